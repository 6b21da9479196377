"""
Card route dependencies.
"""

from __future__ import annotations

from fastapi import Request

from core.airtable import AirtableClient


def get_airtable_client(request: Request) -> AirtableClient:
    client = getattr(request.app.state, "airtable", None)
    if client is None:
        raise RuntimeError("Airtable client is not initialized. It is created in the app lifespan.")
    return client
