"""
Pytest configuration for API tests.

Airtable is never called over the network: every client is built on an
`httpx.MockTransport` that serves the tables handed to `make_client`.
"""

from __future__ import annotations

import pytest
import httpx

from core.airtable import AirtableClient


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def example_tables() -> dict[str, list[dict]]:
    return {
        "Rooms": [{"id": "r1", "fields": {"Name": "Kitchen"}}],
        "Categories": [{"id": "c1", "fields": {"Name": "Weapon"}}],
        "Items": [
            {
                "id": "i1",
                "fields": {"Can Be Used In": ["r1"], "Type": ["c1"], "Name": "Knife"},
            }
        ],
        "Action Cards": [{"id": "a1", "fields": {"Name": "Search"}}],
    }


@pytest.fixture
def make_client():
    """Factory: AirtableClient serving `tables` (table name -> raw records)."""

    def _make(tables: dict[str, list[dict]], *, calls: list[httpx.Request] | None = None, status_for: dict[str, int] | None = None):
        def handler(request: httpx.Request) -> httpx.Response:
            if calls is not None:
                calls.append(request)
            table = request.url.path.rsplit("/", 1)[-1]
            status = (status_for or {}).get(table)
            if status is not None:
                return httpx.Response(status, json={"error": {"type": "FORCED", "message": table}})
            if table not in tables:
                return httpx.Response(404, json={"error": "NOT_FOUND"})
            # A second page exists upstream; it must never be requested.
            return httpx.Response(200, json={"records": tables[table], "offset": "itrNEXTPAGE"})

        return AirtableClient(
            api_key="keyTEST",
            base_id="appTEST",
            api_url="https://airtable.test/v0",
            transport=httpx.MockTransport(handler),
        )

    return _make
