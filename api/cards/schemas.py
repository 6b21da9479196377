"""
Pydantic schemas for card endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CardListResponse(BaseModel):
    # Cards keep arbitrary Airtable fields, so each one stays a plain mapping.
    cards: list[dict[str, Any]] = Field(
        ...,
        description='Item cards (`_type: "item"`) followed by action cards (`_type: "action"`).',
    )
