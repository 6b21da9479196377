"""
Card table reads (Airtable).
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from core.airtable import AirtableClient

ROOMS_TABLE = "Rooms"
CATEGORIES_TABLE = "Categories"
ITEMS_TABLE = "Items"
ACTION_CARDS_TABLE = "Action Cards"
GRID_VIEW = "Grid view"


@dataclass(frozen=True)
class CardTables:
    rooms: list[dict[str, Any]]
    categories: list[dict[str, Any]]
    items: list[dict[str, Any]]
    actions: list[dict[str, Any]]


async def fetch_card_tables(client: AirtableClient) -> CardTables:
    """
    Read the first page of every card table.

    The four reads are independent and run concurrently. The first failure
    propagates and no partial result is returned.
    """
    rooms, categories, items, actions = await asyncio.gather(
        client.fetch_first_page(ROOMS_TABLE, view=GRID_VIEW),
        client.fetch_first_page(CATEGORIES_TABLE, view=GRID_VIEW),
        client.fetch_first_page(ITEMS_TABLE, view=GRID_VIEW),
        client.fetch_first_page(ACTION_CARDS_TABLE, view=GRID_VIEW),
    )
    return CardTables(rooms=rooms, categories=categories, items=items, actions=actions)
