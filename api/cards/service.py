"""
Card aggregation.

Flow:
1) Read Rooms, Categories, Items and Action Cards (repository)
2) Build id -> name lookups for rooms and categories
3) Resolve each item's room/category ids to names and tag it "item"
4) Tag each action card "action"
5) Return items followed by actions
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from core.airtable import AirtableClient

from . import repository

ITEM_ROOM_FIELD = "Can Be Used In"
ITEM_CATEGORY_FIELD = "Type"
NAME_FIELD = "Name"

ANY_ROOM = "Any"
NO_CATEGORY = "None"

ITEM_TYPE = "item"
ACTION_TYPE = "action"

logger = logging.getLogger(__name__)


class MalformedFieldError(ValueError):
    def __init__(self, record_id: str, field: str, value: Any) -> None:
        super().__init__(
            f"Record {record_id!r} has malformed field {field!r}: "
            f"expected a list of record ids, got {type(value).__name__}."
        )
        self.record_id = record_id
        self.field = field
        self.value = value


def build_lookup(records: Iterable[dict[str, Any]]) -> dict[str, str | None]:
    """
    Map record id -> "Name". Later duplicates win; a missing name maps to None.
    """
    return {record["id"]: record["fields"].get(NAME_FIELD) for record in records}


def _linked_ids(record: dict[str, Any], field: str) -> list[Any] | None:
    value = record["fields"].get(field)
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return value
    raise MalformedFieldError(record["id"], field, value)


def _resolve(
    ids: list[Any],
    lookup: dict[str, str | None],
    *,
    record_id: str,
    field: str,
) -> list[str | None]:
    names: list[str | None] = []
    for ref in ids:
        if isinstance(ref, str) and ref in lookup:
            names.append(lookup[ref])
            continue
        # Keep the hole so positions still line up with the source ids.
        logger.warning("unresolved_reference record_id=%s field=%s ref=%r", record_id, field, ref)
        names.append(None)
    return names


def _with_fields(derived: dict[str, Any], record: dict[str, Any]) -> dict[str, Any]:
    fields = record["fields"]
    overwritten = [key for key in derived if key in fields]
    if overwritten:
        logger.warning(
            "derived_field_overwrites_source record_id=%s fields=%s",
            record["id"],
            ",".join(overwritten),
        )

    card = dict(derived)
    card.update((key, value) for key, value in fields.items() if key not in derived)
    return card


def enrich_item(
    record: dict[str, Any],
    *,
    rooms_by_id: dict[str, str | None],
    categories_by_id: dict[str, str | None],
) -> dict[str, Any]:
    room_ids = _linked_ids(record, ITEM_ROOM_FIELD)
    if room_ids is not None:
        rooms = _resolve(room_ids, rooms_by_id, record_id=record["id"], field=ITEM_ROOM_FIELD)
    else:
        rooms = [ANY_ROOM]

    category_ids = _linked_ids(record, ITEM_CATEGORY_FIELD)
    if category_ids is not None:
        categories = _resolve(category_ids, categories_by_id, record_id=record["id"], field=ITEM_CATEGORY_FIELD)
    else:
        categories = [NO_CATEGORY]

    return _with_fields(
        {"rooms": rooms, "categories": categories, "_type": ITEM_TYPE},
        record,
    )


def enrich_action(record: dict[str, Any]) -> dict[str, Any]:
    return _with_fields({"_type": ACTION_TYPE}, record)


def merge_cards(tables: repository.CardTables) -> list[dict[str, Any]]:
    """
    Enriched items (view order) followed by enriched actions (view order).
    """
    rooms_by_id = build_lookup(tables.rooms)
    categories_by_id = build_lookup(tables.categories)

    item_cards = [
        enrich_item(record, rooms_by_id=rooms_by_id, categories_by_id=categories_by_id)
        for record in tables.items
    ]
    action_cards = [enrich_action(record) for record in tables.actions]
    return item_cards + action_cards


async def card_list(client: AirtableClient) -> dict[str, Any]:
    tables = await repository.fetch_card_tables(client)
    cards = merge_cards(tables)
    logger.info(
        "cards_built items=%s actions=%s rooms=%s categories=%s",
        len(tables.items),
        len(tables.actions),
        len(tables.rooms),
        len(tables.categories),
    )
    return {"cards": cards}
