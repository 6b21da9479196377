"""
Card API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from core.airtable import AirtableClient

from . import dependencies, schemas, service

router = APIRouter()


# `/api` is the path the card list was originally deployed under.
@router.get("/cards", response_model=schemas.CardListResponse)
@router.post("/cards", response_model=schemas.CardListResponse)
@router.get("/api", response_model=schemas.CardListResponse)
@router.post("/api", response_model=schemas.CardListResponse)
async def list_cards(
    client: AirtableClient = Depends(dependencies.get_airtable_client),
) -> dict:
    return await service.card_list(client)
