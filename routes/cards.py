"""
Card API routes.

CRUD endpoints for the collection plus per-card value history.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse, Response
from typing import Optional
import structlog

from models.card import (
    CardCreate,
    CardUpdate,
    CardResponse,
    Sport,
    ValueHistoryEntry,
)
from services.card_service import get_card_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.get("", response_model=list[CardResponse])
async def list_cards(
    sport: Optional[Sport] = Query(None, description="Filter by sport"),
    search: Optional[str] = Query(None, description="Search player, team, brand or set")
):
    """
    List all cards with optional filters.
    """
    try:
        service = get_card_service()
        return service.get_all(sport=sport, search=search)

    except Exception as e:
        return handle_error(e)


@router.get("/{card_id}", response_model=CardResponse)
async def get_card(card_id: int):
    """
    Get a single card by ID.

    Raises:
        404: Card not found
    """
    try:
        service = get_card_service()
        return service.get_by_id(card_id)

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=CardResponse, status_code=201)
async def create_card(data: CardCreate):
    """
    Create a new card.

    Raises:
        422: Validation error
    """
    try:
        service = get_card_service()
        return service.create(data)

    except Exception as e:
        return handle_error(e)


@router.put("/{card_id}", response_model=CardResponse)
async def update_card(card_id: int, data: CardUpdate):
    """
    Update an existing card.

    Only provided fields are updated. A new current value is recorded in
    the card's value history.

    Raises:
        404: Card not found
        422: Validation error
    """
    try:
        service = get_card_service()
        return service.update(card_id, data)

    except Exception as e:
        return handle_error(e)


@router.delete("/{card_id}", status_code=204, response_class=Response)
async def delete_card(card_id: int):
    """
    Delete a card.

    Raises:
        404: Card not found
    """
    try:
        service = get_card_service()
        service.delete(card_id)
        return Response(status_code=204)

    except Exception as e:
        return handle_error(e)


@router.get("/{card_id}/history", response_model=list[ValueHistoryEntry])
async def get_card_history(card_id: int):
    """
    Value history for a card, oldest first.

    Still available after the card is deleted.

    Raises:
        404: Card never existed
    """
    try:
        service = get_card_service()
        return service.get_value_history(card_id)

    except Exception as e:
        return handle_error(e)
