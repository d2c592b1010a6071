"""
Collection stats API routes.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.stats import CollectionStats, SportValue
from services.analytics_service import get_analytics_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
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


@router.get("", response_model=CollectionStats)
async def get_collection_stats():
    """
    Collection totals: card count, total and average value, and the most
    valuable card.
    """
    try:
        service = get_analytics_service()
        return service.get_collection_stats()

    except Exception as e:
        return handle_error(e)


@router.get("/by-category", response_model=list[SportValue])
async def get_value_by_category():
    """Collection value by sport, largest share first."""
    try:
        service = get_analytics_service()
        return service.get_value_by_sport()

    except Exception as e:
        return handle_error(e)
