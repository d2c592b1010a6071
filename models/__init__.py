"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, TimestampMixin
from models.card import (
    Sport,
    Condition,
    CardCreate,
    CardUpdate,
    CardResponse,
    PricePoint,
    ValueHistoryEntry,
    UNKNOWN_PLAYER,
)
from models.imports import (
    ColumnMapping,
    ImportResult,
    ImportReport,
    TextImportRequest,
    BulkCardsRequest,
)
from models.stats import CollectionStats, SportValue

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",

    # Card
    "Sport",
    "Condition",
    "CardCreate",
    "CardUpdate",
    "CardResponse",
    "PricePoint",
    "ValueHistoryEntry",
    "UNKNOWN_PLAYER",

    # Import
    "ColumnMapping",
    "ImportResult",
    "ImportReport",
    "TextImportRequest",
    "BulkCardsRequest",

    # Stats
    "CollectionStats",
    "SportValue",
]
