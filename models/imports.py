"""
Import schemas: column mapping, per-row outcomes and batch reports.
"""

from pydantic import ConfigDict, Field
from typing import Any, Optional

from models.base import BaseSchema
from models.card import CardCreate, CardResponse


class ColumnMapping(BaseSchema):
    """
    Canonical card field -> source column name.

    Defaults match the collection spreadsheet export the importer was built
    around. A caller-supplied mapping overrides only the keys it names;
    None means "no column for this field". Unknown keys are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    player_name: Optional[str] = "Player Name"
    card_name: Optional[str] = "Card Name"
    sport: Optional[str] = "Sport"
    year: Optional[str] = "Season"
    brand: Optional[str] = "Brand"
    card_set: Optional[str] = "Card Set"
    card_number: Optional[str] = "Card Number"
    condition: Optional[str] = "Condition"
    team: Optional[str] = "Team"
    notes: Optional[str] = "Features"
    front_image_url: Optional[str] = "IMAGE URL"
    back_image_url: Optional[str] = "IMAGE URL"
    purchase_price: Optional[str] = None
    current_value: Optional[str] = None


class ImportResult(BaseSchema):
    """Outcome of importing one source row."""

    row: int = Field(..., description="0-based index among rows that reached mapping")
    success: bool
    card: Optional[CardResponse] = Field(None, description="Persisted card on success")
    error: Optional[str] = Field(None, description="Failure message")
    data: Optional[CardCreate] = Field(None, description="Mapped candidate, echoed on failure")


class ImportReport(BaseSchema):
    """Aggregate result of one import call."""

    message: str
    imported: int
    failed: int
    skipped: int = Field(0, description="Rows dropped by the empty-row filter")
    results: list[ImportResult]


class TextImportRequest(BaseSchema):
    """Free-text import body: one card description per line."""

    text: str = Field(..., description="Card descriptions, newline separated")


class BulkCardsRequest(BaseSchema):
    """JSON array import body."""

    cards: list[Any] = Field(..., description="Card-like objects; missing fields are defaulted")
