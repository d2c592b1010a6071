"""
Collection analytics schemas.
"""

from decimal import Decimal
from typing import Optional
from pydantic import Field

from models.base import BaseSchema
from models.card import CardResponse


class CollectionStats(BaseSchema):
    """Headline numbers for the dashboard."""

    total_cards: int = Field(..., description="Number of cards in the collection")
    total_value: Decimal = Field(..., description="Sum of current values")
    most_valuable_card: Optional[CardResponse] = Field(None, description="Card with the highest current value")
    average_value: Decimal = Field(..., description="Mean current value per card")


class SportValue(BaseSchema):
    """Share of collection value held in one sport."""

    sport: str
    total_value: Decimal
    percentage: float = Field(..., description="Percent of total collection value")
