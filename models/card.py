"""
Card schemas for validation and serialization.
"""

from pydantic import Field, field_validator
from typing import Optional
from enum import Enum
from datetime import datetime, date
from decimal import Decimal

from models.base import BaseSchema, TimestampMixin


UNKNOWN_PLAYER = "Unknown Player"
MIN_CARD_YEAR = 1800


class Sport(str, Enum):
    """Sports a card can belong to."""
    BASKETBALL = "basketball"
    BASEBALL = "baseball"
    FOOTBALL = "football"
    HOCKEY = "hockey"
    SOCCER = "soccer"
    OTHER = "other"


class Condition(str, Enum):
    """Physical condition, loosely aligned with grading-service tiers."""
    MINT = "mint"
    NEAR_MINT = "nearMint"
    EXCELLENT = "excellent"
    VERY_GOOD = "veryGood"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    NEW = "new"


def max_card_year() -> int:
    """Latest year a card may carry (next year's product ships early)."""
    return date.today().year + 1


class CardCreate(BaseSchema):
    """
    Create a new card.

    Also the shape every import path normalizes to before persistence.

    Required: player_name, sport, year, condition
    """

    player_name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Player name",
        examples=["Michael Jordan", "Connor McDavid"]
    )
    sport: Sport = Field(..., description="Sport")
    year: int = Field(..., ge=MIN_CARD_YEAR, description="Card year")
    brand: Optional[str] = Field(None, description="Manufacturer, e.g. Topps")
    card_set: Optional[str] = Field(None, description="Set name, e.g. Chrome")
    card_number: Optional[str] = Field(None, description="Number within the set")
    team: Optional[str] = Field(None, description="Team")
    condition: Condition = Field(..., description="Card condition")
    purchase_price: Decimal = Field(default=Decimal("0"), ge=0, description="Price paid")
    current_value: Decimal = Field(default=Decimal("0"), ge=0, description="Current estimated value")
    notes: Optional[str] = Field(None, description="Free-form notes")
    front_image_url: Optional[str] = Field(None, description="Front image URL")
    back_image_url: Optional[str] = Field(None, description="Back image URL")

    @field_validator("year")
    @classmethod
    def year_not_too_far_ahead(cls, v: int) -> int:
        """Year cannot be past next year."""
        if v > max_card_year():
            raise ValueError("Year cannot be too far in the future")
        return v


class CardUpdate(BaseSchema):
    """
    Update existing card.

    All fields optional - only provided fields are updated.
    """

    player_name: Optional[str] = Field(None, min_length=1, max_length=200)
    sport: Optional[Sport] = None
    year: Optional[int] = Field(None, ge=MIN_CARD_YEAR)
    brand: Optional[str] = None
    card_set: Optional[str] = None
    card_number: Optional[str] = None
    team: Optional[str] = None
    condition: Optional[Condition] = None
    purchase_price: Optional[Decimal] = Field(None, ge=0)
    current_value: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None
    front_image_url: Optional[str] = None
    back_image_url: Optional[str] = None

    @field_validator("year")
    @classmethod
    def year_not_too_far_ahead(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v > max_card_year():
            raise ValueError("Year cannot be too far in the future")
        return v


class PricePoint(BaseSchema):
    """One entry of a card's embedded price history."""
    date: datetime
    value: Decimal


class CardResponse(CardCreate, TimestampMixin):
    """
    Card response with all fields.

    Used for GET responses and import results.
    """

    id: int = Field(..., description="Card id, assigned at creation")
    price_history: list[PricePoint] = Field(default_factory=list)


class ValueHistoryEntry(BaseSchema):
    """A recorded value of a card at a point in time."""

    id: int
    card_id: int
    value: Decimal
    date: datetime
