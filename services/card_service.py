"""
Card service: collection CRUD over an in-process store.

Cards and their value history live in dicts keyed by monotonically
increasing integer ids. A single lock guards id allocation and every
mutation, so concurrent creates from an import batch are safe.
"""

import threading
from datetime import datetime
from decimal import Decimal
from typing import Optional
import structlog

from config import settings
from models.card import (
    CardCreate,
    CardUpdate,
    CardResponse,
    PricePoint,
    Sport,
    ValueHistoryEntry,
)
from exceptions import CardNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)


class CardService:
    """
    Card business logic.

    Handles CRUD operations for cards plus their value history.
    """

    def __init__(self, seed: bool = False):
        self._lock = threading.Lock()
        self._cards: dict[int, CardResponse] = {}
        self._history: dict[int, ValueHistoryEntry] = {}
        self._next_card_id = 1
        self._next_history_id = 1

        if seed:
            self._seed_sample_data()

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(
        self,
        sport: Optional[Sport] = None,
        search: Optional[str] = None
    ) -> list[CardResponse]:
        """
        Get all cards with optional filters.

        Args:
            sport: Filter by sport
            search: Case-insensitive substring over player, team, brand, set

        Returns:
            Cards in creation order
        """
        with self._lock:
            cards = list(self._cards.values())

        if sport:
            cards = [c for c in cards if c.sport == sport]

        if search:
            needle = search.lower()
            cards = [
                c for c in cards
                if any(
                    needle in (value or "").lower()
                    for value in (c.player_name, c.team, c.brand, c.card_set)
                )
            ]

        logger.debug("cards_retrieved", count=len(cards), sport=sport, search=search)
        return cards

    def get_by_id(self, card_id: int) -> CardResponse:
        """
        Get a single card by ID.

        Raises:
            CardNotFoundError: If card doesn't exist
        """
        with self._lock:
            card = self._cards.get(card_id)

        if card is None:
            raise CardNotFoundError(card_id)
        return card

    def get_value_history(self, card_id: int) -> list[ValueHistoryEntry]:
        """
        Value history for a card, oldest first.

        A deleted card keeps its history, so it stays readable here.

        Raises:
            CardNotFoundError: If the card never existed
        """
        with self._lock:
            entries = [h for h in self._history.values() if h.card_id == card_id]
            if not entries and card_id not in self._cards:
                raise CardNotFoundError(card_id)
        return sorted(entries, key=lambda h: (h.date, h.id))

    def count(self) -> int:
        """Count total cards."""
        with self._lock:
            return len(self._cards)

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: CardCreate) -> CardResponse:
        """
        Create a new card.

        Seeds the price history and value history with the card's current
        value.

        Args:
            data: Card creation data

        Returns:
            Created CardResponse

        Raises:
            DatabaseError: If the record cannot be built
        """
        now = datetime.utcnow()

        try:
            with self._lock:
                card_id = self._next_card_id
                self._next_card_id += 1

                card = CardResponse(
                    **data.model_dump(),
                    id=card_id,
                    created_at=now,
                    updated_at=now,
                    price_history=[PricePoint(date=now, value=data.current_value)],
                )
                self._cards[card_id] = card
                self._add_history_locked(card_id, data.current_value, now)

        except Exception as e:
            logger.error(
                "create_card_failed",
                player_name=data.player_name,
                error=str(e)
            )
            raise DatabaseError("insert", str(e))

        logger.info("card_created", card_id=card_id, player_name=card.player_name)
        return card

    def update(self, card_id: int, data: CardUpdate) -> CardResponse:
        """
        Update an existing card.

        Only fields present in the request are changed. A new current value
        is appended to both the embedded price history and the value history.

        Raises:
            CardNotFoundError: If card doesn't exist
        """
        logger.info("updating_card", card_id=card_id)

        update_data = data.model_dump(exclude_unset=True)

        with self._lock:
            existing = self._cards.get(card_id)
            if existing is None:
                raise CardNotFoundError(card_id)

            if not update_data:
                # Nothing to update, return existing
                return existing

            now = datetime.utcnow()
            price_history = list(existing.price_history)
            new_value = update_data.get("current_value")

            if new_value is not None and new_value != existing.current_value:
                price_history.append(PricePoint(date=now, value=new_value))
                self._add_history_locked(card_id, new_value, now)

            merged = {
                **existing.model_dump(),
                **{k: v for k, v in update_data.items() if v is not None or k in _NULLABLE_FIELDS},
                "price_history": price_history,
                "updated_at": now,
            }
            card = CardResponse(**merged)
            self._cards[card_id] = card

        logger.info("card_updated", card_id=card_id, fields=list(update_data.keys()))
        return card

    def delete(self, card_id: int) -> bool:
        """
        Delete a card. Its value history is kept.

        Raises:
            CardNotFoundError: If card doesn't exist
        """
        logger.info("deleting_card", card_id=card_id)

        with self._lock:
            if self._cards.pop(card_id, None) is None:
                raise CardNotFoundError(card_id)

        logger.info("card_deleted", card_id=card_id)
        return True

    def clear(self) -> None:
        """Drop every card and history entry and restart ids at 1."""
        with self._lock:
            self._cards.clear()
            self._history.clear()
            self._next_card_id = 1
            self._next_history_id = 1

    # ===================
    # HELPERS
    # ===================

    def _add_history_locked(self, card_id: int, value: Decimal, when: datetime) -> None:
        """Append a value history entry. Caller holds the lock."""
        entry = ValueHistoryEntry(
            id=self._next_history_id,
            card_id=card_id,
            value=value,
            date=when,
        )
        self._history[entry.id] = entry
        self._next_history_id += 1

    def _seed_sample_data(self) -> None:
        """Load the demo collection."""
        for data in SAMPLE_CARDS:
            self.create(CardCreate(**data))
        logger.info("sample_cards_loaded", count=len(SAMPLE_CARDS))


# Optional text fields that an update may explicitly clear
_NULLABLE_FIELDS = {
    "brand", "card_set", "card_number", "team", "notes",
    "front_image_url", "back_image_url",
}


SAMPLE_CARDS = [
    {
        "player_name": "LeBron James",
        "team": "Los Angeles Lakers",
        "sport": "basketball",
        "year": 2020,
        "brand": "Panini",
        "card_set": "Prizm",
        "card_number": "6",
        "condition": "mint",
        "current_value": Decimal("1200"),
        "notes": "Silver prizm, PSA 9",
    },
    {
        "player_name": "Mike Trout",
        "team": "LA Angels",
        "sport": "baseball",
        "year": 2018,
        "brand": "Topps",
        "card_set": "Chrome",
        "card_number": "17",
        "condition": "nearMint",
        "current_value": Decimal("850"),
        "notes": "Refractor parallel, BGS 9.5",
    },
    {
        "player_name": "Patrick Mahomes",
        "team": "Kansas City Chiefs",
        "sport": "football",
        "year": 2019,
        "brand": "Panini",
        "card_set": "Prizm",
        "card_number": "22",
        "condition": "mint",
        "current_value": Decimal("950"),
        "notes": "Red white and blue parallel, PSA 10",
    },
    {
        "player_name": "Connor McDavid",
        "team": "Edmonton Oilers",
        "sport": "hockey",
        "year": 2020,
        "brand": "Upper Deck",
        "card_set": "Young Guns",
        "card_number": "97",
        "condition": "nearMint",
        "current_value": Decimal("650"),
        "notes": "Young Guns rookie card",
    },
]


# Singleton instance for convenience
_card_service: Optional[CardService] = None

def get_card_service() -> CardService:
    """Get or create CardService instance."""
    global _card_service
    if _card_service is None:
        _card_service = CardService(seed=settings.seed_sample_data)
    return _card_service
