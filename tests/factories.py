"""
Test data factories.

Uses factory pattern to generate consistent test data.
"""

from decimal import Decimal
from typing import Optional

from models.card import CardCreate


class CardFactory:
    """
    Factory for creating test card data.

    Usage:
        # Create with defaults
        card = CardFactory.create()

        # Create with overrides
        card = CardFactory.create(player_name="Wayne Gretzky", sport="hockey")

        # Create multiple
        cards = CardFactory.create_batch(5)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        player_name: Optional[str] = None,
        sport: str = "basketball",
        year: int = 2020,
        condition: str = "mint",
        current_value: Decimal = Decimal("100"),
        **overrides
    ) -> dict:
        """
        Create a single card dict (CardCreate fields, snake_case).

        Returns:
            Card dict suitable for CardCreate(**data)
        """
        counter = cls._next_counter()

        return {
            "player_name": player_name or f"Test Player {counter}",
            "sport": sport,
            "year": year,
            "brand": "Topps",
            "card_set": "Chrome",
            "card_number": str(counter),
            "team": None,
            "condition": condition,
            "purchase_price": Decimal("0"),
            "current_value": current_value,
            "notes": None,
            **overrides,
        }

    @classmethod
    def create_model(cls, **kwargs) -> CardCreate:
        """Create a CardCreate instead of a dict."""
        return CardCreate(**cls.create(**kwargs))

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list:
        """Create multiple cards."""
        return [cls.create(**overrides) for _ in range(count)]


class RowFactory:
    """
    Factory for spreadsheet rows in the default column layout.

    Usage:
        row = RowFactory.create(**{"Player Name": "Pele"})
        rows = RowFactory.create_batch(10)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(cls, **columns) -> dict:
        counter = cls._next_counter()

        row = {
            "Player Name": f"Player {counter}",
            "Card Name": None,
            "Sport": "baseball",
            "Season": "2021",
            "Brand": "Bowman",
            "Card Set": "Chrome",
            "Card Number": str(counter),
            "Condition": "mint",
            "Team": None,
            "Features": None,
            "IMAGE URL": None,
        }
        row.update(columns)
        return row

    @classmethod
    def create_batch(cls, count: int, **columns) -> list:
        """Create multiple rows."""
        return [cls.create(**columns) for _ in range(count)]


class EbayRowFactory:
    """Factory for eBay bulk-listing export rows."""

    @classmethod
    def create(cls, **columns) -> dict:
        row = {
            "Title": "2018 Topps Chrome Shohei Ohtani #150 RC $45.00",
            "ConditionID": None,
            "ConditionDescription": None,
            "C:Player/Athlete": None,
            "C:Card Name": None,
            "C:Sport": None,
            "C:Year Manufactured": None,
            "C:Season": None,
            "C:Manufacturer": None,
            "C:Set": None,
            "C:Card Number": None,
            "C:Team": None,
            "C:Features": None,
            "C:ConditionDescription": None,
            "PicURL": None,
        }
        row.update(columns)
        return row
