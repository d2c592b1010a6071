"""
Unit tests for CardService.

Run: pytest tests/unit/test_card_service.py -v
"""

from decimal import Decimal
from concurrent.futures import ThreadPoolExecutor
import pytest

from services.card_service import CardService, SAMPLE_CARDS
from models.card import CardCreate, CardUpdate, Sport
from exceptions import CardNotFoundError

from tests.factories import CardFactory


class TestCardServiceCreate:
    """Tests for CardService.create()"""

    def test_assigns_incrementing_ids(self, card_service):
        # Act
        first = card_service.create(CardFactory.create_model())
        second = card_service.create(CardFactory.create_model())

        # Assert
        assert first.id == 1
        assert second.id == 2

    def test_seeds_price_and_value_history(self, card_service):
        card = card_service.create(CardFactory.create_model(current_value=Decimal("250")))

        assert len(card.price_history) == 1
        assert card.price_history[0].value == Decimal("250")

        history = card_service.get_value_history(card.id)
        assert len(history) == 1
        assert history[0].value == Decimal("250")
        assert history[0].card_id == card.id

    def test_concurrent_creates_get_unique_ids(self, card_service):
        cards = [CardFactory.create_model() for _ in range(50)]

        with ThreadPoolExecutor(max_workers=8) as executor:
            created = list(executor.map(card_service.create, cards))

        assert sorted(c.id for c in created) == list(range(1, 51))
        assert card_service.count() == 50


class TestCardServiceRead:
    """Tests for get_all() and get_by_id()"""

    def test_get_by_id_not_found(self, card_service):
        with pytest.raises(CardNotFoundError) as exc_info:
            card_service.get_by_id(99)

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "CARD_NOT_FOUND"

    def test_filter_by_sport(self, seeded_card_service):
        cards = seeded_card_service.get_all(sport=Sport.HOCKEY)

        assert [c.player_name for c in cards] == ["Connor McDavid"]

    def test_search_is_case_insensitive(self, seeded_card_service):
        cards = seeded_card_service.get_all(search="prizm")

        assert {c.player_name for c in cards} == {"LeBron James", "Patrick Mahomes"}

    def test_search_matches_team(self, seeded_card_service):
        cards = seeded_card_service.get_all(search="oilers")

        assert len(cards) == 1


class TestCardServiceUpdate:
    """Tests for CardService.update()"""

    def test_partial_update(self, card_service):
        # Arrange
        card = card_service.create(CardFactory.create_model(player_name="Kobe Bryant"))

        # Act
        updated = card_service.update(card.id, CardUpdate(team="Los Angeles Lakers"))

        # Assert
        assert updated.team == "Los Angeles Lakers"
        assert updated.player_name == "Kobe Bryant"
        assert updated.created_at == card.created_at

    def test_value_change_appends_history(self, card_service):
        card = card_service.create(CardFactory.create_model(current_value=Decimal("100")))

        updated = card_service.update(card.id, CardUpdate(current_value=Decimal("175")))

        assert [p.value for p in updated.price_history] == [Decimal("100"), Decimal("175")]
        history = card_service.get_value_history(card.id)
        assert [h.value for h in history] == [Decimal("100"), Decimal("175")]

    def test_same_value_does_not_append_history(self, card_service):
        card = card_service.create(CardFactory.create_model(current_value=Decimal("100")))

        updated = card_service.update(card.id, CardUpdate(current_value=Decimal("100"), notes="regraded"))

        assert len(updated.price_history) == 1
        assert len(card_service.get_value_history(card.id)) == 1

    def test_update_not_found(self, card_service):
        with pytest.raises(CardNotFoundError):
            card_service.update(5, CardUpdate(notes="x"))


class TestCardServiceDelete:
    """Tests for CardService.delete()"""

    def test_delete(self, card_service):
        card = card_service.create(CardFactory.create_model())

        assert card_service.delete(card.id) is True
        with pytest.raises(CardNotFoundError):
            card_service.get_by_id(card.id)

    def test_delete_not_found(self, card_service):
        with pytest.raises(CardNotFoundError):
            card_service.delete(1)

    def test_history_survives_delete(self, card_service):
        # Arrange
        card = card_service.create(CardFactory.create_model(current_value=Decimal("80")))

        # Act
        card_service.delete(card.id)
        history = card_service.get_value_history(card.id)

        # Assert
        assert [h.value for h in history] == [Decimal("80")]
        with pytest.raises(CardNotFoundError):
            card_service.get_value_history(card.id + 1)

    def test_ids_not_reused(self, card_service):
        first = card_service.create(CardFactory.create_model())
        card_service.delete(first.id)

        second = card_service.create(CardFactory.create_model())

        assert second.id == first.id + 1


class TestSampleData:
    """Tests for the demo collection."""

    def test_seed_loads_sample_cards(self, seeded_card_service):
        assert seeded_card_service.count() == len(SAMPLE_CARDS) == 4

    def test_clear(self, seeded_card_service):
        seeded_card_service.clear()

        assert seeded_card_service.count() == 0
        card = seeded_card_service.create(CardCreate(**CardFactory.create()))
        assert card.id == 1
