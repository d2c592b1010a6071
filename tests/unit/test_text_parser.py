"""
Unit tests for the free-text line parser.
"""

from datetime import date
from decimal import Decimal

from parsers.text_parser import parse_text, parse_text_line, split_lines
from models.card import Condition, Sport, UNKNOWN_PLAYER


class TestParseTextLine:
    """Tests for parse_text_line()"""

    def test_full_description(self):
        """Every field is pulled from the one line."""
        # Act
        card = parse_text_line("1996 Fleer Ultra Michael Jordan #23 PSA 10 Mint")

        # Assert
        assert card.player_name == "Michael Jordan"
        assert card.year == 1996
        assert card.brand == "Fleer"
        assert card.card_set == "Ultra"
        assert card.card_number == "23"
        assert card.condition == Condition.MINT
        assert card.sport == Sport.SOCCER
        assert card.current_value == Decimal("0")
        assert card.notes == "1996 Fleer Ultra Michael Jordan #23 PSA 10 Mint"

    def test_sport_keyword(self):
        card = parse_text_line("2019 Panini Prizm Zion Williamson NBA RC")

        assert card.sport == Sport.BASKETBALL
        assert card.player_name == "Zion Williamson"

    def test_defaults(self):
        card = parse_text_line("mystery card")

        assert card.year == date.today().year
        assert card.condition == Condition.NEW
        assert card.sport == Sport.SOCCER
        assert card.brand is None
        assert card.card_number is None

    def test_price_is_not_read(self):
        card = parse_text_line("2018 Topps Chrome Shohei Ohtani $45")

        assert card.current_value == Decimal("0")
        assert card.purchase_price == Decimal("0")


class TestParseText:
    """Tests for parse_text()"""

    def test_one_card_per_non_blank_line(self):
        text = "1996 Fleer Ultra Michael Jordan\n\n   \n2018 Topps Chrome Shohei Ohtani\n"

        cards = parse_text(text)

        assert [c.player_name for c in cards] == ["Michael Jordan", "Shohei Ohtani"]

    def test_windows_line_endings(self):
        assert split_lines("a b\r\nc d\r\n") == ["a b", "c d"]

    def test_blank_text(self):
        assert parse_text("  \n \n") == []

    def test_player_never_empty(self):
        cards = parse_text("#12")

        assert cards[0].player_name == "#12"
        assert cards[0].player_name != UNKNOWN_PLAYER
