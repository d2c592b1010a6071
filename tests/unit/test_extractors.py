"""
Unit tests for free-text field extractors.

Run: pytest tests/unit/test_extractors.py -v
"""

import pytest

from parsers.extractors import (
    extract_year,
    extract_card_number,
    extract_price,
    extract_player_name,
    extract_condition,
    extract_sport,
    extract_brand,
    extract_brand_and_set,
    normalize_sport,
    normalize_condition,
)
from models.card import Condition, Sport


class TestExtractYear:
    """Tests for extract_year()"""

    def test_year_at_start(self):
        assert extract_year("2003 Topps Chrome #23") == 2003

    def test_no_year_returns_none(self):
        """Caller decides the default."""
        assert extract_year("no year here") is None

    def test_ignores_longer_numbers(self):
        assert extract_year("serial 123456 of 1996 print run") == 1996

    def test_empty_and_none(self):
        assert extract_year("") is None
        assert extract_year(None) is None


class TestExtractCardNumber:
    """Tests for extract_card_number()"""

    def test_number_after_hash(self):
        assert extract_card_number("Jordan #45 PSA 10") == "45"

    def test_space_after_hash(self):
        assert extract_card_number("Ohtani # 150") == "150"

    def test_no_hash_returns_none(self):
        assert extract_card_number("Jordan 45") is None


class TestExtractPrice:
    """Tests for extract_price()"""

    def test_dollar_amount(self):
        assert extract_price("Sold for $125.50 shipped") == 125.50

    def test_whole_dollars(self):
        assert extract_price("BIN $40") == 40.0

    def test_no_price(self):
        assert extract_price("Best offer") is None


class TestExtractPlayerName:
    """Tests for extract_player_name()"""

    def test_skips_brand_and_set(self):
        """Brand and set words are not mistaken for the player."""
        assert extract_player_name("1996 Fleer Ultra Michael Jordan #23 PSA 10 Mint") == "Michael Jordan"

    def test_skips_condition_words(self):
        assert extract_player_name("Gem Mint Wayne Gretzky 1979") == "Wayne Gretzky"

    def test_name_after_leading_capitalized_word(self):
        assert extract_player_name("Rookie Michael Jordan") == "Michael Jordan"

    def test_name_right_after_brand(self):
        """With no set word, the word after the brand is the first name."""
        assert extract_player_name("1986 Fleer Michael Jordan #57 PSA 8") == "Michael Jordan"
        assert extract_player_name("Topps Michael Jordan #23") == "Michael Jordan"

    def test_inner_capital_in_name(self):
        assert extract_player_name("2003 Topps LeBron James NBA") == "LeBron James"
        assert extract_player_name("2015 Upper Deck Connor McDavid RC") == "Connor McDavid"

    def test_set_word_still_skipped(self):
        assert extract_player_name("2018 Topps Chrome Shohei Ohtani RC") == "Shohei Ohtani"

    def test_falls_back_to_first_two_tokens(self):
        assert extract_player_name("lebron james psa 9") == "lebron james"

    def test_blank_returns_none(self):
        assert extract_player_name("   ") is None
        assert extract_player_name(None) is None


class TestExtractCondition:
    """Tests for extract_condition() ordering."""

    def test_psa_10_gem_mint_is_mint(self):
        assert extract_condition("PSA 10 Gem Mint") == Condition.MINT

    def test_bgs_9_5_near_mint_is_near_mint(self):
        """"Near Mint" must not be read as "Mint"."""
        assert extract_condition("BGS 9.5 Near Mint") == Condition.NEAR_MINT

    def test_very_good_is_not_good(self):
        assert extract_condition("very good corners") == Condition.VERY_GOOD

    @pytest.mark.parametrize("text,expected", [
        ("PSA 9", Condition.NEAR_MINT),
        ("PSA 8", Condition.EXCELLENT),
        ("PSA 6", Condition.VERY_GOOD),
        ("PSA 4", Condition.GOOD),
        ("PSA 1", Condition.FAIR),
        ("poor shape", Condition.POOR),
    ])
    def test_grading_table(self, text, expected):
        assert extract_condition(text) == expected

    def test_no_condition(self):
        assert extract_condition("1996 Fleer Ultra") is None


class TestExtractSport:
    """Tests for extract_sport()"""

    def test_league_keyword(self):
        assert extract_sport("2019 Prizm NBA rookie") == Sport.BASKETBALL

    def test_sport_word(self):
        assert extract_sport("vintage hockey card") == Sport.HOCKEY

    def test_no_keyword(self):
        assert extract_sport("1996 Fleer Ultra Michael Jordan") is None


class TestExtractBrandAndSet:
    """Tests for extract_brand_and_set()"""

    def test_brand_and_following_word(self):
        assert extract_brand_and_set("1996 Fleer Ultra Michael Jordan") == ("Fleer", "Ultra")

    def test_canonical_spelling(self):
        assert extract_brand("2021 TOPPS chrome") == "Topps"

    def test_multi_word_brand(self):
        assert extract_brand_and_set("2015 Upper Deck Young Guns McDavid") == ("Upper Deck", "Young")

    def test_brand_without_set(self):
        assert extract_brand_and_set("Topps #7") == ("Topps", None)

    def test_unknown_brand(self):
        assert extract_brand_and_set("Score 1990 Barry Sanders") == (None, None)


class TestNormalize:
    """Tests for normalize_sport() and normalize_condition()"""

    def test_sport_exact_value(self):
        assert normalize_sport("Basketball") == Sport.BASKETBALL

    def test_sport_keyword(self):
        assert normalize_sport("NHL") == Sport.HOCKEY

    def test_unknown_sport_is_other(self):
        assert normalize_sport("Cricket") == Sport.OTHER

    def test_blank_sport_is_none(self):
        assert normalize_sport("  ") is None

    @pytest.mark.parametrize("value", ["nearMint", "Near Mint", "NEAR_MINT", "near-mint"])
    def test_condition_spellings(self, value):
        assert normalize_condition(value) == Condition.NEAR_MINT

    def test_condition_grade_shorthand(self):
        assert normalize_condition("PSA 10") == Condition.MINT

    def test_unknown_condition_is_none(self):
        assert normalize_condition("crinkled") is None
