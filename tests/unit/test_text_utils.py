"""
Unit tests for spreadsheet cell helpers.
"""

from decimal import Decimal
import math
import pytest

from utils.text_utils import clean_cell, split_urls, parse_amount, looks_like_url


class TestCleanCell:
    @pytest.mark.parametrize("value,expected", [
        (None, None),
        (math.nan, None),
        ("   ", None),
        ("nan", None),
        (23.0, "23"),
        (9.5, "9.5"),
        ("  Pele  ", "Pele"),
        (1958, "1958"),
    ])
    def test_values(self, value, expected):
        assert clean_cell(value) == expected

    def test_truncates(self):
        assert clean_cell("x" * 20, max_length=5) == "xxxxx"


class TestSplitUrls:
    def test_pipe_split(self):
        assert split_urls("http://a.jpg | http://b.jpg") == ["http://a.jpg", "http://b.jpg"]

    def test_single_url(self):
        assert split_urls("http://a.jpg") == ["http://a.jpg"]

    def test_empty_segments_dropped(self):
        assert split_urls(" | http://a.jpg ||") == ["http://a.jpg"]

    def test_missing(self):
        assert split_urls(None) == []


class TestParseAmount:
    @pytest.mark.parametrize("value,expected", [
        ("$1,250.00", Decimal("1250.00")),
        (19.999, Decimal("20.00")),
        ("-4", Decimal("0")),
        ("ask", Decimal("0")),
        (math.nan, Decimal("0")),
        (None, Decimal("0")),
        ("1e30", Decimal("0")),
        (1e40, Decimal("0")),
    ])
    def test_values(self, value, expected):
        assert parse_amount(value) == expected


def test_looks_like_url():
    assert looks_like_url("see https://x/y.jpg")
    assert not looks_like_url("front.jpg")
    assert not looks_like_url(None)
