"""
File and text parsers for card imports.

Spreadsheet reading, free-text field extraction, and the row mappers that
turn raw rows into candidate cards.
"""

from parsers.spreadsheet_parser import parse_spreadsheet, detect_file_kind, RawRow
from parsers.row_mapper import map_row, has_card_data, coerce_card_object
from parsers.ebay_parser import map_ebay_row, map_ebay_condition, is_ebay_export
from parsers.text_parser import parse_text, parse_text_line

__all__ = [
    "parse_spreadsheet",
    "detect_file_kind",
    "RawRow",
    "map_row",
    "has_card_data",
    "coerce_card_object",
    "map_ebay_row",
    "map_ebay_condition",
    "is_ebay_export",
    "parse_text",
    "parse_text_line",
]
