"""
Text utilities for spreadsheet cells.

Spreadsheet readers hand back strings, ints, floats, NaN or None for the same
logical column depending on the file. These helpers collapse that into
predictable Python values.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Optional


def clean_cell(value: Any, max_length: int = 500) -> Optional[str]:
    """
    Convert a raw cell to a trimmed string.

    - None, NaN and whitespace-only cells become None
    - Whole floats lose their trailing ".0" (Excel stores 23 as 23.0)
    - Truncates to max length

    Args:
        value: Raw cell value
        max_length: Maximum characters to keep

    Returns:
        Cleaned string or None
    """
    if value is None:
        return None

    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            value = int(value)

    text = str(value).strip()

    if not text or text.lower() == "nan":
        return None

    if len(text) > max_length:
        text = text[:max_length]

    return text


def looks_like_url(value: Optional[str]) -> bool:
    """True if the value contains an http(s) scheme."""
    if not value:
        return False
    return "http://" in value or "https://" in value


def split_urls(value: Any) -> list[str]:
    """
    Split a pipe-delimited URL cell.

    "http://a.jpg | http://b.jpg" -> ["http://a.jpg", "http://b.jpg"]
    "http://a.jpg||" -> ["http://a.jpg"]
    """
    text = clean_cell(value, max_length=4000)
    if text is None:
        return []
    return [part.strip() for part in text.split("|") if part.strip()]


def parse_amount(value: Any) -> Decimal:
    """
    Coerce a money cell to a non-negative Decimal.

    Accepts numbers and strings like "$1,250.00". Anything unparseable,
    negative or missing becomes 0.
    """
    text = clean_cell(value)
    if text is None:
        return Decimal("0")

    text = text.replace("$", "").replace(",", "").strip()
    try:
        amount = Decimal(text)
        if not amount.is_finite() or amount < 0:
            return Decimal("0")
        # Raises for amounts too large to hold at cent precision
        return amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        return Decimal("0")
