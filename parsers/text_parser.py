"""
Free-text card import parser.

One card per line, no columns, e.g.:

    1996 Fleer Ultra Michael Jordan #23 PSA 10 Mint
    2018 Topps Chrome Shohei Ohtani RC

Every field comes from the extractors; the line itself is kept as notes.
"""

from datetime import date
from decimal import Decimal
import structlog

from models.card import CardCreate, UNKNOWN_PLAYER
from parsers.extractors import (
    extract_brand_and_set,
    extract_card_number,
    extract_condition,
    extract_player_name,
    extract_sport,
    extract_year,
)
from parsers.row_mapper import default_condition, default_sport, parse_year, MAX_PLAYER_NAME

logger = structlog.get_logger(__name__)


def split_lines(text: str) -> list[str]:
    """Non-blank lines, trimmed."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def parse_text_line(line: str) -> CardCreate:
    """
    Build a candidate card from one description line.

    Prices are not read from the line; both purchase price and current
    value start at 0.
    """
    line = line.strip()
    brand, card_set = extract_brand_and_set(line)
    player_name = extract_player_name(line) or UNKNOWN_PLAYER

    return CardCreate(
        player_name=player_name[:MAX_PLAYER_NAME],
        sport=extract_sport(line) or default_sport(),
        year=parse_year(extract_year(line), default=date.today().year),
        brand=brand,
        card_set=card_set,
        card_number=extract_card_number(line),
        team=None,
        condition=extract_condition(line) or default_condition(),
        purchase_price=Decimal("0"),
        current_value=Decimal("0"),
        notes=line,
    )


def parse_text(text: str) -> list[CardCreate]:
    """Parse a text blob into one candidate per non-blank line."""
    lines = split_lines(text)
    logger.info("parsing_text_import", lines=len(lines))
    return [parse_text_line(line) for line in lines]
