"""
eBay bulk-listing export parser.

Maps rows of eBay's File Exchange / Seller Hub export (Title, ConditionID,
"C:" item-specific columns, PicURL) onto candidate cards. Structured
item-specific columns win; the listing Title is the fallback for anything
left blank.
"""

import re
from decimal import Decimal
from typing import Optional
import structlog

from models.card import CardCreate, Condition, UNKNOWN_PLAYER
from parsers.extractors import (
    extract_brand_and_set,
    extract_card_number,
    extract_condition,
    extract_player_name,
    extract_price,
    extract_sport,
    extract_year,
    normalize_sport,
)
from parsers.row_mapper import (
    default_condition,
    default_sport,
    fallback_card,
    parse_year,
    MAX_PLAYER_NAME,
)
from parsers.spreadsheet_parser import RawRow
from utils.text_utils import clean_cell, parse_amount, split_urls

logger = structlog.get_logger(__name__)


# ===================
# COLUMN NAMES
# ===================

EBAY_COLUMNS = {
    "title": "Title",
    "condition_id": "ConditionID",
    "condition_description": "ConditionDescription",
    "player": "C:Player/Athlete",
    "card_name": "C:Card Name",
    "sport": "C:Sport",
    "year": "C:Year Manufactured",
    "season": "C:Season",
    "manufacturer": "C:Manufacturer",
    "set": "C:Set",
    "card_number": "C:Card Number",
    "team": "C:Team",
    "features": "C:Features",
    "specific_condition": "C:ConditionDescription",
    "pictures": "PicURL",
}

# Columns that mark a sheet as an eBay export
EBAY_SIGNATURE_COLUMNS = {"Title", "PicURL"}


# ===================
# CONDITION TABLE
# ===================

# eBay grade IDs used on trading-card listings
EBAY_CONDITION_IDS: dict[str, Condition] = {
    "10": Condition.MINT,
    "9": Condition.NEAR_MINT,
    "8": Condition.EXCELLENT,
    "7": Condition.VERY_GOOD,
    "6": Condition.GOOD,
    "5": Condition.FAIR,
    "4": Condition.POOR,
}

# Longest phrases first so "Near Mint" is not read as "Mint"
EBAY_CONDITION_DESCRIPTIONS: list[tuple[str, Condition]] = [
    ("near mint", Condition.NEAR_MINT),
    ("very good", Condition.VERY_GOOD),
    ("excellent", Condition.EXCELLENT),
    ("gem mint", Condition.MINT),
    ("mint", Condition.MINT),
    ("good", Condition.GOOD),
    ("fair", Condition.FAIR),
    ("poor", Condition.POOR),
]


def map_ebay_condition(
    condition_id: Optional[str],
    description: Optional[str]
) -> Optional[Condition]:
    """
    Translate eBay's ConditionID / condition description to our enum.

    The description is checked first since sellers fill it more carefully
    than the numeric grade. Returns None when neither is recognized.
    """
    if description:
        lowered = description.lower()
        for phrase, condition in EBAY_CONDITION_DESCRIPTIONS:
            if re.search(rf"\b{phrase}\b", lowered):
                return condition

    if condition_id:
        return EBAY_CONDITION_IDS.get(condition_id.split(".")[0].strip())

    return None


def is_ebay_export(columns) -> bool:
    """True if the header row looks like an eBay export."""
    return EBAY_SIGNATURE_COLUMNS.issubset({str(c).strip() for c in columns})


def map_ebay_row(row: RawRow) -> CardCreate:
    """
    Map one eBay export row to a candidate card.

    Never raises; a row that cannot be mapped degrades to fallback_card().
    """
    try:
        return _map_ebay_row(row)
    except Exception as e:
        logger.warning("ebay_row_mapping_degraded", error=str(e), error_type=type(e).__name__)
        return fallback_card(notes=_notes(clean_cell(row.get(EBAY_COLUMNS["title"]))))


def _map_ebay_row(row: RawRow) -> CardCreate:
    def cell(key: str) -> Optional[str]:
        return clean_cell(row.get(EBAY_COLUMNS[key]))

    title = cell("title") or ""

    player_name = (
        cell("player")
        or cell("card_name")
        or extract_player_name(title)
        or UNKNOWN_PLAYER
    )

    sport = normalize_sport(cell("sport")) or extract_sport(title) or default_sport()

    year_text = cell("year") or cell("season")
    year = parse_year(year_text, default=parse_year(extract_year(title)))

    title_brand, title_set = extract_brand_and_set(title)
    brand = cell("manufacturer") or title_brand
    card_set = cell("set") or title_set

    card_number = cell("card_number") or extract_card_number(title)
    if card_number:
        card_number = card_number.lstrip("#").strip() or None

    condition = (
        map_ebay_condition(
            cell("condition_id"),
            cell("specific_condition") or cell("condition_description"),
        )
        or extract_condition(title)
        or default_condition()
    )

    price = extract_price(title)
    current_value = parse_amount(price) if price is not None else Decimal("0")

    pictures = split_urls(row.get(EBAY_COLUMNS["pictures"]))

    return CardCreate(
        player_name=player_name[:MAX_PLAYER_NAME],
        sport=sport,
        year=year,
        brand=brand,
        card_set=card_set,
        card_number=card_number,
        team=cell("team"),
        condition=condition,
        purchase_price=Decimal("0"),
        current_value=current_value,
        notes=_notes(title),
        front_image_url=pictures[0] if pictures else None,
        back_image_url=pictures[1] if len(pictures) > 1 else None,
    )


def _notes(title: Optional[str]) -> Optional[str]:
    return f"Imported from eBay: {title}" if title else None
