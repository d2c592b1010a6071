"""
Row mapper for column-mapped card imports.

Projects one RawRow plus a ColumnMapping onto a CardCreate. Mapping never
fails: anything missing or unreadable falls back to a free-text extractor,
then to the field default. Validation happens later, in the import service.
"""

import re
from datetime import date
from typing import Any, Optional
import structlog

from config import settings
from models.card import (
    CardCreate,
    Condition,
    Sport,
    UNKNOWN_PLAYER,
    MIN_CARD_YEAR,
    max_card_year,
)
from models.imports import ColumnMapping
from parsers.extractors import (
    extract_brand_and_set,
    extract_card_number,
    extract_condition,
    extract_player_name,
    extract_sport,
    extract_year,
    normalize_condition,
    normalize_sport,
)
from parsers.spreadsheet_parser import RawRow
from utils.text_utils import clean_cell, looks_like_url, parse_amount, split_urls

logger = structlog.get_logger(__name__)


MAX_PLAYER_NAME = 200

# Extra image columns some exports use instead of (or beside) the mapped one
EXTRA_FRONT_IMAGE_COLUMNS = ["Front Image URL", "Front Image", "Image URL", "IMAGE URL"]
EXTRA_BACK_IMAGE_COLUMNS = ["Back Image URL", "Back Image"]


def default_sport() -> Sport:
    return Sport(settings.default_sport)


def default_condition() -> Condition:
    return Condition(settings.default_condition)


def parse_year(value: Any, default: Optional[int] = None) -> int:
    """
    Normalize a year / season cell.

    "2023-2024" -> 2023, 2019.0 -> 2019, "'96" -> default.
    Values outside MIN_CARD_YEAR..next year fall back to the default, which
    itself defaults to the current calendar year.
    """
    fallback = default if default is not None else date.today().year
    text = clean_cell(value)
    if text is None:
        return fallback

    match = re.search(r"\d{4}", text)
    if not match:
        return fallback

    year = int(match.group(0))
    if year < MIN_CARD_YEAR or year > max_card_year():
        return fallback
    return year


def get_cell(row: RawRow, column: Optional[str]) -> Optional[str]:
    """Cleaned value of a mapped column, None if unmapped or blank."""
    if not column:
        return None
    return clean_cell(row.get(column))


def has_card_data(row: RawRow, mapping: ColumnMapping) -> bool:
    """
    Pre-filter for spreadsheet noise (blank rows, merged-cell leftovers).

    A row counts if it names the card (player or card-name cell), or carries
    both an image URL and a card number.
    """
    if get_cell(row, mapping.player_name) or get_cell(row, mapping.card_name):
        return True
    return bool(
        get_cell(row, mapping.front_image_url) and get_cell(row, mapping.card_number)
    )


def fallback_card(notes: Optional[str] = None) -> CardCreate:
    """Candidate made purely of defaults."""
    return CardCreate(
        player_name=UNKNOWN_PLAYER,
        sport=default_sport(),
        year=date.today().year,
        condition=default_condition(),
        notes=notes,
    )


def map_row(row: RawRow, mapping: Optional[ColumnMapping] = None) -> CardCreate:
    """
    Map one spreadsheet row to a candidate card.

    Args:
        row: Column-name keyed cell values
        mapping: Column mapping (defaults to the standard export layout)

    Returns:
        CardCreate with every required field filled. A row that cannot be
        mapped at all degrades to fallback_card().
    """
    mapping = mapping or ColumnMapping()
    try:
        return _map_row(row, mapping)
    except Exception as e:
        logger.warning("row_mapping_degraded", error=str(e), error_type=type(e).__name__)
        return fallback_card()


def _map_row(row: RawRow, mapping: ColumnMapping) -> CardCreate:
    card_name = get_cell(row, mapping.card_name)
    notes = get_cell(row, mapping.notes)
    # Free-text sources for fallback extraction, in priority order
    free_text = [text for text in (card_name, notes) if text]

    def from_text(extractor):
        for text in free_text:
            value = extractor(text)
            if value is not None:
                return value
        return None

    # Player name
    player_name = get_cell(row, mapping.player_name)
    if not player_name and card_name:
        player_name = extract_player_name(card_name)
    player_name = (player_name or UNKNOWN_PLAYER)[:MAX_PLAYER_NAME]

    # Enumerated fields
    sport = normalize_sport(get_cell(row, mapping.sport)) or from_text(extract_sport) or default_sport()
    condition = (
        normalize_condition(get_cell(row, mapping.condition))
        or from_text(extract_condition)
        or default_condition()
    )

    # Year
    year = parse_year(get_cell(row, mapping.year), default=parse_year(from_text(extract_year)))

    # Brand / set / number
    brand = get_cell(row, mapping.brand)
    card_set = get_cell(row, mapping.card_set)
    if not brand or not card_set:
        for text in free_text:
            text_brand, text_set = extract_brand_and_set(text)
            if text_brand:
                brand = brand or text_brand
                card_set = card_set or text_set
                break
    card_number = get_cell(row, mapping.card_number) or from_text(extract_card_number)
    if card_number:
        card_number = card_number.lstrip("#").strip() or None

    front_image_url, back_image_url = _resolve_images(row, mapping)

    return CardCreate(
        player_name=player_name,
        sport=sport,
        year=year,
        brand=brand,
        card_set=card_set,
        card_number=card_number,
        team=get_cell(row, mapping.team),
        condition=condition,
        # Never derived from free text for column-mapped imports
        purchase_price=parse_amount(row.get(mapping.purchase_price)) if mapping.purchase_price else 0,
        current_value=parse_amount(row.get(mapping.current_value)) if mapping.current_value else 0,
        notes=notes or card_name,
        front_image_url=front_image_url,
        back_image_url=back_image_url,
    )


def _resolve_images(row: RawRow, mapping: ColumnMapping) -> tuple[Optional[str], Optional[str]]:
    """
    Front/back image URLs from the mapped columns, then the extra columns.

    When front and back share a column it holds "front | back".
    """
    front_urls = split_urls(row.get(mapping.front_image_url)) if mapping.front_image_url else []
    front = front_urls[0] if front_urls else None
    back = None

    if mapping.back_image_url and mapping.back_image_url == mapping.front_image_url:
        back = front_urls[1] if len(front_urls) > 1 else None
    elif mapping.back_image_url:
        back_urls = split_urls(row.get(mapping.back_image_url))
        back = back_urls[0] if back_urls else None

    if not front:
        front = _first_url(row, EXTRA_FRONT_IMAGE_COLUMNS)
    if not back:
        back = _first_url(row, EXTRA_BACK_IMAGE_COLUMNS)

    return front, back


def _first_url(row: RawRow, columns: list[str]) -> Optional[str]:
    for column in columns:
        for url in split_urls(row.get(column)):
            if looks_like_url(url):
                return url
    return None


def coerce_card_object(item: Any) -> CardCreate:
    """
    Build a candidate from a JSON card object (no column mapping).

    Missing player/sport/year/condition get the usual defaults and enum
    spellings are normalized. Everything else is validated as sent, so a
    negative price or a non-object item raises.

    Raises:
        pydantic.ValidationError, TypeError
    """
    if not isinstance(item, dict):
        raise TypeError(f"Expected a card object, got {type(item).__name__}")

    data = dict(item)

    def pick(*keys):
        for key in keys:
            value = data.pop(key, None)
            if value is not None and value != "":
                return value
        return None

    player_name = clean_cell(pick("playerName", "player_name"))
    sport = pick("sport")
    condition = pick("condition")
    year = pick("year")

    data["player_name"] = player_name or UNKNOWN_PLAYER
    data["sport"] = normalize_sport(str(sport)) if sport is not None else default_sport()
    data["condition"] = (
        normalize_condition(str(condition)) if condition is not None else None
    ) or default_condition()
    data["year"] = parse_year(year)

    return CardCreate.model_validate(data)
