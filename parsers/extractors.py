"""
Field extractors for free-text card descriptions.

Each extractor takes a title, card-name cell or description line and returns
the value it found, or None. They never raise; callers decide the default.
"""

import re
from typing import Optional

from models.card import Condition, Sport


# ===================
# PATTERNS
# ===================

YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")
CARD_NUMBER_PATTERN = re.compile(r"#\s*(\d+)")
PRICE_PATTERN = re.compile(r"\$\s*(\d+(?:\.\d{1,2})?)")
# Capitalized word, allowing one inner capital ("LeBron", "McDavid")
NAME_WORD = r"[A-Z][a-z]*[A-Z]?[a-z]+"
PLAYER_NAME_PATTERN = re.compile(NAME_WORD + " " + NAME_WORD)
# Lookahead so "Rookie Michael Jordan" still yields "Michael Jordan"
PLAYER_NAME_PATTERN_OVERLAPPING = re.compile(r"(?=\b(" + PLAYER_NAME_PATTERN.pattern + r")\b)")
NAME_STOPWORDS = {
    "gem", "mint", "near", "very", "good", "excellent", "fair", "poor",
    "rookie", "card", "base", "insert", "parallel", "refractor", "auto",
}

KNOWN_BRANDS = ["Topps", "Panini", "Fleer", "Upper Deck", "Bowman", "Donruss"]
BRAND_PATTERN = re.compile(
    r"\b(" + "|".join(re.escape(b) for b in KNOWN_BRANDS) + r")\b",
    re.IGNORECASE
)

# Order matters: grading tokens first, then longer phrases ahead of the
# words they contain ("near mint" before "mint", "very good" before "good").
CONDITION_PATTERNS: list[tuple[re.Pattern, Condition]] = [
    (re.compile(r"\bpsa\s*10\b|\bgem\s*-?\s*(?:mt|mint)\b", re.IGNORECASE), Condition.MINT),
    (re.compile(r"\bpsa\s*9\b|\bbgs\s*9(?:\.5)?\b|\bnm-mt\b", re.IGNORECASE), Condition.NEAR_MINT),
    (re.compile(r"\bpsa\s*8\b", re.IGNORECASE), Condition.EXCELLENT),
    (re.compile(r"\bpsa\s*[67]\b", re.IGNORECASE), Condition.VERY_GOOD),
    (re.compile(r"\bpsa\s*[345]\b", re.IGNORECASE), Condition.GOOD),
    (re.compile(r"\bpsa\s*[12]\b", re.IGNORECASE), Condition.FAIR),
    (re.compile(r"\bpsa\s*0\b", re.IGNORECASE), Condition.POOR),
    (re.compile(r"\bnear\s*mint\b|\bnm\b", re.IGNORECASE), Condition.NEAR_MINT),
    (re.compile(r"\bmint\b", re.IGNORECASE), Condition.MINT),
    (re.compile(r"\bexcellent\b|\bex\b", re.IGNORECASE), Condition.EXCELLENT),
    (re.compile(r"\bvery\s*good\b|\bvg\b", re.IGNORECASE), Condition.VERY_GOOD),
    (re.compile(r"\bgood\b", re.IGNORECASE), Condition.GOOD),
    (re.compile(r"\bfair\b", re.IGNORECASE), Condition.FAIR),
    (re.compile(r"\bpoor\b", re.IGNORECASE), Condition.POOR),
]

SPORT_PATTERNS: list[tuple[re.Pattern, Sport]] = [
    (re.compile(r"basketball|nba|hoops", re.IGNORECASE), Sport.BASKETBALL),
    (re.compile(r"baseball|mlb|diamond", re.IGNORECASE), Sport.BASEBALL),
    (re.compile(r"football|nfl|gridiron", re.IGNORECASE), Sport.FOOTBALL),
    (re.compile(r"hockey|nhl|puck", re.IGNORECASE), Sport.HOCKEY),
    (re.compile(r"soccer|fifa|mls", re.IGNORECASE), Sport.SOCCER),
]


# ===================
# EXTRACTORS
# ===================

def extract_year(text: Optional[str]) -> Optional[int]:
    """First 19xx/20xx token, e.g. "2003 Topps Chrome #23" -> 2003."""
    if not text:
        return None
    match = YEAR_PATTERN.search(text)
    return int(match.group(0)) if match else None


def extract_card_number(text: Optional[str]) -> Optional[str]:
    """Digits after a '#', e.g. "Jordan #45 PSA 10" -> "45"."""
    if not text:
        return None
    match = CARD_NUMBER_PATTERN.search(text)
    return match.group(1) if match else None


def extract_price(text: Optional[str]) -> Optional[float]:
    """Dollar amount, e.g. "Sold for $125.50 shipped" -> 125.5."""
    if not text:
        return None
    match = PRICE_PATTERN.search(text)
    return float(match.group(1)) if match else None


def extract_player_name(text: Optional[str]) -> Optional[str]:
    """
    Guess the player name from a description.

    Takes the first pair of capitalized words, ignoring the brand and set
    ("Fleer Ultra") and condition words ("Gem Mint"). When the word after
    the brand turns out to be the player's first name ("Fleer Michael
    Jordan"), only the brand is ignored. When there is no pair at all,
    falls back to the first two whitespace-separated tokens.
    """
    if not text or not text.strip():
        return None

    brand_match = BRAND_PATTERN.search(text)
    if brand_match:
        set_match = re.match(r"\s+[A-Za-z]+", text[brand_match.end():])
        set_end = brand_match.end() + (set_match.end() if set_match else 0)
        searches = [
            _mask(text, brand_match.start(), set_end),
            _mask(text, brand_match.start(), brand_match.end()),
        ]
    else:
        searches = [text]

    for searchable in searches:
        name = _first_name_pair(searchable)
        if name:
            return name

    return " ".join(text.split()[:2])


def _mask(text: str, start: int, end: int) -> str:
    return text[:start] + " | " + text[end:]


def _first_name_pair(text: str) -> Optional[str]:
    for match in PLAYER_NAME_PATTERN_OVERLAPPING.finditer(text):
        candidate = match.group(1)
        if not any(word.lower() in NAME_STOPWORDS for word in candidate.split()):
            return candidate
    return None


def extract_condition(text: Optional[str]) -> Optional[Condition]:
    """First matching entry of CONDITION_PATTERNS."""
    if not text:
        return None
    for pattern, condition in CONDITION_PATTERNS:
        if pattern.search(text):
            return condition
    return None


def extract_sport(text: Optional[str]) -> Optional[Sport]:
    """First matching entry of SPORT_PATTERNS."""
    if not text:
        return None
    for pattern, sport in SPORT_PATTERNS:
        if pattern.search(text):
            return sport
    return None


def extract_brand(text: Optional[str]) -> Optional[str]:
    """Known manufacturer, returned in its canonical spelling."""
    brand, _ = extract_brand_and_set(text)
    return brand


def extract_brand_and_set(text: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """
    Manufacturer plus the word right after it as the set name.

    "1996 Fleer Ultra Michael Jordan" -> ("Fleer", "Ultra")
    "Topps #7" -> ("Topps", None)
    """
    if not text:
        return None, None

    match = BRAND_PATTERN.search(text)
    if not match:
        return None, None

    brand = next(b for b in KNOWN_BRANDS if b.lower() == match.group(1).lower())

    set_match = re.match(r"\s+([A-Za-z]+)", text[match.end():])
    card_set = set_match.group(1) if set_match else None

    return brand, card_set


# ===================
# COLUMN VALUE NORMALIZATION
# ===================

def normalize_sport(value: Optional[str]) -> Optional[Sport]:
    """
    Coerce an explicit sport cell to the enum.

    Exact enum values and keywords ("NBA") are recognized. Any other
    non-empty value is a sport we don't track and maps to OTHER.
    """
    if not value or not value.strip():
        return None
    key = value.strip().lower()
    for sport in Sport:
        if sport.value == key:
            return sport
    return extract_sport(value) or Sport.OTHER


def normalize_condition(value: Optional[str]) -> Optional[Condition]:
    """
    Coerce an explicit condition cell to the enum.

    Accepts enum values in any case or spacing ("Near Mint", "nearmint",
    "NEAR_MINT") and grading shorthand ("PSA 9"). Unknown -> None.
    """
    if not value or not value.strip():
        return None
    key = re.sub(r"[\s_-]+", "", value.strip().lower())
    for condition in Condition:
        if condition.value.lower() == key:
            return condition
    return extract_condition(value)
