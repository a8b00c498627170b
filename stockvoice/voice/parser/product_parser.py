"""Multi-product command parsing.

Turns "add 2 kg rice, 3 packets of salt for ₹20 and milk expiring
tomorrow" into one ParsedProduct per spoken item:

    1. strip one leading action verb
    2. split on commas and "and"/"plus"/"also"/"with"
    3. per segment: leading quantity + unit, price, expiry and placed location
       phrases are pulled out; what is left is the product name
    4. optionally snap the name to a known product (fuzzy match)

Parsing never raises; a segment that cannot be interpreted becomes a
product named after the segment text.
"""

from __future__ import annotations

import difflib
import logging
import re
from datetime import date

from stockvoice.voice.models import ParsedProduct
from stockvoice.voice.parser.date_parser import extract_expiry_date, find_expiry_keyword
from stockvoice.voice.parser.location_parser import find_placed_location
from stockvoice.voice.parser.units import UNIT_ALIASES

logger = logging.getLogger(__name__)

DEFAULT_UNIT = "piece"
DEFAULT_POSITION = "unspecified"
DEFAULT_FUZZY_THRESHOLD = 0.6

_UNIT_ALTERNATION = "|".join(sorted((re.escape(u) for u in UNIT_ALIASES), key=len, reverse=True))

LEADING_VERB_PATTERN = r"^\s*(?:add|create|insert|put|place)\b\s*"
SEGMENT_SPLIT_PATTERN = r"\s*,\s*|\s+(?:and|plus|also|with)\s+"
QUANTITY_UNIT_PATTERN = rf"^(\d+(?:\.\d+)?)\s*({_UNIT_ALTERNATION})\b\s*(.*)$"
BARE_QUANTITY_PATTERN = r"^(\d+(?:\.\d+)?)\s+(.+)$"

# Ordered: keyword-led forms first so "for ₹30" is cut as one phrase
PRICE_PATTERNS: list[str] = [
    r"\b(?:for|at|priced\s+at|price(?:\s+is)?|costs?|worth)\s*(?:₹|rs\.?|inr|\$)?\s*"
    r"(\d+(?:\.\d+)?)(?:\s*(?:rupees?|rs\.?|dollars?)(?!\w))?",
    r"(?:₹|\$)\s*(\d+(?:\.\d+)?)",
    r"\b(?:rs\.?|inr)\s*(\d+(?:\.\d+)?)",
    r"\b(\d+(?:\.\d+)?)\s*(?:rupees?|rs\.?)(?!\w)",
]

_NAME_NOISE = re.compile(r"^(?:of|a|an|the|some)\s+", re.IGNORECASE)

# Compiled pattern cache
_leading_verb_re = re.compile(LEADING_VERB_PATTERN, re.IGNORECASE)
_split_re = re.compile(SEGMENT_SPLIT_PATTERN, re.IGNORECASE)
_quantity_unit_re = re.compile(QUANTITY_UNIT_PATTERN, re.IGNORECASE)
_bare_quantity_re = re.compile(BARE_QUANTITY_PATTERN)
_price_res = [re.compile(p, re.IGNORECASE) for p in PRICE_PATTERNS]


def _number(raw: str) -> int | float:
    value = float(raw)
    return int(value) if value.is_integer() else value


def _cut(text: str, start: int, end: int) -> str:
    return re.sub(r"\s+", " ", f"{text[:start]} {text[end:]}").strip()


def strip_leading_verb(command: str) -> str:
    """Remove one leading add/create/insert/put/place."""
    return _leading_verb_re.sub("", command, count=1).strip()


def split_into_segments(command: str) -> list[str]:
    """Split a command into per-product segments, dropping empty ones."""
    if not command:
        return []
    body = strip_leading_verb(command)
    return [s.strip() for s in _split_re.split(body) if s and s.strip()]


def extract_price(text: str) -> tuple[float | None, str]:
    """Find a price phrase; returns (price, text with the phrase removed)."""
    for pattern in _price_res:
        match = pattern.search(text)
        if match:
            return _number(match.group(1)), _cut(text, match.start(), match.end())
    return None, text


def _strip_expiry(text: str, today: date | None) -> tuple[str | None, str]:
    keyword = find_expiry_keyword(text)
    if not keyword:
        return None, text
    expiry = extract_expiry_date(text, today)
    return expiry, text[:keyword.start()].strip()


def _clean_name(text: str) -> str:
    name = text.strip(" .,!?").lower()
    previous = None
    while previous != name:
        previous = name
        name = _NAME_NOISE.sub("", name).strip()
    return re.sub(r"\s+", " ", name)


def match_known_product(
    name: str,
    known_products: list[str] | None,
    threshold: float = DEFAULT_FUZZY_THRESHOLD,
) -> str:
    """Snap a spoken name to the closest known product, if close enough."""
    if not known_products or not name:
        return name

    candidates = {p.lower(): p for p in known_products if p and p.strip()}
    if name in candidates:
        return name

    close = difflib.get_close_matches(name, list(candidates), n=1, cutoff=threshold)
    if close:
        logger.debug("Fuzzy matched '%s' to known product '%s'", name, close[0])
        return close[0]
    return name


def parse_product_segment(
    segment: str,
    known_products: list[str] | None = None,
    threshold: float = DEFAULT_FUZZY_THRESHOLD,
    default_unit: str = DEFAULT_UNIT,
    today: date | None = None,
) -> ParsedProduct | None:
    """Parse one segment ("3 packets of salt for ₹20") into a ParsedProduct.

    Returns None only for a blank segment.
    """
    trimmed = (segment or "").strip()
    if not trimmed:
        return None

    quantity: int | float = 1
    unit = default_unit
    rest = trimmed

    match = _quantity_unit_re.match(trimmed)
    if match:
        quantity = _number(match.group(1))
        unit = match.group(2).lower()
        rest = match.group(3)
    else:
        match = _bare_quantity_re.match(trimmed)
        if match:
            quantity = _number(match.group(1))
            rest = match.group(2)

    price, rest = extract_price(rest)
    expiry, rest = _strip_expiry(rest, today)

    location = find_placed_location(rest)
    if location:
        rest = _cut(rest, location.start, location.end)

    name = _clean_name(rest)
    if not name:
        name = trimmed.lower()

    name = match_known_product(name, known_products, threshold)

    return ParsedProduct(
        name=name,
        quantity=quantity,
        unit=unit,
        position=DEFAULT_POSITION,
        price=price,
        expiry=expiry,
    )


def parse_multi_product_command(
    command: str,
    known_products: list[str] | None = None,
    threshold: float = DEFAULT_FUZZY_THRESHOLD,
    default_unit: str = DEFAULT_UNIT,
    today: date | None = None,
) -> list[ParsedProduct]:
    """Parse a spoken command into one ParsedProduct per segment.

    Args:
        command: Raw transcript, e.g. "add 2 kg rice and 1 packet salt".
        known_products: Catalogue names to fuzzy-match against.
        threshold: Minimum similarity ratio (0..1) for a fuzzy match.
        default_unit: Unit used when none is spoken.
        today: Reference date for relative expiry phrases.
    """
    products: list[ParsedProduct] = []
    for segment in split_into_segments(command):
        product = parse_product_segment(segment, known_products, threshold, default_unit, today)
        if product is not None:
            products.append(product)

    logger.debug("Parsed %d product(s) from '%s'", len(products), command)
    return products
