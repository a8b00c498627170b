"""Storage location extraction from voice commands.

Recognizes where a product is kept ("on shelf three", "in the dairy
section", "back room", "left of the store") and returns a display label
such as "Shelf 3" or "Dairy Section".

Families are tried in a fixed order and the first family/pattern pair that
matches anywhere in the text wins, even if a later family would match a
longer or earlier phrase. A generic "in/at/on/from the <phrase>" pattern is
the last resort.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

NUMBER_WORDS: dict[str, str] = {
    "one": "1", "two": "2", "three": "3", "four": "4", "five": "5",
    "six": "6", "seven": "7", "eight": "8", "nine": "9", "ten": "10",
}

_NUMBER = r"(\d+|one|two|three|four|five|six|seven|eight|nine|ten)"
_NUMBER_PREFIX = r"\s*(?:number|#|no\.?)?\s*"
_LEVEL = r"(?:top|bottom|middle|upper|lower)"
_SECTIONS = (
    r"fruit|vegetable|dairy|meat|frozen|bakery|produce|deli|seafood|canned"
    r"|dry|beverage|snack|health|beauty|household|pet|cleaning"
)
_STORAGE = r"store\s*room|back\s*room|warehouse|storage|pantry|fridge|refrigerator|freezer|cooler"
_POSITIONS = r"left|right|front|back|top|bottom|center|middle|corner|end|side"
_RELATIVE_TO = r"store|shop|aisle|section|display"

# Ordered: shelves, aisles, racks, sections, storage, positions
LOCATION_PATTERNS: dict[str, list[str]] = {
    "shelves": [
        rf"\b(?:on|in|at|from)?\s*(?:the)?\s*{_LEVEL}?\s*shelf{_NUMBER_PREFIX}{_NUMBER}?\b",
        rf"\b(?:shelf|shelves){_NUMBER_PREFIX}{_NUMBER}?\b",
    ],
    "aisles": [
        rf"\b(?:on|in|at|from)?\s*(?:the)?\s*aisle{_NUMBER_PREFIX}{_NUMBER}?\b",
        rf"\baisle{_NUMBER_PREFIX}{_NUMBER}?\b",
    ],
    "racks": [
        rf"\b(?:on|in|at|from)?\s*(?:the)?\s*{_LEVEL}?\s*rack{_NUMBER_PREFIX}{_NUMBER}?\b",
        rf"\b(?:rack|racks){_NUMBER_PREFIX}{_NUMBER}?\b",
    ],
    "sections": [
        rf"\b(?:in|at|from)?\s*(?:the)?\s*(?:{_SECTIONS})\s*section\b",
        rf"\b(?:{_SECTIONS})\s*section\b",
    ],
    "storage": [
        rf"\b(?:in|at|from)?\s*(?:the)?\s*(?:{_STORAGE})\b",
        rf"\b(?:{_STORAGE})\b",
    ],
    "positions": [
        rf"\b(?:on|in|at|from)?\s*(?:the)?\s*(?:{_POSITIONS})\s*(?:of|in|at)?\s*(?:the)?\s*(?:{_RELATIVE_TO})?\b",
        rf"\b(?:{_POSITIONS})\s*(?:of|in|at)?\s*(?:the)?\s*(?:{_RELATIVE_TO})?\b",
    ],
}

GENERIC_LOCATION_PATTERN = r"\b(?:in|at|on|from)\s+(?:the\s+)?([a-z0-9\s]{2,25})\b"

# Generic-fallback phrases that are never locations
COMMON_PHRASES = frozenset({"store", "shop", "inventory", "list", "cart"})

_SECTION_TERM = re.compile(rf"\b({_SECTIONS})\b", re.IGNORECASE)
_STORAGE_TERM = re.compile(rf"\b({_STORAGE})\b", re.IGNORECASE)
_POSITION_TERM = re.compile(rf"\b({_POSITIONS})\b", re.IGNORECASE)
_RELATIVE_TERM = re.compile(rf"\b(of|in|at)\s+(?:the\s+)?({_RELATIVE_TO})\b", re.IGNORECASE)

# A placed phrase is introduced by a preposition or names a fixture
_PLACED_TERM = re.compile(
    r"^\s*(?:on|in|at|from)\b|\b(?:shelf|shelves|rack|racks|aisle|section)\b", re.IGNORECASE
)


@dataclass(frozen=True)
class LocationMatch:
    """A recognized location and the span of the phrase that produced it."""

    label: str
    start: int
    end: int
    family: str


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def _numbered(label: str) -> Callable[[re.Match], str]:
    def formatter(match: re.Match) -> str:
        number = match.group(1)
        if not number:
            return label
        number = NUMBER_WORDS.get(number.lower(), number)
        return f"{label} {number}"

    return formatter


def _format_section(match: re.Match) -> str:
    term = _SECTION_TERM.search(match.group(0))
    if not term:
        return "Section"
    return f"{_capitalize(term.group(1).lower())} Section"


def _format_storage(match: re.Match) -> str:
    term = _STORAGE_TERM.search(match.group(0))
    if not term:
        return "Storage"
    storage = re.sub(r"\s+", " ", term.group(1).lower()).strip()
    return _capitalize(storage)


def _format_position(match: re.Match) -> str:
    term = _POSITION_TERM.search(match.group(0))
    if not term:
        return "Position"
    location = _capitalize(term.group(1).lower())
    relative = _RELATIVE_TERM.search(match.group(0))
    if relative:
        location += f" {relative.group(1).lower()} {_capitalize(relative.group(2).lower())}"
    return location


_FORMATTERS: dict[str, Callable[[re.Match], str]] = {
    "shelves": _numbered("Shelf"),
    "aisles": _numbered("Aisle"),
    "racks": _numbered("Rack"),
    "sections": _format_section,
    "storage": _format_storage,
    "positions": _format_position,
}

# Compiled pattern cache
_compiled_patterns: list[tuple[str, re.Pattern]] | None = None
_generic_pattern: re.Pattern | None = None


def _get_patterns() -> list[tuple[str, re.Pattern]]:
    """Get compiled (family, pattern) pairs in priority order."""
    global _compiled_patterns
    if _compiled_patterns is None:
        _compiled_patterns = [
            (family, re.compile(pattern, re.IGNORECASE))
            for family, patterns in LOCATION_PATTERNS.items()
            for pattern in patterns
        ]
    return _compiled_patterns


def _get_generic_pattern() -> re.Pattern:
    global _generic_pattern
    if _generic_pattern is None:
        _generic_pattern = re.compile(GENERIC_LOCATION_PATTERN, re.IGNORECASE)
    return _generic_pattern


def find_location(text: str, include_generic: bool = True) -> LocationMatch | None:
    """Find the best-guess location phrase in text.

    Args:
        text: Free text (a transcript or one product segment).
        include_generic: Fall back to the "in/at/on/from <phrase>" pattern.

    Returns:
        LocationMatch with offsets into ``text``, or None.
    """
    if not text or not text.strip():
        return None

    for family, pattern in _get_patterns():
        match = pattern.search(text)
        if match:
            return LocationMatch(
                label=_FORMATTERS[family](match),
                start=match.start(),
                end=match.end(),
                family=family,
            )

    if not include_generic:
        return None

    match = _get_generic_pattern().search(text)
    if match:
        phrase = match.group(1).strip().lower()
        if len(phrase) > 2 and phrase not in COMMON_PHRASES:
            return LocationMatch(
                label=_capitalize(phrase),
                start=match.start(),
                end=match.end(),
                family="generic",
            )

    return None


def find_placed_location(text: str) -> LocationMatch | None:
    """Find a location phrase that is safe to treat as a product's placement.

    Only family matches that start with on/in/at/from or name a shelf,
    rack, aisle or section qualify, so "storage boxes" or "top ramen"
    stay product names. The generic fallback is never used.
    """
    if not text or not text.strip():
        return None

    for family, pattern in _get_patterns():
        for match in pattern.finditer(text):
            if _PLACED_TERM.search(match.group(0)):
                return LocationMatch(
                    label=_FORMATTERS[family](match),
                    start=match.start(),
                    end=match.end(),
                    family=family,
                )

    return None


def extract_location(text: str) -> str | None:
    """Extract a normalized location label, e.g. "put it on shelf 3" → "Shelf 3".

    None means no location was mentioned; it is not an error.
    """
    found = find_location(text)
    return found.label if found else None
