"""Entity extraction from voice command transcripts.

Each entity family (products, quantities, positions, money, dates, command
verbs) is a tagged definition: a label, its regexes and a formatter that
normalizes the matched text. One generic pass runs every regex over the
text, sorts the hits by start offset and resolves overlaps greedily.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from stockvoice.voice.models import Entity, EntityKind
from stockvoice.voice.parser.date_parser import EXPIRY_KEYWORDS, date_phrase_patterns, parse_date
from stockvoice.voice.parser.location_parser import NUMBER_WORDS, extract_location
from stockvoice.voice.parser.units import UNIT_ALIASES, canonical_unit

ENTITY_DESCRIPTIONS: dict[EntityKind, str] = {
    EntityKind.PRODUCT: "Objects, vehicles, foods, etc. (not services)",
    EntityKind.QUANTITY: "Measurements, as of weight or distance",
    EntityKind.POSITION: "Storage positions such as racks, shelves and drawers",
    EntityKind.MONEY: "Monetary values, including unit",
    EntityKind.DATE: "Absolute or relative dates or periods",
    EntityKind.COMMAND: "Action verbs that start a command",
    EntityKind.PERSON: "People, including fictional",
    EntityKind.ORG: "Companies, agencies, institutions, etc.",
    EntityKind.LOC: "Non-GPE locations, mountain ranges, bodies of water",
    EntityKind.MISC: "Other named entities",
}

ENTITY_COLORS: dict[str, str] = {
    "PERSON": "#ff5e5e",
    "ORG": "#77dd77",
    "LOC": "#84dcc6",
    "PRODUCT": "#a0a0ff",
    "DATE": "#aec6cf",
    "MONEY": "#98fb98",
    "QUANTITY": "#f0e68c",
    "POSITION": "#84b6f4",
    "COMMAND": "#ffb347",
}

DEFAULT_ENTITY_COLOR = "#cccccc"

# Spoken product term → catalogue name. Hindi transliterations map to the
# English name used in the inventory.
PRODUCT_TERMS: dict[str, str] = {
    "rice": "rice", "basmati rice": "rice", "chawal": "rice",
    "sugar": "sugar", "cheeni": "sugar", "chini": "sugar",
    "salt": "salt", "namak": "salt",
    "flour": "flour", "wheat flour": "flour", "atta": "flour", "maida": "flour",
    "oil": "oil", "cooking oil": "oil", "tel": "oil",
    "milk": "milk", "doodh": "milk", "dudh": "milk",
    "bread": "bread",
    "butter": "butter", "makhan": "butter", "makkhan": "butter",
    "cheese": "cheese", "paneer": "paneer",
    "ghee": "ghee",
    "dal": "dal", "daal": "dal", "lentils": "dal",
    "tea": "tea", "chai": "tea", "chai patti": "tea",
    "coffee": "coffee",
    "egg": "eggs", "eggs": "eggs", "anda": "eggs", "ande": "eggs",
    "onion": "onion", "onions": "onion", "pyaz": "onion", "pyaaz": "onion",
    "potato": "potato", "potatoes": "potato", "aloo": "potato", "alu": "potato",
    "tomato": "tomato", "tomatoes": "tomato", "tamatar": "tomato",
    "biscuit": "biscuits", "biscuits": "biscuits",
    "soap": "soap", "sabun": "soap",
    "water": "water", "pani": "water",
    "vegetables": "vegetables", "sabzi": "vegetables",
    "fruits": "fruits",
}

COMMAND_VERBS = (
    "add", "insert", "put", "place", "stock", "update", "change", "edit",
    "modify", "remove", "delete", "discard", "search", "find", "locate",
    "show", "generate", "create", "make", "prepare", "checkout",
)


@dataclass(frozen=True)
class EntityFamily:
    """Definition of one entity type: its label, regexes and normalizer."""

    kind: EntityKind
    patterns: tuple[str, ...]
    formatter: Callable[[str], str | None] | None = None


def _alternation(terms) -> str:
    # Longest first so "basmati rice" beats "rice" inside one regex
    ordered = sorted(terms, key=len, reverse=True)
    return "|".join(re.escape(t).replace(r"\ ", r"\s+") for t in ordered)


def _format_product(text: str) -> str | None:
    key = re.sub(r"\s+", " ", text.lower()).strip()
    return PRODUCT_TERMS.get(key, key)


def _format_quantity(text: str) -> str | None:
    match = re.match(r"(\d+(?:\.\d+)?)\s*([^\d\s].*)", text.strip())
    if not match:
        return None
    return f"{match.group(1)} {canonical_unit(match.group(2))}"


def _format_position(text: str) -> str | None:
    label = extract_location(text)
    if label:
        return label
    words = [NUMBER_WORDS.get(w.lower(), w.lower()) for w in text.split()]
    return " ".join(w[:1].upper() + w[1:] for w in words)


def _format_money(text: str) -> str | None:
    amount = re.search(r"\d+(?:\.\d+)?", text)
    return amount.group(0) if amount else None


def _format_date(text: str) -> str | None:
    return parse_date(text)


_NUMBER = r"(?:\d+|one|two|three|four|five|six|seven|eight|nine|ten)"
_DATE_PHRASE = "(?:" + "|".join(date_phrase_patterns()) + ")"

ENTITY_FAMILIES: tuple[EntityFamily, ...] = (
    EntityFamily(
        kind=EntityKind.PRODUCT,
        patterns=(rf"\b(?:{_alternation(PRODUCT_TERMS)})\b",),
        formatter=_format_product,
    ),
    EntityFamily(
        kind=EntityKind.QUANTITY,
        patterns=(rf"\b\d+(?:\.\d+)?\s*(?:{_alternation(UNIT_ALIASES)})\b",),
        formatter=_format_quantity,
    ),
    EntityFamily(
        kind=EntityKind.POSITION,
        patterns=(
            rf"\b(?:rack|shelf|drawer|aisle|row|bin|cabinet)\s*(?:number|no\.?|#)?\s*{_NUMBER}\b",
            r"\b(?:top|bottom|middle|upper|lower)\s+(?:shelf|rack|drawer)\b",
        ),
        formatter=_format_position,
    ),
    EntityFamily(
        kind=EntityKind.MONEY,
        patterns=(
            r"(?:₹|\$)\s*\d+(?:\.\d+)?",
            r"\b(?:rs\.?|inr)\s*\d+(?:\.\d+)?",
            r"\b\d+(?:\.\d+)?\s*(?:rupees?|rs\.?|dollars?|bucks)(?!\w)",
        ),
        formatter=_format_money,
    ),
    EntityFamily(
        kind=EntityKind.DATE,
        patterns=(
            rf"{EXPIRY_KEYWORDS}(?:\s+(?:date|on|in|by|is))*\s+{_DATE_PHRASE}",
            *date_phrase_patterns(),
        ),
        formatter=_format_date,
    ),
    EntityFamily(
        kind=EntityKind.COMMAND,
        patterns=(rf"\b(?:{'|'.join(COMMAND_VERBS)})\b",),
        formatter=str.lower,
    ),
)

# Compiled pattern cache
_compiled_families: list[tuple[EntityFamily, list[re.Pattern]]] | None = None


def _get_families() -> list[tuple[EntityFamily, list[re.Pattern]]]:
    global _compiled_families
    if _compiled_families is None:
        _compiled_families = [
            (family, [re.compile(p, re.IGNORECASE) for p in family.patterns])
            for family in ENTITY_FAMILIES
        ]
    return _compiled_families


def collect_entities(text: str) -> list[Entity]:
    """Run every family regex over text; returns all hits sorted by start.

    Overlaps are NOT resolved here. The sort is stable, so hits with equal
    start keep family/pattern declaration order.
    """
    if not text:
        return []

    found: list[Entity] = []
    for family, patterns in _get_families():
        for pattern in patterns:
            for match in pattern.finditer(text):
                if match.end() <= match.start():
                    continue
                matched = match.group(0)
                found.append(Entity(
                    text=matched,
                    label=family.kind,
                    start=match.start(),
                    end=match.end(),
                    description=ENTITY_DESCRIPTIONS[family.kind],
                    value=family.formatter(matched) if family.formatter else None,
                ))

    found.sort(key=lambda e: e.start)
    return found


def resolve_overlaps(entities: list[Entity]) -> list[Entity]:
    """Greedy left-to-right sweep producing non-overlapping entities.

    Input must be sorted by start. A candidate that overlaps the last kept
    entity replaces it only when strictly longer; ties keep the earlier one.
    """
    resolved: list[Entity] = []
    for candidate in entities:
        if not resolved:
            resolved.append(candidate)
            continue

        last = resolved[-1]
        if candidate.overlaps(last):
            if candidate.length > last.length:
                resolved[-1] = candidate
        else:
            resolved.append(candidate)

    return resolved


def extract_entities(text: str) -> list[Entity]:
    """Extract position-sorted, non-overlapping entities from a transcript.

    An empty list is a valid result.
    """
    return resolve_overlaps(collect_entities(text))


def get_entity_color(label: EntityKind | str) -> str:
    """Highlight colour for an entity label."""
    key = label.value if isinstance(label, EntityKind) else label
    return ENTITY_COLORS.get(key, DEFAULT_ENTITY_COLOR)


def get_entity_spans(text: str, entities: list[Entity]) -> list[tuple[str, Entity | None]]:
    """Split text into (fragment, entity-or-None) pieces for highlighting."""
    if not entities:
        return [(text, None)]

    spans: list[tuple[str, Entity | None]] = []
    last_index = 0
    for entity in sorted(entities, key=lambda e: e.start):
        if entity.start < last_index:
            continue
        if entity.start > last_index:
            spans.append((text[last_index:entity.start], None))
        spans.append((text[entity.start:entity.end], entity))
        last_index = entity.end

    if last_index < len(text):
        spans.append((text[last_index:], None))

    return spans
