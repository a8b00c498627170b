"""Voice interface data models.

Defines intents, entities, and result types for the voice command pipeline:
    Transcript → ParsedCommand (intent + ParsedProduct list + entities)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CommandIntent(str, Enum):
    """Voice command intent types.

    Declaration order is significant: keyword matching walks the intents
    in this order and the first hit wins.
    """

    ADD_PRODUCT = "add_product"
    UPDATE_PRODUCT = "update_product"
    SEARCH_PRODUCT = "search_product"
    DELETE_PRODUCT = "delete_product"
    CREATE_BILL = "create_bill"
    GENERATE_BILL = "generate_bill"
    REMOVE_PRODUCT = "remove_product"
    UNKNOWN = "unknown"


class EntityKind(str, Enum):
    """Labels the entity extractor can assign to a text span."""

    PRODUCT = "PRODUCT"
    QUANTITY = "QUANTITY"
    POSITION = "POSITION"
    MONEY = "MONEY"
    DATE = "DATE"
    COMMAND = "COMMAND"
    PERSON = "PERSON"
    ORG = "ORG"
    LOC = "LOC"
    MISC = "MISC"


@dataclass(frozen=True)
class Entity:
    """A labelled span of the source text.

    ``start``/``end`` are character offsets into the text the entity was
    extracted from, ``end`` exclusive. ``value`` holds the normalized form
    produced by the entity family (e.g. "chawal" → "rice").
    """

    text: str
    label: EntityKind
    start: int
    end: int
    description: str | None = None
    value: str | None = None

    def __post_init__(self) -> None:
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"Invalid entity span [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: Entity) -> bool:
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "label": self.label.value,
            "start": self.start,
            "end": self.end,
            "description": self.description,
            "value": self.value,
        }


@dataclass(frozen=True)
class ParsedProduct:
    """One product extracted from a spoken command segment."""

    name: str
    quantity: float = 1
    unit: str = "piece"
    position: str = "unspecified"
    price: float | None = None
    expiry: str | None = None
    image_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "position": self.position,
            "price": self.price,
            "expiry": self.expiry,
            "image_url": self.image_url,
        }


@dataclass
class TranscriptionResult:
    """Result delivered by a speech engine."""

    transcript: str
    confidence: float = 0.0
    source: str = "web_speech"
    language: str = "en-US"
    is_final: bool = True
    alternatives: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "transcript": self.transcript,
            "confidence": self.confidence,
            "source": self.source,
            "language": self.language,
            "is_final": self.is_final,
            "alternatives": self.alternatives,
        }


@dataclass
class ParsedCommand:
    """A fully interpreted transcript."""

    intent: CommandIntent
    confidence: float = 0.0
    products: list[ParsedProduct] = field(default_factory=list)
    location: str | None = None
    entities: list[Entity] = field(default_factory=list)
    raw_transcript: str = ""
    search_term: str | None = None
    suggestion: str | None = None

    def get_entity(self, kind: EntityKind) -> Entity | None:
        """Get first entity of a given kind."""
        for entity in self.entities:
            if entity.label == kind:
                return entity
        return None

    def get_entities(self, kind: EntityKind) -> list[Entity]:
        """Get all entities of a given kind."""
        return [e for e in self.entities if e.label == kind]

    def to_dict(self) -> dict[str, Any]:
        return {
            "intent": self.intent.value,
            "confidence": self.confidence,
            "products": [p.to_dict() for p in self.products],
            "location": self.location,
            "entities": [e.to_dict() for e in self.entities],
            "raw_transcript": self.raw_transcript,
            "search_term": self.search_term,
            "suggestion": self.suggestion,
        }
