"""Single entry point from transcript text to a structured command.

    text → intent → location → entities → products (ADD_PRODUCT only)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date

from stockvoice.voice.config_models import VoiceConfig
from stockvoice.voice.models import CommandIntent, ParsedCommand, ParsedProduct
from stockvoice.voice.parser.entity_extractor import extract_entities
from stockvoice.voice.parser.intent_parser import extract_search_term, parse_intent, suggest_command
from stockvoice.voice.parser.location_parser import extract_location, find_placed_location
from stockvoice.voice.parser.product_parser import parse_product_segment, split_into_segments

logger = logging.getLogger(__name__)


def _parse_products(
    text: str,
    utterance_position: str | None,
    known_products: list[str] | None,
    config: VoiceConfig,
    today: date | None,
) -> list[ParsedProduct]:
    parsing = config.parsing
    products: list[ParsedProduct] = []

    for segment in split_into_segments(text):
        product = parse_product_segment(
            segment,
            known_products=known_products,
            threshold=parsing.fuzzy_match_threshold,
            default_unit=parsing.default_unit,
            today=today,
        )
        if product is None:
            continue

        segment_location = find_placed_location(segment)
        if segment_location:
            position = segment_location.label
        else:
            position = utterance_position or parsing.default_position
        products.append(replace(product, position=position))

    return products


def process_transcript(
    text: str,
    known_products: list[str] | None = None,
    config: VoiceConfig | None = None,
    today: date | None = None,
) -> ParsedCommand:
    """Interpret a final transcript.

    Args:
        text: Transcript from the speech engine.
        known_products: Catalogue names for fuzzy matching product names.
        config: Parsing settings (defaults when omitted).
        today: Reference date for relative expiry phrases.

    Returns:
        ParsedCommand. Products are only filled in for ADD_PRODUCT; every
        product's position is its own segment's placed location, else the
        placed location of the whole utterance. Generic "at <phrase>"
        matches only feed ``location``, never a product position.
    """
    config = config or VoiceConfig()
    text = (text or "").strip()

    intent, confidence = parse_intent(text)
    location = extract_location(text)
    entities = extract_entities(text)

    products: list[ParsedProduct] = []
    if intent == CommandIntent.ADD_PRODUCT:
        placed = find_placed_location(text)
        utterance_position = placed.label if placed else None
        products = _parse_products(text, utterance_position, known_products, config, today)

    suggestion = None
    if intent == CommandIntent.UNKNOWN and text:
        suggestion = suggest_command(text)

    logger.debug(
        "Processed transcript: intent=%s products=%d entities=%d",
        intent.value, len(products), len(entities),
    )

    return ParsedCommand(
        intent=intent,
        confidence=confidence,
        products=products,
        location=location,
        entities=entities,
        raw_transcript=text,
        search_term=extract_search_term(text, intent),
        suggestion=suggestion,
    )
