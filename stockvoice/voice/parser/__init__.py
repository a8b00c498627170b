"""Voice command parsing: intents, entities, locations, products."""

from stockvoice.voice.parser.entity_extractor import extract_entities
from stockvoice.voice.parser.intent_parser import detect_command_intent, parse_intent
from stockvoice.voice.parser.location_parser import extract_location
from stockvoice.voice.parser.product_parser import parse_multi_product_command
from stockvoice.voice.parser.transcript_processor import process_transcript

__all__ = [
    "detect_command_intent",
    "extract_entities",
    "extract_location",
    "parse_intent",
    "parse_multi_product_command",
    "process_transcript",
]
