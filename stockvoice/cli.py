#!/usr/bin/env python3
"""
stockvoice Command Line Interface

Main entry point for the `stockvoice` command. Useful for checking how a
spoken phrase will be understood without a browser or microphone.

Usage:
    stockvoice parse "add 2 kg rice and 3 packets sugar"   # Full interpretation
    stockvoice parse "add chawal" --known "Rice,Sugar" --json
    stockvoice entities "2 kg chini for ₹45 on rack 3"       # Entity spans
    stockvoice location "keep it in the back room"           # Location label
    stockvoice units 1500 g                                  # Display form
    stockvoice units 2 kg --to g                             # Convert
    stockvoice commands                                      # Example phrasings
    stockvoice --version                                     # Show version
"""

from __future__ import annotations

import argparse
import json
import sys

from stockvoice.logging_config import setup_logging


def _split_known(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


def cmd_version(args):
    """Show version information."""
    from stockvoice import __version__

    print(f"stockvoice version {__version__}")


def cmd_parse(args):
    """Interpret a transcript the way a listening session would."""
    from stockvoice.voice.config_models import load_voice_config
    from stockvoice.voice.parser.transcript_processor import process_transcript

    config = load_voice_config(args.config)
    command = process_transcript(args.text, _split_known(args.known), config)

    if args.json:
        print(json.dumps(command.to_dict(), indent=2, ensure_ascii=False))
        return 0

    print(f"Intent:     {command.intent.value} ({command.confidence:.2f})")
    if command.location:
        print(f"Location:   {command.location}")
    if command.search_term:
        print(f"Search:     {command.search_term}")
    if command.products:
        print("Products:")
        for product in command.products:
            line = f"  - {product.name}: {product.quantity} {product.unit} @ {product.position}"
            if product.price is not None:
                line += f", price {product.price}"
            if product.expiry:
                line += f", expires {product.expiry}"
            print(line)
    if command.suggestion:
        print(command.suggestion)
    return 0


def cmd_entities(args):
    """List entity spans found in text."""
    from stockvoice.voice.parser.entity_extractor import extract_entities

    entities = extract_entities(args.text)

    if args.json:
        print(json.dumps([e.to_dict() for e in entities], indent=2, ensure_ascii=False))
        return 0

    if not entities:
        print("No entities found.")
        return 0

    for entity in entities:
        value = f" → {entity.value}" if entity.value and entity.value != entity.text else ""
        print(f"[{entity.start:>3}:{entity.end:<3}] {entity.label.value:<9} {entity.text}{value}")
    return 0


def cmd_location(args):
    """Print the normalized storage location in text."""
    from stockvoice.voice.parser.location_parser import extract_location

    location = extract_location(args.text)
    if location is None:
        print("No location found.")
        return 1

    print(location)
    return 0


def cmd_commands(args):
    """List example voice commands."""
    from stockvoice.voice.parser.intent_parser import AVAILABLE_COMMANDS

    if args.json:
        data = {
            "commands": AVAILABLE_COMMANDS,
            "total": sum(len(v) for v in AVAILABLE_COMMANDS.values()),
        }
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return 0

    for category, commands in AVAILABLE_COMMANDS.items():
        print(f"{category}:")
        for entry in commands:
            print(f"  {entry['command']:<26} e.g. \"{entry['example']}\"")
    return 0


def cmd_units(args):
    """Format or convert a quantity."""
    from stockvoice.voice.parser.units import convert_unit, format_value_with_unit

    if args.to is None:
        print(format_value_with_unit(args.value, args.unit))
        return 0

    converted = convert_unit(args.value, args.unit, args.to)
    if converted is None:
        print(f"Cannot convert {args.unit} to {args.to}", file=sys.stderr)
        return 1

    print(f"{converted:g} {args.to}")
    return 0


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="stockvoice",
        description="stockvoice - voice commands for shop inventory",
    )
    parser.add_argument(
        "--version", "-V", action="store_true", help="Show version and exit"
    )
    parser.add_argument(
        "--log-level", default=None, help="Log level (default: STOCKVOICE_LOG_LEVEL or INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse subcommand
    parse_parser = subparsers.add_parser(
        "parse", help="Interpret a transcript (intent, location, products)"
    )
    parse_parser.add_argument("text", help="Transcript text")
    parse_parser.add_argument(
        "--known", default=None, help="Comma-separated known product names for fuzzy matching"
    )
    parse_parser.add_argument(
        "--config", default=None, help="Path to voice.yaml (default: args/voice.yaml)"
    )
    parse_parser.add_argument("--json", action="store_true", help="Output as JSON")
    parse_parser.set_defaults(func=cmd_parse)

    # Entities subcommand
    entities_parser = subparsers.add_parser(
        "entities", help="Show entity spans (products, quantities, money, dates...)"
    )
    entities_parser.add_argument("text", help="Text to analyze")
    entities_parser.add_argument("--json", action="store_true", help="Output as JSON")
    entities_parser.set_defaults(func=cmd_entities)

    # Location subcommand
    location_parser = subparsers.add_parser(
        "location", help="Extract a storage location label"
    )
    location_parser.add_argument("text", help="Text to analyze")
    location_parser.set_defaults(func=cmd_location)

    # Units subcommand
    units_parser = subparsers.add_parser(
        "units", help="Format a quantity or convert between kg/g and l/ml"
    )
    units_parser.add_argument("value", type=float, help="Numeric value")
    units_parser.add_argument("unit", help="Unit of the value (kg, g, l, ml, ...)")
    units_parser.add_argument("--to", default=None, help="Target unit")
    units_parser.set_defaults(func=cmd_units)

    # Commands subcommand
    commands_parser = subparsers.add_parser(
        "commands", help="List example voice commands"
    )
    commands_parser.add_argument("--json", action="store_true", help="Output as JSON")
    commands_parser.set_defaults(func=cmd_commands)

    args = parser.parse_args(argv)

    setup_logging(level=args.log_level)

    # Handle --version at top level
    if args.version:
        cmd_version(args)
        return

    # If no command given, show help
    if not args.command:
        parser.print_help()
        return

    # Execute command
    result = args.func(args)

    # Commands may return an exit code
    if isinstance(result, int) and result != 0:
        sys.exit(result)


if __name__ == "__main__":
    main()
