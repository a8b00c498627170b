"""stockvoice Test Suite

Test organization:
- unit/: Unit tests for individual modules
  - voice/: Parsers (units, locations, dates, entities, intents, products),
    transcript pipeline, recognition engines and the listening session
  - test_cli.py, test_config_models.py: entry point and settings

Running tests:
    # All tests
    pytest

    # Specific module
    pytest tests/unit/voice/

    # With coverage
    pytest --cov=stockvoice --cov-report=term-missing
"""
