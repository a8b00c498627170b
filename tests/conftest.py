"""Shared test fixtures for stockvoice tests.

This module provides common fixtures used across all test modules:
- A fixed reference date for relative expiry phrases
- A known-product catalogue for fuzzy matching
- Speech engine / session wiring with an event recorder
- Temporary voice.yaml files

Usage:
    def test_something(session, recorder):
        session.start()
        ...
"""

from collections.abc import Callable
from datetime import date
from pathlib import Path

import pytest

from stockvoice.voice.recognition.mock import MockSpeechEngine
from stockvoice.voice.session import SessionListeners, VoiceCommandSession


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent
ARGS_DIR = PROJECT_ROOT / "args"


# ─────────────────────────────────────────────────────────────────────────────
# Parsing Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def fixed_today() -> date:
    """Reference date for relative expiry phrases (a Wednesday)."""
    return date(2025, 3, 12)


@pytest.fixture
def known_products() -> list[str]:
    """Inventory catalogue used for fuzzy matching.

    Returns:
        list of product names as stored in the shop's inventory
    """
    return ["Basmati Rice", "Sugar", "Toor Dal", "Sunflower Oil", "Amul Butter", "Parle-G Biscuits"]


# ─────────────────────────────────────────────────────────────────────────────
# Session Fixtures
# ─────────────────────────────────────────────────────────────────────────────


class EventRecorder:
    """Collects listener callbacks in call order as (name, args) tuples."""

    def __init__(self):
        self.events: list[tuple] = []

    def _record(self, name: str) -> Callable:
        def callback(*args):
            self.events.append((name, *args))
        return callback

    def listeners(self) -> SessionListeners:
        return SessionListeners(
            on_start=self._record("start"),
            on_result=self._record("result"),
            on_end=self._record("end"),
            on_error=self._record("error"),
            on_processing=self._record("processing"),
        )

    @property
    def names(self) -> list[str]:
        return [event[0] for event in self.events]


@pytest.fixture
def engine() -> MockSpeechEngine:
    """Supported mock speech engine."""
    return MockSpeechEngine()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def session(engine: MockSpeechEngine, recorder: EventRecorder) -> VoiceCommandSession:
    """Session wired to the mock engine with all listeners recording."""
    voice_session = VoiceCommandSession(engine)
    voice_session.set_listeners(recorder.listeners())
    return voice_session


# ─────────────────────────────────────────────────────────────────────────────
# Config Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def voice_yaml(tmp_path: Path) -> Callable[[str], Path]:
    """Write a voice.yaml into a temp dir.

    Returns:
        function taking YAML text and returning the file path
    """
    def write(content: str) -> Path:
        path = tmp_path / "voice.yaml"
        path.write_text(content)
        return path

    return write


@pytest.fixture
def repo_voice_yaml() -> Path:
    """The voice.yaml shipped in the repository's args/ directory."""
    return ARGS_DIR / "voice.yaml"
