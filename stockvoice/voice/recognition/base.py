"""Abstract base class for speech recognition engines.

An engine only produces events. The session owning it assigns the four
callback slots before calling ``start()``; engines must tolerate a slot
being left as None.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from stockvoice.voice.models import TranscriptionResult


class SpeechRecognitionError(Exception):
    """A recognition failure reported by the engine."""

    def __init__(self, code: str, message: str | None = None):
        self.code = code
        self.message = message or f"Speech recognition error: {code}"
        super().__init__(self.message)


class SpeechEngine(ABC):
    """Abstract base for all speech recognition engines."""

    def __init__(self) -> None:
        self.on_start: Callable[[], None] | None = None
        self.on_result: Callable[[TranscriptionResult], None] | None = None
        self.on_error: Callable[[str, str], None] | None = None
        self.on_end: Callable[[], None] | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Engine identifier (e.g. 'web_speech', 'mock')."""

    @property
    @abstractmethod
    def is_supported(self) -> bool:
        """Whether recognition can run in this environment."""

    @abstractmethod
    def start(self) -> None:
        """Begin listening. May raise if the engine refuses to start."""

    @abstractmethod
    def stop(self) -> None:
        """Stop listening; a pending final result may still be delivered."""

    @abstractmethod
    def abort(self) -> None:
        """Stop listening and drop anything not yet delivered."""

    # Helpers for subclasses

    def _emit_start(self) -> None:
        if self.on_start:
            self.on_start()

    def _emit_result(self, result: TranscriptionResult) -> None:
        if self.on_result:
            self.on_result(result)

    def _emit_error(self, code: str, message: str) -> None:
        if self.on_error:
            self.on_error(code, message)

    def _emit_end(self) -> None:
        if self.on_end:
            self.on_end()
