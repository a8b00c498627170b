"""Listening session: speech engine events in, parsed products out.

State machine:

    IDLE ──start()──▶ LISTENING ──final result──▶ PROCESSING ──▶ IDLE
                          │
                          ├──engine error──▶ ERROR ──▶ IDLE
                          └──stop()/abort()/engine end──▶ IDLE

Only one listening run is active per session; ``start()`` while
LISTENING is a successful no-op. Listener callbacks are replaced as a set
by ``set_listeners()``. A listener that raises is logged and does not
disturb the state machine.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from stockvoice.logging_config import bind_voice_context, clear_voice_context
from stockvoice.voice.config_models import VoiceConfig
from stockvoice.voice.models import ParsedCommand, ParsedProduct, TranscriptionResult
from stockvoice.voice.parser.transcript_processor import process_transcript
from stockvoice.voice.recognition.base import SpeechEngine, SpeechRecognitionError

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"
    PROCESSING = "processing"
    ERROR = "error"


@dataclass
class SessionListeners:
    """UI callbacks. Any slot may be None."""

    on_start: Callable[[], None] | None = None
    on_result: Callable[[str, list[ParsedProduct]], None] | None = None
    on_end: Callable[[], None] | None = None
    on_error: Callable[[Exception], None] | None = None
    on_processing: Callable[[bool], None] | None = None


class VoiceCommandSession:
    """Drives one speech engine and turns its final transcripts into products."""

    def __init__(
        self,
        engine: SpeechEngine,
        config: VoiceConfig | None = None,
        known_products: list[str] | None = None,
    ):
        self.engine = engine
        self.config = config or VoiceConfig()
        self.known_products = list(known_products or [])
        self.session_id = uuid.uuid4().hex[:8]

        self._state = SessionState.IDLE
        self._transcript = ""
        self._listeners = SessionListeners()
        self.last_command: ParsedCommand | None = None

        engine.on_start = self._handle_start
        engine.on_result = self._handle_result
        engine.on_error = self._handle_error
        engine.on_end = self._handle_end

    # ── Public API ──────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_listening(self) -> bool:
        return self._state == SessionState.LISTENING

    @property
    def is_supported(self) -> bool:
        return self.engine.is_supported

    @property
    def transcript(self) -> str:
        """Latest transcript (interim or final) of the current run."""
        return self._transcript

    def set_listeners(self, listeners: SessionListeners) -> None:
        """Replace all listener slots; slots left None are cleared."""
        self._listeners = listeners

    def start(self) -> bool:
        """Start listening. True when listening (or already listening)."""
        if not self.engine.is_supported:
            logger.warning(f"Speech engine '{self.engine.name}' is not supported here")
            return False

        if self._state == SessionState.LISTENING:
            return True

        self._transcript = ""
        self._state = SessionState.LISTENING
        try:
            self.engine.start()
        except Exception as e:
            logger.warning(f"Failed to start speech recognition: {e}")
            self._state = SessionState.IDLE
            return False

        logger.info(f"Voice session {self.session_id} listening via {self.engine.name}")
        return True

    def stop(self) -> bool:
        """Stop listening and discard the in-flight transcript."""
        if self._state != SessionState.LISTENING:
            return False

        self._state = SessionState.IDLE
        self._transcript = ""
        self.engine.stop()
        return True

    def abort(self) -> bool:
        """Abort from any state; nothing pending is delivered afterwards."""
        if not self.engine.is_supported:
            return False

        self._state = SessionState.IDLE
        self._transcript = ""
        self.engine.abort()
        return True

    def update_known_products(self, names: list[str]) -> None:
        self.known_products = list(names)

    # ── Engine callbacks ────────────────────────────────────────────────

    def _handle_start(self) -> None:
        self._notify("on_start")

    def _handle_result(self, result: TranscriptionResult) -> None:
        if self._state != SessionState.LISTENING:
            logger.debug(f"Discarding result received while {self._state.value}")
            return

        self._transcript = result.transcript
        if not result.is_final:
            return

        text = result.transcript.strip()
        if not text:
            logger.warning("No voice input detected")
            return

        self._process(text)

    def _handle_error(self, code: str, message: str) -> None:
        if self._state != SessionState.LISTENING:
            logger.debug(f"Ignoring engine error '{code}' while {self._state.value}")
            return

        logger.warning(f"Speech recognition error: {code}")
        self._state = SessionState.ERROR
        self._notify("on_error", SpeechRecognitionError(code, message or None))
        self._state = SessionState.IDLE

    def _handle_end(self) -> None:
        if self._state == SessionState.LISTENING:
            self._state = SessionState.IDLE
        self._notify("on_end")

    # ── Internals ───────────────────────────────────────────────────────

    def _process(self, text: str) -> None:
        self._state = SessionState.PROCESSING
        bind_voice_context(voice_session=self.session_id)
        self._notify("on_processing", True)
        try:
            command = process_transcript(text, self.known_products, self.config)
        except Exception as e:
            logger.exception(f"Failed to process voice command: {e}")
            self._notify("on_error", e)
        else:
            self.last_command = command
            logger.info(
                f"Voice command '{text}' → {command.intent.value} "
                f"({len(command.products)} product(s))"
            )
            self._notify("on_result", text, command.products)
        finally:
            self._notify("on_processing", False)
            self._state = SessionState.IDLE
            clear_voice_context("voice_session")

    def _notify(self, slot: str, *args) -> None:
        callback = getattr(self._listeners, slot)
        if callback is None:
            return
        try:
            callback(*args)
        except Exception as e:
            logger.exception(f"Voice listener {slot} failed: {e}")
