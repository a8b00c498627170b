"""Web Speech API configuration, result processing and browser relay.

The actual Web Speech API runs in the browser (JavaScript). This module
defines the config sent to the frontend, converts the result and error
payloads sent back, and provides WebSpeechRelay: a SpeechEngine whose
start/stop/abort go out as command dicts and whose events come back
through ``receive()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from stockvoice.voice.config_models import RecognitionConfig
from stockvoice.voice.models import TranscriptionResult
from stockvoice.voice.recognition.base import SpeechEngine

logger = logging.getLogger(__name__)


@dataclass
class WebSpeechConfig:
    """Configuration for the browser-side Web Speech API."""

    language: str = "en-US"
    continuous: bool = False
    interim_results: bool = True
    max_alternatives: int = 1

    @classmethod
    def from_config(cls, config: RecognitionConfig) -> WebSpeechConfig:
        return cls(
            language=config.language,
            continuous=config.continuous,
            interim_results=config.interim_results,
            max_alternatives=config.max_alternatives,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "lang": self.language,
            "continuous": self.continuous,
            "interimResults": self.interim_results,
            "maxAlternatives": self.max_alternatives,
        }


def process_web_speech_result(result: dict[str, Any]) -> TranscriptionResult:
    """Convert a Web Speech API result dict into a TranscriptionResult.

    Expected format from the browser:
    {
        "transcript": "add 2 kg rice and 3 packets sugar",
        "confidence": 0.92,
        "isFinal": true,
        "alternatives": ["add 2 kg rice and 3 packet sugar"],
        "language": "en-IN"
    }
    """
    return TranscriptionResult(
        transcript=(result.get("transcript") or "").strip(),
        confidence=float(result.get("confidence") or 0.0),
        source="web_speech",
        language=result.get("language", "en-US"),
        is_final=bool(result.get("isFinal", True)),
        alternatives=list(result.get("alternatives") or []),
    )


@dataclass(frozen=True)
class RecognitionErrorInfo:
    """User-facing description of a Web Speech error code."""

    code: str
    category: str
    message: str
    retryable: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "category": self.category,
            "message": self.message,
            "retryable": self.retryable,
        }


# code -> (category, message, retryable)
RECOGNITION_ERRORS: dict[str, tuple[str, str, bool]] = {
    "not-allowed": (
        "permission",
        "Microphone access was denied. Please allow microphone access in your browser settings.",
        False,
    ),
    "service-not-allowed": (
        "permission",
        "Speech recognition is blocked for this page.",
        False,
    ),
    "no-speech": ("input", "No speech was detected. Please try speaking again.", True),
    "audio-capture": ("input", "No microphone was found. Check that one is connected.", True),
    "aborted": ("input", "Listening was cancelled.", True),
    "network": ("network", "Network error. Please check your internet connection.", True),
    "language-not-supported": ("config", "The selected language is not supported.", False),
    "bad-grammar": ("config", "The speech grammar could not be loaded.", False),
}


def describe_recognition_error(code: str) -> RecognitionErrorInfo:
    """Map a Web Speech error code to a categorized message."""
    category, message, retryable = RECOGNITION_ERRORS.get(
        code,
        ("unknown", "An unknown error occurred during speech recognition.", True),
    )
    return RecognitionErrorInfo(code=code, category=category, message=message, retryable=retryable)


class WebSpeechRelay(SpeechEngine):
    """Engine backed by recognition running in the user's browser.

    Outgoing commands: {"command": "start", "config": {...}},
    {"command": "stop"}, {"command": "abort"}.

    Incoming events (passed to ``receive``): {"type": "start"},
    {"type": "result", ...result payload}, {"type": "error", "error": code},
    {"type": "end"}, {"type": "capabilities", "supported": bool}.
    """

    def __init__(
        self,
        send: Callable[[dict[str, Any]], None],
        config: WebSpeechConfig | None = None,
        supported: bool = True,
    ):
        super().__init__()
        self._send = send
        self.config = config or WebSpeechConfig()
        self._supported = supported

    @property
    def name(self) -> str:
        return "web_speech"

    @property
    def is_supported(self) -> bool:
        return self._supported

    def start(self) -> None:
        self._send({"command": "start", "config": self.config.to_dict()})

    def stop(self) -> None:
        self._send({"command": "stop"})

    def abort(self) -> None:
        self._send({"command": "abort"})

    def receive(self, event: dict[str, Any]) -> bool:
        """Dispatch one browser event. Returns False for unrecognized events."""
        event_type = event.get("type")

        if event_type == "start":
            self._emit_start()
        elif event_type == "result":
            self._emit_result(process_web_speech_result(event))
        elif event_type == "error":
            code = event.get("error") or "unknown"
            message = event.get("message") or describe_recognition_error(code).message
            self._emit_error(code, message)
        elif event_type == "end":
            self._emit_end()
        elif event_type == "capabilities":
            self._supported = bool(event.get("supported", False))
        else:
            logger.warning(f"Ignoring unknown speech event type: {event_type!r}")
            return False

        return True
