"""In-process speech engine for tests and the CLI.

Nothing is recorded; the caller scripts what the "microphone" hears with
``deliver()``, ``fail()`` and ``end()``.
"""

from __future__ import annotations

from stockvoice.voice.models import TranscriptionResult
from stockvoice.voice.recognition.base import SpeechEngine


class MockSpeechEngine(SpeechEngine):
    """Scriptable engine. Records the commands it received in ``calls``."""

    def __init__(self, supported: bool = True, fail_on_start: bool = False):
        super().__init__()
        self.supported = supported
        self.fail_on_start = fail_on_start
        self.running = False
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def is_supported(self) -> bool:
        return self.supported

    def start(self) -> None:
        self.calls.append("start")
        if self.fail_on_start:
            raise RuntimeError("recognition already started")
        self.running = True
        self._emit_start()

    def stop(self) -> None:
        self.calls.append("stop")
        self.running = False

    def abort(self) -> None:
        self.calls.append("abort")
        self.running = False

    def deliver(
        self,
        transcript: str,
        is_final: bool = True,
        confidence: float = 0.9,
    ) -> None:
        """Pretend the recognizer heard ``transcript``."""
        self._emit_result(TranscriptionResult(
            transcript=transcript,
            confidence=confidence,
            source=self.name,
            is_final=is_final,
        ))

    def fail(self, code: str = "no-speech", message: str = "") -> None:
        self.running = False
        self._emit_error(code, message)

    def end(self) -> None:
        self.running = False
        self._emit_end()
