"""Speech recognition engines."""

from stockvoice.voice.recognition.base import SpeechEngine, SpeechRecognitionError
from stockvoice.voice.recognition.mock import MockSpeechEngine
from stockvoice.voice.recognition.web_speech_config import (
    WebSpeechConfig,
    WebSpeechRelay,
    describe_recognition_error,
    process_web_speech_result,
)

__all__ = [
    "MockSpeechEngine",
    "SpeechEngine",
    "SpeechRecognitionError",
    "WebSpeechConfig",
    "WebSpeechRelay",
    "describe_recognition_error",
    "process_web_speech_result",
]
