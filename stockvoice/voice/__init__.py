"""Voice Interface - spoken stock entry for the shop counter

Philosophy:
    Shopkeepers restock with their hands full. Voice is a low-friction way to
    get "2 kg rice on shelf 3" into the inventory without putting the sack
    down. The parser is deliberately permissive: it always produces a best
    guess and the confirmation screen is where mistakes get corrected.

Components:
    models.py: Data models (CommandIntent, EntityKind, ParsedProduct, ...)
    config_models.py: Validated settings loaded from args/voice.yaml
    parser/: Units, locations, dates, entities, intents, product segments
    recognition/: Speech engine capability (mock, browser relay)
    session.py: Listening session state machine and listener callbacks

Usage:
    from stockvoice.voice.parser import process_transcript
    from stockvoice.voice.session import VoiceCommandSession

    command = process_transcript("add 2 kg rice and 3 packets sugar")
    session = VoiceCommandSession(engine)
    session.start()
"""

from stockvoice import ARGS_DIR

CONFIG_PATH = ARGS_DIR / "voice.yaml"

__all__ = [
    "CONFIG_PATH",
]
