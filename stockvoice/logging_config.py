"""
Structured logging for stockvoice, using structlog on top of stdlib logging.

Library modules log through ``logging.getLogger(__name__)``; this module
decides how those records are rendered. Console output is the default,
JSON lines when STOCKVOICE_LOG_FORMAT=json (for the kiosk/backend relay).

Voice sessions bind their id into structlog's context variables so every
record emitted while a transcript is processed carries ``voice_session``.

Usage:
    from stockvoice.logging_config import setup_logging
    setup_logging()
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, TextIO

import structlog


def setup_logging(
    level: str | None = None,
    json_output: bool | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog + stdlib logging for the process.

    Args:
        level: Log level name; defaults to STOCKVOICE_LOG_LEVEL or INFO.
        json_output: Render JSON lines; defaults to STOCKVOICE_LOG_FORMAT=json.
        stream: Output stream, stderr by default.
    """
    if level is None:
        level = os.environ.get("STOCKVOICE_LOG_LEVEL", "INFO")

    if json_output is None:
        json_output = os.environ.get("STOCKVOICE_LOG_FORMAT", "").lower() == "json"

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(
            ensure_ascii=False
        )
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # foreign_pre_chain lets plain logging.getLogger() records pick up the
    # bound voice_session context as well
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)


def bind_voice_context(**values: Any) -> None:
    """Attach key/values (e.g. voice_session) to every subsequent record."""
    structlog.contextvars.bind_contextvars(**values)


def clear_voice_context(*keys: str) -> None:
    """Remove keys bound with bind_voice_context (all keys when none given)."""
    if keys:
        structlog.contextvars.unbind_contextvars(*keys)
    else:
        structlog.contextvars.clear_contextvars()


__all__ = ["bind_voice_context", "clear_voice_context", "setup_logging"]
