"""
Logging for signing and envelope events.

Library modules log through ``structlog.get_logger()``; ``request_signed`` and
``envelope_serialized`` are emitted at ``DEBUG`` with the action, method,
region and counts as context. Secrets and message bodies are never part of an
event. Applications that want these events call :func:`setup_logging` once.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, TextIO

import structlog


def _event_processors() -> List[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.format_exc_info,
    ]


def _formatter(json: bool) -> logging.Formatter:
    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    return structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def setup_logging(*, json: bool = True, level: str = 'INFO', stream: Optional[TextIO] = None) -> None:
    """
    Send structlog events through a single root handler.

    ``json`` selects JSON lines over the console renderer, ``level`` is a
    stdlib level name in any case, and ``stream`` defaults to stderr. Existing
    root handlers are replaced.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_event_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(_formatter(json))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper())
