"""
Logging Configuration

structlog on top of the stdlib logging module. Events are short sentences
with key-value context:

    logger.info("Bulk delete completed", media_type="image", deleted_count=12)

Rendering:
==========
    development   2026-03-02T10:30:00Z [info ] Bulk delete completed  media_type=image deleted_count=12
    otherwise     {"event": "Bulk delete completed", "level": "info", "deleted_count": 12, ...}

Request Context:
================
The HTTP middleware binds ``request_id``, ``method`` and ``path`` with
log_context(); every line logged while serving that request carries them.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from portfolio.config.settings import settings


def _renderers() -> list[Processor]:
    if settings.is_development:
        return [structlog.dev.ConsoleRenderer(colors=True)]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def setup_logging() -> None:
    """Configure stdlib logging and structlog. Runs once, on import."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=settings.LOG_LEVEL.upper(),
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            *_renderers(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_context(**values: Any) -> None:
    """Attach ``values`` to every log line emitted from the current context."""
    structlog.contextvars.bind_contextvars(**values)


def clear_log_context() -> None:
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("portfolio")
