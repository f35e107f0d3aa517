"""
Logging Setup
=============

Routes structlog events through the stdlib ``logging`` root handler so
library and application records share one format. Request-scoped fields
(request id, path) ride along through structlog's contextvars.
"""

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

from ai_query.config import Configuration

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Chatty third-party loggers held at WARNING
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def _resolve_level(level: str | None) -> str:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return name if name in LOG_LEVELS else "INFO"


def _use_json(json_format: bool | None) -> bool:
    if json_format is not None:
        return json_format
    return (
        os.getenv("LOG_FORMAT", "").lower() == "json"
        or os.getenv("ENVIRONMENT", "development") == "production"
    )


def setup_logging(
    level: str | None = None,
    enabled: bool = True,
    json_format: bool | None = None,
) -> None:
    """
    Install the structlog pipeline on the root logger.

    Args:
        level: One of LOG_LEVELS; unknown names fall back to INFO
               (default: $LOG_LEVEL)
        enabled: False raises the threshold to ERROR
        json_format: JSON lines instead of console output
                     (default: $LOG_FORMAT=json or $ENVIRONMENT=production)
    """
    log_level = _resolve_level(level)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if _use_json(json_format):
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, log_level) if enabled else logging.ERROR)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging(config: Configuration) -> None:
    """Apply the ``[general]`` logging settings of a loaded configuration."""
    setup_logging(level=config.log_level, enabled=config.enable_logging)


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger, normally named after the calling module."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach fields to every event logged by the current request or task."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all request-scoped fields."""
    structlog.contextvars.clear_contextvars()
