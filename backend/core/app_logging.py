"""Structured logging configuration.

structlog renders every event, while the stdlib root logger owns the output
handler so uvicorn and library loggers end up in the same stream.

Example usage:
    >>> from backend.core.app_logging import setup_logging, get_logger
    >>> setup_logging(level="INFO", fmt="console")
    >>> logger = get_logger(__name__)
    >>> logger.info("project_added", project_id=1741600000000, name="Site X")
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_FORMATS = {"json", "console"}


def _resolve_level(level: str | None) -> str:
    value = (level or os.getenv("SITETRACK_LOG_LEVEL") or "INFO").upper()
    if value not in VALID_LEVELS:
        raise ValueError(f"Invalid log level: {value}. Must be one of {VALID_LEVELS}")
    return value


def _resolve_format(fmt: str | None) -> str:
    value = (fmt or os.getenv("SITETRACK_LOG_FORMAT") or "console").lower()
    if value not in VALID_FORMATS:
        raise ValueError(f"Invalid log format: {value}. Must be one of {VALID_FORMATS}")
    return value


def setup_logging(level: str | None = None, fmt: str | None = None, stream: Any = None) -> None:
    """Configure structlog and the stdlib root handler.

    Args:
        level: Log level name; defaults to ``SITETRACK_LOG_LEVEL`` or INFO
        fmt: ``json`` or ``console``; defaults to ``SITETRACK_LOG_FORMAT`` or console
        stream: Output stream, stdout when omitted
    """
    log_level = getattr(logging, _resolve_level(level))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    root_logger.addHandler(handler)

    if _resolve_format(fmt) == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def bind_user_context(email: str | None) -> None:
    """Attach the signed-in operator to every subsequent log event."""

    if email is None:
        structlog.contextvars.unbind_contextvars("user")
    else:
        structlog.contextvars.bind_contextvars(user=email)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
