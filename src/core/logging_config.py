"""Structured logging for CueStats.

Events are rendered as one JSON object per line on stderr, so stdout
stays reserved for command payloads. structlog is preferred; the stdlib
adapter below keeps the same call shape when it is not installed.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from core.constants import SERVICE_NAME

_configured = False


def get_logger(name: str) -> Any:
    """Return a logger bound to a module name.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog or stdlib logger accepting keyword event fields.
    """
    try:
        import structlog
    except ImportError:
        return _get_standard_logger(name)

    _configure_structlog(structlog)
    return structlog.get_logger(name).bind(service=SERVICE_NAME, logger=name)


def _configure_structlog(structlog: Any) -> None:
    global _configured
    if _configured:
        return
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True, default=str),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        logger_factory=_stderr_logger_factory,
        # Loggers are rebuilt per call so a swapped sys.stderr is picked up.
        cache_logger_on_first_use=False,
    )
    _configured = True


def _stderr_logger_factory(*_args: Any) -> Any:
    import structlog

    return structlog.PrintLogger(sys.stderr)


def _get_standard_logger(name: str) -> Any:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return _StructuredStandardLogger(logger)


class _StructuredStandardLogger:
    """Stdlib logger adapter that accepts structured keyword fields."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def info(self, event: str, **fields: object) -> None:
        self._log(logging.INFO, "info", event, fields)

    def warning(self, event: str, **fields: object) -> None:
        self._log(logging.WARNING, "warning", event, fields)

    def error(self, event: str, **fields: object) -> None:
        self._log(logging.ERROR, "error", event, fields)

    def _log(self, level: int, level_name: str, event: str, fields: dict[str, object]) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, _format_event(self._logger.name, level_name, event, fields))


def _format_event(
    logger_name: str,
    level_name: str,
    event: str,
    fields: dict[str, object],
) -> str:
    """Render one event as a JSON line matching the structlog output."""
    payload = {
        "event": event,
        "level": level_name,
        "logger": logger_name,
        "service": SERVICE_NAME,
        **fields,
    }
    return json.dumps(payload, sort_keys=True, default=str)
