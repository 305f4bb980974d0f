"""
rowspine logging - structured logging for the mapper and its sessions.

Every statement the session runs, every metadata build and every coerced
type mismatch is logged as a structlog event with keyword fields, so a
JSON log stream can be filtered by ``table``, ``record_type`` or ``sql``.

Architecture:
    ::

        configure_logging(level="INFO", json_format=True, service="billing")
            ↓
        structlog processor chain:
          1. contextvars (LogContext fields)
          2. add_log_level / add_logger_name / service
          3. TimeStamper (iso), exception formatting
          4. JSONRenderer or ConsoleRenderer

        logger = get_logger(__name__)
        logger.info("statement_executed", sql="SELECT ...", params=2)

Examples:
    >>> from rowspine.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=False)
    >>> logger = get_logger(__name__)
    >>> logger.debug("session_opened", driver="sqlite")

Guardrails:
    - Never log bound parameter values; log their count
    - Service name stored globally (set once at startup)
    - Scope per-operation fields with LogContext, not by threading kwargs

Tags:
    logging, structlog, observability, rowspine
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_SERVICE_NAME = "rowspine"


def _add_service(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "rowspine",
    add_timestamp: bool = True,
) -> None:
    """Route rowspine events through the stdlib root logger.

    Args:
        level: Minimum level to emit (DEBUG, INFO, WARNING, ERROR).
        json_format: JSON lines when True, console output when False.
            None picks JSON unless stdout is a terminal.
        service: Value of the ``service`` field on every event.
        add_timestamp: Prefix events with an ISO ``timestamp`` field.
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service
    numeric_level = getattr(logging, level.upper())

    if json_format is None:
        json_format = not sys.stdout.isatty()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _add_service,
    ]
    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    processors.append(structlog.processors.format_exc_info)
    processors.append(
        structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind fields to every event logged from the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Bind fields for the duration of a block.

    Values bound by an enclosing block are restored on exit, so scopes nest::

        with LogContext(table="student"):
            session.execute(...)  # statement_executed carries table="student"
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs
        self._tokens: Any = None

    def __enter__(self) -> LogContext:
        self._tokens = structlog.contextvars.bind_contextvars(**self._context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
