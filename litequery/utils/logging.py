"""Logging setup for litequery.

Every litequery logger lives under the ``litequery`` namespace. Statement
logs carry the SQL text, its operation type and binding count as structured
fields; failure logs add the mapped error class, kind and engine code.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from litequery.utils.serializers import to_json

if TYPE_CHECKING:
    from collections.abc import Iterable
    from logging import LogRecord
    from typing import TextIO

__all__ = (
    "CorrelationIDFilter",
    "StructuredFormatter",
    "configure_logging",
    "correlation_id_var",
    "get_correlation_id",
    "get_logger",
    "log_with_context",
    "set_correlation_id",
)

ROOT_LOGGER_NAME = "litequery"

SIMPLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def set_correlation_id(correlation_id: str | None) -> None:
    """Tag statements logged from the current context, or clear the tag with None."""
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> str | None:
    return correlation_id_var.get()


class StructuredFormatter(logging.Formatter):
    """Render litequery records as one JSON object per line.

    Fields passed through :func:`log_with_context` (``sql``, ``operation``,
    ``parameter_count``, ``error_kind`` ...) become top-level keys. Fields that
    are ``None`` are left out. A logged :class:`~litequery.exceptions.DatabaseError`
    contributes its kind, code and statement.
    """

    def format(self, record: LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = getattr(record, "correlation_id", None) or get_correlation_id()
        if correlation_id:
            entry["correlation_id"] = correlation_id

        extra_fields: dict[str, Any] = getattr(record, "extra_fields", None) or {}
        entry.update((key, value) for key, value in extra_fields.items() if value is not None)

        if record.exc_info:
            entry.update(_error_fields(record.exc_info[1]))
            entry["exception"] = self.formatException(record.exc_info)

        return to_json(entry)


def _error_fields(error: BaseException | None) -> dict[str, Any]:
    from litequery.exceptions import DatabaseError

    if not isinstance(error, DatabaseError):
        return {}
    fields: dict[str, Any] = {"error": type(error).__name__, "error_kind": str(error.kind), "error_code": error.code}
    if error.sql:
        fields["sql"] = error.sql
    return fields


class CorrelationIDFilter(logging.Filter):
    """Copy the context's correlation ID onto each record."""

    def filter(self, record: LogRecord) -> bool:
        if correlation_id := get_correlation_id():
            record.correlation_id = correlation_id  # type: ignore[attr-defined]
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger in the litequery namespace.

    Args:
        name: Dotted name below ``litequery``. Names already prefixed are kept.

    Returns:
        The logger, with a correlation ID filter attached once.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(name)

    if not any(isinstance(f, CorrelationIDFilter) for f in logger.filters):
        logger.addFilter(CorrelationIDFilter())

    return logger


def configure_logging(
    level: int | str = logging.WARNING,
    *,
    structured: bool = True,
    stream: TextIO | None = None,
    handlers: Iterable[logging.Handler] = (),
) -> logging.Logger:
    """Send litequery logs to a stream.

    Replaces handlers previously installed on the ``litequery`` logger and stops
    propagation to the root logger. Use ``level="DEBUG"`` to see every statement.

    Args:
        level: Level for the ``litequery`` logger.
        structured: Emit JSON lines through :class:`StructuredFormatter` instead of plain text.
        stream: Stream for the console handler, ``sys.stderr`` by default.
        handlers: Additional handlers, attached as given.

    Returns:
        The configured ``litequery`` logger.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level.upper() if isinstance(level, str) else level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setFormatter(StructuredFormatter() if structured else logging.Formatter(SIMPLE_FORMAT))
    root_logger.addHandler(console_handler)
    for handler in handlers:
        root_logger.addHandler(handler)

    root_logger.propagate = False
    return root_logger


def log_with_context(logger: logging.Logger, level: int, message: str, **extra_fields: Any) -> None:
    """Log a message with structured extra fields.

    Args:
        logger: The logger to use
        level: Log level
        message: Log message
        **extra_fields: Fields rendered as top-level keys by :class:`StructuredFormatter`
    """
    if not logger.isEnabledFor(level):
        return
    logger.log(level, message, extra={"extra_fields": extra_fields})
