"""Logging helpers for stringman.

Every module logs through :func:`get_logger`, so all records live under the
``stringman`` logger and carry the correlation id of the current context.
Events that describe template loading or registration go through
:func:`log_event`, which attaches their fields (statement id, file, counts)
to the record so :class:`StructuredFormatter` can emit them as JSON keys.

The library never installs handlers by itself. Applications, and the
``stringman`` command line, call :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.logging import RichHandler

from stringman._serialization import encode_json

if TYPE_CHECKING:
    from logging import LogRecord

__all__ = (
    "LOG_FORMATS",
    "CorrelationIDFilter",
    "EventTextFormatter",
    "StructuredFormatter",
    "configure_logging",
    "correlation_id_var",
    "get_correlation_id",
    "get_logger",
    "log_event",
    "set_correlation_id",
)

ROOT_LOGGER_NAME = "stringman"
CONTEXT_ATTRIBUTE = "stringman_context"
LOG_FORMATS = ("text", "json")

correlation_id_var: ContextVar[str | None] = ContextVar("stringman_correlation_id", default=None)


def set_correlation_id(correlation_id: str | None) -> None:
    """Bind a correlation id to the current context; ``None`` clears it."""
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> str | None:
    return correlation_id_var.get()


class CorrelationIDFilter(logging.Filter):
    """Copies the context correlation id onto each record."""

    def filter(self, record: LogRecord) -> bool:
        record.correlation_id = get_correlation_id()  # type: ignore[attr-defined]
        return True


class StructuredFormatter(logging.Formatter):
    """One JSON object per record.

    Keys are ``time``, ``level``, ``logger`` and ``event``, followed by the
    correlation id when one is bound and by the fields given to
    :func:`log_event`. A formatted traceback goes under ``exception``.
    """

    def format(self, record: LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        correlation_id = getattr(record, "correlation_id", None) or get_correlation_id()
        if correlation_id:
            entry["correlation_id"] = correlation_id
        entry.update(getattr(record, CONTEXT_ATTRIBUTE, None) or {})
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return encode_json(entry)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the ``stringman`` logger or one of its children.

    Args:
        name: Child name, with or without the ``stringman.`` prefix.

    Returns:
        The logger, with a :class:`CorrelationIDFilter` attached.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIDFilter) for f in logger.filters):
        logger.addFilter(CorrelationIDFilter())
    return logger


def log_event(logger: logging.Logger, level: int, event: str, /, **fields: Any) -> None:
    """Log ``event`` with structured fields.

    The fields become JSON keys under :class:`StructuredFormatter` and are
    appended as ``key=value`` pairs by the text format.

    Args:
        logger: Logger to emit on.
        level: Logging level.
        event: Short event description.
        **fields: Values describing the event.
    """
    logger.log(level, event, extra={CONTEXT_ATTRIBUTE: fields}, stacklevel=2)


class EventTextFormatter(logging.Formatter):
    """Plain message followed by the :func:`log_event` fields."""

    def format(self, record: LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, CONTEXT_ATTRIBUTE, None)
        if fields:
            message = f"{message} [{', '.join(f'{key}={value}' for key, value in fields.items())}]"
        return message


def configure_logging(level: str = "WARNING", format_style: str = "text", log_to_file: str | None = None) -> None:
    """Install handlers on the ``stringman`` logger.

    Handlers installed by an earlier call are replaced.

    Args:
        level: Level name such as ``DEBUG`` or ``WARNING``.
        format_style: ``text`` renders through rich on stderr; ``json``
            writes one :class:`StructuredFormatter` object per line to stderr.
        log_to_file: Optional file that receives JSON lines as well.

    Raises:
        ValueError: If the level or format style is unknown.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        msg = f"Unknown log level: {level!r}"
        raise ValueError(msg)
    if format_style not in LOG_FORMATS:
        msg = f"Unknown log format: {format_style!r}. Expected one of: {', '.join(LOG_FORMATS)}"
        raise ValueError(msg)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(numeric_level)

    console_handler: logging.Handler
    if format_style == "json":
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(StructuredFormatter())
    else:
        console_handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
        console_handler.setFormatter(EventTextFormatter("%(message)s"))
    root.addHandler(console_handler)

    if log_to_file:
        file_handler = logging.FileHandler(log_to_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        root.addHandler(file_handler)

    root.propagate = False

    log_event(root, logging.DEBUG, "logging configured", level=level.upper(), format=format_style)
