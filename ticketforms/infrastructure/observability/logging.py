"""Logging setup for ticketforms.

Library modules only ask for loggers; the CLI (or an embedding engine) decides
where records go by calling :func:`configure_logging`. Lifecycle operations
wrap their work in :func:`log_context` so every record they emit carries the
resource, operation and identifier it concerns.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import IO, Any, Iterator

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# HTTP stack loggers that are chatty at DEBUG level.
QUIET_LOGGERS = ("requests", "urllib3", "charset_normalizer")

_fields: ContextVar[dict[str, Any]] = ContextVar("ticketforms_log_fields", default={})

logging.getLogger("ticketforms").addHandler(logging.NullHandler())


class ContextualFormatter(logging.Formatter):
    """Formatter that appends the active :func:`log_context` fields."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = _fields.get()
        if not fields:
            return message
        rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{message} [{rendered}]"


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Attach ``fields`` to every record formatted inside the block.

    Nested blocks add to the outer fields; the outer set is back in place
    once the block exits.
    """
    token = _fields.set({**_fields.get(), **fields})
    try:
        yield
    finally:
        _fields.reset(token)


class _CLIHandler(logging.StreamHandler):
    """Handler installed by :func:`configure_logging`.

    Without an explicit stream it writes to whatever ``sys.stderr`` is when a
    record is emitted, so redirected stderr is honoured.
    """

    def __init__(self, stream: IO[str] | None = None) -> None:
        super().__init__(stream or sys.stderr)
        self._follow_stderr = stream is None

    def emit(self, record: logging.LogRecord) -> None:
        if self._follow_stderr:
            self.stream = sys.stderr
        super().emit(record)


def configure_logging(
    verbose: bool = False,
    *,
    stream: IO[str] | None = None,
    http_level: int = logging.WARNING,
) -> logging.Handler:
    """Route ticketforms records to ``stream`` (stderr by default).

    Calling it again replaces the handler installed by the previous call, so
    repeated CLI invocations in one process never duplicate output. Handlers
    installed by anybody else are left alone.

    Args:
        verbose: Log at DEBUG instead of WARNING.
        stream: Destination of the formatted records.
        http_level: Level applied to the HTTP stack loggers.

    Returns:
        The installed handler.
    """
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _CLIHandler)]:
        root.removeHandler(existing)

    handler = _CLIHandler(stream)
    handler.setFormatter(ContextualFormatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a ticketforms module (pass ``__name__``)."""
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """Log a failed operation at ERROR level, tagged with the error type."""
    with log_context(error=type(exc).__name__, **context):
        logger.error("%s: %s", message, exc)


__all__ = [
    "ContextualFormatter",
    "configure_logging",
    "get_logger",
    "log_context",
    "log_exception",
]
