"""Tests for the contextual logging helpers."""

import io
import logging

import pytest

from ticketforms.infrastructure.observability import (
    ContextualFormatter,
    configure_logging,
    get_logger,
    log_context,
    log_exception,
)


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("ticketforms.test", logging.INFO, __file__, 1, message, (), None)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_log_context_nests_and_restores():
    formatter = ContextualFormatter("%(message)s")
    with log_context(resource="ticket_form"):
        with log_context(operation="create", id="42"):
            inner = formatter.format(_record("inner"))
        outer = formatter.format(_record("outer"))
    after = formatter.format(_record("after"))

    assert inner == "inner [resource=ticket_form operation=create id=42]"
    assert outer == "outer [resource=ticket_form]"
    assert after == "after"


def test_formatter_appends_context_fields():
    formatter = ContextualFormatter("%(levelname)s %(message)s")
    with log_context(operation="read", id="7"):
        output = formatter.format(_record("Reading ticket form"))
    assert output == "INFO Reading ticket form [operation=read id=7]"


def test_formatter_without_context_is_plain():
    formatter = ContextualFormatter("%(message)s")
    assert formatter.format(_record("plain")) == "plain"


def test_configure_logging_replaces_its_own_handler(restore_root_logger):
    first = configure_logging(stream=io.StringIO())
    second = configure_logging(verbose=True, stream=io.StringIO())

    assert first not in restore_root_logger.handlers
    assert second in restore_root_logger.handlers
    assert restore_root_logger.level == logging.DEBUG
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_log_exception_tags_error_type(restore_root_logger):
    stream = io.StringIO()
    configure_logging(stream=stream)

    with log_context(operation="delete"):
        log_exception(
            get_logger("ticketforms.test"), "Ticket form delete failed", KeyError("x")
        )

    line = stream.getvalue().strip()
    assert "ERROR ticketforms.test: Ticket form delete failed: 'x'" in line
    assert line.endswith("[operation=delete error=KeyError]")
