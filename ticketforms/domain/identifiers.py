"""Conversion between textual state identifiers and numeric remote ids.

The resource state stores identifiers as strings while the Zendesk API keys
ticket forms by 64-bit integers.
"""

from __future__ import annotations

import re

from .errors import TicketFormError

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class IdentifierParseError(TicketFormError, ValueError):
    """Raised when a state identifier is not a valid base-10 integer."""

    def __init__(self, text: str, reason: str = "not a base-10 integer") -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"could not parse ticket form id {text!r}: {reason}")


def parse_id(text: str) -> int:
    """Parse a textual identifier into the remote numeric id.

    Only an optional sign followed by ASCII digits is accepted; ``int()``
    alone would also allow whitespace and underscores.
    """
    if not text:
        raise IdentifierParseError(text, "identifier is empty")
    if not _INT_PATTERN.fullmatch(text):
        raise IdentifierParseError(text)
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise IdentifierParseError(text, "value out of range")
    return value


def format_id(value: int) -> str:
    return str(value)


__all__ = ["IdentifierParseError", "format_id", "parse_id"]
