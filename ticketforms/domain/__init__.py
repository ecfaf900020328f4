"""Domain layer facade for ticketforms.

This package groups the pure models and rules that do not concern
infrastructure or interface details: the ticket form entity, the declared
field schema and the identifier codec.
"""

from . import models
from .errors import TicketFormError
from .identifiers import IdentifierParseError, format_id, parse_id
from .schema import TICKET_FORM_SCHEMA, FieldKind, FieldSpec

__all__ = [
    "FieldKind",
    "FieldSpec",
    "IdentifierParseError",
    "TICKET_FORM_SCHEMA",
    "TicketFormError",
    "format_id",
    "models",
    "parse_id",
]
