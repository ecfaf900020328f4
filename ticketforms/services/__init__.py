"""Service layer modules for ticketforms."""

from ticketforms.domain.errors import TicketFormError  # noqa: F401
from ticketforms.domain.identifiers import IdentifierParseError  # noqa: F401
from ticketforms.infrastructure.http import (  # noqa: F401
    AuthenticationError,
    NotFoundError,
    RemoteAPIError,
    RequestCancelledError,
    RequestContext,
)

from .codec import EncodingError, decode_ticket_form, encode_ticket_form  # noqa: F401
from .dto import DiagnosticDTO, TicketFormViewDTO, diagnostics_from_error  # noqa: F401
from .ticket_forms import TicketFormAPI, TicketFormService  # noqa: F401

__all__ = [
    "AuthenticationError",
    "DiagnosticDTO",
    "EncodingError",
    "IdentifierParseError",
    "NotFoundError",
    "RemoteAPIError",
    "RequestCancelledError",
    "RequestContext",
    "TicketFormAPI",
    "TicketFormError",
    "TicketFormService",
    "TicketFormViewDTO",
    "decode_ticket_form",
    "diagnostics_from_error",
    "encode_ticket_form",
]
