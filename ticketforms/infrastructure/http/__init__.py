"""HTTP adapters for ticketforms.

This package provides authenticated access to the Zendesk Support REST API
and the ticket form operations built on top of it.
"""

from .client import (
    ApiCredentials,
    AuthenticationError,
    NotFoundError,
    RemoteAPIError,
    RequestCancelledError,
    RequestContext,
    ZendeskHttpClient,
)
from .ticket_forms import TicketFormClient, TicketFormPayload

__all__ = [
    "ApiCredentials",
    "AuthenticationError",
    "NotFoundError",
    "RemoteAPIError",
    "RequestCancelledError",
    "RequestContext",
    "TicketFormClient",
    "TicketFormPayload",
    "ZendeskHttpClient",
]
