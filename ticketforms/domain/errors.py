"""Base exception shared by every ticketforms error kind."""


class TicketFormError(Exception):
    """Base class for failures surfaced by ticket form operations."""


__all__ = ["TicketFormError"]
