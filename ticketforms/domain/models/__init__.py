"""Domain models package.

This package contains domain model classes for ticketforms.
"""

from .ticket_form import TicketForm

__all__ = ["TicketForm"]
