"""
Diagnostic and view models for ticketforms services.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from ticketforms.domain.identifiers import IdentifierParseError
from ticketforms.domain.models import TicketForm
from ticketforms.infrastructure.http import (
    AuthenticationError,
    NotFoundError,
    RemoteAPIError,
    RequestCancelledError,
)

from .codec import EncodingError


# --- Diagnostics ---
class DiagnosticDTO(BaseModel):
    """Caller-visible description of a failed operation."""

    model_config = ConfigDict(extra="forbid")

    severity: Literal["error", "warning"] = "error"
    summary: str
    detail: str | None = None
    operation: str | None = None
    error_kind: str


_ERROR_KINDS: tuple[tuple[type[BaseException], str], ...] = (
    (IdentifierParseError, "identifier_parse"),
    (EncodingError, "encoding"),
    (RequestCancelledError, "remote_cancelled"),
    (AuthenticationError, "remote_authentication"),
    (NotFoundError, "remote_not_found"),
    (RemoteAPIError, "remote_api"),
)


def diagnostics_from_error(
    exc: BaseException, operation: str | None = None
) -> list[DiagnosticDTO]:
    """Translate an operation failure into a single-entry diagnostic list."""
    kind = next(
        (name for cls, name in _ERROR_KINDS if isinstance(exc, cls)), "internal"
    )
    summary = str(exc) or exc.__class__.__name__
    detail = None
    if isinstance(exc, RemoteAPIError) and exc.status_code is not None:
        detail = f"HTTP status {exc.status_code}"
    elif isinstance(exc, EncodingError):
        detail = f"field: {exc.field}"
    return [
        DiagnosticDTO(
            summary=summary, detail=detail, operation=operation, error_kind=kind
        )
    ]


# --- Ticket form views ---
class TicketFormViewDTO(BaseModel):
    """Read-only view of a remote ticket form, as printed by ``list``."""

    model_config = ConfigDict(extra="forbid")

    id: int | None = None
    url: str = ""
    name: str = ""
    display_name: str = ""
    position: int = 0
    active: bool = False
    end_user_visible: bool = False
    default: bool = False
    in_all_brands: bool = False
    ticket_field_ids: list[int] = []
    restricted_brand_ids: list[int] = []

    @classmethod
    def from_domain(cls, form: TicketForm) -> "TicketFormViewDTO":
        return cls(
            id=form.id,
            url=form.url,
            name=form.name,
            display_name=form.display_name,
            position=form.position,
            active=form.active,
            end_user_visible=form.end_user_visible,
            default=form.default,
            in_all_brands=form.in_all_brands,
            ticket_field_ids=list(form.ticket_field_ids),
            restricted_brand_ids=sorted(form.restricted_brand_ids),
        )
