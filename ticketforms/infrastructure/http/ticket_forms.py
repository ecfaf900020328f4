"""Client for the Zendesk ticket forms endpoints.

Usage:
    http = ZendeskHttpClient(base_url="https://acme.zendesk.com", ...)
    api = TicketFormClient(http)
    form = api.get_ticket_form(42)
"""

from __future__ import annotations

from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, ValidationError

from ticketforms.domain.models import TicketForm
from ticketforms.infrastructure.observability import get_logger

from .client import RemoteAPIError, RequestContext, ZendeskHttpClient

logger = get_logger(__name__)

TICKET_FORMS_PATH = "/api/v2/ticket_forms.json"


class TicketFormPayload(BaseModel):
    """Validated ``ticket_form`` object as returned by the API."""

    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    url: str | None = None
    name: str | None = None
    raw_name: str | None = None
    display_name: str | None = None
    raw_display_name: str | None = None
    position: int | None = None
    active: bool | None = None
    end_user_visible: bool | None = None
    default: bool | None = None
    in_all_brands: bool | None = None
    ticket_field_ids: list[int] | None = None
    restricted_brand_ids: list[int] | None = None


def ticket_form_path(form_id: int) -> str:
    return f"/api/v2/ticket_forms/{form_id}.json"


def _unwrap(response: dict[str, Any]) -> TicketForm:
    raw = response.get("ticket_form")
    if not isinstance(raw, dict):
        raise RemoteAPIError("Response does not contain a ticket_form object")
    try:
        payload = TicketFormPayload.model_validate(raw)
    except ValidationError as exc:
        raise RemoteAPIError(f"Malformed ticket_form in response: {exc}") from exc
    return TicketForm.from_payload(payload.model_dump())


class TicketFormClient:
    """Remote ticket form operations keyed by integer identifier."""

    def __init__(self, http: ZendeskHttpClient) -> None:
        self.http = http

    def create_ticket_form(
        self, form: TicketForm, ctx: RequestContext | None = None
    ) -> TicketForm:
        response = self.http.post_json(
            TICKET_FORMS_PATH, {"ticket_form": form.to_payload()}, ctx=ctx
        )
        return _unwrap(response)

    def get_ticket_form(
        self, form_id: int, ctx: RequestContext | None = None
    ) -> TicketForm:
        return _unwrap(self.http.get_json(ticket_form_path(form_id), ctx=ctx))

    def update_ticket_form(
        self, form_id: int, form: TicketForm, ctx: RequestContext | None = None
    ) -> TicketForm:
        response = self.http.put_json(
            ticket_form_path(form_id), {"ticket_form": form.to_payload()}, ctx=ctx
        )
        return _unwrap(response)

    def delete_ticket_form(
        self, form_id: int, ctx: RequestContext | None = None
    ) -> None:
        self.http.delete(ticket_form_path(form_id), ctx=ctx)

    def iter_ticket_forms(
        self, ctx: RequestContext | None = None
    ) -> Iterator[TicketForm]:
        """Yield every ticket form in the account, following ``next_page``."""
        next_page: str | None = TICKET_FORMS_PATH
        page = 0
        while next_page:
            page += 1
            logger.debug("Fetching ticket forms page %d", page)
            response = self.http.get_json(next_page, ctx=ctx)
            items = response.get("ticket_forms") or []
            if not isinstance(items, list):
                raise RemoteAPIError("Response does not contain a ticket_forms list")
            for item in items:
                yield _unwrap({"ticket_form": item})
            next_page = response.get("next_page")

    def list_ticket_forms(self, ctx: RequestContext | None = None) -> list[TicketForm]:
        return list(self.iter_ticket_forms(ctx))


__all__ = [
    "TICKET_FORMS_PATH",
    "TicketFormClient",
    "TicketFormPayload",
    "ticket_form_path",
]
