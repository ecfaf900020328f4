"""Lifecycle operations reconciling declared ticket forms with Zendesk."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Callable, Protocol, TypeVar

from ticketforms.domain.errors import TicketFormError
from ticketforms.domain.identifiers import format_id, parse_id
from ticketforms.domain.models import TicketForm
from ticketforms.infrastructure.http import (
    RemoteAPIError,
    RequestContext,
    TicketFormClient,
)
from ticketforms.infrastructure.observability import (
    get_logger,
    log_context,
    log_exception,
)

from .codec import ResourceState, decode_ticket_form, encode_ticket_form

if TYPE_CHECKING:
    from ticketforms.app.config import ApiSettings

T = TypeVar("T")


class TicketFormAPI(Protocol):
    """Remote ticket form capability keyed by integer identifier."""

    def create_ticket_form(
        self, form: TicketForm, ctx: RequestContext | None = None
    ) -> TicketForm: ...

    def get_ticket_form(
        self, form_id: int, ctx: RequestContext | None = None
    ) -> TicketForm: ...

    def update_ticket_form(
        self, form_id: int, form: TicketForm, ctx: RequestContext | None = None
    ) -> TicketForm: ...

    def delete_ticket_form(
        self, form_id: int, ctx: RequestContext | None = None
    ) -> None: ...


class TicketFormService:
    """Drive create/read/update/delete/import of a single ticket form.

    Every operation issues at most one remote call, never retries, and
    re-raises any failure unchanged after logging it. After each successful
    write or read the remote response is encoded into the state, making it
    the declared source of truth.
    """

    def __init__(self, api: TicketFormAPI) -> None:
        self.api = api
        self._logger = get_logger(__name__)

    @classmethod
    def from_settings(cls, settings: "ApiSettings") -> "TicketFormService":
        """Create a service talking to the Zendesk account in ``settings``."""
        from ticketforms.app.config import build_http_client

        return cls(TicketFormClient(build_http_client(settings)))

    def _run(self, operation: str, state_id: str, fn: Callable[[], T]) -> T:
        with log_context(
            resource="ticket_form", operation=operation, id=state_id or "-"
        ):
            try:
                return fn()
            except TicketFormError as exc:
                log_exception(self._logger, f"Ticket form {operation} failed", exc)
                raise

    def create(
        self, state: ResourceState, ctx: RequestContext | None = None
    ) -> TicketForm:
        """Create the declared form remotely and bind the assigned id.

        Raises:
            IdentifierParseError: If the state holds a malformed identifier.
            RemoteAPIError: If the remote call fails; the state is unchanged.
            EncodingError: If the response cannot be written to the state.
        """

        def _create() -> TicketForm:
            form = decode_ticket_form(state)
            # Identity and URL are assigned by the remote side.
            form = dataclasses.replace(form, id=None, url="")
            self._logger.info("Creating ticket form %r", form.name)
            created = self.api.create_ticket_form(form, ctx)
            if created.id is None:
                raise RemoteAPIError("Create response did not include an id")
            state.set_id(format_id(created.id))
            encode_ticket_form(created, state)
            self._logger.info("Created ticket form %d", created.id)
            return created

        return self._run("create", state.id, _create)

    def read(
        self, state: ResourceState, ctx: RequestContext | None = None
    ) -> TicketForm:
        """Refresh the state from the remote form.

        Raises:
            IdentifierParseError: If the state identifier is malformed; no
                remote call is made.
            RemoteAPIError: If the remote call fails.
            EncodingError: If the response cannot be written to the state.
        """

        def _read() -> TicketForm:
            form_id = parse_id(state.id)
            self._logger.debug("Reading ticket form %d", form_id)
            form = self.api.get_ticket_form(form_id, ctx)
            encode_ticket_form(form, state)
            return form

        return self._run("read", state.id, _read)

    def update(
        self, state: ResourceState, ctx: RequestContext | None = None
    ) -> TicketForm:
        """Replace the remote form with the full declared view.

        Fields left at their zero value in the state overwrite the remote
        values, so the state must hold the complete desired form.
        """

        def _update() -> TicketForm:
            form = decode_ticket_form(state)
            form_id = parse_id(state.id)
            self._logger.info("Updating ticket form %d", form_id)
            updated = self.api.update_ticket_form(form_id, form, ctx)
            encode_ticket_form(updated, state)
            return updated

        return self._run("update", state.id, _update)

    def delete(self, state: ResourceState, ctx: RequestContext | None = None) -> None:
        """Delete the remote form.

        The state is left as it is; removing the local entry after success is
        the caller's responsibility.
        """

        def _delete() -> None:
            form_id = parse_id(state.id)
            self._logger.info("Deleting ticket form %d", form_id)
            self.api.delete_ticket_form(form_id, ctx)

        self._run("delete", state.id, _delete)

    def import_(
        self,
        identifier: str,
        state: ResourceState,
        ctx: RequestContext | None = None,
    ) -> TicketForm:
        """Bind an existing remote form to ``state`` and read it.

        On failure the state's previous identifier is put back.
        """
        form_id = self._run("import", identifier, lambda: parse_id(identifier))
        previous_id = state.id
        state.set_id(format_id(form_id))
        try:
            return self.read(state, ctx)
        except TicketFormError:
            state.set_id(previous_id)
            raise


__all__ = ["TicketFormAPI", "TicketFormService"]
