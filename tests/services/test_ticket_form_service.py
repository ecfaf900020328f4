"""Tests for the ticket form lifecycle service."""

from __future__ import annotations

import dataclasses
import threading

import pytest

from ticketforms.domain.identifiers import IdentifierParseError
from ticketforms.domain.models import TicketForm
from ticketforms.infrastructure.state import ResourceData
from ticketforms.services import (
    EncodingError,
    NotFoundError,
    RemoteAPIError,
    RequestCancelledError,
    RequestContext,
    TicketFormService,
)

BASE_URL = "https://acme.zendesk.com/api/v2/ticket_forms"


class FakeTicketFormAPI:
    """In-memory stand-in for the Zendesk ticket form endpoints."""

    def __init__(self, next_id: int = 42) -> None:
        self.forms: dict[int, TicketForm] = {}
        self.calls: list[tuple[str, int | None]] = []
        self.contexts: list[RequestContext | None] = []
        self.next_id = next_id
        self.fail_with: Exception | None = None
        self.last_sent: TicketForm | None = None

    def _record(self, name: str, form_id: int | None, ctx: RequestContext | None) -> None:
        self.calls.append((name, form_id))
        self.contexts.append(ctx)
        if ctx is not None and ctx.cancelled:
            raise RequestCancelledError(f"{name} cancelled")
        if self.fail_with is not None:
            raise self.fail_with

    def _stored(self, form_id: int) -> TicketForm:
        if form_id not in self.forms:
            raise NotFoundError(f"ticket form {form_id} not found", status_code=404)
        return dataclasses.replace(self.forms[form_id])

    def create_ticket_form(self, form, ctx=None):
        self._record("create", form.id, ctx)
        self.last_sent = form
        form_id = self.next_id
        self.next_id += 1
        self.forms[form_id] = dataclasses.replace(
            form,
            id=form_id,
            url=f"{BASE_URL}/{form_id}.json",
            ticket_field_ids=list(form.ticket_field_ids),
            restricted_brand_ids=set(form.restricted_brand_ids),
        )
        return self._stored(form_id)

    def get_ticket_form(self, form_id, ctx=None):
        self._record("get", form_id, ctx)
        return self._stored(form_id)

    def update_ticket_form(self, form_id, form, ctx=None):
        self._record("update", form_id, ctx)
        self._stored(form_id)
        self.forms[form_id] = dataclasses.replace(
            form, id=form_id, url=f"{BASE_URL}/{form_id}.json"
        )
        return self._stored(form_id)

    def delete_ticket_form(self, form_id, ctx=None):
        self._record("delete", form_id, ctx)
        self._stored(form_id)
        del self.forms[form_id]


@pytest.fixture
def api() -> FakeTicketFormAPI:
    return FakeTicketFormAPI()


@pytest.fixture
def service(api: FakeTicketFormAPI) -> TicketFormService:
    return TicketFormService(api)


class TestCreate:
    def test_create_binds_identifier_and_encodes_response(self, service, api):
        state = ResourceData({"name": "Support", "ticket_field_ids": [1, 2, 3]})

        created = service.create(state)

        assert created.id == 42
        assert state.id == "42"
        assert state.get("ticket_field_ids") == [1, 2, 3]
        assert state.get("url") == f"{BASE_URL}/42.json"
        assert state.get("name") == "Support"
        assert api.calls == [("create", None)]

    def test_create_never_sends_identity_or_url(self, service, api):
        state = ResourceData(
            {"name": "Support", "url": "https://stale.example.com/1.json"}
        )
        service.create(state)
        sent = api.last_sent
        assert sent is not None
        assert sent.id is None
        assert sent.url == ""
        assert sent.raw_name == "Support"
        assert state.get("url") == f"{BASE_URL}/42.json"

    def test_remote_failure_leaves_state_untouched(self, service, api):
        api.fail_with = RemoteAPIError("validation failed", status_code=422)
        state = ResourceData({"name": "Support", "ticket_field_ids": [1, 2]})
        before = state.to_dict()

        with pytest.raises(RemoteAPIError):
            service.create(state)

        assert state.id == ""
        assert state.to_dict() == before

    def test_missing_identifier_in_response_is_remote_error(self, service, api):
        api.create_ticket_form = lambda form, ctx=None: dataclasses.replace(form, id=None)
        state = ResourceData({"name": "Support"})
        with pytest.raises(RemoteAPIError, match="did not include an id"):
            service.create(state)
        assert state.id == ""

    def test_encoding_failure_keeps_new_identifier(self, service, api):
        class LockedUrlState(ResourceData):
            def set(self, name, value):
                if name == "url":
                    raise ValueError("url is read-only here")
                super().set(name, value)

        state = LockedUrlState({"name": "Support"})
        with pytest.raises(EncodingError):
            service.create(state)
        assert state.id == "42"


class TestRead:
    def test_read_refreshes_state_from_remote(self, service, api):
        state = ResourceData({"name": "Support"})
        service.create(state)
        api.forms[42].name = "Renamed upstream"
        api.forms[42].ticket_field_ids = [3, 2, 1]

        service.read(state)

        assert state.get("name") == "Renamed upstream"
        assert state.get("ticket_field_ids") == [3, 2, 1]

    def test_malformed_identifier_makes_no_remote_call(self, service, api):
        state = ResourceData({"name": "Support"}, id="abc")
        with pytest.raises(IdentifierParseError):
            service.read(state)
        assert api.calls == []

    def test_missing_remote_form_raises_not_found(self, service):
        with pytest.raises(NotFoundError):
            service.read(ResourceData(id="404"))


class TestUpdate:
    def test_update_replaces_remote_form(self, service, api):
        state = ResourceData({"name": "Support", "ticket_field_ids": [1, 2]})
        service.create(state)
        state.set("ticket_field_ids", [2, 1, 7])
        state.set("restricted_brand_ids", [9, 4])
        state.set("in_all_brands", False)

        updated = service.update(state)

        assert api.calls[-1] == ("update", 42)
        assert updated.ticket_field_ids == [2, 1, 7]
        assert api.forms[42].restricted_brand_ids == {4, 9}
        assert state.get("in_all_brands") is False

    def test_repeated_update_is_stable(self, service):
        state = ResourceData(
            {"name": "Support", "ticket_field_ids": [5, 1, 3], "restricted_brand_ids": [9]}
        )
        service.create(state)

        service.update(state)
        first = state.to_dict()
        service.update(state)

        assert state.to_dict() == first

    def test_update_requires_identifier(self, service, api):
        with pytest.raises(IdentifierParseError):
            service.update(ResourceData({"name": "Support"}))
        assert api.calls == []

    def test_failed_update_leaves_state_untouched(self, service, api):
        state = ResourceData({"name": "Support"})
        service.create(state)
        state.set("name", "Changed")
        before = state.to_dict()
        api.fail_with = RemoteAPIError("server error", status_code=500)

        with pytest.raises(RemoteAPIError):
            service.update(state)

        assert state.to_dict() == before


class TestDelete:
    def test_delete_removes_remote_form_only(self, service, api):
        state = ResourceData({"name": "Support"})
        service.create(state)

        service.delete(state)

        assert 42 not in api.forms
        assert state.id == "42"

    def test_delete_not_found_leaves_state_untouched(self, service, api):
        state = ResourceData({"name": "Support"}, id="42")
        before = state.to_dict()

        with pytest.raises(RemoteAPIError):
            service.delete(state)

        assert state.id == "42"
        assert state.to_dict() == before

    def test_delete_with_malformed_identifier(self, service, api):
        with pytest.raises(IdentifierParseError):
            service.delete(ResourceData(id="4x2"))
        assert api.calls == []


class TestImport:
    def test_import_binds_identifier_and_reads(self, service, api):
        service.create(ResourceData({"name": "Existing", "ticket_field_ids": [8, 6]}))
        state = ResourceData()

        service.import_("42", state)

        assert state.id == "42"
        assert state.get("name") == "Existing"
        assert state.get("ticket_field_ids") == [8, 6]

    def test_import_failure_restores_previous_identifier(self, service, api):
        state = ResourceData(id="7")
        with pytest.raises(NotFoundError):
            service.import_("42", state)
        assert state.id == "7"

    def test_import_rejects_malformed_identifier(self, service, api):
        state = ResourceData()
        with pytest.raises(IdentifierParseError):
            service.import_("forty-two", state)
        assert state.id == ""
        assert api.calls == []


def test_request_context_is_passed_through(service, api):
    ctx = RequestContext(timeout=3.0)
    state = ResourceData({"name": "Support"})
    service.create(state, ctx)
    service.read(state, ctx)
    service.update(state, ctx)
    service.delete(state, ctx)
    assert api.contexts == [ctx, ctx, ctx, ctx]


def test_cancelled_context_fails_without_encoding(service, api):
    state = ResourceData({"name": "Support"})
    service.create(state)
    ctx = RequestContext(cancel_event=threading.Event())
    ctx.cancel()
    state.set("name", "Changed")

    with pytest.raises(RequestCancelledError):
        service.update(state, ctx)

    assert state.get("name") == "Changed"
    assert api.forms[42].name == "Support"
