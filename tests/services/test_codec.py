"""Tests for decoding and encoding ticket form state."""

from __future__ import annotations

from typing import Any

import pytest

from ticketforms.domain.identifiers import IdentifierParseError
from ticketforms.domain.models import TicketForm
from ticketforms.infrastructure.state import ResourceData, StateWriteError
from ticketforms.services import EncodingError, decode_ticket_form, encode_ticket_form

FULL_ATTRIBUTES: dict[str, Any] = {
    "url": "https://acme.zendesk.com/api/v2/ticket_forms/42.json",
    "name": "Support",
    "display_name": "Get help",
    "position": 3,
    "active": True,
    "end_user_visible": True,
    "default": True,
    "ticket_field_ids": [5, 1, 3],
    "in_all_brands": False,
    "restricted_brand_ids": [9, 4],
}


class TestDecode:
    def test_no_identifier_means_new_form(self):
        form = decode_ticket_form(ResourceData({"name": "Support"}))
        assert form.id is None
        assert form.is_persisted is False

    def test_identifier_is_parsed(self):
        assert decode_ticket_form(ResourceData(id="42")).id == 42

    def test_malformed_identifier_raises(self):
        with pytest.raises(IdentifierParseError):
            decode_ticket_form(ResourceData({"name": "Support"}, id="abc"))

    def test_name_fills_raw_name(self):
        form = decode_ticket_form(
            ResourceData({"name": "Support", "display_name": "Get help"})
        )
        assert form.name == form.raw_name == "Support"
        assert form.display_name == form.raw_display_name == "Get help"

    def test_absent_fields_keep_zero_values(self):
        form = decode_ticket_form(ResourceData())
        assert form.name == ""
        assert form.url == ""
        assert form.position == 0
        assert form.end_user_visible is False
        assert form.default is False
        assert form.ticket_field_ids == []
        assert form.restricted_brand_ids == set()

    def test_defaults_apply_when_unset(self):
        form = decode_ticket_form(ResourceData())
        assert form.active is True
        assert form.in_all_brands is True

    def test_explicit_false_overrides_default(self):
        form = decode_ticket_form(ResourceData({"active": False, "in_all_brands": False}))
        assert form.active is False
        assert form.in_all_brands is False

    def test_ticket_field_order_is_preserved(self):
        form = decode_ticket_form(ResourceData({"ticket_field_ids": [5, 1, 3]}))
        assert form.ticket_field_ids == [5, 1, 3]

    def test_brand_ids_stay_out_of_ticket_fields(self):
        form = decode_ticket_form(
            ResourceData({"restricted_brand_ids": [9, 4], "ticket_field_ids": [1, 2]})
        )
        assert form.ticket_field_ids == [1, 2]
        assert form.restricted_brand_ids == {9, 4}

    def test_brand_ids_without_ticket_fields(self):
        form = decode_ticket_form(ResourceData({"restricted_brand_ids": [4, 9, 4]}))
        assert form.ticket_field_ids == []
        assert form.restricted_brand_ids == {4, 9}


class TestEncode:
    def test_full_replace_overwrites_prior_values(self):
        state = ResourceData({"name": "Old", "ticket_field_ids": [7], "position": 9})
        encode_ticket_form(TicketForm(name="New"), state)
        assert state.get("name") == "New"
        assert state.get("ticket_field_ids") == []
        assert state.get("position") == 0
        assert state.is_declared("url")

    def test_identifier_is_left_alone(self):
        state = ResourceData(id="42")
        encode_ticket_form(TicketForm(id=99, name="Support"), state)
        assert state.id == "42"

    def test_store_rejection_raises_encoding_error(self):
        class RejectingState(ResourceData):
            def set(self, name: str, value: Any) -> None:
                if name == "position":
                    raise StateWriteError(name, "position is locked")
                super().set(name, value)

        with pytest.raises(EncodingError) as excinfo:
            encode_ticket_form(TicketForm(name="Support"), RejectingState())
        assert excinfo.value.field == "position"
        assert isinstance(excinfo.value.__cause__, StateWriteError)


def test_round_trip_reproduces_state():
    source = ResourceData(FULL_ATTRIBUTES, id="42")
    target = ResourceData()

    encode_ticket_form(decode_ticket_form(source), target)

    for name in FULL_ATTRIBUTES:
        if name == "restricted_brand_ids":
            assert set(target.get(name)) == set(source.get(name))
        else:
            assert target.get(name) == source.get(name), name


def test_order_survives_decode_encode():
    state = ResourceData({"ticket_field_ids": [5, 1, 3]})
    encode_ticket_form(decode_ticket_form(state), state)
    assert state.get("ticket_field_ids") == [5, 1, 3]
