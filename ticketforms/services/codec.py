"""Translation between declared resource state and the TicketForm entity.

``decode_ticket_form`` reads each declared field through its own typed
accessor so a value read for one field can only land in that field's
counterpart on the entity. ``encode_ticket_form`` writes every entity field
back to the state, replacing whatever was declared before.
"""

from __future__ import annotations

from typing import Any, Protocol

from ticketforms.domain.errors import TicketFormError
from ticketforms.domain.identifiers import parse_id
from ticketforms.domain.models import TicketForm


class ResourceState(Protocol):
    """Config-store capability consumed by the codec and the service."""

    @property
    def id(self) -> str: ...

    def set_id(self, value: str) -> None: ...

    def get_ok(self, name: str) -> tuple[Any, bool]: ...

    def set(self, name: str, value: Any) -> None: ...


class EncodingError(TicketFormError):
    """Raised when the state rejects a field written during encode."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"could not set field {field!r}: {message}")


# -------------------- typed accessors --------------------
def _read_str(state: ResourceState, name: str) -> str:
    value, ok = state.get_ok(name)
    return str(value) if ok else ""


def _read_int(state: ResourceState, name: str) -> int:
    value, ok = state.get_ok(name)
    return int(value) if ok else 0


def _read_bool(state: ResourceState, name: str) -> bool:
    value, ok = state.get_ok(name)
    return bool(value) if ok else False


def _read_int_list(state: ResourceState, name: str) -> list[int]:
    value, ok = state.get_ok(name)
    return [int(item) for item in value] if ok else []


def _read_int_set(state: ResourceState, name: str) -> set[int]:
    value, ok = state.get_ok(name)
    return {int(item) for item in value} if ok else set()


def decode_ticket_form(state: ResourceState) -> TicketForm:
    """Build a TicketForm from the declared state.

    Raises:
        IdentifierParseError: If the state carries a malformed identifier.
    """
    form = TicketForm()

    if state.id:
        form.id = parse_id(state.id)

    form.url = _read_str(state, "url")

    name = _read_str(state, "name")
    form.name = name
    form.raw_name = name

    display_name = _read_str(state, "display_name")
    form.display_name = display_name
    form.raw_display_name = display_name

    form.position = _read_int(state, "position")
    form.active = _read_bool(state, "active")
    form.end_user_visible = _read_bool(state, "end_user_visible")
    form.default = _read_bool(state, "default")
    form.in_all_brands = _read_bool(state, "in_all_brands")
    form.ticket_field_ids = _read_int_list(state, "ticket_field_ids")
    form.restricted_brand_ids = _read_int_set(state, "restricted_brand_ids")

    return form


def encode_ticket_form(form: TicketForm, state: ResourceState) -> None:
    """Write every field of ``form`` into ``state``.

    The identifier is not touched; callers bind it explicitly after create.

    Raises:
        EncodingError: If the state rejects one of the writes. Fields written
            before the failing one keep their new values.
    """
    fields: dict[str, Any] = {
        "url": form.url,
        "name": form.name,
        "display_name": form.display_name,
        "position": form.position,
        "active": form.active,
        "end_user_visible": form.end_user_visible,
        "default": form.default,
        "ticket_field_ids": list(form.ticket_field_ids),
        "in_all_brands": form.in_all_brands,
        "restricted_brand_ids": set(form.restricted_brand_ids),
    }
    for name, value in fields.items():
        try:
            state.set(name, value)
        except (TypeError, ValueError) as exc:
            raise EncodingError(name, str(exc)) from exc


__all__ = [
    "EncodingError",
    "ResourceState",
    "decode_ticket_form",
    "encode_ticket_form",
]
