"""Ticket form domain model and its wire representation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class TicketForm:
    """Domain model representing a Zendesk ticket form.

    ``id`` is only set once the form exists remotely. ``ticket_field_ids`` is
    the display order of fields within the form, so its order is meaningful;
    ``restricted_brand_ids`` is an unordered set.
    """

    id: int | None = None
    url: str = ""
    name: str = ""
    raw_name: str = ""
    display_name: str = ""
    raw_display_name: str = ""
    position: int = 0
    active: bool = False
    end_user_visible: bool = False
    default: bool = False
    in_all_brands: bool = False
    ticket_field_ids: list[int] = field(default_factory=list)
    restricted_brand_ids: set[int] = field(default_factory=set)

    @property
    def is_persisted(self) -> bool:
        """Check if the form has been assigned a remote identifier."""
        return self.id is not None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "TicketForm":
        """Create a TicketForm from a ``ticket_form`` JSON object.

        Keys the model does not know about (timestamps, conditions) are ignored.
        """
        return cls(
            id=data.get("id"),
            url=data.get("url") or "",
            name=data.get("name") or "",
            raw_name=data.get("raw_name") or "",
            display_name=data.get("display_name") or "",
            raw_display_name=data.get("raw_display_name") or "",
            position=data.get("position") or 0,
            active=bool(data.get("active", False)),
            end_user_visible=bool(data.get("end_user_visible", False)),
            default=bool(data.get("default", False)),
            in_all_brands=bool(data.get("in_all_brands", False)),
            ticket_field_ids=list(data.get("ticket_field_ids") or []),
            restricted_brand_ids=set(data.get("restricted_brand_ids") or []),
        )

    def to_payload(self) -> dict[str, Any]:
        """Return the ``ticket_form`` JSON object sent to the API.

        Every declared field is sent, empty ones included, so an update
        clears remote values the form no longer has. Only ``id`` and ``url``
        are left out until the remote side has assigned them.
        """
        payload: dict[str, Any] = {}
        if self.id is not None:
            payload["id"] = self.id
        if self.url:
            payload["url"] = self.url
        payload.update(
            name=self.name,
            raw_name=self.raw_name,
            display_name=self.display_name,
            raw_display_name=self.raw_display_name,
            position=self.position,
            active=self.active,
            end_user_visible=self.end_user_visible,
            default=self.default,
            ticket_field_ids=list(self.ticket_field_ids),
            in_all_brands=self.in_all_brands,
            restricted_brand_ids=sorted(self.restricted_brand_ids),
        )
        return payload


__all__ = ["TicketForm"]
