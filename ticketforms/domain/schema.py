"""Declared-field schema for the ticket form resource.

The schema is built once at import time and exposed as a read-only mapping.
Both the resource state and the descriptor codec refer to it.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any


class FieldKind(str, Enum):
    """Storage type of a declared field."""

    STRING = "string"
    INT = "int"
    BOOL = "bool"
    INT_LIST = "int_list"
    INT_SET = "int_set"


@dataclass(frozen=True)
class FieldSpec:
    """Definition of a single declared field."""

    name: str
    kind: FieldKind
    description: str = ""
    default: Any = None
    required: bool = False
    computed: bool = False

    def zero_value(self) -> Any:
        """Return the zero value for this field's kind."""
        if self.kind is FieldKind.STRING:
            return ""
        if self.kind is FieldKind.INT:
            return 0
        if self.kind is FieldKind.BOOL:
            return False
        if self.kind is FieldKind.INT_LIST:
            return []
        return frozenset()

    def coerce(self, value: Any) -> Any:
        """Return the storage form of ``value`` or raise :class:`TypeError`."""
        if self.kind is FieldKind.STRING:
            if not isinstance(value, str):
                raise TypeError(self._mismatch(value))
            return value
        if self.kind is FieldKind.INT:
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(self._mismatch(value))
            return value
        if self.kind is FieldKind.BOOL:
            if not isinstance(value, bool):
                raise TypeError(self._mismatch(value))
            return value
        if self.kind is FieldKind.INT_LIST:
            if not isinstance(value, (list, tuple)):
                raise TypeError(self._mismatch(value))
            return [self._element(item) for item in value]
        if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
            raise TypeError(self._mismatch(value))
        return frozenset(self._element(item) for item in value)

    def _element(self, item: Any) -> int:
        if isinstance(item, bool) or not isinstance(item, int):
            raise TypeError(
                f"field {self.name!r} expects integer elements, got {type(item).__name__}"
            )
        return item

    def _mismatch(self, value: Any) -> str:
        return (
            f"field {self.name!r} expects {self.kind.value}, "
            f"got {type(value).__name__}"
        )


Schema = Mapping[str, FieldSpec]


def build_schema(*fields: FieldSpec) -> Schema:
    """Return a read-only mapping of field name to definition."""
    return MappingProxyType({spec.name: spec for spec in fields})


TICKET_FORM_SCHEMA: Schema = build_schema(
    FieldSpec(
        "url",
        FieldKind.STRING,
        "URL of the ticket form.",
        computed=True,
    ),
    FieldSpec(
        "name",
        FieldKind.STRING,
        "The name of the form.",
        required=True,
    ),
    FieldSpec(
        "display_name",
        FieldKind.STRING,
        "The name of the form that is displayed to an end user.",
    ),
    FieldSpec(
        "position",
        FieldKind.INT,
        "The position of this form among other forms in the account.",
    ),
    FieldSpec(
        "active",
        FieldKind.BOOL,
        "If the form is set as active.",
        default=True,
    ),
    FieldSpec(
        "end_user_visible",
        FieldKind.BOOL,
        "Is the form visible to the end user.",
    ),
    FieldSpec(
        "default",
        FieldKind.BOOL,
        "Is the form the default form for this account.",
    ),
    FieldSpec(
        "ticket_field_ids",
        FieldKind.INT_LIST,
        "Ids of all ticket fields in this form, in display order.",
    ),
    FieldSpec(
        "in_all_brands",
        FieldKind.BOOL,
        "Is the form available for use in all brands on this account.",
        default=True,
    ),
    FieldSpec(
        "restricted_brand_ids",
        FieldKind.INT_SET,
        "Ids of all brands that this ticket form is restricted to.",
        computed=True,
    ),
)


__all__ = ["FieldKind", "FieldSpec", "Schema", "TICKET_FORM_SCHEMA", "build_schema"]
