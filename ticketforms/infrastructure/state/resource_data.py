"""In-memory resource state bound to a declared-field schema.

:class:`ResourceData` plays the part of the configuration engine's per-resource
state: declared values are read with an "is it set" flag, written back by name,
and the resource carries a textual identifier.
"""

from __future__ import annotations

from typing import Any

from ticketforms.domain.schema import TICKET_FORM_SCHEMA, FieldKind, FieldSpec, Schema


class StateWriteError(ValueError):
    """Raised when the state rejects a value written to a declared field."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class ResourceData:
    """Declared state of one resource instance."""

    def __init__(
        self,
        values: dict[str, Any] | None = None,
        *,
        id: str = "",
        schema: Schema = TICKET_FORM_SCHEMA,
    ) -> None:
        self.schema = schema
        self._id = id
        self._values: dict[str, Any] = {}
        for name, value in (values or {}).items():
            self.set(name, value)

    # -------------------- identifier --------------------
    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: str) -> None:
        self._id = value

    # -------------------- field access --------------------
    def is_declared(self, name: str) -> bool:
        """Check whether a value was explicitly written for ``name``."""
        return name in self._values

    def get_ok(self, name: str) -> tuple[Any, bool]:
        """Return the field value and whether it is set to a non-zero value.

        Undeclared fields fall back to the schema default, then to the kind's
        zero value.
        """
        spec = self._spec(name)
        if name in self._values:
            value = self._values[name]
        elif spec.default is not None:
            value = spec.coerce(spec.default)
        else:
            value = spec.zero_value()
        if isinstance(value, list):
            value = list(value)
        return value, value != spec.zero_value()

    def get(self, name: str) -> Any:
        value, _ = self.get_ok(name)
        return value

    def set(self, name: str, value: Any) -> None:
        """Write ``value`` to the declared field ``name``."""
        spec = self.schema.get(name)
        if spec is None:
            raise StateWriteError(name, f"unknown field {name!r}")
        try:
            self._values[name] = spec.coerce(value)
        except TypeError as exc:
            raise StateWriteError(name, str(exc)) from exc

    def _spec(self, name: str) -> FieldSpec:
        spec = self.schema.get(name)
        if spec is None:
            raise KeyError(f"unknown field {name!r}")
        return spec

    # -------------------- serialisation --------------------
    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation of the state."""
        attributes: dict[str, Any] = {}
        for name, value in self._values.items():
            if self.schema[name].kind is FieldKind.INT_SET:
                attributes[name] = sorted(value)
            elif isinstance(value, list):
                attributes[name] = list(value)
            else:
                attributes[name] = value
        return {"id": self._id, "attributes": attributes}

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], *, schema: Schema = TICKET_FORM_SCHEMA
    ) -> "ResourceData":
        """Create a ResourceData from :meth:`to_dict` output.

        Raises:
            StateWriteError: If an attribute is unknown or has the wrong type.
        """
        raw_id = data.get("id") or ""
        if not isinstance(raw_id, str):
            raw_id = str(raw_id)
        attributes = data.get("attributes") or {}
        return cls(attributes, id=raw_id, schema=schema)

    def __repr__(self) -> str:
        return f"ResourceData(id={self._id!r}, values={self._values!r})"


__all__ = ["ResourceData", "StateWriteError"]
