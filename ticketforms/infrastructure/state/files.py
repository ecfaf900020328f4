"""JSON state files holding one resource each."""

from __future__ import annotations

import json
from pathlib import Path

from ticketforms.domain.schema import TICKET_FORM_SCHEMA, Schema

from .resource_data import ResourceData


def load_state(path: Path | str, *, schema: Schema = TICKET_FORM_SCHEMA) -> ResourceData:
    """Load a resource state from ``path``.

    A missing file yields an empty state so a new resource can be declared
    through the same code path.
    """
    path = Path(path)
    if not path.exists():
        return ResourceData(schema=schema)
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, dict):
        raise ValueError(f"State file {path} must contain a JSON object")
    return ResourceData.from_dict(payload, schema=schema)


def save_state(data: ResourceData, path: Path | str) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data.to_dict(), f, indent=2, sort_keys=True)
        f.write("\n")


def remove_state(path: Path | str) -> bool:
    """Delete the state file; return False when there was nothing to remove."""
    path = Path(path)
    if not path.exists():
        return False
    path.unlink()
    return True


__all__ = ["load_state", "remove_state", "save_state"]
