"""Resource state adapters.

This package provides the declared-state store consumed by the descriptor
codec, plus helpers to persist it as JSON files.
"""

from .files import load_state, remove_state, save_state
from .resource_data import ResourceData, StateWriteError

__all__ = [
    "ResourceData",
    "StateWriteError",
    "load_state",
    "remove_state",
    "save_state",
]
