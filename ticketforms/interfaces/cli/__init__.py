"""CLI interface for ticketforms.

This package is the canonical home for all Click commands. Use
``python -m ticketforms.interfaces.cli`` or the ``ticketforms`` console script.
"""

from .__main__ import cli, main
from .forms import create, declare, delete, import_cmd, list_forms, read, show, update

__all__ = [
    "cli",
    "create",
    "declare",
    "delete",
    "import_cmd",
    "list_forms",
    "main",
    "read",
    "show",
    "update",
]
