"""Shared helpers for composing CLI command contexts.

This module centralises common CLI wiring such as resolving API settings and
building the ticket form service used by every command.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from ticketforms.app.config import ApiSettings, get_api_settings
from ticketforms.services import TicketFormService

DEFAULT_STATE_FILE = Path("ticket_form.json")


@dataclass
class CLIContext:
    """Container for CLI dependencies and configuration."""

    settings: ApiSettings
    service_factory: Callable[[ApiSettings], TicketFormService] = field(
        default=TicketFormService.from_settings
    )
    _service: TicketFormService | None = None

    @property
    def service(self) -> TicketFormService:
        """Return the ticket form service, constructing it on first use."""
        if self._service is None:
            self._service = self.service_factory(self.settings)
        return self._service


def build_cli_context(
    *,
    config_path: str | None = None,
    url: str | None = None,
    email: str | None = None,
    api_token: str | None = None,
    timeout: float | None = None,
    service: TicketFormService | None = None,
) -> CLIContext:
    """Return a :class:`CLIContext` with command-line overrides applied."""

    settings = get_api_settings(
        config_path,
        overrides={
            "url": url,
            "email": email,
            "api_token": api_token,
            "timeout_seconds": timeout,
        },
    )
    return CLIContext(settings=settings, _service=service)


__all__ = ["CLIContext", "DEFAULT_STATE_FILE", "build_cli_context"]
