"""Configuration utilities for ticketforms.

Settings for the Zendesk API are resolved from, in order of precedence:
explicit overrides, environment variables, the ``zendesk`` section of a JSON
config file, and built-in defaults.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

from ticketforms.infrastructure.http import (
    ApiCredentials,
    ZendeskHttpClient,
)
from ticketforms.infrastructure.http.client import DEFAULT_TIMEOUT_SECONDS
from ticketforms.infrastructure.observability import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILE = Path("ticketforms.json")

ENV_URL = "ZENDESK_URL"
ENV_ACCOUNT = "ZENDESK_ACCOUNT"
ENV_EMAIL = "ZENDESK_EMAIL"
ENV_TOKEN = "ZENDESK_TOKEN"
ENV_TIMEOUT = "ZENDESK_TIMEOUT"


@dataclass(frozen=True)
class ApiSettings:
    """Connection settings for a Zendesk account."""

    base_url: str = ""
    email: str | None = None
    api_token: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def load_config(config_path: Path | str | None = None) -> Dict[str, Any]:
    """Load the JSON config file if present and return it as a dictionary."""

    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_FILE
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return data


def account_url(account: str) -> str:
    return f"https://{account}.zendesk.com"


def _parse_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        logger.warning(
            "Invalid timeout %r; using %.1fs", value, DEFAULT_TIMEOUT_SECONDS
        )
        return DEFAULT_TIMEOUT_SECONDS
    if timeout <= 0:
        logger.warning(
            "Invalid timeout %r; using %.1fs", value, DEFAULT_TIMEOUT_SECONDS
        )
        return DEFAULT_TIMEOUT_SECONDS
    return timeout


def get_api_settings(
    config_path: Path | str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ApiSettings:
    """Resolve API settings from overrides, environment and config file."""

    env = os.environ if environ is None else environ
    section = load_config(config_path).get("zendesk", {})
    if not isinstance(section, dict):
        section = {}

    merged: dict[str, Any] = {k: v for k, v in section.items() if v not in (None, "")}
    if "account" in merged and "url" not in merged:
        merged["url"] = account_url(str(merged["account"]))

    if env.get(ENV_ACCOUNT):
        merged["url"] = account_url(env[ENV_ACCOUNT])
    if env.get(ENV_URL):
        merged["url"] = env[ENV_URL]
    if env.get(ENV_EMAIL):
        merged["email"] = env[ENV_EMAIL]
    if env.get(ENV_TOKEN):
        merged["api_token"] = env[ENV_TOKEN]
    if env.get(ENV_TIMEOUT):
        merged["timeout_seconds"] = env[ENV_TIMEOUT]

    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value

    return ApiSettings(
        base_url=str(merged.get("url", "")),
        email=merged.get("email"),
        api_token=merged.get("api_token"),
        timeout_seconds=_parse_timeout(
            merged.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
        ),
    )


def build_http_client(settings: ApiSettings) -> ZendeskHttpClient:
    """Return a :class:`ZendeskHttpClient` configured from ``settings``.

    Raises:
        ValueError: If no account URL is configured.
    """
    if not settings.base_url:
        raise ValueError(
            f"No Zendesk URL configured; set {ENV_URL} or {ENV_ACCOUNT}"
        )
    return ZendeskHttpClient(
        base_url=settings.base_url,
        credentials=ApiCredentials(email=settings.email, api_token=settings.api_token),
        timeout_seconds=settings.timeout_seconds,
    )


__all__ = [
    "ApiSettings",
    "DEFAULT_CONFIG_FILE",
    "account_url",
    "build_http_client",
    "get_api_settings",
    "load_config",
]
