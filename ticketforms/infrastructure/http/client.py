"""HTTP client for the Zendesk Support REST API.

This module centralises HTTP access to a Zendesk account. It maintains a
:class:`requests.Session` authenticated with an API token, applies JSON
headers, honours a caller-supplied :class:`RequestContext` for timeout and
cancellation, and maps every failure to :class:`RemoteAPIError`.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urljoin

import requests
from requests import Response, Session

from ticketforms.domain.errors import TicketFormError
from ticketforms.infrastructure.observability import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class RemoteAPIError(TicketFormError):
    """Raised when a remote API call fails for any reason."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(RemoteAPIError):
    """Raised when the API rejects the configured credentials."""


class NotFoundError(RemoteAPIError):
    """Raised when the requested remote resource does not exist."""


class RequestCancelledError(RemoteAPIError):
    """Raised when the caller cancelled the operation before the request."""


@dataclass(frozen=True)
class RequestContext:
    """Caller-owned timeout and cancellation for a single remote call."""

    timeout: float | None = None
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def cancel(self) -> None:
        self.cancel_event.set()


@dataclass
class ApiCredentials:
    """Email and API token used for Zendesk token authentication."""

    email: str | None = None
    api_token: str | None = None

    def as_auth(self) -> tuple[str, str] | None:
        if not self.email or not self.api_token:
            return None
        return (f"{self.email}/token", self.api_token)


class ZendeskHttpClient:
    """JSON helper around an authenticated :class:`requests.Session`."""

    def __init__(
        self,
        *,
        base_url: str,
        credentials: ApiCredentials | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials or ApiCredentials()
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        auth = self.credentials.as_auth()
        if auth is not None:
            self.session.auth = auth

    # -------------------- request helpers --------------------
    def resolve(self, path: str) -> str:
        """Return the absolute URL for an API path or pass absolute URLs through."""
        if path.startswith(("http://", "https://")):
            return path
        return urljoin(self.base_url + "/", path.lstrip("/"))

    def _prepare_headers(self) -> dict[str, str]:
        from ticketforms import __version__

        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": f"ticketforms/{__version__}",
        }

    def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        ctx: RequestContext | None = None,
    ) -> Response:
        """Issue a request and return the response once its status is checked.

        Raises:
            RequestCancelledError: If ``ctx`` was cancelled before sending.
            RemoteAPIError: On transport failures or error status codes.
        """
        url = self.resolve(path)
        if ctx is not None and ctx.cancelled:
            raise RequestCancelledError(f"{method} {url} cancelled before sending")
        timeout = self.timeout_seconds
        if ctx is not None and ctx.timeout is not None:
            timeout = ctx.timeout

        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                json=json,
                headers=self._prepare_headers(),
                timeout=timeout,
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise RemoteAPIError(f"{method} {url} failed: {exc}") from exc
        self._raise_for_status(method, url, response)
        return response

    def _raise_for_status(self, method: str, url: str, response: Response) -> None:
        """
        Raise custom exceptions for HTTP error status codes.
        """
        status = response.status_code
        if status < 400:
            return
        detail = _error_detail(response)
        message = f"{method} {url} returned {status}: {detail}"
        logger.error(message)
        if status in (401, 403):
            raise AuthenticationError(message, status_code=status)
        if status == 404:
            raise NotFoundError(message, status_code=status)
        raise RemoteAPIError(message, status_code=status)

    def _json(self, method: str, response: Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise RemoteAPIError(
                f"Failed to parse JSON response from {method} {response.url}: {exc}",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise RemoteAPIError(
                f"Expected a JSON object from {method} {response.url}",
                status_code=response.status_code,
            )
        return payload

    # -------------------- convenience --------------------
    def get_json(self, path: str, *, ctx: RequestContext | None = None) -> dict[str, Any]:
        return self._json("GET", self.request("GET", path, ctx=ctx))

    def post_json(
        self, path: str, payload: dict[str, Any], *, ctx: RequestContext | None = None
    ) -> dict[str, Any]:
        return self._json("POST", self.request("POST", path, json=payload, ctx=ctx))

    def put_json(
        self, path: str, payload: dict[str, Any], *, ctx: RequestContext | None = None
    ) -> dict[str, Any]:
        return self._json("PUT", self.request("PUT", path, json=payload, ctx=ctx))

    def delete(self, path: str, *, ctx: RequestContext | None = None) -> None:
        self.request("DELETE", path, ctx=ctx)

    def close(self) -> None:
        self.session.close()


def _error_detail(response: Response) -> str:
    """Extract the most useful error description from a Zendesk response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200] or response.reason or "no detail"
    if isinstance(payload, dict):
        error = payload.get("error")
        description = payload.get("description")
        if isinstance(error, dict):
            description = description or error.get("message")
            error = error.get("title")
        parts = [str(p) for p in (error, description) if p]
        if parts:
            return ": ".join(parts)
    return str(payload)[:200]


__all__ = [
    "ApiCredentials",
    "AuthenticationError",
    "DEFAULT_TIMEOUT_SECONDS",
    "NotFoundError",
    "RemoteAPIError",
    "RequestCancelledError",
    "RequestContext",
    "ZendeskHttpClient",
]
