"""
ticketforms package initializer.

This package reconciles declaratively described Zendesk ticket forms against
the ticket forms exposed by the Zendesk Support REST API.

The package exposes a ``__version__`` attribute indicating the installed
version of ticketforms. The version is read from pyproject.toml via
importlib.metadata – this is the single source of truth.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ticketforms")
except PackageNotFoundError:
    # Package is not installed (running from source without pip install -e .)
    __version__ = "0.0.0.dev"

__all__: list[str] = ["__version__"]
