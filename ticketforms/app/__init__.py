"""Application wiring: configuration and client construction."""

from .config import ApiSettings, build_http_client, get_api_settings, load_config

__all__ = ["ApiSettings", "build_http_client", "get_api_settings", "load_config"]
