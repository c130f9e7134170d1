"""Point API client package.

This package provides an asynchronous client for the Point study platform
REST API. It includes bearer-token session management with transparent
token refresh, bounded retry of transport failures, and one method per
REST endpoint.

:var __version__: Current package version
:type __version__: str
"""

from .client import ApiClient
from .config.settings import Settings, get_settings
from .exceptions import (
    APIError,
    ConfigurationError,
    PointAPIError,
    ResponseDecodeError,
)
from .session import TokenSession

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "Settings",
    "get_settings",
    "TokenSession",
    "PointAPIError",
    "APIError",
    "ConfigurationError",
    "ResponseDecodeError",
]
