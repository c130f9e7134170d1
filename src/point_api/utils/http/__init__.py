"""HTTP utilities public API (barrel module).

This package provides:
- Transport retrier with linear jittered backoff
- httpx client construction helpers
- Response parsing and status helpers

Recommended import pattern for consumers:
    from point_api.utils.http import TransportRetrier, parse_json_body
"""

from .client_manager import create_http_client, create_limits, create_timeout
from .request import is_success, parse_json_body, raise_for_status
from .retry import RequestOptions, TransportRetrier, compute_backoff

__all__ = [
    "create_http_client",
    "create_timeout",
    "create_limits",
    "compute_backoff",
    "RequestOptions",
    "TransportRetrier",
    "is_success",
    "parse_json_body",
    "raise_for_status",
]
