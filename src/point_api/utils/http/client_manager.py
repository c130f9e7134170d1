"""httpx client construction for the Point API client.

Centralizes timeout and connection-limit defaults so every
:class:`~point_api.client.ApiClient` that owns its transport is built the
same way.
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


def create_timeout(
    connect: float = 5.0,
    read: float = 30.0,
    write: float = 10.0,
    pool: float = 5.0,
) -> httpx.Timeout:
    """Create a timeout configuration object.

    :param connect: Connection timeout in seconds
    :type connect: float
    :param read: Read timeout in seconds
    :type read: float
    :param write: Write timeout in seconds
    :type write: float
    :param pool: Pool timeout in seconds
    :type pool: float
    :return: Configured timeout object
    :rtype: httpx.Timeout
    """
    return httpx.Timeout(connect=connect, read=read, write=write, pool=pool)


def create_limits(
    max_keepalive_connections: int = 10,
    max_connections: int = 20,
    keepalive_expiry: float = 30.0,
) -> httpx.Limits:
    """Create a connection limits configuration object.

    :param max_keepalive_connections: Maximum number of keepalive connections
    :type max_keepalive_connections: int
    :param max_connections: Maximum total number of connections
    :type max_connections: int
    :param keepalive_expiry: Keepalive connection expiry time in seconds
    :type keepalive_expiry: float
    :return: Configured limits object
    :rtype: httpx.Limits
    """
    return httpx.Limits(
        max_keepalive_connections=max_keepalive_connections,
        max_connections=max_connections,
        keepalive_expiry=keepalive_expiry,
    )


def create_http_client(
    timeout_seconds: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    **kwargs: Any,
) -> httpx.AsyncClient:
    """Build the httpx client used by the request pipeline.

    Absolute URLs are built by the retrier, so no ``base_url`` is set on
    the client. The read timeout follows ``timeout_seconds``; connect and
    pool timeouts keep their shorter defaults unless the overall timeout
    is smaller.

    :param timeout_seconds: Overall per-request timeout
    :type timeout_seconds: float
    :param transport: Optional transport, e.g. ``httpx.MockTransport``
    :type transport: Optional[httpx.AsyncBaseTransport]
    :param kwargs: Extra ``httpx.AsyncClient`` arguments
    :return: Configured client
    :rtype: httpx.AsyncClient
    """
    config: Dict[str, Any] = {
        "timeout": create_timeout(
            connect=min(5.0, timeout_seconds),
            read=timeout_seconds,
            write=min(10.0, timeout_seconds),
            pool=min(5.0, timeout_seconds),
        ),
        "limits": create_limits(),
        "follow_redirects": True,
        **kwargs,
    }
    if transport is not None:
        config["transport"] = transport
    logger.debug("Creating httpx client (timeout=%ss)", timeout_seconds)
    return httpx.AsyncClient(**config)
