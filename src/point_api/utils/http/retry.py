"""Transport-level retry for single HTTP requests.

This module issues one logical HTTP request against the service and
retries it when the network layer fails (DNS, connection reset, timeouts)
or yields no response at all. HTTP status codes are never inspected here:
a 4xx or 5xx response is a successful outcome of this layer.

The backoff grows linearly with the attempt number and adds random jitter
so that callers failing together do not retry in lockstep.
"""

import asyncio
import logging
import random
from typing import Any, Awaitable, Callable, Dict, Optional, TypedDict

import httpx

from ...session import TokenSession
from ..security import sanitize_headers

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 4
DEFAULT_BACKOFF_BASE_MS = 1000
DEFAULT_BACKOFF_JITTER_MS = 1000

SleepFunc = Callable[[float], Awaitable[Any]]


class RequestOptions(TypedDict, total=False):
    """Per-request options forwarded to :meth:`httpx.AsyncClient.request`."""

    method: str
    headers: Dict[str, str]
    json: Any
    content: Any
    data: Dict[str, Any]
    files: Any
    params: Dict[str, Any]


def compute_backoff(
    attempt: int,
    base_ms: int = DEFAULT_BACKOFF_BASE_MS,
    jitter_ms: int = DEFAULT_BACKOFF_JITTER_MS,
    rng: Optional[random.Random] = None,
) -> float:
    """Return the sleep before retrying after failed ``attempt``.

    The duration is ``base_ms * attempt + randrange(jitter_ms)``
    milliseconds, returned in seconds. With the defaults the result lies
    in ``[attempt, attempt + 0.999]``.

    :param attempt: 1-based index of the attempt that just failed
    :type attempt: int
    :param base_ms: Linear step in milliseconds
    :type base_ms: int
    :param jitter_ms: Exclusive upper bound of the jitter in milliseconds
    :type jitter_ms: int
    :param rng: Random source; the module-level generator when omitted
    :type rng: Optional[random.Random]
    :return: Sleep duration in seconds
    :rtype: float
    """
    if attempt < 1:
        raise ValueError("attempt must be >= 1")
    source = rng or random
    jitter = source.randrange(jitter_ms) if jitter_ms > 0 else 0
    return (base_ms * attempt + jitter) / 1000.0


class TransportRetrier:
    """Send requests with bounded retry on transport failure.

    The retrier reads the current access token from the session on every
    attempt, so an attempt made after a token refresh carries the new
    token.

    :param client: httpx client used for all requests
    :type client: httpx.AsyncClient
    :param session: Token session providing the base URL and bearer token
    :type session: TokenSession
    :param max_attempts: Attempts per request (including the first)
    :type max_attempts: int
    :param base_ms: Linear backoff step in milliseconds
    :type base_ms: int
    :param jitter_ms: Exclusive jitter bound in milliseconds
    :type jitter_ms: int
    :param sleep: Awaitable sleep, injectable for tests
    :type sleep: Optional[SleepFunc]
    :param rng: Random source for jitter
    :type rng: Optional[random.Random]
    :param strip_leading_slash: Normalize leading slashes of endpoints
    :type strip_leading_slash: bool
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        session: TokenSession,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_ms: int = DEFAULT_BACKOFF_BASE_MS,
        jitter_ms: int = DEFAULT_BACKOFF_JITTER_MS,
        sleep: Optional[SleepFunc] = None,
        rng: Optional[random.Random] = None,
        strip_leading_slash: bool = True,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.client = client
        self.session = session
        self.max_attempts = max_attempts
        self.base_ms = base_ms
        self.jitter_ms = jitter_ms
        self.sleep: SleepFunc = sleep or asyncio.sleep
        self.rng = rng
        self.strip_leading_slash = strip_leading_slash

    def build_url(self, endpoint: str) -> str:
        """Join the session base URL and ``endpoint``.

        :param endpoint: Relative endpoint, optionally with a query string
        :type endpoint: str
        :return: Absolute request URL
        :rtype: str
        """
        base = self.session.base_url.rstrip("/")
        if not self.strip_leading_slash:
            # Path kept verbatim; only a missing separator is added
            separator = "" if endpoint.startswith("/") else "/"
            return f"{base}{separator}{endpoint}"
        return f"{base}/{endpoint.lstrip('/')}"

    def merge_headers(
        self, headers: Optional[Dict[str, str]], no_auth: bool = False
    ) -> Dict[str, str]:
        """Overlay the bearer header on the caller's headers.

        :param headers: Caller-supplied headers
        :type headers: Optional[Dict[str, str]]
        :param no_auth: Leave the Authorization header out
        :type no_auth: bool
        :return: Headers to send
        :rtype: Dict[str, str]
        """
        merged = dict(headers or {})
        auth = {} if no_auth else self.session.auth_header()
        if auth:
            # Header names are case-insensitive; the session token wins
            merged = {k: v for k, v in merged.items() if k.lower() != "authorization"}
            merged.update(auth)
        return merged

    async def request(
        self,
        endpoint: str,
        options: Optional[RequestOptions] = None,
        no_auth: bool = False,
    ) -> Optional[httpx.Response]:
        """Send one request, retrying transport failures.

        :param endpoint: Relative endpoint path
        :type endpoint: str
        :param options: Method, headers and body of the request
        :type options: Optional[RequestOptions]
        :param no_auth: Do not attach the bearer token
        :type no_auth: bool
        :return: The first response obtained, or None once all attempts
            failed
        :rtype: Optional[httpx.Response]
        """
        options = dict(options or {})
        method = options.pop("method", "GET").upper()
        caller_headers = options.pop("headers", None)
        url = self.build_url(endpoint)

        for attempt in range(1, self.max_attempts + 1):
            headers = self.merge_headers(caller_headers, no_auth)
            try:
                logger.debug(
                    "%s %s (attempt %d/%d) headers=%s",
                    method,
                    url,
                    attempt,
                    self.max_attempts,
                    sanitize_headers(headers),
                )
                response = await self.client.request(
                    method, url, headers=headers, **options
                )
                if response is None:
                    raise httpx.TransportError("No response received")
                return response
            except httpx.RequestError as e:
                failure = e

            if attempt >= self.max_attempts:
                logger.error(
                    "%s %s failed after %d attempts: %s",
                    method,
                    url,
                    attempt,
                    failure,
                )
                break

            delay = compute_backoff(attempt, self.base_ms, self.jitter_ms, self.rng)
            logger.warning(
                "sleep %.3fs before attempt %d/%d for %s %s (%s)",
                delay,
                attempt + 1,
                self.max_attempts,
                method,
                endpoint,
                type(failure).__name__,
            )
            await self.sleep(delay)

        return None
