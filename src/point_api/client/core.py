"""Authenticated request pipeline for the Point API.

This module turns one logical API call into at most three physical
requests (call, refresh, replay):

1. The request is sent through the :class:`TransportRetrier`, which
   retries transport failures and attaches the bearer token.
2. If the response carries the configured auth-failure status (401 or
   403, deployment dependent), the refresh token is exchanged for a new
   access token exactly once.
3. After a successful refresh the original request is replayed once.
   A failed refresh returns the original response unchanged.

Nothing here raises for transport failures or error statuses; callers
receive ``None`` (service unreachable) or the parsed error body.

Examples:
    >>> async with BaseApiClient("https://api.dev.point.study") as client:
    ...     await client.login({"email": "me@example.com", "password": "x"})
    ...     me = await client.get("/users/me")
"""

import asyncio
import logging
import random
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from ..config.settings import Settings, get_settings
from ..exceptions import ConfigurationError, ResponseDecodeError
from ..session import TokenErrorCallback, TokenSession, TokenUpdateCallback
from ..utils.http.client_manager import create_http_client
from ..utils.http.request import is_success, parse_json_body
from ..utils.http.retry import RequestOptions, SleepFunc, TransportRetrier
from ..utils.query import QueryLike, handle_query_string
from ..utils.security import safe_log_dict

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


def to_payload(data: Any) -> Any:
    """Convert a request body to JSON-serializable data.

    Pydantic models are dumped by alias without unset optional fields;
    everything else is passed through. A missing body (``None`` or
    an empty string) becomes ``{}``; empty lists and dicts are sent as is.

    :param data: Request body
    :type data: Any
    :return: JSON-serializable payload
    :rtype: Any
    """
    if data is None or data == "":
        return {}
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, exclude_none=True)
    return data


class BaseApiClient:
    """Verb helpers and the token-refresh pipeline.

    :param url: Service root address; defaults to ``settings.api_url``
    :type url: Optional[str]
    :param token: Pre-seeded access token
    :type token: Optional[str]
    :param refresh_token: Pre-seeded refresh token
    :type refresh_token: Optional[str]
    :param on_token_update: Called with the new access token after login,
        registration or refresh
    :type on_token_update: Optional[TokenUpdateCallback]
    :param on_token_error: Called when a refresh attempt fails
    :type on_token_error: Optional[TokenErrorCallback]
    :param settings: Client settings; loaded from the environment if omitted
    :type settings: Optional[Settings]
    :param http_client: Caller-owned httpx client (left open on close)
    :type http_client: Optional[httpx.AsyncClient]
    :param transport: Transport for the client created internally
    :type transport: Optional[httpx.AsyncBaseTransport]
    :param sleep: Awaitable sleep used between retries
    :type sleep: Optional[SleepFunc]
    :param rng: Random source for backoff jitter
    :type rng: Optional[random.Random]
    :raises ConfigurationError: If no base URL is available
    """

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        on_token_update: Optional[TokenUpdateCallback] = None,
        on_token_error: Optional[TokenErrorCallback] = None,
        *,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Optional[SleepFunc] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or get_settings()
        base_url = (url or self.settings.api_url or "").strip()
        if not base_url:
            raise ConfigurationError("A base url is required", setting="url")

        self.session = TokenSession(
            base_url,
            access_token=token,
            refresh_token=refresh_token,
            on_token_update=on_token_update,
            on_token_error=on_token_error,
        )

        self._owns_http_client = http_client is None
        self._http_client = http_client or create_http_client(
            self.settings.timeout_seconds, transport=transport
        )
        self._retrier = TransportRetrier(
            self._http_client,
            self.session,
            max_attempts=self.settings.max_attempts,
            base_ms=self.settings.backoff_base_ms,
            jitter_ms=self.settings.backoff_jitter_ms,
            sleep=sleep,
            rng=rng,
            strip_leading_slash=self.settings.strip_leading_slash,
        )
        self._refresh_task: Optional[asyncio.Future] = None

        logger.debug(
            "Client initialized for %s (auth_failure_status=%d, refresh_path=%s)",
            base_url,
            self.settings.auth_failure_status,
            self.settings.refresh_path,
        )

    # ------------------------------------------------------------------
    # Session accessors
    # ------------------------------------------------------------------

    @property
    def url(self) -> str:
        """Return the service root address."""
        return self.session.base_url

    @property
    def token(self) -> Optional[str]:
        """Return the current access token."""
        return self.session.access_token

    @property
    def refresh_token(self) -> Optional[str]:
        """Return the current refresh token."""
        return self.session.refresh_token

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the httpx client if this instance created it."""
        if self._owns_http_client and not self._http_client.is_closed:
            await self._http_client.aclose()
            logger.debug("Closed owned HTTP client")

    async def __aenter__(self) -> "BaseApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def request(
        self,
        endpoint: str,
        options: Optional[RequestOptions] = None,
        no_auth: bool = False,
    ) -> Optional[httpx.Response]:
        """Send one physical request with transport retries.

        :param endpoint: Relative endpoint path
        :type endpoint: str
        :param options: Method, headers and body
        :type options: Optional[RequestOptions]
        :param no_auth: Omit the bearer token
        :type no_auth: bool
        :return: Response, or None after exhausting all attempts
        :rtype: Optional[httpx.Response]
        """
        return await self._retrier.request(endpoint, options, no_auth)

    async def fetch_with_token(
        self,
        endpoint: str,
        options: Optional[RequestOptions] = None,
        no_auth: bool = False,
    ) -> Optional[httpx.Response]:
        """Send a request, refreshing the access token once if it expired.

        :param endpoint: Relative endpoint path
        :type endpoint: str
        :param options: Method, headers and body
        :type options: Optional[RequestOptions]
        :param no_auth: Omit the bearer token and skip the refresh check
        :type no_auth: bool
        :return: Final response, or None if the service was unreachable
        :rtype: Optional[httpx.Response]
        """
        response = await self.request(endpoint, options, no_auth)

        if (
            not no_auth
            and response is not None
            and response.status_code == self.settings.auth_failure_status
        ):
            logger.info(
                "Received %d for %s; refreshing access token",
                response.status_code,
                endpoint,
            )
            if await self.handle_auth_failure():
                # Replayed once; a second auth failure is returned as is
                response = await self.request(endpoint, options, no_auth)

        return response

    async def handle_auth_failure(self) -> bool:
        """Run the refresh protocol, sharing it between callers if configured.

        :return: True if a new access token was obtained
        :rtype: bool
        """
        if not self.settings.coalesce_refresh:
            return await self._refresh_access_token()

        if self._refresh_task is None or self._refresh_task.done():
            self._refresh_task = asyncio.ensure_future(self._refresh_access_token())
        else:
            logger.debug("Joining in-flight token refresh")
        return await asyncio.shield(self._refresh_task)

    async def _refresh_access_token(self) -> bool:
        """Exchange the refresh token for a new access token.

        :return: True if the session now holds a new access token
        :rtype: bool
        """
        response = await self.request(
            self.settings.refresh_path,
            {
                "method": "POST",
                "json": {"refresh": self.session.refresh_token},
                "headers": dict(JSON_HEADERS),
            },
            no_auth=True,
        )

        if response is None or response.status_code != 200:
            logger.warning(
                "Token refresh rejected (status=%s)",
                response.status_code if response is not None else "no response",
            )
            await self.session.notify_token_error()
            return False

        try:
            body = parse_json_body(response)
        except ResponseDecodeError as e:
            logger.warning("Token refresh returned an unreadable body: %s", e.message)
            await self.session.notify_token_error()
            return False

        token = body.get("token") if isinstance(body, dict) else None
        if not token:
            logger.warning("Token refresh response carried no token")
            await self.session.notify_token_error()
            return False

        await self.session.update_tokens(token)
        logger.info("Access token refreshed")
        return True

    # ------------------------------------------------------------------
    # Verb helpers
    # ------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        endpoint: str,
        data: Any = None,
        no_auth: bool = False,
    ) -> Optional[httpx.Response]:
        options: RequestOptions = {"method": method}
        if method in ("POST", "PUT", "PATCH"):
            payload = to_payload(data)
            options["json"] = payload
            options["headers"] = dict(JSON_HEADERS)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%s %s body=%s", method, endpoint, safe_log_dict(payload))
        return await self.fetch_with_token(endpoint, options, no_auth)

    async def get(self, endpoint: str, no_auth: bool = False) -> Any:
        """Send a GET request and return the parsed JSON body.

        :param endpoint: Relative endpoint, optionally with query string
        :type endpoint: str
        :param no_auth: Omit the bearer token
        :type no_auth: bool
        :return: Parsed body, or None if absent
        :rtype: Any
        """
        return parse_json_body(await self._send("GET", endpoint, no_auth=no_auth))

    async def post(self, endpoint: str, data: Any = None, no_auth: bool = False) -> Any:
        """Send a JSON POST request and return the parsed JSON body.

        :param endpoint: Relative endpoint path
        :type endpoint: str
        :param data: Request body; ``{}`` when omitted
        :type data: Any
        :param no_auth: Omit the bearer token
        :type no_auth: bool
        :return: Parsed body, or None if absent
        :rtype: Any
        """
        return parse_json_body(await self._send("POST", endpoint, data, no_auth))

    async def put(self, endpoint: str, data: Any = None, no_auth: bool = False) -> Any:
        """Send a JSON PUT request and return the parsed JSON body."""
        return parse_json_body(await self._send("PUT", endpoint, data, no_auth))

    async def patch(self, endpoint: str, data: Any = None, no_auth: bool = False) -> Any:
        """Send a JSON PATCH request and return the parsed JSON body."""
        return parse_json_body(await self._send("PATCH", endpoint, data, no_auth))

    async def delete(self, endpoint: str, no_auth: bool = False) -> Any:
        """Send a DELETE request and return the parsed JSON body."""
        return parse_json_body(await self._send("DELETE", endpoint, no_auth=no_auth))

    async def post_form(
        self,
        endpoint: str,
        fields: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        no_auth: bool = False,
    ) -> Any:
        """Send a multipart POST request and return the parsed JSON body.

        httpx sets the multipart content type and boundary itself.

        :param endpoint: Relative endpoint path
        :type endpoint: str
        :param fields: Plain form fields
        :type fields: Optional[Dict[str, Any]]
        :param files: File fields, as accepted by httpx
        :type files: Optional[Dict[str, Any]]
        :param no_auth: Omit the bearer token
        :type no_auth: bool
        :return: Parsed body, or None if absent
        :rtype: Any
        """
        options: RequestOptions = {"method": "POST"}
        if fields:
            options["data"] = {k: v for k, v in fields.items() if v is not None}
        if files:
            options["files"] = files
        response = await self.fetch_with_token(endpoint, options, no_auth)
        return parse_json_body(response)

    # ------------------------------------------------------------------
    # Query strings
    # ------------------------------------------------------------------

    @staticmethod
    def handle_query_string(query: QueryLike) -> str:
        """Encode ``query`` for a list endpoint, dropping falsy values.

        :param query: Query parameters
        :type query: QueryLike
        :return: Query string without the leading ``?``
        :rtype: str
        """
        return handle_query_string(query)

    # ------------------------------------------------------------------
    # Session-establishing calls
    # ------------------------------------------------------------------

    async def _authenticate(self, endpoint: str, body: Any) -> Any:
        response = await self._send("POST", endpoint, body, no_auth=True)
        result = parse_json_body(response)
        if is_success(response) and isinstance(result, dict):
            await self.session.update_tokens(
                result.get("token"), refresh_token=result.get("refresh")
            )
            logger.info("Session established via %s", endpoint)
        else:
            logger.warning(
                "Authentication via %s failed (status=%s)",
                endpoint,
                response.status_code if response is not None else "no response",
            )
        return result

    async def login(self, body: Any) -> Any:
        """Log in with credentials and store the returned token pair.

        :param body: ``{"login"|"email": ..., "password": ...}`` or a
            :class:`~point_api.models.UserLogin`
        :type body: Any
        :return: Login result with ``token`` and ``refresh``
        :rtype: Any
        """
        return await self._authenticate("/login", body)

    async def create_user(self, body: Any) -> Any:
        """Register a user and store the returned token pair.

        :param body: Registration credentials
        :type body: Any
        :return: Registration result with ``token`` and ``refresh``
        :rtype: Any
        """
        return await self._authenticate("/register", body)
