"""Token session state for the Point API client.

A :class:`TokenSession` owns the access/refresh token pair of one client
instance. Every request reads from it, and login, registration and the
refresh protocol write to it through :meth:`TokenSession.update_tokens`,
so a concurrency guard can later be placed in one spot.

The session is process-local and never persisted. Callers that want to
keep tokens between runs do so from the ``on_token_update`` callback.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Union

logger = logging.getLogger(__name__)

TokenUpdateCallback = Callable[[Optional[str]], Union[None, Awaitable[None]]]
TokenErrorCallback = Callable[[], Union[None, Awaitable[None]]]

_UNCHANGED: Any = object()


def _noop_token_update(token: Optional[str]) -> None:
    return None


def _noop_token_error() -> None:
    return None


async def _maybe_await(result: Any) -> None:
    if inspect.isawaitable(result):
        await result


class TokenSession:
    """Mutable bearer-token state shared by all requests of a client.

    :param base_url: Root address of the service (immutable)
    :type base_url: str
    :param access_token: Optional pre-seeded access token
    :type access_token: Optional[str]
    :param refresh_token: Optional pre-seeded refresh token
    :type refresh_token: Optional[str]
    :param on_token_update: Called with the new access token whenever it
        changes; may be a coroutine function
    :type on_token_update: Optional[TokenUpdateCallback]
    :param on_token_error: Called when a refresh attempt fails; may be a
        coroutine function
    :type on_token_error: Optional[TokenErrorCallback]
    """

    def __init__(
        self,
        base_url: str,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        on_token_update: Optional[TokenUpdateCallback] = None,
        on_token_error: Optional[TokenErrorCallback] = None,
    ):
        self._base_url = base_url
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.on_token_update: TokenUpdateCallback = on_token_update or _noop_token_update
        self.on_token_error: TokenErrorCallback = on_token_error or _noop_token_error

    @property
    def base_url(self) -> str:
        """Return the service root address."""
        return self._base_url

    @property
    def is_authenticated(self) -> bool:
        """Return whether an access token is currently held."""
        return bool(self.access_token)

    def auth_header(self) -> Dict[str, str]:
        """Return the bearer header for the current token, or an empty dict.

        :return: ``{"Authorization": "Bearer <token>"}`` when a token is set
        :rtype: Dict[str, str]
        """
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}

    async def update_tokens(
        self,
        access_token: Optional[str],
        refresh_token: Optional[str] = _UNCHANGED,
    ) -> None:
        """Store a new token (pair) and notify ``on_token_update``.

        The access token is always written before the callback runs, so a
        request issued from the callback already carries the new token.

        :param access_token: New access token
        :type access_token: Optional[str]
        :param refresh_token: New refresh token; left as is when omitted
        :type refresh_token: Optional[str]
        """
        self.access_token = access_token
        if refresh_token is not _UNCHANGED:
            self.refresh_token = refresh_token
        logger.debug(
            "Session tokens updated (refresh token %s)",
            "replaced" if refresh_token is not _UNCHANGED else "kept",
        )
        await _maybe_await(self.on_token_update(access_token))

    async def notify_token_error(self) -> None:
        """Invoke ``on_token_error`` after a terminal refresh failure."""
        logger.warning("Token refresh failed; notifying token error handler")
        await _maybe_await(self.on_token_error())

    def clear(self) -> None:
        """Forget both tokens without invoking callbacks."""
        self.access_token = None
        self.refresh_token = None

    def __repr__(self) -> str:
        return (
            f"TokenSession(base_url={self._base_url!r}, "
            f"authenticated={self.is_authenticated}, "
            f"has_refresh_token={bool(self.refresh_token)})"
        )
