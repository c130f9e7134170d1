"""Authentication, registration and external login endpoints.

Calls that a user makes before holding a session (registration, password
login, e-mail confirmation, password recovery, OAuth URL lookups) are sent
without a bearer token and never trigger a token refresh.

Examples:
    >>> await client.check_registered_email({"email": "me@example.com"})
    >>> url = await client.get_google_url({"redirect": "https://app/cb"})
"""

import logging
from typing import Any

from ...utils.http.request import is_success, parse_json_body
from ...utils.query import QueryLike, with_query
from ..core import BaseApiClient

logger = logging.getLogger(__name__)


class AuthMixin(BaseApiClient):
    """Endpoints under ``/register``, ``/login`` and ``/logout``."""

    async def get_check(self, query: QueryLike = None) -> Any:
        """Service health check."""
        return await self.get(with_query("/check", query), no_auth=True)

    async def get_drawio(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/drawio", query))

    async def register_new_user(self, body: Any) -> Any:
        """Register a new user without storing the returned tokens.

        Use :meth:`create_user` to register and start a session in one call.

        :param body: Registration credentials
        :type body: Any
        :return: Registration result
        :rtype: Any
        """
        return await self.post("/register", body, no_auth=True)

    async def get_access_token(self, body: Any) -> Any:
        """Exchange credentials for a token pair without storing it."""
        return await self.post("/login", body, no_auth=True)

    async def login_by_service(self, service: str, body: Any) -> Any:
        """Log in through an external service such as ``google``.

        :param service: External service name
        :type service: str
        :param body: Service-specific login payload
        :type body: Any
        :return: Login result
        :rtype: Any
        """
        return await self.post(f"/login/{service}", body, no_auth=True)

    async def check_registered_email(self, body: Any) -> Any:
        return await self.post("/register/check", body, no_auth=True)

    async def refresh_access_token(self, body: Any) -> Any:
        """Exchange a refresh token explicitly.

        The automatic refresh of the request pipeline does not go through
        this method, and the result is not stored in the session.
        """
        return await self.post("/login/refresh", body, no_auth=True)

    async def logout(self, body: Any = None) -> Any:
        """Log out and drop the session tokens on success.

        :param body: Optional logout payload
        :type body: Any
        :return: Logout result
        :rtype: Any
        """
        response = await self._send("POST", "/logout", body)
        if is_success(response):
            self.session.clear()
            logger.info("Logged out; session tokens cleared")
        return parse_json_body(response)

    async def add_resend_in_register(self, body: Any) -> Any:
        """Re-send the e-mail with the confirmation code."""
        return await self.post("/register/resend", body, no_auth=True)

    async def change_password(self, body: Any) -> Any:
        return await self.patch("/login", body)

    async def get_refresh_in_login(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/login/refresh", query))

    async def forgot_password(self, body: Any) -> Any:
        """Request a code to restore the password."""
        return await self.post("/login/forgot", body, no_auth=True)

    async def set_forgot_password(self, body: Any) -> Any:
        """Set a new password using a restore code."""
        return await self.post("/login/restore", body, no_auth=True)

    async def change_email(self, body: Any) -> Any:
        """Set a new e-mail using a restore code."""
        return await self.post("/login/email", body)

    async def get_externals_login(self, query: QueryLike = None) -> Any:
        """List the external services linked to the user's profile."""
        return await self.get(with_query("/login/externals", query))

    async def delete_externals_by_external_name(self, external_name: str) -> Any:
        """Unlink an external service from the user's profile."""
        return await self.delete(f"/login/externals/{external_name}")

    async def get_google_url(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/login/google", query), no_auth=True)

    async def post_google_data(self, body: Any) -> Any:
        return await self.post("/login/google", body)

    async def get_microsoft_url(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/login/microsoft", query), no_auth=True)

    async def post_microsoft_data(self, body: Any) -> Any:
        return await self.post("/login/microsoft", body)

    async def get_linkedin_url(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/login/linkedin", query), no_auth=True)

    async def post_linkedin_data(self, body: Any) -> Any:
        return await self.post("/login/linkedin", body)

    async def get_facebook_url(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/login/facebook", query), no_auth=True)

    async def post_facebook_data(self, body: Any) -> Any:
        return await self.post("/login/facebook", body)
