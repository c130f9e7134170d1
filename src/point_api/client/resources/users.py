"""User, user status, superadmin impersonation and e-mail subscription endpoints."""

from typing import Any

from ...utils.query import QueryLike, with_query
from ..core import BaseApiClient


class UsersMixin(BaseApiClient):
    """Endpoints under ``/users``, ``/superadmin`` and ``/emails``."""

    async def get_me_in_users(self, query: QueryLike = None) -> Any:
        """Return the profile of the logged-in user.

        :param query: Optional list-style parameters, e.g. ``_join``
        :type query: QueryLike
        :return: Current user
        :rtype: Any
        """
        return await self.get(with_query("/users/me", query))

    async def add_user_by_id(self, user_id: Any, body: Any) -> Any:
        return await self.post(f"/users/{user_id}", body)

    async def update_user_by_id(self, user_id: Any, body: Any) -> Any:
        return await self.put(f"/users/{user_id}", body)

    async def delete_user_by_id(self, user_id: Any) -> Any:
        return await self.delete(f"/users/{user_id}")

    async def patch_password_for_user_by_id(self, user_id: Any, body: Any) -> Any:
        """Set a new password for the user."""
        return await self.patch(f"/users/{user_id}/password", body)

    async def add_user(self, body: Any) -> Any:
        return await self.post("/users", body)

    async def get_users(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/users", query))

    async def get_users_by_id(self, user_id: Any) -> Any:
        return await self.get(f"/users/{user_id}")

    async def update_user_status_by_user_id(
        self, user_id: Any, status_name: str, body: Any = None
    ) -> Any:
        """Grant a status such as ``admin`` to a user.

        :param user_id: User identifier
        :type user_id: Any
        :param status_name: Status to grant
        :type status_name: str
        :param body: Optional payload
        :type body: Any
        :return: Status change result
        :rtype: Any
        """
        return await self.post(f"/users/{user_id}/statuses/{status_name}", body)

    async def delete_user_status_by_user_id(self, user_id: Any, status_name: str) -> Any:
        """Revoke a status from a user."""
        return await self.delete(f"/users/{user_id}/statuses/{status_name}")

    async def login_as_user_by_admin(self, user_id: Any) -> Any:
        """Get a token for ``user_id`` as superadmin.

        The returned token is not stored in the session.
        """
        return await self.get(f"/superadmin/tokens/{user_id}")

    async def logout_as_user_by_admin(self) -> Any:
        """Get the superadmin token back."""
        return await self.delete("/superadmin/tokens")

    async def add_subscribe_in_emails(self, body: Any = None) -> Any:
        """Allow the user to receive all e-mails."""
        return await self.post("/emails/subscribe", body)

    async def delete_subscribe_in_emails(self) -> Any:
        """Unsubscribe from all e-mails except password recovery."""
        return await self.delete("/emails/subscribe")
