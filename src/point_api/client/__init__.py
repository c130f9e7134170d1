"""Point API client.

:class:`ApiClient` combines the authenticated request pipeline of
:class:`BaseApiClient` with one method per service endpoint.

Examples:
    >>> from point_api import ApiClient
    >>> async with ApiClient("https://api.dev.point.study") as client:
    ...     await client.login({"email": "me@example.com", "password": "secret"})
    ...     page = await client.get_users({"_limit": 10})
"""

from .core import BaseApiClient
from .resources import (
    AuthMixin,
    CategoriesMixin,
    CoursesMixin,
    GoalsMixin,
    MediaMixin,
    ReferenceMixin,
    SchedulesMixin,
    TopicsMixin,
    UsersMixin,
)


class ApiClient(
    AuthMixin,
    UsersMixin,
    MediaMixin,
    TopicsMixin,
    CoursesMixin,
    SchedulesMixin,
    GoalsMixin,
    CategoriesMixin,
    ReferenceMixin,
    BaseApiClient,
):
    """Typed async client for every Point API endpoint."""


__all__ = ["ApiClient", "BaseApiClient"]
