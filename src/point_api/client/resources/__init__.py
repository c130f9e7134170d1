"""Per-resource endpoint mixins composed into :class:`point_api.client.ApiClient`."""

from .auth import AuthMixin
from .categories import CategoriesMixin
from .courses import CoursesMixin
from .goals import GoalsMixin
from .media import MediaMixin
from .reference import ReferenceMixin
from .schedules import SchedulesMixin
from .topics import TopicsMixin
from .users import UsersMixin

__all__ = [
    "AuthMixin",
    "CategoriesMixin",
    "CoursesMixin",
    "GoalsMixin",
    "MediaMixin",
    "ReferenceMixin",
    "SchedulesMixin",
    "TopicsMixin",
    "UsersMixin",
]
