"""Topic, key point and per-user topic status endpoints.

Collection paths use snake_case (``/topics/key_points``) while item paths
use camelCase (``/topics/keyPoints/{id}``), matching the service routes.
"""

from typing import Any

from ...utils.query import QueryLike, with_query
from ..core import BaseApiClient


class TopicsMixin(BaseApiClient):
    """Endpoints under ``/topics``."""

    async def add_key_points_in_topics(self, body: Any) -> Any:
        return await self.post("/topics/key_points", body)

    async def get_key_points_in_topics(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/topics/key_points", query))

    async def get_key_points_by_id_in_topics(self, key_point_id: Any) -> Any:
        return await self.get(f"/topics/keyPoints/{key_point_id}")

    async def update_key_points_by_id_in_topics(self, key_point_id: Any, body: Any) -> Any:
        return await self.put(f"/topics/keyPoints/{key_point_id}", body)

    async def delete_key_points_by_id_in_topics(self, key_point_id: Any) -> Any:
        return await self.delete(f"/topics/keyPoints/{key_point_id}")

    async def add_user_statuses_in_topics(self, body: Any) -> Any:
        return await self.post("/topics/user_statuses", body)

    async def get_user_statuses_in_topics(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/topics/user_statuses", query))

    async def get_user_statuses_by_id_in_topics(self, status_id: Any) -> Any:
        return await self.get(f"/topics/userStatuses/{status_id}")

    async def update_user_statuses_by_id_in_topics(self, status_id: Any, body: Any) -> Any:
        return await self.put(f"/topics/userStatuses/{status_id}", body)

    async def delete_user_statuses_by_id_in_topics(self, status_id: Any) -> Any:
        return await self.delete(f"/topics/userStatuses/{status_id}")

    async def add_topic(self, body: Any) -> Any:
        return await self.post("/topics", body)

    async def update_topic_by_id(self, topic_id: Any, body: Any) -> Any:
        return await self.put(f"/topics/{topic_id}", body)

    async def get_topics(self, query: QueryLike = None) -> Any:
        """List topics.

        :param query: List parameters, e.g. ``{"_search": "algebra"}``
        :type query: QueryLike
        :return: Result page with ``total`` and ``data``
        :rtype: Any
        """
        return await self.get(with_query("/topics", query))

    async def get_topics_by_id(self, topic_id: Any) -> Any:
        return await self.get(f"/topics/{topic_id}")

    async def delete_topic_by_id(self, topic_id: Any) -> Any:
        return await self.delete(f"/topics/{topic_id}")
