"""Goal, goal share and goal topic endpoints."""

from typing import Any

from ...utils.query import QueryLike, with_query
from ..core import BaseApiClient


class GoalsMixin(BaseApiClient):
    """Endpoints under ``/goals``."""

    async def add_shares_in_goals(self, body: Any) -> Any:
        """Share a goal with another user."""
        return await self.post("/goals/shares", body)

    async def get_shares_in_goals(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/goals/shares", query))

    async def get_shares_by_id_in_goals(self, share_id: Any) -> Any:
        return await self.get(f"/goals/shares/{share_id}")

    async def update_shares_by_id_in_goals(self, share_id: Any, body: Any) -> Any:
        return await self.put(f"/goals/shares/{share_id}", body)

    async def delete_shares_by_id_in_goals(self, share_id: Any) -> Any:
        return await self.delete(f"/goals/shares/{share_id}")

    async def add_topics_in_goals(self, body: Any) -> Any:
        return await self.post("/goals/topics", body)

    async def get_topics_in_goals(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/goals/topics", query))

    async def get_topics_by_id_in_goals(self, link_id: Any) -> Any:
        return await self.get(f"/goals/topics/{link_id}")

    async def update_topics_by_id_in_goals(self, link_id: Any, body: Any) -> Any:
        return await self.put(f"/goals/topics/{link_id}", body)

    async def delete_topics_by_id_in_goals(self, link_id: Any) -> Any:
        return await self.delete(f"/goals/topics/{link_id}")

    async def add_goal(self, body: Any) -> Any:
        return await self.post("/goals", body)

    async def get_goals(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/goals", query))

    async def get_goals_by_id(self, goal_id: Any) -> Any:
        return await self.get(f"/goals/{goal_id}")

    async def update_goal_by_id(self, goal_id: Any, body: Any) -> Any:
        return await self.put(f"/goals/{goal_id}", body)

    async def delete_goal_by_id(self, goal_id: Any) -> Any:
        return await self.delete(f"/goals/{goal_id}")
