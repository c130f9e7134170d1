"""Category and category topic endpoints.

Method names keep the service's singular ``categorie`` spelling so that
they line up with the rest of the API surface.
"""

from typing import Any

from ...utils.query import QueryLike, with_query
from ..core import BaseApiClient


class CategoriesMixin(BaseApiClient):
    """Endpoints under ``/categories``."""

    async def add_topics_in_categories(self, body: Any) -> Any:
        return await self.post("/categories/topics", body)

    async def get_topics_in_categories(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/categories/topics", query))

    async def get_topics_by_id_in_categories(self, link_id: Any) -> Any:
        return await self.get(f"/categories/topics/{link_id}")

    async def update_topics_by_id_in_categories(self, link_id: Any, body: Any) -> Any:
        return await self.put(f"/categories/topics/{link_id}", body)

    async def delete_topics_by_id_in_categories(self, link_id: Any) -> Any:
        return await self.delete(f"/categories/topics/{link_id}")

    async def add_categorie(self, body: Any) -> Any:
        return await self.post("/categories", body)

    async def get_categories(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/categories", query))

    async def get_categories_by_id(self, category_id: Any) -> Any:
        return await self.get(f"/categories/{category_id}")

    async def update_categorie_by_id(self, category_id: Any, body: Any) -> Any:
        return await self.put(f"/categories/{category_id}", body)

    async def delete_categorie_by_id(self, category_id: Any) -> Any:
        return await self.delete(f"/categories/{category_id}")
