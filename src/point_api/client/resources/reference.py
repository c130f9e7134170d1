"""Reference data: asset trees, language codes, learn statuses, regions, timezones.

As with topics, collection paths are snake_case (``/language_codes``) and
item paths camelCase (``/languageCodes/{id}``).
"""

from typing import Any

from ...utils.query import QueryLike, with_query
from ..core import BaseApiClient


class ReferenceMixin(BaseApiClient):
    """Endpoints for trees and lookup tables."""

    async def get_tree(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/tree", query))

    async def get_tree_by_asset_id(self, asset_id: Any) -> Any:
        """Return the tree rooted at ``asset_id``."""
        return await self.get(f"/tree/{asset_id}")

    async def get_tree2_by_asset_id(self, asset_id: Any) -> Any:
        """Return the ``tree2`` representation rooted at ``asset_id``."""
        return await self.get(f"/tree2/{asset_id}")

    async def add_language_code(self, body: Any) -> Any:
        return await self.post("/language_codes", body)

    async def get_language_codes(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/language_codes", query))

    async def get_language_codes_by_id(self, code_id: Any) -> Any:
        return await self.get(f"/languageCodes/{code_id}")

    async def update_language_code_by_id(self, code_id: Any, body: Any) -> Any:
        return await self.put(f"/languageCodes/{code_id}", body)

    async def delete_language_code_by_id(self, code_id: Any) -> Any:
        return await self.delete(f"/languageCodes/{code_id}")

    async def add_learn_statuse(self, body: Any) -> Any:
        return await self.post("/learn_statuses", body)

    async def get_learn_statuses(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/learn_statuses", query))

    async def get_learn_statuses_by_id(self, status_id: Any) -> Any:
        return await self.get(f"/learnStatuses/{status_id}")

    async def update_learn_statuse_by_id(self, status_id: Any, body: Any) -> Any:
        return await self.put(f"/learnStatuses/{status_id}", body)

    async def delete_learn_statuse_by_id(self, status_id: Any) -> Any:
        return await self.delete(f"/learnStatuses/{status_id}")

    async def add_region(self, body: Any) -> Any:
        return await self.post("/regions", body)

    async def get_regions(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/regions", query))

    async def get_regions_by_id(self, region_id: Any) -> Any:
        return await self.get(f"/regions/{region_id}")

    async def update_region_by_id(self, region_id: Any, body: Any) -> Any:
        return await self.put(f"/regions/{region_id}", body)

    async def delete_region_by_id(self, region_id: Any) -> Any:
        return await self.delete(f"/regions/{region_id}")

    async def get_timezones(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/timezones", query))

    async def get_timezones_by_id(self, timezone_id: Any) -> Any:
        return await self.get(f"/timezones/{timezone_id}")
