"""Schedule, schedule teacher and schedule student endpoints."""

from typing import Any

from ...utils.query import QueryLike, with_query
from ..core import BaseApiClient


class SchedulesMixin(BaseApiClient):
    """Endpoints under ``/schedules``."""

    async def add_teachers_in_schedules(self, body: Any) -> Any:
        return await self.post("/schedules/teachers", body)

    async def get_teachers_in_schedules(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/schedules/teachers", query))

    async def get_teachers_by_id_in_schedules(self, teacher_id: Any) -> Any:
        return await self.get(f"/schedules/teachers/{teacher_id}")

    async def update_teachers_by_id_in_schedules(self, teacher_id: Any, body: Any) -> Any:
        return await self.put(f"/schedules/teachers/{teacher_id}", body)

    async def delete_teachers_by_id_in_schedules(self, teacher_id: Any) -> Any:
        return await self.delete(f"/schedules/teachers/{teacher_id}")

    async def add_students_for_schedule_by_schedule_id(
        self, schedule_id: Any, body: Any
    ) -> Any:
        """Enrol a student in a schedule."""
        return await self.post(f"/schedules/{schedule_id}/students", body)

    async def get_students_for_schedules_by_schedule_id(
        self, schedule_id: Any, query: QueryLike = None
    ) -> Any:
        return await self.get(with_query(f"/schedules/{schedule_id}/students", query))

    async def get_students_by_id_in_schedules_by_schedule_id(
        self, schedule_id: Any, student_id: Any
    ) -> Any:
        return await self.get(f"/schedules/{schedule_id}/students/{student_id}")

    async def update_students_by_id_in_schedules_by_schedule_id(
        self, schedule_id: Any, student_id: Any, body: Any
    ) -> Any:
        return await self.put(f"/schedules/{schedule_id}/students/{student_id}", body)

    async def delete_students_by_id_in_schedules_by_schedule_id(
        self, schedule_id: Any, student_id: Any
    ) -> Any:
        return await self.delete(f"/schedules/{schedule_id}/students/{student_id}")

    async def add_schedule(self, body: Any) -> Any:
        return await self.post("/schedules", body)

    async def get_schedules(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/schedules", query))

    async def get_schedules_by_id(self, schedule_id: Any) -> Any:
        return await self.get(f"/schedules/{schedule_id}")

    async def update_schedule_by_id(self, schedule_id: Any, body: Any) -> Any:
        return await self.put(f"/schedules/{schedule_id}", body)

    async def delete_schedule_by_id(self, schedule_id: Any) -> Any:
        return await self.delete(f"/schedules/{schedule_id}")
