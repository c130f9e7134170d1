"""Course, course teacher, course topic and course schedule endpoints."""

from typing import Any

from ...utils.query import QueryLike, with_query
from ..core import BaseApiClient


class CoursesMixin(BaseApiClient):
    """Endpoints under ``/courses``."""

    async def add_teachers_in_courses(self, body: Any) -> Any:
        return await self.post("/courses/teachers", body)

    async def get_teachers_in_courses(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/courses/teachers", query))

    async def get_teachers_by_id_in_courses(self, teacher_id: Any) -> Any:
        return await self.get(f"/courses/teachers/{teacher_id}")

    async def update_teachers_by_id_in_courses(self, teacher_id: Any, body: Any) -> Any:
        return await self.put(f"/courses/teachers/{teacher_id}", body)

    async def delete_teachers_by_id_in_courses(self, teacher_id: Any) -> Any:
        return await self.delete(f"/courses/teachers/{teacher_id}")

    async def add_topics_in_courses(self, body: Any) -> Any:
        return await self.post("/courses/topics", body)

    async def get_topics_in_courses(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/courses/topics", query))

    async def get_topics_by_id_in_courses(self, link_id: Any) -> Any:
        return await self.get(f"/courses/topics/{link_id}")

    async def update_topics_by_id_in_courses(self, link_id: Any, body: Any) -> Any:
        return await self.put(f"/courses/topics/{link_id}", body)

    async def delete_topics_by_id_in_courses(self, link_id: Any) -> Any:
        return await self.delete(f"/courses/topics/{link_id}")

    async def add_course(self, body: Any) -> Any:
        return await self.post("/courses", body)

    async def get_courses(self, query: QueryLike = None) -> Any:
        return await self.get(with_query("/courses", query))

    async def get_courses_by_id(self, course_id: Any) -> Any:
        return await self.get(f"/courses/{course_id}")

    async def update_course_by_id(self, course_id: Any, body: Any) -> Any:
        return await self.put(f"/courses/{course_id}", body)

    async def delete_course_by_id(self, course_id: Any) -> Any:
        return await self.delete(f"/courses/{course_id}")

    async def add_schedules_for_course_by_course_id(self, course_id: Any, body: Any) -> Any:
        return await self.post(f"/courses/{course_id}/schedules", body)

    async def get_schedules_for_courses_by_course_id(
        self, course_id: Any, query: QueryLike = None
    ) -> Any:
        """List the schedules of one course.

        :param course_id: Course identifier
        :type course_id: Any
        :param query: List parameters
        :type query: QueryLike
        :return: Result page
        :rtype: Any
        """
        return await self.get(with_query(f"/courses/{course_id}/schedules", query))

    async def get_schedules_by_id_in_courses_by_course_id(
        self, course_id: Any, schedule_id: Any
    ) -> Any:
        return await self.get(f"/courses/{course_id}/schedules/{schedule_id}")

    async def update_schedules_by_id_in_courses_by_course_id(
        self, course_id: Any, schedule_id: Any, body: Any
    ) -> Any:
        return await self.put(f"/courses/{course_id}/schedules/{schedule_id}", body)

    async def delete_schedules_by_id_in_courses_by_course_id(
        self, course_id: Any, schedule_id: Any
    ) -> Any:
        return await self.delete(f"/courses/{course_id}/schedules/{schedule_id}")
