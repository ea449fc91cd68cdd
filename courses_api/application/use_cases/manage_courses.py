"""Создание, изменение и удаление курсов.

Порядок для изменения и удаления: курс существует (404) -> владелец (403)
-> запись. Валидация и аутентификация выполняются раньше, в обработчике.
"""
from collections.abc import Mapping
from typing import Any

from ...domain.entities import Course, User
from ...domain.errors import AuthorizationError, NotFoundError
from ..authorization import Decision, authorize
from ..ports import ICourseRepository

# поля тела запроса -> поля модели; владельца клиент не задаёт
COURSE_FIELDS = {
    "title": "title",
    "description": "description",
    "estimatedTime": "estimated_time",
    "materialsNeeded": "materials_needed",
}


def to_course_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    return {column: data[key] for key, column in COURSE_FIELDS.items() if key in data}


class CreateCourse:
    def __init__(self, repo: ICourseRepository):
        self.repo = repo

    def execute(self, identity: User, data: Mapping[str, Any]) -> Course:
        return self.repo.create(to_course_fields(data), owner_id=identity.id)


class _OwnedCourseAction:
    def __init__(self, repo: ICourseRepository):
        self.repo = repo

    def _load_for_owner(self, identity: User, course_id: int) -> Course:
        course = self.repo.get_by_id(course_id)
        if course is None:
            raise NotFoundError()
        if authorize(identity, course) is Decision.DENY:
            raise AuthorizationError()
        return course


class UpdateCourse(_OwnedCourseAction):
    def execute(self, identity: User, course_id: int, data: Mapping[str, Any]) -> None:
        course = self._load_for_owner(identity, course_id)
        self.repo.update(course, to_course_fields(data))


class DeleteCourse(_OwnedCourseAction):
    def execute(self, identity: User, course_id: int) -> None:
        course = self._load_for_owner(identity, course_id)
        self.repo.delete(course)
