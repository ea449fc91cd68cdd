from typing import Any

from ..domain.entities import Course, User


class IUserRepository:
    def get_by_email(self, email: str) -> User | None: ...
    def create(self, fields: dict[str, Any]) -> User: ...


class ICourseRepository:
    def get_by_id(self, course_id: int) -> Course | None: ...
    def list(self) -> list[Course]: ...
    def create(self, fields: dict[str, Any], owner_id: int) -> Course: ...
    def update(self, course: Course, fields: dict[str, Any]) -> None: ...
    def delete(self, course: Course) -> None: ...


class IPasswordHasher:
    def hash(self, plain: str) -> str: ...
    def verify(self, plain: str, hashed: str) -> bool: ...
    def dummy_verify(self) -> None: ...
