from contextlib import contextmanager
from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from .models import UserORM, CourseORM
from .metrics import db_queries_total
from ..domain.entities import User, Course
from ..domain.errors import DuplicateEmailError, NotFoundError, StoreError
from ..application.ports import IUserRepository, ICourseRepository

logger = structlog.get_logger()


def to_domain_user(u: UserORM) -> User:
    return User(
        id=u.id,
        first_name=u.first_name,
        last_name=u.last_name,
        email_address=u.email_address,
        password_hash=u.password_hash,
    )


def to_domain_course(c: CourseORM, with_owner: bool = False) -> Course:
    return Course(
        id=c.id,
        title=c.title,
        description=c.description,
        estimated_time=c.estimated_time,
        materials_needed=c.materials_needed,
        owner_id=c.user_id,
        owner=to_domain_user(c.owner) if with_owner and c.owner is not None else None,
    )


@contextmanager
def store_operation(db: Session, operation: str):
    """Откатывает транзакцию и превращает ошибки SQLAlchemy в StoreError."""
    db_queries_total.inc()
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("store_error", operation=operation, error=str(e), exc_info=True)
        raise StoreError(f"{operation} failed") from e


class UserRepository(IUserRepository):
    def __init__(self, db: Session): self.db = db

    def get_by_email(self, email: str) -> User | None:
        with store_operation(self.db, "find_user_by_email"):
            row = self.db.query(UserORM).filter(UserORM.email_address == email).first()
        return to_domain_user(row) if row else None

    def create(self, fields: dict[str, Any]) -> User:
        row = UserORM(**fields)
        try:
            with store_operation(self.db, "create_user"):
                self.db.add(row); self.db.commit(); self.db.refresh(row)
        except StoreError as e:
            if isinstance(e.__cause__, IntegrityError):
                raise DuplicateEmailError("email already exists") from e.__cause__
            raise
        return to_domain_user(row)


class CourseRepository(ICourseRepository):
    def __init__(self, db: Session): self.db = db

    def _get_row(self, course_id: int) -> CourseORM | None:
        return self.db.query(CourseORM).filter(CourseORM.id == course_id).first()

    def get_by_id(self, course_id: int) -> Course | None:
        with store_operation(self.db, "find_course_by_id"):
            row = (self.db.query(CourseORM)
                   .options(joinedload(CourseORM.owner))
                   .filter(CourseORM.id == course_id)
                   .first())
        return to_domain_course(row, with_owner=True) if row else None

    def list(self) -> list[Course]:
        with store_operation(self.db, "list_courses"):
            rows = (self.db.query(CourseORM)
                    .options(joinedload(CourseORM.owner))
                    .order_by(CourseORM.id)
                    .all())
        return [to_domain_course(row, with_owner=True) for row in rows]

    def create(self, fields: dict[str, Any], owner_id: int) -> Course:
        row = CourseORM(**fields, user_id=owner_id)
        with store_operation(self.db, "create_course"):
            self.db.add(row); self.db.commit(); self.db.refresh(row)
        return to_domain_course(row)

    def update(self, course: Course, fields: dict[str, Any]) -> None:
        with store_operation(self.db, "update_course"):
            row = self._get_row(course.id)
            if row is None:
                raise NotFoundError()
            for column, value in fields.items():
                setattr(row, column, value)
            self.db.commit()

    def delete(self, course: Course) -> None:
        with store_operation(self.db, "delete_course"):
            row = self._get_row(course.id)
            if row is None:
                raise NotFoundError()
            self.db.delete(row)
            self.db.commit()
