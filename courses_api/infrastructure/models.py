# courses_api/infrastructure/models.py
from __future__ import annotations

from sqlalchemy import String, Text, ForeignKey
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase): pass


class UserORM(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email_address: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    courses: Mapped[list["CourseORM"]] = relationship(
        "CourseORM",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"UserORM(id={self.id!r}, email_address={self.email_address!r})"


class CourseORM(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    estimated_time: Mapped[str | None] = mapped_column(String(255), nullable=True)
    materials_needed: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    owner: Mapped["UserORM"] = relationship(
        "UserORM",
        back_populates="courses",
    )

    def __repr__(self) -> str:
        return f"CourseORM(id={self.id!r}, title={self.title!r}, user_id={self.user_id!r})"


__all__ = [
    "Base",
    "UserORM",
    "CourseORM",
]
