from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class User:
    id: int | None
    first_name: str
    last_name: str
    email_address: str
    # хэш пароля наружу не отдаём и в логи не пишем
    password_hash: str = field(default="", repr=False)


@dataclass(frozen=True)
class Course:
    id: int | None
    title: str
    description: str
    owner_id: int
    estimated_time: str | None = None
    materials_needed: str | None = None
    owner: User | None = None
