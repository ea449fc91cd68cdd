from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# Входные модели нарочно без обязательных полей: обязательность и формат
# проверяют функции из application.validation, чтобы собрать все ошибки сразу.
class UserCreate(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    email_address: str | None = None
    password: str | None = None

class CourseIn(CamelModel):
    title: str | None = None
    description: str | None = None
    estimated_time: str | None = None
    materials_needed: str | None = None

class UserOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    email_address: str

class CourseOut(CamelModel):
    id: int
    title: str
    description: str
    estimated_time: str | None = None
    materials_needed: str | None = None
    owner_id: int
    owner: UserOut | None = None
