"""Доменные ошибки и их HTTP-статусы.

Клиенту уходит только общий текст; внутренние причины пишутся в лог.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class ApiError(Exception):
    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)


class ValidationError(ApiError):
    status_code = 400
    public_message = "Validation failed"

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(e.message for e in self.errors))

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]


class AuthenticationError(ApiError):
    status_code = 401
    public_message = "Access Denied"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class AuthorizationError(ApiError):
    status_code = 403
    public_message = "Access to the requested resource is forbidden"


class NotFoundError(ApiError):
    status_code = 404
    public_message = "Course not found"

    def __init__(self, public_message: str | None = None) -> None:
        if public_message:
            self.public_message = public_message
        super().__init__(public_message)


class StoreError(ApiError):
    status_code = 500


class DuplicateEmailError(StoreError):
    """Нарушение уникальности email на уровне БД (гонка двух регистраций)."""
