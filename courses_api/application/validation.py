"""Проверка входных данных без привязки к HTTP.

Каждая функция принимает "сырой" словарь из тела запроса и возвращает
список всех нарушений, а не только первое.
"""
from collections.abc import Mapping
from typing import Any

from email_validator import EmailNotValidError, validate_email

from ..domain.errors import FieldError

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 20

DUPLICATE_EMAIL_MESSAGE = "Email must be unique. This email already exists."


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _required(data: Mapping[str, Any], key: str, label: str) -> FieldError | None:
    if _is_blank(data.get(key)):
        return FieldError(key, f'Please provide a value for "{label}"')
    return None


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_user(data: Mapping[str, Any]) -> list[FieldError]:
    errors: list[FieldError] = []
    for key, label in (("firstName", "first name"), ("lastName", "last name")):
        err = _required(data, key, label)
        if err:
            errors.append(err)

    err = _required(data, "emailAddress", "email")
    if err:
        errors.append(err)
    elif not is_valid_email(data["emailAddress"]):
        errors.append(FieldError("emailAddress", "Please provide a valid email address"))

    err = _required(data, "password", "password")
    if err:
        errors.append(err)
    elif not PASSWORD_MIN_LENGTH <= len(data["password"]) <= PASSWORD_MAX_LENGTH:
        errors.append(FieldError(
            "password",
            f"Password length must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters",
        ))
    return errors


def validate_course(data: Mapping[str, Any]) -> list[FieldError]:
    errors: list[FieldError] = []
    for key in ("title", "description"):
        err = _required(data, key, key)
        if err:
            errors.append(err)
    return errors
