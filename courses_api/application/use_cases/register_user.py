from collections.abc import Mapping
from typing import Any

from ...domain.entities import User
from ...domain.errors import DuplicateEmailError, FieldError, ValidationError
from ..ports import IPasswordHasher, IUserRepository
from ..validation import DUPLICATE_EMAIL_MESSAGE, validate_user


class RegisterUser:
    def __init__(self, repo: IUserRepository, hasher: IPasswordHasher):
        self.repo = repo
        self.hasher = hasher

    def execute(self, data: Mapping[str, Any]) -> User:
        errors = validate_user(data)
        if errors:
            raise ValidationError(errors)

        email = data["emailAddress"].strip()
        if self.repo.get_by_email(email):
            raise ValidationError([FieldError("emailAddress", DUPLICATE_EMAIL_MESSAGE)])

        fields = {
            "first_name": data["firstName"].strip(),
            "last_name": data["lastName"].strip(),
            "email_address": email,
            "password_hash": self.hasher.hash(data["password"]),
        }
        try:
            return self.repo.create(fields)
        except DuplicateEmailError:
            # тот же email успел зарегистрироваться параллельным запросом
            raise ValidationError([FieldError("emailAddress", DUPLICATE_EMAIL_MESSAGE)])
