import pytest
from unittest.mock import MagicMock, patch
from sqlalchemy.exc import IntegrityError, OperationalError

from courses_api.domain.errors import DuplicateEmailError, StoreError
from courses_api.infrastructure.repositories import UserRepository

@pytest.fixture
def broken_db():
    db = MagicMock()
    db.query.side_effect = OperationalError("SELECT 1", {}, Exception("database is locked"))
    return db

def test_store_error_is_logged_with_traceback(broken_db):
    """Ошибка БД: откат, StoreError и лог store_error с трейсбеком"""
    with patch("courses_api.infrastructure.repositories.logger") as logger:
        with pytest.raises(StoreError) as exc_info:
            UserRepository(broken_db).get_by_email("ada@school.edu")

    broken_db.rollback.assert_called_once()
    assert isinstance(exc_info.value.__cause__, OperationalError)
    logger.error.assert_called_once()
    args, kwargs = logger.error.call_args
    assert args == ("store_error",)
    assert kwargs["operation"] == "find_user_by_email"
    assert kwargs["exc_info"] is True

def test_unique_violation_becomes_duplicate_email():
    db = MagicMock()
    db.commit.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
    with patch("courses_api.infrastructure.repositories.logger"):
        with pytest.raises(DuplicateEmailError):
            UserRepository(db).create({
                "first_name": "Ada",
                "last_name": "Lovelace",
                "email_address": "ada@school.edu",
                "password_hash": "x",
            })
    db.rollback.assert_called_once()
