import structlog
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ...application.authentication import Authenticated, Authenticator
from ...domain.entities import User
from ...domain.errors import AuthenticationError
from ...infrastructure.db import get_db
from ...infrastructure.metrics import auth_attempts_total
from ...infrastructure.repositories import UserRepository
from ...infrastructure.security import PasswordHasher

logger = structlog.get_logger()


def authenticate_request(request: Request, db: Session) -> User:
    """Возвращает пользователя из заголовка Authorization или кидает AuthenticationError.

    Вызывается явно внутри обработчиков, после проверки тела запроса.
    """
    result = Authenticator(UserRepository(db), PasswordHasher()).authenticate(
        request.headers.get("Authorization")
    )
    if isinstance(result, Authenticated):
        auth_attempts_total.labels(result="success").inc()
        logger.info("authentication_succeeded", user_id=result.identity.id)
        return result.identity

    auth_attempts_total.labels(result=result.reason).inc()
    logger.warning(
        "authentication_failed",
        reason=result.reason,
        identifier=result.identifier,
        path=request.url.path,
    )
    raise AuthenticationError(result.reason)


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    # для эндпоинтов без тела запроса, где проверять нечего до аутентификации
    return authenticate_request(request, db)
