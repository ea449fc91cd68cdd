"""Перевод доменных ошибок в HTTP-ответы.

Наружу уходит только общий текст, подробности остаются в логах.
"""
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ...config import settings
from ...domain.errors import (
    ApiError,
    AuthenticationError,
    StoreError,
    ValidationError,
)

logger = structlog.get_logger()


def _validation_message(err: dict) -> str:
    loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
    field = ".".join(loc) or "body"
    return f'Invalid value for "{field}": {err.get("msg", "invalid")}'


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=exc.status_code, content={"errors": exc.messages})


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # битый JSON, неверные типы, нечисловой id в пути: всё это 400, как и пустые поля
    return JSONResponse(
        status_code=400,
        content={"errors": [_validation_message(e) for e in exc.errors()]},
    )


async def authentication_error_handler(request: Request, exc: AuthenticationError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.public_message},
        headers={"WWW-Authenticate": f'Basic realm="{settings.AUTH_REALM}"'},
    )


async def store_error_handler(request: Request, exc: StoreError):
    logger.error("request_failed", path=request.url.path, method=request.method, error=str(exc), exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.public_message})


async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.public_message})


def register_exception_handlers(app: FastAPI) -> None:
    # Starlette выбирает обработчик по MRO, поэтому порядок регистрации не важен
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(ApiError, api_error_handler)
