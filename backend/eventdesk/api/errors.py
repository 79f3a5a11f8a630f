"""
Exception handlers mapping domain errors to HTTP responses.

Services raise domain errors only; this module decides status codes and the
JSON shape. Field errors are always returned as {field: [messages]}.
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from eventdesk.core.errors import (
    ConcurrencyConflictError,
    DependencyConflictError,
    DomainError,
    MalformedInputError,
    NotFoundError,
    ValidationFailedError,
)
from eventdesk.core.logging import get_logger

logger = get_logger(__name__)


def _body(exc: DomainError, **extra) -> dict:
    return {"code": exc.code.value, "message": exc.message, **extra}


async def malformed_input_handler(request: Request, exc: MalformedInputError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=_body(exc))


async def validation_failed_handler(request: Request, exc: ValidationFailedError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=_body(exc, errors=exc.errors.as_dict(), candidate=jsonable_encoder(exc.candidate)),
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=_body(exc))


async def dependency_conflict_handler(request: Request, exc: DependencyConflictError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=_body(exc, errors=exc.errors.as_dict()),
    )


async def concurrency_conflict_handler(request: Request, exc: ConcurrencyConflictError) -> JSONResponse:
    logger.error("concurrency_conflict", entity=exc.entity, key=exc.key)
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=_body(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MalformedInputError, malformed_input_handler)
    app.add_exception_handler(ValidationFailedError, validation_failed_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(DependencyConflictError, dependency_conflict_handler)
    app.add_exception_handler(ConcurrencyConflictError, concurrency_conflict_handler)
