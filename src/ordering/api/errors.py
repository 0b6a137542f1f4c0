"""Map ordering exceptions to HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from ordering.errors import AccessDenied, InvalidTransition, RepositoryFailure

logger = structlog.get_logger(__name__)


async def invalid_transition_handler(request: Request, exc: InvalidTransition) -> JSONResponse:
    return JSONResponse(
        status_code=409,
        content={
            "error": "invalid_transition",
            "order_id": exc.order_id,
            "current": exc.current,
            "requested": exc.requested,
            "detail": exc.messages,
        },
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "validation_error", "detail": exc.messages})


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "not_found", "detail": str(exc)})


async def access_denied_handler(request: Request, exc: AccessDenied) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={"error": "unauthorized", "detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def repository_failure_handler(request: Request, exc: RepositoryFailure) -> JSONResponse:
    logger.error("Request failed on storage", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=503, content={"error": "storage_unavailable", "detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    # InvalidTransition subclasses ValidationError; Starlette picks the most specific handler
    app.add_exception_handler(InvalidTransition, invalid_transition_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(AccessDenied, access_denied_handler)
    app.add_exception_handler(RepositoryFailure, repository_failure_handler)
