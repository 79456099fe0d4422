"""Global exception handlers mapping core errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from effectivedex.errors import (
    DuplicateMember,
    EffectivedexError,
    NotFound,
    PersistenceFailure,
    RosterFull,
    SourceUnavailable,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: list[tuple[type[EffectivedexError], int]] = [
    (NotFound, status.HTTP_404_NOT_FOUND),
    (RosterFull, status.HTTP_409_CONFLICT),
    (DuplicateMember, status.HTTP_409_CONFLICT),
    (SourceUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
    (PersistenceFailure, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_for(exc: EffectivedexError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_error_handlers(app: FastAPI) -> None:
    """Register core error handlers on the FastAPI app."""

    @app.exception_handler(EffectivedexError)
    async def effectivedex_error_handler(request: Request, exc: EffectivedexError):
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}")
        else:
            logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status_code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.warning(f"Invalid request on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "ValueError", "detail": str(exc)},
        )
