"""Exception handlers mapping service errors to HTTP responses.

    - InvalidInputError -> 400, NotFoundError -> 404
    - RequestProcessingError -> 500 with an opaque message
    - RequestValidationError (malformed body) -> 400
    - Anything else -> 500, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..lib.errors import (
    InvalidInputError,
    LinkServiceError,
    NotFoundError,
    RequestProcessingError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    RequestProcessingError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: LinkServiceError) -> int:
    """HTTP status code for a service error."""
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(LinkServiceError)
    async def link_service_error_handler(request: Request, exc: LinkServiceError):
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
        else:
            logger.info(f"{exc.error_code} on {request.url.path}: {exc.message}")
        return JSONResponse(status_code=status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": InvalidInputError.default_code,
                "detail": "; ".join(
                    f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
                    for err in exc.errors()
                ),
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=RequestProcessingError().to_dict(),
        )
