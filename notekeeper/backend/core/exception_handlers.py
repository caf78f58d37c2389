"""
Exception Handlers.

Turns every failure of the notes API into the ErrorResponse envelope:

    404 RES_NOT_FOUND               unknown note or category id
    400 VAL_VALIDATION_ERROR        blank title, content or name (missing_fields)
    409 RES_CONFLICT                unique constraint violated in the store
    502 SYS_EXTERNAL_SERVICE_ERROR  upstream call failed
    503 SYS_DATABASE_ERROR          the store is unavailable
    422 VAL_REQUEST_INVALID         body, path or query failed schema validation
    500 SYS_INTERNAL_ERROR          anything else, without internals

Successful responses are not wrapped; only errors use the envelope.

Usage:
    from notekeeper.backend.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from notekeeper.backend.core.exceptions import (
    ApplicationError,
    ConflictError,
    DatabaseError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from notekeeper.backend.core.logging import get_logger
from notekeeper.backend.schemas.base import ErrorDetail, ErrorResponse, ResponseMetadata

logger = get_logger(__name__)

EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    ConflictError: 409,
    ExternalServiceError: 502,
    DatabaseError: 503,
}


def _get_request_id(request: Request) -> str | None:
    """Request ID set by the middleware, else the incoming header."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _error_response(
    status_code: int,
    request_id: str | None,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    envelope = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details),
        metadata=ResponseMetadata(request_id=request_id),
    )
    return JSONResponse(status_code=status_code, content=envelope.model_dump(mode="json"))


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> JSONResponse:
    """
    Answer a note or category operation that failed with an ApplicationError.

    Missing-field details are only returned for ValidationError.
    Subclasses not listed in EXCEPTION_STATUS_MAP answer 500.
    """
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)
    request_id = _get_request_id(request)

    log_extra = {
        "code": exc.code,
        "message": exc.message,
        "status": status_code,
        "path": request.url.path,
        "method": request.method,
    }
    if request_id:
        log_extra["request_id"] = request_id

    if status_code >= 500:
        logger.error("Notes API server error", extra=log_extra)
    else:
        logger.warning("Notes API client error", extra=log_extra)

    details = exc.details if isinstance(exc, ValidationError) and exc.details else None
    return _error_response(status_code, request_id, exc.code, exc.message, details)


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Answer a request whose body, path or query parameters did not parse.

    Each failing location is listed as a dotted field such as
    `body.categoryId` or `path.note_id`.
    """
    request_id = _get_request_id(request)
    errors = exc.errors()

    logger.warning(
        "Notes API request rejected",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error_count": len(errors),
            "request_id": request_id,
        },
    )

    details = {
        "validation_errors": [
            {
                "field": ".".join(str(loc) for loc in err.get("loc", [])),
                "message": err.get("msg", "Validation error"),
                "type": err.get("type", "unknown"),
            }
            for err in errors
        ]
    }
    return _error_response(
        422, request_id, "VAL_REQUEST_INVALID", "Request validation failed", details
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Log the traceback and answer a generic 500."""
    request_id = _get_request_id(request)

    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "request_id": request_id,
        },
    )

    return _error_response(
        500, request_id, "SYS_INTERNAL_ERROR", "An unexpected error occurred"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the notes API error handlers on the app."""
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
