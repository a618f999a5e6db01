"""Map service failures and request validation errors to HTTP responses.

Error response format:
    {"detail": "Human-readable message", "code": "MACHINE_READABLE_CODE"}

Validation failures also carry "errors": [{"field": ..., "message": ...}].
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import TOKEN_ERROR_KINDS, ErrorKind, ServiceError

logger = logging.getLogger(__name__)

ERROR_KIND_TO_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.EXPIRED_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.MALFORMED_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INVALID_TOKEN_MESSAGE = "Invalid or expired token"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error_response(
    status_code: int,
    detail: str,
    code: ErrorKind,
    **extra: object,
) -> JSONResponse:
    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "code": code.value, **extra},
        headers=headers,
    )


def _field_name(loc: tuple | list) -> str:
    # Drop the leading "body"/"query" segment FastAPI adds.
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(parts)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code = ERROR_KIND_TO_STATUS.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    log_extra = {"code": exc.kind.value, "path": request.url.path, "reason": exc.message}

    if exc.kind in TOKEN_ERROR_KINDS:
        # The precise token failure is for the logs only.
        logger.info(
            "Request rejected: %s %s (%s)",
            exc.kind.value,
            request.url.path,
            exc.message,
            extra=log_extra,
        )
        return _error_response(status_code, INVALID_TOKEN_MESSAGE, ErrorKind.UNAUTHORIZED)
    if status_code >= 500:
        logger.error(
            "Request failed: %s %s (%s)",
            exc.kind.value,
            request.url.path,
            exc.message,
            extra=log_extra,
            exc_info=exc,
        )
        return _error_response(status_code, INTERNAL_ERROR_MESSAGE, ErrorKind.INTERNAL_ERROR)

    logger.info(
        "Request rejected: %s %s (%s)",
        exc.kind.value,
        request.url.path,
        exc.message,
        extra=log_extra,
    )
    return _error_response(status_code, exc.message, exc.kind)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    fields = [e["field"] for e in errors]
    logger.info(
        "Request validation failed: %s fields=%s",
        request.url.path,
        ",".join(fields),
        extra={"path": request.url.path, "fields": fields},
    )
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        ErrorKind.VALIDATION_ERROR,
        errors=errors,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR_MESSAGE,
        ErrorKind.INTERNAL_ERROR,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all handlers on the application."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
