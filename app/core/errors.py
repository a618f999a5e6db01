"""Typed service failures. HTTP status codes are assigned in app.api.exception_handlers."""

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    EXPIRED_TOKEN = "EXPIRED_TOKEN"
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ServiceError(Exception):
    """Base for every failure the auth flow raises on purpose."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConflictError(ServiceError):
    kind = ErrorKind.CONFLICT


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class UnauthorizedError(ServiceError):
    kind = ErrorKind.UNAUTHORIZED


class InternalError(ServiceError):
    kind = ErrorKind.INTERNAL_ERROR


class TokenError(UnauthorizedError):
    """A bearer token could not be accepted. Subclasses say why (diagnostics only)."""


class InvalidTokenError(TokenError):
    kind = ErrorKind.INVALID_TOKEN


class ExpiredTokenError(TokenError):
    kind = ErrorKind.EXPIRED_TOKEN


class MalformedTokenError(TokenError):
    kind = ErrorKind.MALFORMED_TOKEN


TOKEN_ERROR_KINDS = frozenset(
    {ErrorKind.INVALID_TOKEN, ErrorKind.EXPIRED_TOKEN, ErrorKind.MALFORMED_TOKEN}
)
