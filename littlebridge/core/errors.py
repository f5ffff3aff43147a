"""
Structured errors for the data-access layer.

Services raise DataAccessError with an ErrorKind so callers branch on the kind
instead of sniffing backend messages. The API layer maps kinds to HTTP status
codes (see littlebridge.main).
"""

from enum import Enum
from typing import Optional
import logging

from postgrest.exceptions import APIError

logger = logging.getLogger(__name__)

# Postgres / PostgREST error codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
CHECK_VIOLATION = "23514"
NO_ROWS = "PGRST116"


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    REFERENCE = "reference"
    INVALID_TRANSITION = "invalid_transition"
    BACKEND = "backend"


HTTP_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE: 409,
    ErrorKind.REFERENCE: 409,
    ErrorKind.INVALID_TRANSITION: 409,
    ErrorKind.BACKEND: 500,
}


class DataAccessError(Exception):
    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]

    def __repr__(self) -> str:
        return f"DataAccessError({self.kind.value!r}, {self.message!r})"


def classify_backend_error(exc: Exception) -> ErrorKind:
    """Map a PostgREST / Postgres failure to an ErrorKind."""
    code: Optional[str] = None
    message = str(exc)
    if isinstance(exc, APIError):
        code = exc.code
        message = exc.message or message
    if code == UNIQUE_VIOLATION or "duplicate key" in message.lower():
        return ErrorKind.DUPLICATE
    if code == FOREIGN_KEY_VIOLATION:
        return ErrorKind.REFERENCE
    if code == CHECK_VIOLATION:
        return ErrorKind.VALIDATION
    if code == NO_ROWS:
        return ErrorKind.NOT_FOUND
    return ErrorKind.BACKEND


def wrap_backend_error(exc: Exception, context: str, messages: Optional[dict] = None) -> DataAccessError:
    """Convert a raw backend exception into a DataAccessError.

    `messages` optionally overrides the user-facing text per kind, e.g.
    {ErrorKind.DUPLICATE: "Email already registered"}.
    """
    if isinstance(exc, DataAccessError):
        return exc
    kind = classify_backend_error(exc)
    if messages and kind in messages:
        return DataAccessError(kind, messages[kind])
    if kind == ErrorKind.BACKEND:
        logger.error(f"{context} failed: {exc}")
        return DataAccessError(kind, f"{context} failed")
    return DataAccessError(kind, f"{context} failed: {getattr(exc, 'message', None) or exc}")
