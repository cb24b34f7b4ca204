from __future__ import annotations

from enum import Enum
from typing import Any

from ..services.channels.errors import FetchError, NotFoundInPage, PersistenceError


class ErrorCode(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"
    STALE_PAGE = "STALE_PAGE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_HTTP_STATUS = {
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.STALE_PAGE: 409,
    ErrorCode.UPSTREAM_ERROR: 502,
    ErrorCode.STORAGE_ERROR: 503,
    ErrorCode.INTERNAL_ERROR: 500,
}


def http_status_for(code: ErrorCode) -> int:
    return _HTTP_STATUS.get(code, 500)


def map_exception_to_error(exc: Exception) -> tuple[ErrorCode, str, dict[str, Any] | None]:
    msg = str(exc) or exc.__class__.__name__
    if isinstance(exc, FetchError):
        details = {k: v for k, v in {"status_code": exc.status_code, "url": exc.url}.items() if v is not None}
        return ErrorCode.UPSTREAM_ERROR, msg, details or None
    if isinstance(exc, PersistenceError):
        return ErrorCode.STORAGE_ERROR, msg, {"key": exc.key} if exc.key else None
    if isinstance(exc, NotFoundInPage):
        return ErrorCode.STALE_PAGE, msg, {"channel": exc.channel, "entity_id": exc.entity_id}
    if isinstance(exc, ValueError):
        return ErrorCode.INVALID_INPUT, msg, None
    return ErrorCode.INTERNAL_ERROR, msg, {"exception_type": exc.__class__.__name__}
