"""Standardized API envelopes and error codes."""

from .errors import ErrorCode, http_status_for, map_exception_to_error
from .responses import ApiEnvelope, ApiErrorModel, ApiMetaModel, PaginationMetaModel, fail, ok, ok_page

__all__ = [
    "ApiEnvelope",
    "ApiErrorModel",
    "ApiMetaModel",
    "ErrorCode",
    "PaginationMetaModel",
    "fail",
    "http_status_for",
    "map_exception_to_error",
    "ok",
    "ok_page",
]
