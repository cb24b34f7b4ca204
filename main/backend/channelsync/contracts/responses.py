from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ..services.channels.types import Page
from .errors import ErrorCode


class ApiErrorModel(BaseModel):
    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class PaginationMetaModel(BaseModel):
    page: int
    page_size: int
    total: int
    total_pages: int


class ApiMetaModel(BaseModel):
    channel: str | None = None
    generation: int | None = None
    load_state: str | None = None
    pagination: PaginationMetaModel | None = None


class ApiEnvelope(BaseModel):
    status: str
    data: Any = None
    error: ApiErrorModel | None = None
    meta: ApiMetaModel = Field(default_factory=ApiMetaModel)


def ok(data: Any = None, *, meta: ApiMetaModel | None = None) -> dict[str, Any]:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True)
    return ApiEnvelope(status="ok", data=data, meta=meta or ApiMetaModel()).model_dump(mode="json")


def fail(
    code: ErrorCode,
    message: str,
    *,
    details: dict[str, Any] | None = None,
    meta: ApiMetaModel | None = None,
) -> dict[str, Any]:
    return ApiEnvelope(
        status="error",
        error=ApiErrorModel(code=code.value, message=message, details=details or {}),
        meta=meta or ApiMetaModel(),
    ).model_dump(mode="json")


def ok_page(page: Page, *, page_number: int, page_size: int, meta: ApiMetaModel | None = None) -> dict[str, Any]:
    """Envelope a fetched page with the paginator values the list view needs."""
    merged_meta = (meta or ApiMetaModel()).model_copy(
        update={
            "pagination": PaginationMetaModel(
                page=page_number,
                page_size=page_size,
                total=page.total,
                total_pages=page.page_count(page_size),
            )
        }
    )
    return ok(page, meta=merged_meta)
