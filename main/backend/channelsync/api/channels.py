from __future__ import annotations

import logging
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Query

from ..contracts import ApiMetaModel, fail, http_status_for, map_exception_to_error, ok, ok_page
from ..services.channels import ChannelSyncError, ListSynchronizer, QueryState, SortDirection
from ..services.channels.runtime import get_synchronizer

router = APIRouter(prefix="/channels", tags=["channels"])
logger = logging.getLogger(__name__)


def _raise_for(exc: Exception, channel: str) -> NoReturn:
    code, message, details = map_exception_to_error(exc)
    logger.warning("channels.api error channel=%s code=%s err=%s", channel, code.value, message)
    raise HTTPException(
        status_code=http_status_for(code),
        detail=fail(code, message, details=details, meta=ApiMetaModel(channel=channel)),
    ) from exc


def _meta(sync: ListSynchronizer, channel: str) -> ApiMetaModel:
    view = sync.current(channel)
    return ApiMetaModel(channel=view.channel, generation=view.generation, load_state=view.state.value)


@router.get("/{channel}/items")
async def list_items(
    channel: str,
    page: int = Query(default=1, ge=1),
    order_by: str | None = Query(default=None),
    order: str | None = Query(default=None),
    search: str | None = Query(default=None),
    sync: ListSynchronizer = Depends(get_synchronizer),
) -> dict:
    config = sync.config_for(channel)
    state = QueryState(
        page=page,
        sort_field=config.resolve_sort_field(order_by),
        sort_direction=SortDirection.parse(order),
        search=(search or "").strip(),
    )
    try:
        result = await sync.refresh(channel, state)
    except ChannelSyncError as exc:
        _raise_for(exc, channel)
    view = sync.current(channel)
    current = result if result is not None else view.page
    if current is None:
        return ok(None, meta=_meta(sync, channel))
    return ok_page(current, page_number=view.query.page, page_size=sync.page_size, meta=_meta(sync, channel))


@router.post("/{channel}/items/{entity_id}/toggle")
def toggle_item(
    channel: str,
    entity_id: int,
    sync: ListSynchronizer = Depends(get_synchronizer),
) -> dict:
    try:
        page = sync.toggle(channel, entity_id)
    except ChannelSyncError as exc:
        _raise_for(exc, channel)
    entity = page.find(entity_id)
    return ok(
        {"id": entity_id, "active": bool(entity and entity.active), "page": page.model_dump(mode="json", by_alias=True)},
        meta=_meta(sync, channel),
    )


@router.get("/{channel}/selection")
def list_selection(channel: str, sync: ListSynchronizer = Depends(get_synchronizer)) -> dict:
    try:
        records = sync.selection.list(channel)
    except ChannelSyncError as exc:
        _raise_for(exc, channel)
    return ok([r.model_dump(mode="json", by_alias=True) for r in records], meta=ApiMetaModel(channel=channel))


@router.delete("/{channel}/selection")
def clear_selection(channel: str, sync: ListSynchronizer = Depends(get_synchronizer)) -> dict:
    try:
        sync.selection.clear(channel)
    except ChannelSyncError as exc:
        _raise_for(exc, channel)
    return ok({"cleared": True}, meta=ApiMetaModel(channel=channel))


@router.get("/{channel}/items/{entity_id}/detail")
def detail_params(channel: str, entity_id: int, sync: ListSynchronizer = Depends(get_synchronizer)) -> dict:
    try:
        params = sync.open_detail(channel, entity_id)
    except ChannelSyncError as exc:
        _raise_for(exc, channel)
    return ok(params, meta=ApiMetaModel(channel=channel))


@router.get("/{channel}/items/{entity_id}/compose")
def compose_params(channel: str, entity_id: int, sync: ListSynchronizer = Depends(get_synchronizer)) -> dict:
    try:
        params = sync.open_compose(channel, entity_id)
    except ChannelSyncError as exc:
        _raise_for(exc, channel)
    return ok(params, meta=ApiMetaModel(channel=channel))


@router.get("/{channel}/compose")
def compose_selection(channel: str, sync: ListSynchronizer = Depends(get_synchronizer)) -> dict:
    try:
        params = sync.open_compose_selection(channel)
    except ChannelSyncError as exc:
        _raise_for(exc, channel)
    return ok(params, meta=ApiMetaModel(channel=channel))
