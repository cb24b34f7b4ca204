from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from ...settings.channels import ChannelConfig, get_channel_config
from .errors import ChannelSyncError, FetchError, NotFoundInPage, PersistenceError
from .ports import ChannelListSource, ErrorSink, ModalConsumer
from .query import DEFAULT_PAGE_SIZE, QueryState, SortDirection, compose
from .selection import SelectionStore
from .types import Entity, Page, SelectionRecord, ViewModelParams
from .view import (
    build_compose_params,
    build_detail_params,
    build_selection_bundle,
    selection_record_for,
)


logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"


@dataclass(slots=True)
class ChannelView:
    channel: str
    query: QueryState
    draft_search: str = ""
    page: Page | None = None
    state: LoadState = LoadState.IDLE
    generation: int = 0
    last_error: ChannelSyncError | None = None


def log_error_sink(exc: ChannelSyncError) -> None:
    logger.warning("channel.error type=%s err=%s", type(exc).__name__, exc)


class ListSynchronizer:
    """Keeps each channel's fetched page and its persisted selection in step."""

    def __init__(
        self,
        source: ChannelListSource,
        selection: SelectionStore,
        *,
        error_sink: ErrorSink | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        default_channel: str | None = None,
        channel_config: Callable[[str], ChannelConfig] = get_channel_config,
        detail_consumer: ModalConsumer | None = None,
        compose_consumer: ModalConsumer | None = None,
    ) -> None:
        self.source = source
        self.selection = selection
        self.error_sink = error_sink or log_error_sink
        self.page_size = page_size
        self.default_channel = default_channel or selection.default_channel
        self._channel_config = channel_config
        self.detail_consumer = detail_consumer
        self.compose_consumer = compose_consumer
        self._views: Dict[str, ChannelView] = {}

    def _channel(self, channel: str | None) -> str:
        return (channel or "").strip() or self.default_channel

    def config_for(self, channel: str | None) -> ChannelConfig:
        return self._channel_config(self._channel(channel))

    def current(self, channel: str | None) -> ChannelView:
        name = self._channel(channel)
        view = self._views.get(name)
        if view is None:
            config = self.config_for(name)
            view = ChannelView(channel=name, query=QueryState(sort_field=config.default_sort_field))
            self._views[name] = view
        return view

    def _report(self, exc: ChannelSyncError) -> None:
        self.error_sink(exc)

    # -- page load -----------------------------------------------------------

    async def refresh(self, channel: str | None, query_state: QueryState | None = None) -> Optional[Page]:
        """Fetch one page and annotate it with the channel's selection.

        Returns the installed page, or ``None`` when a newer refresh for the
        same channel was started while this one was in flight.
        """
        view = self.current(channel)
        if query_state is not None:
            view.query = query_state
        view.generation += 1
        generation = view.generation
        view.state = LoadState.LOADING
        name = view.channel
        params = compose(view.query, self.config_for(name), page_size=self.page_size)
        logger.debug("channel.refresh start channel=%s generation=%d params=%s", name, generation, params)

        try:
            try:
                fetched = await self.source.fetch_page(name, params)
            except ChannelSyncError:
                raise
            except Exception as exc:  # noqa: BLE001
                raise FetchError(f"remote list fetch failed: {exc}") from exc
            if generation != view.generation:
                logger.debug("channel.refresh stale discarded channel=%s generation=%d latest=%d", name, generation, view.generation)
                return None
            page = await asyncio.to_thread(self._install, view, generation, fetched)
        except ChannelSyncError as exc:
            if generation != view.generation:
                logger.debug("channel.refresh stale error discarded channel=%s generation=%d err=%s", name, generation, exc)
                return None
            view.state = LoadState.LOAD_FAILED
            view.last_error = exc
            self._report(exc)
            raise

        if page is None:
            logger.debug("channel.refresh stale discarded channel=%s generation=%d latest=%d", name, generation, view.generation)
            return None
        logger.info(
            "channel.refresh loaded channel=%s generation=%d total=%d count=%d selected=%d",
            name, generation, page.total, page.count, sum(1 for e in page.results if e.active),
        )
        return page

    def _install(self, view: ChannelView, generation: int, fetched: Page) -> Optional[Page]:
        # Runs in a worker thread. The channel lock orders the selection read and
        # the page swap against concurrent toggles.
        with self.selection.channel_lock(view.channel):
            if generation != view.generation:
                return None
            selected = self.selection.load(view.channel)
            page = fetched.model_copy(
                update={
                    "results": [
                        entity.model_copy(update={"active": str(entity.id) in selected})
                        for entity in fetched.results
                    ]
                }
            )
            view.page = page
            view.state = LoadState.LOADED
            view.last_error = None
        return page

    async def _requery(self, view: ChannelView, query: QueryState) -> Optional[Page]:
        if query == view.query and view.state == LoadState.LOADED:
            return view.page
        return await self.refresh(view.channel, query)

    async def load(self, channel: str | None) -> Optional[Page]:
        view = self.current(channel)
        return await self.refresh(view.channel, view.query)

    async def set_page(self, channel: str | None, page: int) -> Optional[Page]:
        view = self.current(channel)
        return await self._requery(view, view.query.with_page(page))

    async def set_sort_field(self, channel: str | None, sort_field: str | None) -> Optional[Page]:
        view = self.current(channel)
        return await self._requery(view, view.query.with_sort_field(sort_field))

    async def set_sort_direction(self, channel: str | None, direction: SortDirection | str | None) -> Optional[Page]:
        view = self.current(channel)
        return await self._requery(view, view.query.with_sort_direction(direction))

    def type_search(self, channel: str | None, text: str) -> None:
        self.current(channel).draft_search = text or ""

    async def submit_search(self, channel: str | None) -> Optional[Page]:
        view = self.current(channel)
        return await self._requery(view, view.query.with_search(view.draft_search))

    # -- selection -----------------------------------------------------------

    def apply_toggle(self, page: Page, channel: str | None, entity_id: int, record: SelectionRecord) -> Page:
        """Toggle ``entity_id`` in the store and return a copy of ``page`` reflecting it."""
        name = self._channel(channel)
        if page.find(entity_id) is None:
            raise NotFoundInPage(name, entity_id)
        with self.selection.channel_lock(name):
            try:
                selected = self.selection.toggle(name, entity_id, record)
            except PersistenceError as exc:
                self._report(exc)
                raise
            updated = page.with_active(entity_id, selected)
            view = self._views.get(name)
            if view is not None and view.page is not None:
                if view.page is page:
                    view.page = updated
                elif view.page.find(entity_id) is not None:
                    view.page = view.page.with_active(entity_id, selected)
        return updated

    def toggle(self, channel: str | None, entity_id: int) -> Page:
        view = self.current(channel)
        with self.selection.channel_lock(view.channel):
            entity = self._entity(view, entity_id)
            record = selection_record_for(entity, self.config_for(view.channel))
            return self.apply_toggle(view.page, view.channel, entity_id, record)  # type: ignore[arg-type]

    # -- modal parameters ----------------------------------------------------

    def _entity(self, view: ChannelView, entity_id: int) -> Entity:
        entity = view.page.find(entity_id) if view.page is not None else None
        if entity is None:
            raise NotFoundInPage(view.channel, entity_id)
        return entity

    def open_detail(self, channel: str | None, entity_id: int) -> ViewModelParams:
        view = self.current(channel)
        params = build_detail_params(self._entity(view, entity_id), view.channel, self.config_for(view.channel))
        if self.detail_consumer is not None:
            self.detail_consumer.open(params)
        return params

    def open_compose(self, channel: str | None, entity_id: int) -> ViewModelParams:
        view = self.current(channel)
        params = build_compose_params(self._entity(view, entity_id), view.channel, self.config_for(view.channel))
        if self.compose_consumer is not None:
            self.compose_consumer.open(params)
        return params

    def open_compose_selection(self, channel: str | None) -> ViewModelParams:
        name = self._channel(channel)
        try:
            records = self.selection.list(name)
        except PersistenceError as exc:
            self._report(exc)
            raise
        params = build_selection_bundle(name, records)
        if self.compose_consumer is not None:
            self.compose_consumer.open(params)
        return params
