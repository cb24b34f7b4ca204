"""Channel list synchronization: query composition, selection persistence, page sync."""

from .errors import ChannelSyncError, FetchError, NotFoundInPage, PersistenceError
from .query import DEFAULT_PAGE_SIZE, QueryState, SortDirection, compose
from .selection import SelectionStore
from .stores import MemoryKeyValueStore, RedisKeyValueStore, SqlKeyValueStore
from .synchronizer import ChannelView, ListSynchronizer, LoadState
from .types import Entity, Page, SelectionRecord, ViewModelParams
from .view import build_compose_params, build_detail_params, build_selection_bundle, build_view_params

__all__ = [
    "ChannelSyncError",
    "ChannelView",
    "DEFAULT_PAGE_SIZE",
    "Entity",
    "FetchError",
    "ListSynchronizer",
    "LoadState",
    "MemoryKeyValueStore",
    "NotFoundInPage",
    "Page",
    "PersistenceError",
    "QueryState",
    "RedisKeyValueStore",
    "SelectionRecord",
    "SelectionStore",
    "SortDirection",
    "SqlKeyValueStore",
    "ViewModelParams",
    "build_compose_params",
    "build_detail_params",
    "build_selection_bundle",
    "build_view_params",
    "compose",
]
