from __future__ import annotations

import logging

from ...models.base import Base, make_engine, make_session_factory
from ...settings import config
from ..http.client import ApiClient
from .selection import SelectionStore
from .stores import MemoryKeyValueStore, RedisKeyValueStore, SqlKeyValueStore
from .synchronizer import ListSynchronizer


logger = logging.getLogger(__name__)

_SYNCHRONIZER: ListSynchronizer | None = None


def build_key_value_store(settings: config.Settings):
    backend = (settings.selection_backend or "sql").strip().lower()
    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "redis":
        return RedisKeyValueStore.from_url(settings.redis_url)
    if backend != "sql":
        raise ValueError(f"unsupported selection backend: {settings.selection_backend}")
    engine = make_engine(settings.database_url)
    Base.metadata.create_all(bind=engine, checkfirst=True)
    return SqlKeyValueStore(make_session_factory(engine))


def build_selection_store(settings: config.Settings) -> SelectionStore:
    return SelectionStore(
        build_key_value_store(settings),
        namespace=settings.selection_namespace,
        default_channel=settings.default_channel,
    )


def build_synchronizer(settings: config.Settings, **kwargs) -> ListSynchronizer:
    client = ApiClient(
        base_url=settings.api_base_url,
        public_key=settings.api_public_key,
        private_key=settings.api_private_key,
        timeout=settings.http_timeout,
    )
    if not settings.api_public_key or not settings.api_private_key:
        logger.info("channel.runtime api keys missing, requests will be unsigned")
    return ListSynchronizer(
        client,
        build_selection_store(settings),
        page_size=settings.page_size,
        default_channel=settings.default_channel,
        **kwargs,
    )


def get_synchronizer() -> ListSynchronizer:
    global _SYNCHRONIZER
    if _SYNCHRONIZER is None:
        _SYNCHRONIZER = build_synchronizer(config.settings)
    return _SYNCHRONIZER


def set_synchronizer(synchronizer: ListSynchronizer | None) -> None:
    global _SYNCHRONIZER
    _SYNCHRONIZER = synchronizer


async def close_synchronizer() -> None:
    global _SYNCHRONIZER
    sync = _SYNCHRONIZER
    _SYNCHRONIZER = None
    if sync is None:
        return
    aclose = getattr(sync.source, "aclose", None)
    if aclose is not None:
        await aclose()
