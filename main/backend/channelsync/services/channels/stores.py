"""Key-value media backing the selection store."""
from __future__ import annotations

import logging
import threading
from typing import Dict

import redis

from ...models.entities import SelectionEntry


logger = logging.getLogger(__name__)


class MemoryKeyValueStore:
    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._data)


class SqlKeyValueStore:
    """Stores one row per key; a session is opened and closed on every call."""

    def __init__(self, session_factory) -> None:  # noqa: ANN001
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        with self._session_factory() as session:
            row = session.get(SelectionEntry, key)
            return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            row = session.get(SelectionEntry, key)
            if row is None:
                session.add(SelectionEntry(key=key, value=value))
            else:
                row.value = value
            session.commit()

    def remove(self, key: str) -> None:
        with self._session_factory() as session:
            row = session.get(SelectionEntry, key)
            if row is None:
                return
            session.delete(row)
            session.commit()


class RedisKeyValueStore:
    def __init__(self, client: "redis.Redis") -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        client = redis.Redis.from_url(url, decode_responses=True)
        logger.info("selection.store redis configured url=%s", url)
        return cls(client)

    def get(self, key: str) -> str | None:
        value = self._client.get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str) -> None:
        self._client.set(key, value)

    def remove(self, key: str) -> None:
        self._client.delete(key)
