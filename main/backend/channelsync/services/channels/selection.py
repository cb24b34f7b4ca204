"""Per-channel persisted selection set.

Each channel's selection is stored under ``<namespace>:<channel>`` as a JSON
array of records ordered by id. A record's presence is the only thing that
makes an entity "selected"; the remaining fields are denormalized for display
in the compose view. Unreadable payloads are treated as an empty selection.
"""
from __future__ import annotations

import json
import logging
import threading
from typing import Dict, List

from pydantic import ValidationError

from .errors import PersistenceError
from .ports import KeyValueStore
from .types import SelectionRecord


logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "@channel-selection"
DEFAULT_CHANNEL = "comics"


class SelectionStore:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        default_channel: str = DEFAULT_CHANNEL,
    ) -> None:
        self._store = store
        self.namespace = namespace
        self.default_channel = default_channel
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def storage_key(self, channel: str | None) -> str:
        return f"{self.namespace}:{channel or self.default_channel}"

    def channel_lock(self, channel: str | None) -> threading.RLock:
        key = self.storage_key(channel)
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    def load(self, channel: str | None) -> Dict[str, SelectionRecord]:
        return self._read(self.storage_key(channel))

    def is_selected(self, channel: str | None, entity_id: int | str) -> bool:
        return str(entity_id) in self.load(channel)

    def list(self, channel: str | None) -> List[SelectionRecord]:
        mapping = self.load(channel)
        return [mapping[record_id] for record_id in sorted(mapping, key=_record_order)]

    def toggle(self, channel: str | None, entity_id: int | str, record: SelectionRecord) -> bool:
        """Flip the selection of ``entity_id`` and persist it; returns the new state."""
        key = self.storage_key(channel)
        record_id = str(entity_id)
        with self.channel_lock(channel):
            mapping = self._read(key)
            if record_id in mapping:
                mapping = {k: v for k, v in mapping.items() if k != record_id}
                selected = False
            else:
                mapping[record_id] = record.model_copy(update={"id": record_id})
                selected = True
            self._write(key, mapping)
        logger.info("selection.toggle key=%s id=%s selected=%s", key, record_id, selected)
        return selected

    def clear(self, channel: str | None) -> None:
        key = self.storage_key(channel)
        with self.channel_lock(channel):
            try:
                self._store.remove(key)
            except Exception as exc:  # noqa: BLE001
                raise PersistenceError(f"selection clear failed: {exc}", key=key) from exc

    def _read(self, key: str) -> Dict[str, SelectionRecord]:
        try:
            raw = self._store.get(key)
        except Exception as exc:  # noqa: BLE001
            raise PersistenceError(f"selection read failed: {exc}", key=key) from exc
        if not raw:
            return {}
        return _decode(raw, key)

    def _write(self, key: str, mapping: Dict[str, SelectionRecord]) -> None:
        try:
            if not mapping:
                self._store.remove(key)
                return
            self._store.set(key, _encode(mapping))
        except PersistenceError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise PersistenceError(f"selection write failed: {exc}", key=key) from exc


def _record_order(record_id: str) -> tuple:
    # numeric ids sort numerically, anything else after them lexically
    if record_id.isdigit():
        return (0, int(record_id), "")
    return (1, 0, record_id)


def _encode(mapping: Dict[str, SelectionRecord]) -> str:
    try:
        payload = [
            mapping[record_id].model_dump(mode="json", by_alias=True)
            for record_id in sorted(mapping, key=_record_order)
        ]
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise PersistenceError(f"selection serialization failed: {exc}") from exc


def _decode(raw: str, key: str) -> Dict[str, SelectionRecord]:
    try:
        payload = json.loads(raw)
        if not isinstance(payload, list):
            raise ValueError(f"expected a list, got {type(payload).__name__}")
        mapping: Dict[str, SelectionRecord] = {}
        for item in payload:
            record = SelectionRecord.model_validate(item)
            mapping.setdefault(record.id, record)
        return mapping
    except (ValueError, ValidationError) as exc:
        logger.warning("selection.load corrupt payload treated as empty key=%s err=%s", key, exc)
        return {}
