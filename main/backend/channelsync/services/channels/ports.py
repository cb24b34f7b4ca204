from __future__ import annotations

from typing import Callable, Protocol

from .errors import ChannelSyncError
from .types import Page, ViewModelParams


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class ChannelListSource(Protocol):
    async def fetch_page(self, channel: str, params: dict) -> Page:
        ...


class ModalConsumer(Protocol):
    def open(self, params: ViewModelParams) -> None:
        ...


ErrorSink = Callable[[ChannelSyncError], None]
