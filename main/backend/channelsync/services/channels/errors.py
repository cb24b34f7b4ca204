from __future__ import annotations


class ChannelSyncError(RuntimeError):
    """Base class for channel list synchronization failures."""


class FetchError(ChannelSyncError):
    """Raised when the remote list call fails or returns a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class PersistenceError(ChannelSyncError):
    """Raised when a selection mapping cannot be read, serialized or written."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class NotFoundInPage(ChannelSyncError):
    """A toggle referenced an entity that is not part of the current page."""

    def __init__(self, channel: str, entity_id: int) -> None:
        super().__init__(f"entity {entity_id} not found in current page of channel {channel}")
        self.channel = channel
        self.entity_id = entity_id
