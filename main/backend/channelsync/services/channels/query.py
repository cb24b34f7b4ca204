from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict

from ...settings.channels import ChannelConfig, DEFAULT_CHANNEL_CONFIG


DEFAULT_PAGE_SIZE = 20


class SortDirection(str, Enum):
    ASCENDING = ""
    DESCENDING = "-"

    @property
    def prefix(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "SortDirection | str | None") -> "SortDirection":
        if isinstance(value, SortDirection):
            return value
        text = (value or "").strip().lower()
        if text in {"-", "desc", "descending"}:
            return cls.DESCENDING
        return cls.ASCENDING


@dataclass(frozen=True, slots=True)
class QueryState:
    page: int = 1
    sort_field: str | None = None
    sort_direction: SortDirection = SortDirection.ASCENDING
    search: str = ""

    def with_page(self, page: int) -> "QueryState":
        return replace(self, page=max(1, int(page)))

    def with_sort_field(self, sort_field: str | None) -> "QueryState":
        return replace(self, sort_field=sort_field, page=1)

    def with_sort_direction(self, sort_direction: SortDirection | str | None) -> "QueryState":
        return replace(self, sort_direction=SortDirection.parse(sort_direction), page=1)

    def with_search(self, search: str | None) -> "QueryState":
        return replace(self, search=(search or "").strip(), page=1)


def compose(
    state: QueryState,
    config: ChannelConfig = DEFAULT_CHANNEL_CONFIG,
    *,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Dict[str, Any]:
    """Build the remote list parameters for one page of a channel."""
    page = max(1, int(state.page or 1))
    direction = SortDirection.parse(state.sort_direction)
    params: Dict[str, Any] = {
        "orderBy": f"{direction.prefix}{config.resolve_sort_field(state.sort_field)}",
        "limit": page_size,
        "offset": (page - 1) * page_size,
    }
    if state.search:
        params[config.search_filter_key] = state.search
    return params
