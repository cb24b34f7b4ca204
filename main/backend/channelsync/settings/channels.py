"""频道配置：每个远程实体集合的排序、搜索与展示参数"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True, slots=True)
class ChannelConfig:
    default_sort_field: str = "name"
    sort_fields: Tuple[str, ...] = ("name", "modified")
    # Remote "starts-with" filter key used when a search text is committed
    search_filter_key: str = "nameStartsWith"
    # Entity attribute shown as the title of a list entry
    title_field: str = "name"
    has_description: bool = True
    # Labels for the related-entity list of the detail and compose modals
    detail_related_label: str = "Histórias em Quadrinhos"
    compose_related_label: str = "Histórias em Quadrinhos"

    def resolve_sort_field(self, value: str | None) -> str:
        candidate = (value or "").strip()
        if candidate in self.sort_fields:
            return candidate
        return self.default_sort_field


CHARACTERS = ChannelConfig(
    default_sort_field="name",
    sort_fields=("name", "modified"),
    search_filter_key="nameStartsWith",
    title_field="name",
    has_description=True,
    detail_related_label="Histórias em Quadrinhos",
    compose_related_label="Personagens",
)

CREATORS = ChannelConfig(
    default_sort_field="firstName",
    sort_fields=("firstName", "lastName", "middleName", "suffix", "modified"),
    search_filter_key="firstNameStartsWith",
    title_field="fullName",
    has_description=False,
    detail_related_label="Personagens",
    compose_related_label="Histórias em Quadrinhos",
)

DEFAULT_CHANNEL_CONFIG = ChannelConfig()

CHANNELS: Dict[str, ChannelConfig] = {
    "characters": CHARACTERS,
    "creators": CREATORS,
}


def get_channel_config(channel: str | None) -> ChannelConfig:
    key = (channel or "").strip().lower()
    return CHANNELS.get(key, DEFAULT_CHANNEL_CONFIG)
