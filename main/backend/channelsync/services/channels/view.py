from __future__ import annotations

from typing import Iterable

from ...settings.channels import ChannelConfig, DEFAULT_CHANNEL_CONFIG
from .types import (
    THUMBNAIL_DETAIL_VARIANT,
    THUMBNAIL_LIST_VARIANT,
    Entity,
    SelectionRecord,
    ViewModelParams,
)


def build_view_params(
    entity: Entity,
    channel: str,
    config: ChannelConfig = DEFAULT_CHANNEL_CONFIG,
    *,
    related_label: str | None = None,
) -> ViewModelParams:
    related = [item.name for item in entity.comics.items]
    label = config.detail_related_label if related_label is None else related_label
    return ViewModelParams(
        multiple=False,
        channel=channel,
        id=entity.id,
        title=entity.display_name(config.title_field),
        description=(entity.description or "") if config.has_description else "",
        modified=entity.modified,
        page_count=0,
        thumbnail=entity.thumbnail_url(THUMBNAIL_LIST_VARIANT),
        image=entity.thumbnail_url(THUMBNAIL_DETAIL_VARIANT),
        name_channel=label if related else "",
        name=related,
        active=entity.active,
    )


def build_detail_params(entity: Entity, channel: str, config: ChannelConfig = DEFAULT_CHANNEL_CONFIG) -> ViewModelParams:
    return build_view_params(entity, channel, config, related_label=config.detail_related_label)


def build_compose_params(entity: Entity, channel: str, config: ChannelConfig = DEFAULT_CHANNEL_CONFIG) -> ViewModelParams:
    return build_view_params(entity, channel, config, related_label=config.compose_related_label)


def build_selection_bundle(channel: str, records: Iterable[SelectionRecord]) -> ViewModelParams:
    """Compose-email parameters covering every selected entry of a channel."""
    items = list(records)
    return ViewModelParams(
        multiple=True,
        channel=channel,
        title=", ".join(r.title for r in items if r.title),
        page_count=sum(r.page_count for r in items),
        thumbnail=items[0].thumbnail if items else "",
        name=[r.title for r in items],
        active=bool(items),
        items=items,
    )


def selection_record_for(entity: Entity, config: ChannelConfig = DEFAULT_CHANNEL_CONFIG) -> SelectionRecord:
    return SelectionRecord(
        id=str(entity.id),
        title=entity.display_name(config.title_field),
        description=(entity.description or "") if config.has_description else "",
        thumbnail=entity.thumbnail_url(THUMBNAIL_LIST_VARIANT),
        modified=entity.modified,
        page_count=0,
    )
