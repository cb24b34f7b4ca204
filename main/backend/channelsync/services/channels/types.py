from __future__ import annotations

from math import ceil
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


THUMBNAIL_LIST_VARIANT = "landscape_xlarge"
THUMBNAIL_DETAIL_VARIANT = "landscape_incredible"


class Thumbnail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    path: str
    extension: str

    def url(self, variant: str = THUMBNAIL_LIST_VARIANT) -> str:
        return f"{self.path}/{variant}.{self.extension}"


class RelatedSummary(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    resource_uri: Optional[str] = Field(default=None, alias="resourceURI")
    name: str


class RelatedList(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    available: int = 0
    returned: int = 0
    collection_uri: Optional[str] = Field(default=None, alias="collectionURI")
    items: List[RelatedSummary] = Field(default_factory=list)


class Entity(BaseModel):
    """One remote catalog entry. Only ``active`` is ever changed locally."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    name: Optional[str] = None
    full_name: Optional[str] = Field(default=None, alias="fullName")
    description: Optional[str] = None
    modified: Optional[str] = None
    resource_uri: Optional[str] = Field(default=None, alias="resourceURI")
    thumbnail: Optional[Thumbnail] = None
    comics: RelatedList = Field(default_factory=RelatedList)
    active: bool = False

    def display_name(self, title_field: str = "name") -> str:
        values = {"name": self.name, "fullName": self.full_name}
        value = values.get(title_field)
        if value is None:
            value = self.name or self.full_name
        return value or ""

    def thumbnail_url(self, variant: str = THUMBNAIL_LIST_VARIANT) -> str:
        if self.thumbnail is None:
            return ""
        return self.thumbnail.url(variant)


class Page(BaseModel):
    model_config = ConfigDict(extra="ignore")

    offset: int = 0
    limit: int = 0
    total: int = 0
    count: int = 0
    results: List[Entity] = Field(default_factory=list)

    def page_count(self, page_size: int) -> int:
        if page_size <= 0 or self.total <= 0:
            return 0
        return int(ceil(self.total / page_size))

    def find(self, entity_id: int) -> Entity | None:
        for entity in self.results:
            if entity.id == entity_id:
                return entity
        return None

    def with_active(self, entity_id: int, active: bool) -> "Page":
        """Shallow copy where only ``entity_id`` carries the new flag."""
        results = [
            entity.model_copy(update={"active": active}) if entity.id == entity_id else entity
            for entity in self.results
        ]
        return self.model_copy(update={"results": results})


class PageEnvelope(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code: Optional[int] = None
    status: Optional[str] = None
    attribution_text: Optional[str] = Field(default=None, alias="attributionText")
    etag: Optional[str] = None
    data: Page


class SelectionRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    title: str = ""
    description: str = ""
    thumbnail: str = ""
    modified: Optional[str] = None
    page_count: int = Field(default=0, alias="pageCount")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):  # noqa: ANN001
        return str(value) if isinstance(value, int) else value


class ViewModelParams(BaseModel):
    """Parameters handed to the detail modal or the compose-email modal."""

    model_config = ConfigDict(populate_by_name=True)

    multiple: bool = False
    channel: str
    id: Optional[int] = None
    title: str = ""
    description: str = ""
    modified: Optional[str] = None
    page_count: int = Field(default=0, alias="pageCount")
    thumbnail: str = ""
    image: str = ""
    name_channel: str = Field(default="", alias="nameChannel")
    name: List[str] = Field(default_factory=list)
    active: bool = False
    items: List[SelectionRecord] = Field(default_factory=list)
