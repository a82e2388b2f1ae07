"""Pydantic models describing catalog queries and payloads."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ContentType = Literal["movie", "series"]
EndpointKind = Literal["trending", "list", "genres"]

# Spellings written by the earlier dashboard.
_LEGACY_ENDPOINTS = {
    "trendingmovies": "trending",
    "trending": "trending",
    "list": "list",
    "genres": "genres",
}

PROVIDER_KINDS: dict[str, str] = {"movie": "movies", "series": "shows"}


class Pagination(BaseModel):
    """A 1-based page cursor with a fixed page size."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page: int = Field(default=1, ge=1, alias="current_page")
    page_size: int = Field(default=100, gt=0, alias="items_per_page")


class CatalogDescriptor(BaseModel):
    """Structured query behind a catalog id.

    Descriptors are immutable; request-time overrides produce a new copy via
    :meth:`with_overrides`.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: EndpointKind
    catalog_type: ContentType
    list_id: str | None = None
    genre: str | None = None
    extended_info: bool = False
    pagination: Pagination | None = None

    @field_validator("endpoint", mode="before")
    @classmethod
    def _normalize_endpoint(cls, value: object) -> object:
        if isinstance(value, str):
            return _LEGACY_ENDPOINTS.get(value.strip().lower(), value)
        return value

    @field_validator("list_id", "genre", mode="before")
    @classmethod
    def _strip_blank(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or None
        return value

    @property
    def provider_kind(self) -> str:
        """Return the provider's plural media segment (``movies``/``shows``)."""

        return PROVIDER_KINDS[self.catalog_type]

    def with_overrides(
        self, *, pagination: Pagination, genre: str | None
    ) -> "CatalogDescriptor":
        """Return a validated copy carrying ``pagination`` and ``genre``."""

        data = self.model_dump()
        data.update(pagination=pagination, genre=genre)
        return self.model_validate(data)


class Trailer(BaseModel):
    source: str
    type: str = "Trailer"


class BehaviorHints(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    default_video_id: str = Field(alias="defaultVideoId")


class CatalogMeta(BaseModel):
    """Represents a single media entry returned to Stremio."""

    model_config = ConfigDict(populate_by_name=True)

    type: ContentType
    id: str
    name: str
    poster: str | None = None
    background: str | None = None
    genres: list[str] | None = None
    release_info: str | None = Field(default=None, alias="releaseInfo")
    description: str | None = None
    behavior_hints: BehaviorHints | None = Field(default=None, alias="behaviorHints")
    trailer: Trailer | None = None
    logo: str | None = None
    runtime: str | None = None


class CatalogResponse(BaseModel):
    """An ordered page of metas, in provider order."""

    metas: list[CatalogMeta] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "CatalogResponse":
        return cls(metas=[])

    def to_payload(self) -> dict[str, object]:
        """Return the Stremio catalog payload, keeping absent fields as ``null``."""

        return self.model_dump(mode="json", by_alias=True)


class TraktGenre(BaseModel):
    name: str
    slug: str


class CatalogExtra(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    options: list[str] | None = None
    is_required: bool = Field(default=False, alias="isRequired")


class ManifestCatalog(BaseModel):
    """A catalog advertised in the addon manifest."""

    id: str
    type: ContentType
    name: str
    extra: list[CatalogExtra] = Field(default_factory=list)

    def to_manifest_entry(self) -> dict[str, object]:
        """Return a manifest catalog entry."""

        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
