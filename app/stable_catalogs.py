"""Catalogs served when the manifest configuration does not name any."""

from __future__ import annotations

from dataclasses import dataclass

from .models import CatalogDescriptor, ContentType


# Offered to Stremio as the ``genre`` extra; Trakt lists cannot sort by these
# server-side, which is what triggers the oversized genre-filtered fetch.
DEFAULT_GENRE_OPTIONS: tuple[str, ...] = (
    "Trending Now",
    "New Releases",
    "A-Z",
    "Short & Sweet",
    "Top Rated",
    "Recently Watched",
    "Fan Favorites",
)


@dataclass(frozen=True)
class StableCatalogDefinition:
    """Describes a fixed Trakt list shown in Stremio."""

    name: str
    content_type: ContentType
    list_id: str

    @property
    def descriptor(self) -> CatalogDescriptor:
        return CatalogDescriptor(
            endpoint="list",
            catalog_type=self.content_type,
            list_id=self.list_id,
            extended_info=True,
        )


STABLE_CATALOGS: tuple[StableCatalogDefinition, ...] = (
    StableCatalogDefinition(
        name="Netflix Movies",
        content_type="movie",
        list_id="20764770",
    ),
    StableCatalogDefinition(
        name="Netflix TV Shows",
        content_type="series",
        list_id="20764471",
    ),
)
