"""Merging of request-time overrides into a decoded catalog descriptor."""

from __future__ import annotations

from dataclasses import dataclass

from ..models import CatalogDescriptor, Pagination
from ..paths import CatalogRequest

# Trakt cannot sort list items server-side, so a genre/sort selection pulls one
# oversized page and leaves ordering to the caller.
GENRE_FILTERED_PAGE_SIZE = 500


@dataclass(frozen=True, slots=True)
class ResolvedQuery:
    """A descriptor ready for execution."""

    descriptor: CatalogDescriptor
    genre_filtered: bool = False


def resolve_query(descriptor: CatalogDescriptor, request: CatalogRequest) -> ResolvedQuery:
    """Apply the request's pagination and genre to ``descriptor``."""

    if descriptor.endpoint == "list" and request.genre is not None:
        pagination = Pagination(
            page=request.pagination.page,
            page_size=GENRE_FILTERED_PAGE_SIZE,
        )
        resolved = descriptor.with_overrides(pagination=pagination, genre=request.genre)
        return ResolvedQuery(descriptor=resolved, genre_filtered=True)

    genre = request.genre if request.genre is not None else descriptor.genre
    resolved = descriptor.with_overrides(pagination=request.pagination, genre=genre)
    return ResolvedQuery(descriptor=resolved, genre_filtered=False)


def should_skip_fetch(query: ResolvedQuery) -> bool:
    """Return ``True`` when the page must be served empty without a fetch.

    The first page of a genre-filtered list already carries the oversized batch,
    so later pages would only repeat it.
    """

    if not query.genre_filtered:
        return False
    pagination = query.descriptor.pagination
    return pagination is not None and pagination.page > 1
