"""Parsing of the catalog path segment sent by Stremio.

Stremio requests catalogs in four shapes::

    <catalog_id>.json
    <catalog_id>/skip=200.json
    <catalog_id>/genre=Adventure.json
    <catalog_id>/skip=43&genre=Drama.json

where ``<catalog_id>`` is ``<base id>-<source>``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal
from urllib.parse import unquote

from .codec import TRAKT_SOURCE
from .errors import FormatError, UnsupportedSourceError
from .models import Pagination

PAGE_SIZE = 100
JSON_SUFFIX = ".json"

CatalogSource = Literal["trakt"]
KNOWN_SOURCES: frozenset[str] = frozenset({TRAKT_SOURCE})


@dataclass(frozen=True, slots=True)
class CatalogRequest:
    """A decomposed catalog request path."""

    catalog_id: str
    source: CatalogSource
    pagination: Pagination
    genre: str | None = None


def page_for_skip(skip: int, page_size: int = PAGE_SIZE) -> int:
    """Convert an item offset into a 1-based page number."""

    return skip // page_size + 1


def parse_catalog_path(catalog_path: str) -> CatalogRequest:
    """Split ``catalog_path`` into catalog id, source, pagination and genre.

    The path is split on ``/``, ``&`` and ``=`` before percent-decoding, so an
    encoded genre such as ``Short%20%26%20Sweet`` survives intact.
    """

    if not catalog_path.endswith(JSON_SUFFIX):
        raise FormatError("Catalog path must end with .json")
    segments = catalog_path[: -len(JSON_SUFFIX)].split("/")
    if len(segments) > 2:
        raise FormatError("Incorrect catalog path options provided")

    catalog_id, source = _split_source(unquote(segments[0]))

    skip: int | None = None
    genre: str | None = None
    if len(segments) == 2:
        for param in segments[1].split("&"):
            parts = param.split("=")
            if len(parts) != 2:
                continue
            key, value = unquote(parts[0]), unquote(parts[1])
            if key == "skip":
                skip = _parse_skip(value)
            elif key == "genre":
                genre = value

    page = page_for_skip(skip) if skip is not None else 1
    return CatalogRequest(
        catalog_id=catalog_id,
        source=source,
        pagination=Pagination(page=page, page_size=PAGE_SIZE),
        genre=genre,
    )


def _split_source(token: str) -> tuple[str, CatalogSource]:
    catalog_id, separator, source = token.rpartition("-")
    if not separator or not catalog_id or not source:
        raise FormatError("Catalog id must look like '<id>-<source>'")
    if source not in KNOWN_SOURCES:
        raise UnsupportedSourceError(f"Unsupported catalog source: {source}")
    return catalog_id, source  # type: ignore[return-value]


def _parse_skip(value: str) -> int:
    if not (value.isascii() and value.isdigit()):
        raise FormatError(f"Unable to parse skip value: {value!r}")
    return int(value)
