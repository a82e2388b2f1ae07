"""High level orchestration for catalog requests and manifests."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..codec import decode, encode
from ..config import Settings
from ..errors import DescriptorParseError, FormatError, MissingListIdError
from ..models import (
    CatalogDescriptor,
    CatalogExtra,
    CatalogResponse,
    ContentType,
    ManifestCatalog,
)
from ..paths import parse_catalog_path
from ..stable_catalogs import STABLE_CATALOGS
from ..utils import decode_json_segment
from .normalizer import normalize
from .resolution import resolve_query, should_skip_fetch
from .trakt import TraktClient

logger = logging.getLogger(__name__)

MANIFEST_ID = "com.dynamic.catalogs"
MANIFEST_VERSION = "0.0.1"
DEFAULT_CONFIG_SEGMENTS = frozenset({"", "default"})


class ConfiguredCatalog(BaseModel):
    id: str
    name: str

    @field_validator("id", "name")
    @classmethod
    def _require_text(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped


class ManifestConfig(BaseModel):
    """Catalog selection carried in the ``{config}`` path segment.

    The segment is URL-safe base64 JSON, either a list of ``{"id", "name"}``
    objects or ``{"catalogs": [...]}``. An empty segment or ``default`` selects
    the built-in catalogs.
    """

    catalogs: list[ConfiguredCatalog] = Field(default_factory=list)

    @classmethod
    def from_segment(cls, segment: str) -> "ManifestConfig":
        cleaned = (segment or "").strip()
        if cleaned.lower() in DEFAULT_CONFIG_SEGMENTS:
            return cls.default()
        try:
            payload = decode_json_segment(cleaned)
        except ValueError as exc:
            raise FormatError("Manifest configuration is not valid base64 JSON") from exc
        if isinstance(payload, list):
            payload = {"catalogs": payload}
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise FormatError(
                f"Manifest configuration is invalid: {exc.error_count()} error(s)"
            ) from exc

    @classmethod
    def default(cls) -> "ManifestConfig":
        return cls(
            catalogs=[
                ConfiguredCatalog(id=encode(definition.descriptor), name=definition.name)
                for definition in STABLE_CATALOGS
            ]
        )


class CatalogService:
    """Resolves catalog ids into Trakt queries and Stremio payloads."""

    def __init__(self, settings: Settings, trakt_client: TraktClient):
        self._settings = settings
        self._trakt = trakt_client

    async def get_catalog_payload(self, catalog_path: str) -> dict[str, Any]:
        """Return the ``{"metas": [...]}`` payload for a catalog request path."""

        request = parse_catalog_path(catalog_path)
        descriptor = decode(request.catalog_id)
        if descriptor.endpoint == "genres":
            raise FormatError("Genre listings cannot be served as a catalog")
        if descriptor.endpoint == "list" and not descriptor.list_id:
            raise MissingListIdError("No list provided in Trakt list endpoint")

        query = resolve_query(descriptor, request)
        if should_skip_fetch(query):
            logger.info(
                "Skipping page %s of genre-filtered list %s",
                request.pagination.page,
                descriptor.list_id,
            )
            return CatalogResponse.empty().to_payload()

        data = await self._trakt.fetch(query.descriptor)
        return normalize(data, query.descriptor.genre).to_payload()

    def list_manifest_catalogs(self, config: ManifestConfig) -> list[dict[str, Any]]:
        """Return manifest catalog entries for the configured catalogs."""

        extras = [
            CatalogExtra(name="skip"),
            CatalogExtra(
                name="genre", options=list(self._settings.catalog_genre_options)
            ),
        ]
        entries: list[dict[str, Any]] = []
        for configured in config.catalogs:
            descriptor = decode(configured.id)
            catalog = ManifestCatalog(
                id=configured.id,
                type=descriptor.catalog_type,
                name=configured.name,
                extra=extras,
            )
            entries.append(catalog.to_manifest_entry())
        return entries

    def build_manifest(self, config: ManifestConfig) -> dict[str, Any]:
        catalogs = self.list_manifest_catalogs(config)
        types: list[str] = []
        for entry in catalogs:
            if entry["type"] not in types:
                types.append(entry["type"])
        return {
            "id": MANIFEST_ID,
            "version": MANIFEST_VERSION,
            "name": self._settings.app_name,
            "description": "Trakt lists and trending titles as Stremio catalogs.",
            "logo": "logo.png",
            "resources": ["catalog"] if catalogs else [],
            "types": types,
            "catalogs": catalogs,
            "idPrefixes": ["tt"],
        }

    def encode_catalog(self, payload: Mapping[str, Any]) -> str:
        """Validate a descriptor payload and return its catalog id."""

        try:
            descriptor = CatalogDescriptor.model_validate(dict(payload))
        except ValidationError as exc:
            raise DescriptorParseError(
                f"Invalid catalog descriptor: {exc.error_count()} error(s)"
            ) from exc
        if descriptor.endpoint == "list" and not descriptor.list_id:
            raise MissingListIdError("List catalogs require a list id")
        return encode(descriptor)

    async def list_genres(self, content_type: ContentType) -> list[dict[str, Any]]:
        genres = await self._trakt.fetch_genres(content_type)
        return [genre.model_dump() for genre in genres]

    async def resolve_list_id(self, url: str) -> str:
        return await self._trakt.resolve_list_id(url)
