"""Utilities for communicating with the Trakt API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup
from pydantic import TypeAdapter, ValidationError

from ..config import Settings
from ..errors import FormatError, MissingListIdError, ParseError, UpstreamError
from ..models import CatalogDescriptor, ContentType, TraktGenre

logger = logging.getLogger(__name__)

_GENRES_ADAPTER = TypeAdapter(list[TraktGenre])
_LIST_PAGE_HOSTS = ("trakt.tv", "www.trakt.tv", "app.trakt.tv")


class TraktClient:
    """Thin wrapper around the Trakt HTTP API.

    Every call is a single GET on the shared ``httpx.AsyncClient``. Nothing is
    retried or cached.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self._credentials = settings.require_trakt_credentials()
        self._client = http_client

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "trakt-api-key": self._credentials.client_id,
            "trakt-api-version": "2",
        }

    @staticmethod
    def build_path(descriptor: CatalogDescriptor) -> str:
        """Return the API path for ``descriptor``.

        Raises :class:`MissingListIdError` for list queries without a list id.
        """

        kind = descriptor.provider_kind
        if descriptor.endpoint == "trending":
            return f"/{kind}/trending"
        if descriptor.endpoint == "list":
            if not descriptor.list_id:
                raise MissingListIdError("No list provided in Trakt list endpoint")
            return f"/lists/{descriptor.list_id}/items/{kind}"
        return f"/genres/{kind}"

    @staticmethod
    def build_params(descriptor: CatalogDescriptor) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if descriptor.extended_info:
            params["extended"] = "full"
        if descriptor.pagination is not None:
            params["page"] = descriptor.pagination.page
            params["limit"] = descriptor.pagination.page_size
        return params

    async def fetch(self, descriptor: CatalogDescriptor) -> list[Any]:
        """Execute ``descriptor`` and return the raw JSON array Trakt answers with."""

        path = self.build_path(descriptor)
        params = self.build_params(descriptor)
        try:
            response = await self._client.get(
                path, headers=self._headers(), params=params
            )
        except httpx.HTTPError as exc:
            logger.warning("Failed to reach Trakt for %s: %s", path, exc)
            raise UpstreamError(
                f"Unable to reach Trakt ({exc.__class__.__name__})"
            ) from exc

        logger.info("Final URL: %s", response.request.url)
        if not response.is_success:
            logger.warning(
                "Trakt answered %s for %s: %s",
                response.status_code,
                path,
                response.text,
            )
            raise UpstreamError(
                f"Trakt answered with status {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ParseError("Unable to convert Trakt response to JSON") from exc
        if not isinstance(data, list):
            raise ParseError("Unexpected Trakt response structure, expected a list")
        return data

    async def fetch_genres(self, content_type: ContentType) -> list[TraktGenre]:
        """Return the genres Trakt knows for ``content_type``."""

        descriptor = CatalogDescriptor(endpoint="genres", catalog_type=content_type)
        data = await self.fetch(descriptor)
        try:
            return _GENRES_ADAPTER.validate_python(data)
        except ValidationError as exc:
            raise ParseError("Unable to parse Trakt genres") from exc

    async def resolve_list_id(self, url: str) -> str:
        """Scrape the numeric list id from a public Trakt list page."""

        parsed = urlparse(url)
        if parsed.scheme not in {"http", "https"} or parsed.hostname not in _LIST_PAGE_HOSTS:
            raise FormatError("URL must point to a trakt.tv list page")

        try:
            response = await self._client.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Failed to load Trakt list page %s: %s", url, exc)
            raise UpstreamError("Unable to load the Trakt list page") from exc
        if response.url.host not in _LIST_PAGE_HOSTS:
            logger.warning("Trakt list page %s redirected to %s", url, response.url)
            raise UpstreamError("Trakt list page redirected away from trakt.tv")

        soup = BeautifulSoup(response.text, "html.parser")
        element = soup.select_one('input[id="list-id"]')
        list_id = str(element.get("value") or "").strip() if element else ""
        if not list_id:
            raise MissingListIdError("Trakt list id not found")
        return list_id
