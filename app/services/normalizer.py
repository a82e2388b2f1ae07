"""Mapping of Trakt list and trending payloads into Stremio metas."""

from __future__ import annotations

import logging
from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import (
    BaseModel,
    Field,
    TypeAdapter,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from ..errors import ParseError
from ..models import BehaviorHints, CatalogMeta, CatalogResponse, ContentType, Trailer
from ..utils import best_effort, extract_video_id

logger = logging.getLogger(__name__)

POSTER_URL = "https://images.metahub.space/poster/medium/{id}/img"
BACKGROUND_URL = "https://images.metahub.space/background/medium/{id}/img"
LOGO_URL = "https://images.metahub.space/logo/medium/{id}/img"


class TraktIds(BaseModel):
    imdb: str


class TraktMedia(BaseModel):
    """Fields read from a Trakt movie or show.

    Only ``title`` and ``ids.imdb`` are required. A display field with an
    unexpected type is dropped to ``None`` instead of failing the item.
    """

    title: str
    ids: TraktIds
    year: int | None = None
    overview: str | None = None
    genres: list[str] | None = None
    runtime: int | None = None
    trailer: str | None = None

    @field_validator("year", "overview", "genres", "runtime", "trailer", mode="wrap")
    @classmethod
    def _drop_invalid(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError as exc:
            logger.debug("Dropping invalid Trakt field: %s", exc.errors()[0]["msg"])
            return None


class TraktMovieEntry(BaseModel):
    catalog_type: ClassVar[ContentType] = "movie"

    type: Literal["movie"]
    movie: TraktMedia

    @property
    def media(self) -> TraktMedia:
        return self.movie


class TraktShowEntry(BaseModel):
    catalog_type: ClassVar[ContentType] = "series"

    type: Literal["show"]
    show: TraktMedia

    @property
    def media(self) -> TraktMedia:
        return self.show


TraktEntry = Annotated[
    Union[TraktMovieEntry, TraktShowEntry], Field(discriminator="type")
]
_ENTRIES_ADAPTER = TypeAdapter(list[TraktEntry])


def normalize(data: list[Any], genre: str | None = None) -> CatalogResponse:
    """Convert Trakt items into a catalog page, preserving Trakt's order.

    Any malformed item fails the whole page. ``genre`` is not applied here; the
    caller sorts or filters using each meta's genres.
    """

    try:
        entries = _ENTRIES_ADAPTER.validate_python([_with_type_tag(item) for item in data])
    except ValidationError as exc:
        raise ParseError(
            f"Unable to parse output from Trakt API: {exc.error_count()} invalid field(s)"
        ) from exc

    metas = [to_meta(entry) for entry in entries]
    logger.info("Returned %s meta objects (genre=%s)", len(metas), genre)
    return CatalogResponse(metas=metas)


def to_meta(entry: TraktMovieEntry | TraktShowEntry) -> CatalogMeta:
    media = entry.media
    imdb_id = media.ids.imdb
    return CatalogMeta(
        type=entry.catalog_type,
        id=imdb_id,
        name=media.title,
        poster=POSTER_URL.format(id=imdb_id),
        background=BACKGROUND_URL.format(id=imdb_id),
        logo=LOGO_URL.format(id=imdb_id),
        genres=media.genres,
        release_info=best_effort(format_year, media.year),
        description=media.overview,
        runtime=best_effort(format_runtime, media.runtime),
        trailer=build_trailer(media.trailer),
        behavior_hints=BehaviorHints(default_video_id=imdb_id),
    )


def format_runtime(minutes: int | None) -> str | None:
    if minutes is None:
        return None
    return f"{minutes} mins"


def format_year(year: int | None) -> str | None:
    if year is None:
        return None
    return str(year)


def build_trailer(url: str | None) -> Trailer | None:
    """Wrap the YouTube id from ``url``, or return ``None`` if none is found."""

    if not url:
        return None
    video_id = best_effort(extract_video_id, url)
    if video_id is None:
        return None
    return Trailer(source=video_id)


def _with_type_tag(item: Any) -> Any:
    # Trending items are ``{"watchers": n, "movie": {...}}`` without a tag.
    if not isinstance(item, dict) or "type" in item:
        return item
    if "movie" in item:
        return {**item, "type": "movie"}
    if "show" in item:
        return {**item, "type": "show"}
    return item
