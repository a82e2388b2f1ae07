"""Tests for the catalog id codec."""

from __future__ import annotations

import base64

import pytest

from app.codec import decode, encode
from app.errors import DecodeError, DescriptorParseError, EncodingError, ParseError
from app.models import CatalogDescriptor, Pagination

NETFLIX_MOVIES_ID = (
    "eyJlbmRwb2ludCI6Ikxpc3QiLCJwYWdpbmF0aW9uIjpudWxsLCJleHRlbmRlZF9pbmZvIjp0cnVl"
    "LCJsaXN0X2lkIjoiMjA3NjQ3NzAiLCJjYXRhbG9nX3R5cGUiOiJtb3ZpZSJ9-trakt"
)


@pytest.mark.parametrize(
    "descriptor",
    [
        CatalogDescriptor(endpoint="trending", catalog_type="movie"),
        CatalogDescriptor(
            endpoint="list",
            catalog_type="series",
            list_id="20764471",
            extended_info=True,
        ),
        CatalogDescriptor(
            endpoint="list",
            catalog_type="movie",
            list_id="1",
            genre="Top Rated",
            pagination=Pagination(page=3, page_size=500),
        ),
        CatalogDescriptor(endpoint="genres", catalog_type="series"),
    ],
)
def test_decode_reverses_encode(descriptor: CatalogDescriptor) -> None:
    assert decode(encode(descriptor)) == descriptor


def test_encode_produces_padded_base64_with_source_suffix() -> None:
    descriptor = CatalogDescriptor(endpoint="list", catalog_type="movie", list_id="42")

    token = encode(descriptor)

    assert token.endswith("-trakt")
    body = token[: -len("-trakt")]
    assert len(body) % 4 == 0
    assert base64.b64decode(body, validate=True).startswith(b"{")


def test_encode_is_deterministic() -> None:
    first = CatalogDescriptor(endpoint="list", catalog_type="movie", list_id="42")
    second = CatalogDescriptor(list_id="42", catalog_type="movie", endpoint="list")

    assert encode(first) == encode(second)


def test_decode_accepts_ids_minted_by_the_dashboard() -> None:
    descriptor = decode(NETFLIX_MOVIES_ID)

    assert descriptor.endpoint == "list"
    assert descriptor.catalog_type == "movie"
    assert descriptor.list_id == "20764770"
    assert descriptor.extended_info is True
    assert descriptor.pagination is None
    assert descriptor.genre is None


def test_decode_accepts_base_id_without_suffix() -> None:
    assert decode(NETFLIX_MOVIES_ID[: -len("-trakt")]).list_id == "20764770"


def test_decode_rejects_invalid_base64() -> None:
    with pytest.raises(DecodeError) as excinfo:
        decode("not*base64-trakt")

    assert not isinstance(excinfo.value, EncodingError)
    assert excinfo.value.status_code == 400


def test_decode_rejects_non_utf8_payload() -> None:
    token = base64.b64encode(b"\xff\xfe\xfd").decode("ascii")

    with pytest.raises(EncodingError):
        decode(token)


@pytest.mark.parametrize(
    "payload",
    [
        b'{"endpoint": "popular", "catalog_type": "movie"}',
        b'{"endpoint": "list"}',
        b"not json at all",
    ],
)
def test_decode_rejects_schema_mismatch(payload: bytes) -> None:
    token = base64.b64encode(payload).decode("ascii") + "-trakt"

    with pytest.raises(DescriptorParseError) as excinfo:
        decode(token)

    assert isinstance(excinfo.value, ParseError)
    assert excinfo.value.status_code == 400
