"""Tests for catalog request path parsing."""

from __future__ import annotations

import pytest

from app.errors import FormatError, UnsupportedSourceError
from app.paths import page_for_skip, parse_catalog_path


def test_plain_catalog_path() -> None:
    request = parse_catalog_path("abc-trakt.json")

    assert request.catalog_id == "abc"
    assert request.source == "trakt"
    assert request.pagination.page == 1
    assert request.pagination.page_size == 100
    assert request.genre is None


def test_skip_is_converted_to_page() -> None:
    request = parse_catalog_path("abc-trakt/skip=250.json")

    assert request.pagination.page == 3
    assert request.pagination.page_size == 100


def test_skip_and_genre() -> None:
    request = parse_catalog_path("abc-trakt/skip=50&genre=Action.json")

    assert request.pagination.page == 1
    assert request.genre == "Action"


@pytest.mark.parametrize(
    ("skip", "page"),
    [(0, 1), (99, 1), (100, 2), (199, 2), (200, 3), (1050, 11)],
)
def test_page_for_skip(skip: int, page: int) -> None:
    assert page_for_skip(skip) == page


def test_genre_only() -> None:
    request = parse_catalog_path("abc-trakt/genre=New Releases.json")

    assert request.pagination.page == 1
    assert request.genre == "New Releases"


def test_percent_encoded_values_are_decoded_after_splitting() -> None:
    request = parse_catalog_path("ab%3D%3D-trakt/genre=Short%20%26%20Sweet&skip=100.json")

    assert request.catalog_id == "ab=="
    assert request.genre == "Short & Sweet"
    assert request.pagination.page == 2


def test_unknown_keys_and_malformed_pairs_are_ignored() -> None:
    request = parse_catalog_path("abc-trakt/search=dune&skip=100&broken.json")

    assert request.pagination.page == 2
    assert request.genre is None


def test_catalog_id_splits_on_last_dash() -> None:
    request = parse_catalog_path("a-b-trakt.json")

    assert request.catalog_id == "a-b"


def test_unknown_source_is_rejected() -> None:
    with pytest.raises(UnsupportedSourceError):
        parse_catalog_path("abc-unknown.json")


@pytest.mark.parametrize(
    "path",
    [
        "abc-trakt",
        "abc-trakt/skip=100",
        "abc.json",
        "-trakt.json",
        "abc-.json",
        "abc-trakt/skip=100/genre=Drama.json",
        "abc-trakt/skip=-1.json",
        "abc-trakt/skip=ten.json",
        "abc-trakt/skip=.json",
    ],
)
def test_malformed_paths_raise_format_error(path: str) -> None:
    with pytest.raises(FormatError):
        parse_catalog_path(path)
