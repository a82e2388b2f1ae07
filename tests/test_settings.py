"""Configuration settings behaviour tests."""

from __future__ import annotations

import pytest

from app.config import Settings, TraktCredentials
from app.errors import ConfigurationError
from app.stable_catalogs import DEFAULT_GENRE_OPTIONS


def test_credentials_are_returned_when_both_are_set() -> None:
    settings = Settings(
        _env_file=None, TRAKT_CLIENT_ID=" client-id ", TRAKT_CLIENT_SECRET="secret"
    )

    assert settings.require_trakt_credentials() == TraktCredentials(
        client_id="client-id", client_secret="secret"
    )


@pytest.mark.parametrize(
    ("client_id", "client_secret"),
    [("", "secret"), ("client-id", "   "), (None, None)],
)
def test_missing_credentials_raise(client_id: str | None, client_secret: str | None) -> None:
    """Blank credentials count as missing."""

    settings = Settings(
        _env_file=None, TRAKT_CLIENT_ID=client_id, TRAKT_CLIENT_SECRET=client_secret
    )

    with pytest.raises(ConfigurationError):
        settings.require_trakt_credentials()


def test_genre_options_default() -> None:
    settings = Settings(_env_file=None)

    assert settings.catalog_genre_options == DEFAULT_GENRE_OPTIONS
    assert "Short & Sweet" in settings.catalog_genre_options


def test_genre_options_from_comma_separated_string() -> None:
    settings = Settings(_env_file=None, CATALOG_GENRE_OPTIONS="Top Rated, A-Z,,Top Rated")

    assert settings.catalog_genre_options == ("Top Rated", "A-Z")


def test_genre_options_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATALOG_GENRE_OPTIONS", "Fan Favorites,New Releases")

    settings = Settings(_env_file=None)

    assert settings.catalog_genre_options == ("Fan Favorites", "New Releases")


def test_blank_genre_options_fall_back_to_defaults() -> None:
    settings = Settings(_env_file=None, CATALOG_GENRE_OPTIONS=" , ")

    assert settings.catalog_genre_options == DEFAULT_GENRE_OPTIONS


def test_timeout_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Settings(_env_file=None, TRAKT_TIMEOUT=0)
