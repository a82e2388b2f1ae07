"""Application configuration models."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Iterable, Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .errors import ConfigurationError
from .stable_catalogs import DEFAULT_GENRE_OPTIONS


@dataclass(frozen=True, slots=True)
class TraktCredentials:
    """Provider credentials required before any request is served."""

    client_id: str
    client_secret: str


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="Dynamic Catalogs", alias="APP_NAME")
    server_host: str = Field(default="127.0.0.1", alias="HOST")
    server_port: int = Field(default=8080, alias="PORT")

    trakt_client_id: str | None = Field(default=None, alias="TRAKT_CLIENT_ID")
    trakt_client_secret: str | None = Field(
        default=None, alias="TRAKT_CLIENT_SECRET"
    )
    trakt_api_url: HttpUrl = Field(
        default="https://api.trakt.tv", alias="TRAKT_API_URL"
    )
    trakt_timeout_seconds: float = Field(
        default=20.0, alias="TRAKT_TIMEOUT", gt=0
    )

    catalog_genre_options: Annotated[tuple[str, ...], NoDecode] = Field(
        default=DEFAULT_GENRE_OPTIONS, alias="CATALOG_GENRE_OPTIONS"
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("trakt_client_id", "trakt_client_secret", mode="before")
    @classmethod
    def _strip_blank(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or None
        return value

    @field_validator("catalog_genre_options", mode="before")
    @classmethod
    def _parse_genre_options(cls, value: object) -> tuple[str, ...]:
        """Accept a comma separated string or an iterable of options."""

        if value is None:
            return DEFAULT_GENRE_OPTIONS
        if isinstance(value, str):
            raw_values = value.split(",")
        elif isinstance(value, Iterable):
            raw_values = [str(part) for part in value]
        else:
            raise TypeError("CATALOG_GENRE_OPTIONS must be a string or iterable of strings")

        cleaned: list[str] = []
        for entry in raw_values:
            option = entry.strip()
            if option and option not in cleaned:
                cleaned.append(option)
        return tuple(cleaned) or DEFAULT_GENRE_OPTIONS

    def require_trakt_credentials(self) -> TraktCredentials:
        """Return the Trakt credentials or fail if either is missing."""

        if not (self.trakt_client_id and self.trakt_client_secret):
            raise ConfigurationError(
                "TRAKT_CLIENT_ID and TRAKT_CLIENT_SECRET must both be set"
            )
        return TraktCredentials(
            client_id=self.trakt_client_id,
            client_secret=self.trakt_client_secret,
        )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
