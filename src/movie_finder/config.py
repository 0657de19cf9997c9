"""Application configuration."""

import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    tmdb_api_key: str = Field(repr=False)
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_image_base_url: str | None = "https://image.tmdb.org/t/p/w500"
    tmdb_timeout_seconds: float = 3.0
    result_cache_ttl_seconds: int = 60
    favorites_ttl_days: int = 7
    favorites_max_per_session: int = 200
    session_cookie_name: str = "mf.sid"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("tmdb_base_url", "tmdb_image_base_url")
    @classmethod
    def _trim_trailing_slash(cls, value: str | None) -> str | None:
        return trim_trailing_slash(value)


def trim_trailing_slash(value: str | None) -> str | None:
    """Drop a single trailing slash from a base URL."""
    if not value:
        return value
    return value[:-1] if value.endswith("/") else value
