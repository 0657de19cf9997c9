"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from movie_finder.adapters.tmdb_client import HttpxTmdbClient, TmdbClient
from movie_finder.config import Settings
from movie_finder.services.cache import ResultCache
from movie_finder.services.favorites import FavoritesService, FavoritesStore
from movie_finder.services.movies import MovieService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    tmdb_client: TmdbClient
    movie_service: MovieService
    favorites_service: FavoritesService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    tmdb_client = HttpxTmdbClient.create(
        api_key=resolved_settings.tmdb_api_key,
        base_url=resolved_settings.tmdb_base_url,
        image_base_url=resolved_settings.tmdb_image_base_url,
        timeout_seconds=resolved_settings.tmdb_timeout_seconds,
    )
    movie_service = MovieService(
        tmdb_client=tmdb_client,
        search_cache=ResultCache(name="search"),
        details_cache=ResultCache(name="details"),
        cache_ttl_seconds=resolved_settings.result_cache_ttl_seconds,
    )
    favorites_service = FavoritesService(
        FavoritesStore(
            ttl=timedelta(days=resolved_settings.favorites_ttl_days),
            max_items=resolved_settings.favorites_max_per_session,
        )
    )

    async def close_resources() -> None:
        await tmdb_client.close()

    return AppContainer(
        settings=resolved_settings,
        tmdb_client=tmdb_client,
        movie_service=movie_service,
        favorites_service=favorites_service,
        close_resources=close_resources,
    )
