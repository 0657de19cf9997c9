"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from movie_finder.adapters.tmdb_client import TmdbClient
from movie_finder.config import Settings
from movie_finder.containers import AppContainer
from movie_finder.domain.errors import NotFoundError
from movie_finder.domain.movies import MovieDetails, MovieListItem, MoviePage
from movie_finder.services.cache import ResultCache
from movie_finder.services.favorites import FavoritesService, FavoritesStore
from movie_finder.services.movies import MovieService


@dataclass
class FakeClock:
    """Manually advanced clock."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@dataclass
class FakeTmdbClient(TmdbClient):
    """Fake TMDB client that counts calls and can be told to fail."""

    search_calls: list[tuple[str, int]] = field(default_factory=list)
    details_calls: list[int] = field(default_factory=list)
    search_error: Exception | None = None
    search_page: MoviePage | None = None
    details_error: Exception | None = None

    async def search_movies(self, query: str, page: int) -> MoviePage:
        self.search_calls.append((query, page))
        if self.search_error is not None:
            raise self.search_error
        if self.search_page is not None:
            return self.search_page
        return MoviePage(
            items=(
                MovieListItem(id=27205, title="Inception", year="2010"),
                MovieListItem(id=64956, title="Inception: The Cobol Job", year="2010"),
            ),
            page=page,
            total=2,
        )

    async def get_movie_details(self, movie_id: int) -> MovieDetails:
        self.details_calls.append(movie_id)
        if self.details_error is not None:
            raise self.details_error
        if movie_id == 404:
            raise NotFoundError(f"Movie with id={movie_id} not found")
        return MovieDetails(
            id=movie_id,
            title="Inception",
            year="2010",
            runtime=148,
            genres=("Action", "Science Fiction"),
            actors=("Leonardo DiCaprio", "Joseph Gordon-Levitt"),
            plot="A thief who steals corporate secrets.",
            poster_url="https://img.test/p/inception.jpg",
            rating=8.4,
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(tmdb_api_key="tmdb-key")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tmdb_client() -> FakeTmdbClient:
    return FakeTmdbClient()


@pytest.fixture
def container(
    settings: Settings, tmdb_client: FakeTmdbClient, clock: FakeClock
) -> AppContainer:
    movie_service = MovieService(
        tmdb_client=tmdb_client,
        search_cache=ResultCache(name="search", clock=clock),
        details_cache=ResultCache(name="details", clock=clock),
    )
    favorites_service = FavoritesService(FavoritesStore(clock=clock))

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        tmdb_client=tmdb_client,
        movie_service=movie_service,
        favorites_service=favorites_service,
        close_resources=close_resources,
    )
