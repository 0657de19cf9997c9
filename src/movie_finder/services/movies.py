"""Movie search and details with a short-lived result cache."""

from dataclasses import dataclass, field

from movie_finder.adapters.tmdb_client import TmdbClient
from movie_finder.domain.errors import ValidationError
from movie_finder.domain.movies import MovieDetails, MoviePage
from movie_finder.services.cache import Cache, ResultCache

MIN_QUERY_LENGTH = 2
CACHE_TTL_SECONDS = 60


def search_cache_key(query: str, page: int) -> str:
    """Build the search cache key from a trimmed query and a page number."""
    return f"{query.strip().lower()}::{page}"


@dataclass
class MovieService:
    """Service for movie lookups with caching."""

    tmdb_client: TmdbClient
    search_cache: Cache[str, MoviePage] = field(
        default_factory=lambda: ResultCache(name="search")
    )
    details_cache: Cache[int, MovieDetails] = field(
        default_factory=lambda: ResultCache(name="details")
    )
    cache_ttl_seconds: float = CACHE_TTL_SECONDS

    async def search(self, query: str | None, page: int = 1) -> MoviePage:
        """Search movies by title, serving repeated queries from the cache."""
        cleaned = (query or "").strip()
        if len(cleaned) < MIN_QUERY_LENGTH:
            raise ValidationError(
                f"Query must contain at least {MIN_QUERY_LENGTH} characters"
            )
        page = max(page, 1)
        return await self.search_cache.get_or_compute(
            search_cache_key(cleaned, page),
            self.cache_ttl_seconds,
            lambda: self.tmdb_client.search_movies(cleaned, page),
        )

    async def get_details(self, movie_id: int) -> MovieDetails:
        """Retrieve movie details, serving repeated ids from the cache."""
        if movie_id <= 0:
            raise ValidationError("Movie id must be a positive number")
        return await self.details_cache.get_or_compute(
            movie_id,
            self.cache_ttl_seconds,
            lambda: self.tmdb_client.get_movie_details(movie_id),
        )
