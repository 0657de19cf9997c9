"""The Movie Database (TMDB) API client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from movie_finder.domain.errors import NotFoundError, UpstreamError, ValidationError
from movie_finder.domain.movies import MovieDetails, MovieListItem, MoviePage

MAX_CAST_MEMBERS = 5

_logger = logging.getLogger(__name__)


class TmdbClient(Protocol):
    """Interface for TMDB API interactions."""

    async def search_movies(self, query: str, page: int) -> MoviePage:
        """Search movies by title."""

    async def get_movie_details(self, movie_id: int) -> MovieDetails:
        """Fetch a movie with its credits."""


@dataclass
class HttpxTmdbClient(TmdbClient):
    """HTTPX-backed TMDB client."""

    api_key: str
    base_url: str
    image_base_url: str | None
    http_client: httpx.AsyncClient
    timeout_seconds: float = 3.0

    @classmethod
    def create(
        cls,
        api_key: str,
        base_url: str,
        image_base_url: str | None,
        timeout_seconds: float = 3.0,
    ) -> "HttpxTmdbClient":
        """Create a TMDB client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            image_base_url=image_base_url,
            http_client=httpx.AsyncClient(headers={"Accept": "application/json"}),
            timeout_seconds=timeout_seconds,
        )

    async def search_movies(self, query: str, page: int) -> MoviePage:
        """Search movies via ``/search/movie``."""
        if not query or len(query.strip()) < 2:
            raise ValidationError("Query must contain at least 2 characters")
        page = max(1, page)
        payload = await self._get_json(
            "/search/movie",
            params={
                "query": query.strip(),
                "page": page,
                "include_adult": "false",
                "language": "en-US",
            },
            action="search",
            not_found_message="Movies not found",
        )
        try:
            return parse_search_page(payload, page, self.image_base_url)
        except (AttributeError, TypeError, KeyError) as exc:
            raise _unexpected_payload("search", exc) from exc

    async def get_movie_details(self, movie_id: int) -> MovieDetails:
        """Fetch a movie via ``/movie/{id}`` with credits appended."""
        payload = await self._get_json(
            f"/movie/{movie_id}",
            params={"append_to_response": "credits", "language": "en-US"},
            action="details",
            not_found_message=f"Movie with id={movie_id} not found",
        )
        if not payload:
            raise UpstreamError("Empty response from TMDB")
        try:
            return parse_movie_details(payload, self.image_base_url)
        except (AttributeError, TypeError, KeyError) as exc:
            raise _unexpected_payload("details", exc) from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get_json(
        self,
        path: str,
        *,
        params: dict[str, object],
        action: str,
        not_found_message: str,
    ) -> dict[str, object] | None:
        try:
            response = await self.http_client.get(
                f"{self.base_url}{path}",
                params={**params, "api_key": self.api_key},
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            _logger.warning("TMDB %s request error: %s", action, exc)
            raise UpstreamError(f"TMDB {action} request error: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(not_found_message)
        if response.is_error:
            _logger.warning("TMDB %s failed: status=%s", action, response.status_code)
            raise UpstreamError(
                f"TMDB {action} failed with {response.status_code}"
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(f"TMDB {action} returned invalid JSON") from exc


def parse_search_page(
    payload: dict[str, object] | None, requested_page: int, image_base_url: str | None
) -> MoviePage:
    """Map a TMDB search payload to a page of list items."""
    if not payload or payload.get("results") is None:
        return MoviePage(items=(), page=requested_page, total=0)

    items = tuple(
        MovieListItem(
            id=result.get("id"),
            title=_blank_to_none(result.get("title")),
            year=_to_year(result.get("release_date")),
            poster_url=_to_poster_url(image_base_url, result.get("poster_path")),
        )
        for result in payload["results"]
    )
    page = payload.get("page")
    total = payload.get("total_results")
    return MoviePage(
        items=items,
        page=page if page is not None else requested_page,
        total=total if total is not None else len(items),
    )


def parse_movie_details(
    payload: dict[str, object], image_base_url: str | None
) -> MovieDetails:
    """Map a TMDB movie payload (with credits) to movie details."""
    genres = tuple(
        genre["name"]
        for genre in payload.get("genres") or []
        if genre and _blank_to_none(genre.get("name"))
    )
    credits = payload.get("credits") or {}
    cast = [
        member
        for member in credits.get("cast") or []
        if member and _blank_to_none(member.get("name"))
    ]
    cast.sort(key=_billing_order)
    actors = tuple(member["name"] for member in cast[:MAX_CAST_MEMBERS])

    return MovieDetails(
        id=payload.get("id"),
        title=_blank_to_none(payload.get("title")),
        year=_to_year(payload.get("release_date")),
        runtime=payload.get("runtime"),
        genres=genres,
        actors=actors,
        plot=_blank_to_none(payload.get("overview")),
        poster_url=_to_poster_url(image_base_url, payload.get("poster_path")),
        rating=payload.get("vote_average"),
    )


def _billing_order(member: dict[str, object]) -> tuple[bool, int]:
    order = member.get("order")
    return (order is None, order if order is not None else 0)


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def _to_year(release_date: str | None) -> str | None:
    if not release_date or not release_date.strip() or len(release_date) < 4:
        return None
    return release_date[:4]


def _to_poster_url(image_base_url: str | None, poster_path: str | None) -> str | None:
    if not poster_path or not poster_path.strip():
        return None
    if not image_base_url or not image_base_url.strip():
        return None
    return f"{image_base_url.rstrip('/')}/{poster_path.removeprefix('/')}"


def _unexpected_payload(action: str, exc: Exception) -> UpstreamError:
    _logger.warning("TMDB %s returned an unexpected payload: %s", action, exc)
    return UpstreamError(f"TMDB {action} returned an unexpected payload")
