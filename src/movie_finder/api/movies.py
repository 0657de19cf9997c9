"""Movie search and details endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from movie_finder.api.models import MovieDetailsResponse, MoviePageResponse
from movie_finder.domain.errors import ValidationError

if TYPE_CHECKING:
    from movie_finder.containers import AppContainer

router = APIRouter(prefix="/api/movies", tags=["movies"])


@router.get(
    "",
    response_model=MoviePageResponse,
    response_model_exclude_none=True,
)
async def search_movies(
    request: Request, query: str, page: int | None = None
) -> MoviePageResponse:
    """Return one page of movies matching ``query``."""
    container: AppContainer = request.app.state.container
    resolved_page = page if page is not None and page >= 1 else 1
    result = await container.movie_service.search(query.strip(), resolved_page)
    return MoviePageResponse.from_domain(result)


@router.get(
    "/{movie_id}",
    response_model=MovieDetailsResponse,
    response_model_exclude_none=True,
)
async def movie_details(movie_id: int, request: Request) -> MovieDetailsResponse:
    """Return details for a movie by TMDB id."""
    if movie_id <= 0:
        raise ValidationError("Path variable 'id' must be a positive number")
    container: AppContainer = request.app.state.container
    details = await container.movie_service.get_details(movie_id)
    return MovieDetailsResponse.from_domain(details)
