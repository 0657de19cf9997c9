"""Per-session favorites endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Body, Depends, Request, Response, status

from movie_finder.api.models import FavoritePayload
from movie_finder.api.sessions import current_session_id
from movie_finder.domain.errors import ValidationError

if TYPE_CHECKING:
    from movie_finder.containers import AppContainer

router = APIRouter(prefix="/api/favorites", tags=["favorites"])


@router.get(
    "",
    response_model=list[FavoritePayload],
    response_model_exclude_none=True,
)
async def list_favorites(
    request: Request, session_id: str = Depends(current_session_id)
) -> list[FavoritePayload]:
    """Return the current session's favorites."""
    container: AppContainer = request.app.state.container
    favorites = container.favorites_service.list(session_id)
    return [FavoritePayload.from_domain(favorite) for favorite in favorites]


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_favorite(
    request: Request,
    favorite: FavoritePayload | None = Body(default=None),
    session_id: str = Depends(current_session_id),
) -> Response:
    """Add a favorite to the current session."""
    if favorite is None:
        raise ValidationError("Request body must not be null")
    if favorite.id is None or favorite.id <= 0:
        raise ValidationError("Favorite 'id' must be a positive number")
    container: AppContainer = request.app.state.container
    container.favorites_service.add(session_id, favorite.to_domain())
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/api/favorites/{favorite.id}"},
    )


@router.delete("/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    favorite_id: int,
    request: Request,
    session_id: str = Depends(current_session_id),
) -> Response:
    """Remove a favorite from the current session."""
    if favorite_id <= 0:
        raise ValidationError("Path variable 'id' must be a positive number")
    container: AppContainer = request.app.state.container
    container.favorites_service.remove(session_id, favorite_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
