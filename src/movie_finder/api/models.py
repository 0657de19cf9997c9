"""Pydantic models for the JSON API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from movie_finder.domain.favorites import Favorite
from movie_finder.domain.movies import MovieDetails, MovieListItem, MoviePage


class FavoritePayload(BaseModel):
    """Favorite request and response body."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    title: str | None = None
    year: str | None = None
    poster_url: str | None = Field(default=None, alias="posterUrl")

    @classmethod
    def from_domain(cls, favorite: Favorite) -> "FavoritePayload":
        return cls(
            id=favorite.id,
            title=favorite.title,
            year=favorite.year,
            poster_url=favorite.poster_url,
        )

    def to_domain(self) -> Favorite:
        return Favorite(
            id=self.id,
            title=self.title,
            year=self.year,
            poster_url=self.poster_url,
        )


class MovieListItemResponse(BaseModel):
    """Search result entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    title: str | None = None
    year: str | None = None
    poster_url: str | None = Field(default=None, alias="posterUrl")

    @classmethod
    def from_domain(cls, item: MovieListItem) -> "MovieListItemResponse":
        return cls(
            id=item.id, title=item.title, year=item.year, poster_url=item.poster_url
        )


class MoviePageResponse(BaseModel):
    """Paginated search response."""

    items: list[MovieListItemResponse]
    page: int
    total: int

    @classmethod
    def from_domain(cls, page: MoviePage) -> "MoviePageResponse":
        return cls(
            items=[MovieListItemResponse.from_domain(item) for item in page.items],
            page=page.page,
            total=page.total,
        )


class MovieDetailsResponse(BaseModel):
    """Movie details response."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    title: str | None = None
    year: str | None = None
    runtime: int | None = None
    genres: list[str] = Field(default_factory=list)
    actors: list[str] = Field(default_factory=list)
    plot: str | None = None
    poster_url: str | None = Field(default=None, alias="posterUrl")
    rating: float | None = None

    @classmethod
    def from_domain(cls, details: MovieDetails) -> "MovieDetailsResponse":
        return cls(
            id=details.id,
            title=details.title,
            year=details.year,
            runtime=details.runtime,
            genres=list(details.genres),
            actors=list(details.actors),
            plot=details.plot,
            poster_url=details.poster_url,
            rating=details.rating,
        )


class ErrorResponse(BaseModel):
    """Error body returned for failed requests."""

    message: str
    code: str | None = None
    timestamp: datetime
