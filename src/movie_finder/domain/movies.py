"""Movie domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MovieListItem:
    """Compact movie entry returned by search."""

    id: int | None
    title: str | None = field(default=None, compare=False)
    year: str | None = field(default=None, compare=False)
    poster_url: str | None = field(default=None, compare=False)


@dataclass(frozen=True)
class MoviePage:
    """One page of search results."""

    items: tuple[MovieListItem, ...] = ()
    page: int = 1
    total: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items or ()))
        object.__setattr__(self, "page", max(self.page, 1))
        object.__setattr__(self, "total", max(self.total, 0))


@dataclass(frozen=True)
class MovieDetails:
    """Full movie information."""

    id: int | None
    title: str | None
    year: str | None
    runtime: int | None
    genres: tuple[str, ...]
    actors: tuple[str, ...]
    plot: str | None
    poster_url: str | None
    rating: float | None
