"""Favorites domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Favorite:
    """A movie saved to a session's favorites.

    Identity is the movie id alone; two favorites with the same id compare
    equal regardless of their display fields.
    """

    id: int
    title: str | None = field(default=None, compare=False)
    year: str | None = field(default=None, compare=False)
    poster_url: str | None = field(default=None, compare=False)
