"""Movie records."""

from __future__ import annotations

from records.base import RecordBase
from records.books import Tag

type MovieKey = tuple[str, str, int]


class Director(RecordBase):
    full_name: str


class Composer(RecordBase):
    full_name: str


class Role(RecordBase):
    """Character ``name`` played by ``performer``."""

    name: str
    performer: str


class Movie(RecordBase):
    """Movie record keyed by title, original title and year."""

    title: str
    original_title: str = ""
    year_of_publication: int = 0
    aspect_ratio: str = ""
    runtime: int = 0
    roles: tuple[Role, ...] = ()
    directors: tuple[Director, ...] = ()
    composers: tuple[Composer, ...] = ()
    tags: tuple[Tag, ...] = ()


def movie_key(movie: Movie) -> MovieKey:
    """Return the composite store key of ``movie``."""
    return (movie.title, movie.original_title, movie.year_of_publication)


__all__ = ["Composer", "Director", "Movie", "MovieKey", "Role", "movie_key"]
