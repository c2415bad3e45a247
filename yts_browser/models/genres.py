"""Distinct genre derivation."""

from collections.abc import Iterable

from .movie import Movie


def collect_genres(movies: Iterable[Movie]) -> tuple[str, ...]:
    """Union of every movie's genres, without duplicates.

    Genres keep the order in which the catalog first returned them.
    """
    seen: dict[str, None] = {}
    for movie in movies:
        for genre in movie.genres:
            seen.setdefault(genre, None)
    return tuple(seen)
