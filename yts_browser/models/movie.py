"""Movie records as returned by the catalog."""

from dataclasses import dataclass
from typing import Any


def movie_detail_path(movie_id: int) -> str:
    """Destination of the per-movie detail view."""
    return f"/movies/{movie_id}"


def _require(payload: dict[str, Any], key: str, kinds: tuple[type, ...]) -> Any:
    if key not in payload:
        raise ValueError(f"movie is missing '{key}'")
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, kinds):
        raise ValueError(f"movie field '{key}' has unexpected type {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Movie:
    """A single catalog entry."""
    id: int
    title: str
    year: int
    rating: float
    runtime: int
    genres: tuple[str, ...]
    medium_cover_image: str
    title_long: str = ""
    slug: str = ""
    url: str = ""
    summary: str = ""

    @property
    def detail_path(self) -> str:
        return movie_detail_path(self.id)

    @classmethod
    def from_api(cls, payload: Any) -> "Movie":
        """Build a Movie from one element of ``data.movies``.

        Raises:
            ValueError: If a required field is missing or has the wrong type
        """
        if not isinstance(payload, dict):
            raise ValueError(f"movie entry is a {type(payload).__name__}, expected an object")

        genres_raw = payload.get("genres") or []
        if not isinstance(genres_raw, list) or not all(isinstance(g, str) for g in genres_raw):
            raise ValueError("movie field 'genres' must be a list of strings")

        return cls(
            id=_require(payload, "id", (int,)),
            title=_require(payload, "title", (str,)),
            year=_require(payload, "year", (int,)),
            rating=float(_require(payload, "rating", (int, float))),
            runtime=_require(payload, "runtime", (int,)),
            genres=tuple(genres_raw),
            medium_cover_image=_require(payload, "medium_cover_image", (str,)),
            title_long=str(payload.get("title_long") or ""),
            slug=str(payload.get("slug") or ""),
            url=str(payload.get("url") or ""),
            summary=str(payload.get("summary") or ""),
        )


@dataclass(frozen=True)
class MoviePage:
    """One page of catalog results."""
    movies: tuple[Movie, ...]
    movie_count: int = 0
    page_number: int = 1
    limit: int = 0

    @classmethod
    def from_api(cls, body: Any) -> "MoviePage":
        """Parse a ``list_movies.json`` response body.

        The catalog leaves out ``data.movies`` entirely when a page has no
        results; that is read as an empty page.

        Raises:
            ValueError: If the body does not have the ``data.movies`` shape
        """
        if not isinstance(body, dict):
            raise ValueError("response body is not a JSON object")
        data = body.get("data")
        if not isinstance(data, dict):
            raise ValueError("response has no 'data' object")

        movies_raw = data.get("movies", [])
        if not isinstance(movies_raw, list):
            raise ValueError("'data.movies' is not a list")

        movies = tuple(Movie.from_api(item) for item in movies_raw)

        movie_count = data.get("movie_count")
        page_number = data.get("page_number")
        limit = data.get("limit")
        return cls(
            movies=movies,
            movie_count=movie_count if isinstance(movie_count, int) else len(movies),
            page_number=page_number if isinstance(page_number, int) else 1,
            limit=limit if isinstance(limit, int) else len(movies),
        )


def format_movie_card(movie: Movie) -> dict[str, str]:
    """Get display information for a movie card.

    Args:
        movie: The movie to describe

    Returns:
        Dictionary with the card title, the rating/year/runtime line, the
        cover image URL and the detail destination
    """
    return {
        "title": movie.title,
        "details": f"{movie.rating:g} / 10 | {movie.year} | {movie.runtime} min",
        "cover": movie.medium_cover_image,
        "genres": ", ".join(movie.genres),
        "path": movie.detail_path,
    }
