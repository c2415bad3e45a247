"""Browser view state and its transition function.

All view state lives in one immutable ``BrowserState``. Every change goes
through ``reduce`` with one of the event types below, so each transition can
be exercised without any rendering.

Movie and genre requests carry the generation they were issued under. A
result whose generation is no longer the latest one issued is dropped, so a
slow response can never overwrite the result of a newer request.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

from .movie import Movie, MoviePage
from .options import QueryOptions


class ViewMode(Enum):
    """Mutually exclusive render states of the movie list."""
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


@dataclass(frozen=True)
class BrowserState:
    """Everything the movie list renders from."""
    options: QueryOptions = field(default_factory=QueryOptions)
    movies: tuple[Movie, ...] = ()
    genres: tuple[str, ...] = ()
    loading: bool = True
    movies_error: str | None = None
    genres_error: str | None = None
    movie_count: int = 0
    generation: int = 0
    genre_generation: int = 0
    # Movie generation in flight when the genres last failed
    genres_failed_generation: int = 0

    @property
    def error(self) -> str | None:
        """The single view-level error, whichever request produced it."""
        return self.movies_error or self.genres_error


@dataclass(frozen=True)
class OptionsChanged:
    options: QueryOptions


@dataclass(frozen=True)
class FetchSucceeded:
    generation: int
    page: MoviePage


@dataclass(frozen=True)
class FetchFailed:
    generation: int
    message: str


@dataclass(frozen=True)
class GenresRequested:
    pass


@dataclass(frozen=True)
class GenresLoaded:
    generation: int
    genres: tuple[str, ...]


@dataclass(frozen=True)
class GenresFailed:
    generation: int
    message: str


BrowserEvent = (
    OptionsChanged
    | FetchSucceeded
    | FetchFailed
    | GenresRequested
    | GenresLoaded
    | GenresFailed
)


def reduce(state: BrowserState, event: BrowserEvent) -> BrowserState:
    """Apply one event to the state.

    Args:
        state: Current state
        event: The transition to apply

    Returns:
        The new state, or ``state`` itself when the event is a stale result
    """
    match event:
        case OptionsChanged(options=options):
            return replace(
                state,
                options=options,
                loading=True,
                generation=state.generation + 1,
            )
        case FetchSucceeded(generation=generation, page=page):
            if generation != state.generation:
                return state
            # A later fetch cycle than the one the genres failed in clears that error
            genres_error = state.genres_error
            if generation > state.genres_failed_generation:
                genres_error = None
            return replace(
                state,
                movies=page.movies,
                movie_count=page.movie_count,
                loading=False,
                movies_error=None,
                genres_error=genres_error,
            )
        case FetchFailed(generation=generation, message=message):
            if generation != state.generation:
                return state
            return replace(state, loading=False, movies_error=message)
        case GenresRequested():
            return replace(state, genre_generation=state.genre_generation + 1)
        case GenresLoaded(generation=generation, genres=genres):
            if generation != state.genre_generation:
                return state
            return replace(state, genres=genres, genres_error=None)
        case GenresFailed(generation=generation, message=message):
            if generation != state.genre_generation:
                return state
            return replace(
                state,
                genres_error=message,
                genres_failed_generation=state.generation,
            )
    raise TypeError(f"Unknown browser event: {event!r}")


def view_mode(state: BrowserState) -> ViewMode:
    """Pick the render state; an error hides both stale data and loading."""
    if state.error:
        return ViewMode.ERROR
    if state.loading:
        return ViewMode.LOADING
    return ViewMode.READY
