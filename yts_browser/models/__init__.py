"""Data models for the YTS movie browser."""

from .config import AppConfig, DEFAULT_API_URL
from .genres import collect_genres
from .movie import Movie, MoviePage, format_movie_card, movie_detail_path
from .options import OPTION_NAMES, OrderBy, Quality, QueryOptions, SortBy, coerce_option
from .state import (
    BrowserEvent,
    BrowserState,
    FetchFailed,
    FetchSucceeded,
    GenresFailed,
    GenresLoaded,
    GenresRequested,
    OptionsChanged,
    ViewMode,
    reduce,
    view_mode,
)

__all__ = [
    "AppConfig",
    "BrowserEvent",
    "BrowserState",
    "DEFAULT_API_URL",
    "FetchFailed",
    "FetchSucceeded",
    "GenresFailed",
    "GenresLoaded",
    "GenresRequested",
    "Movie",
    "MoviePage",
    "OPTION_NAMES",
    "OptionsChanged",
    "OrderBy",
    "Quality",
    "QueryOptions",
    "SortBy",
    "ViewMode",
    "coerce_option",
    "collect_genres",
    "format_movie_card",
    "movie_detail_path",
    "reduce",
    "view_mode",
]
