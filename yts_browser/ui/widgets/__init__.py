"""Custom widgets for the TUI application."""

from .movie_card import MovieCard
from .pagination import PAGE_BUTTON_COUNT, PaginationStrip, pagination_labels

__all__ = [
    "MovieCard",
    "PAGE_BUTTON_COUNT",
    "PaginationStrip",
    "pagination_labels",
]
