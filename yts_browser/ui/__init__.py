"""User interface components using Textual framework."""

from .app import MovieBrowserApp, ROUTES, parse_detail_path, resolve_route
from .screens import (
    BaseScreen,
    MovieListScreen,
    get_registered_screens,
    get_screen_by_name,
)

__all__ = [
    "BaseScreen",
    "MovieBrowserApp",
    "MovieListScreen",
    "ROUTES",
    "get_registered_screens",
    "get_screen_by_name",
    "parse_detail_path",
    "resolve_route",
]
