"""Screen components for the TUI application."""

from .base import BaseScreen
from .movie_list import MovieListScreen

# Screen registry for navigation
_SCREEN_REGISTRY: dict[str, type[BaseScreen]] = {
    "movie_list": MovieListScreen,
}


def get_screen_by_name(name: str) -> BaseScreen | None:
    """Get a screen instance by its registered name.

    Args:
        name: The registered name of the screen

    Returns:
        A new instance of the screen, or None if not found
    """
    screen_class = _SCREEN_REGISTRY.get(name)
    if screen_class:
        return screen_class()
    return None


def get_registered_screens() -> list[str]:
    """Get a list of all registered screen names."""
    return list(_SCREEN_REGISTRY.keys())


__all__ = [
    "BaseScreen",
    "MovieListScreen",
    "get_screen_by_name",
    "get_registered_screens",
]
