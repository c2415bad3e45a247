"""Main Textual application with routing and screen management."""

import re
from typing import ClassVar, override

from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.widgets import Footer, Header

import structlog

from ..models.movie import movie_detail_path
from ..services.browser import MovieBrowserService
from .widgets import MovieCard


log = structlog.stdlib.get_logger()


# Navigable destinations -> registered screen names
ROUTES: dict[str, str] = {
    "/": "movie_list",
}

DETAIL_ROUTE = re.compile(r"^/movies/(?P<movie_id>\d+)$")


def resolve_route(path: str) -> str | None:
    """Get the screen registered for a destination path, if any."""
    return ROUTES.get(path)


def parse_detail_path(path: str) -> int | None:
    """Extract the movie id from a ``/movies/{id}`` destination."""
    match = DETAIL_ROUTE.match(path)
    return int(match.group("movie_id")) if match else None


class MovieBrowserApp(App[None]):
    """TUI application showing the YTS movie catalog.

    The root route shows the movie grid. Movie cards link to
    ``/movies/{id}``; the detail view behind that destination is not part of
    this application, so opening it only reports the destination.
    """

    CSS: ClassVar[str] = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True, priority=True),
        Binding("escape", "go_back", "Back", show=True),
        Binding("?", "show_help", "Help", show=True),
    ]

    _browser: MovieBrowserService
    _navigation_stack: list[str]
    _last_destination: str | None

    def __init__(self, browser: MovieBrowserService) -> None:
        """Initialize the application with its browser service.

        Args:
            browser: Service holding the movie list state
        """
        super().__init__()
        self.title = "YTS Movies"  # type: ignore[assignment]
        self.sub_title = "Catalog browser"  # type: ignore[assignment]
        self._browser = browser
        self._navigation_stack = []
        self._last_destination = None

        log.info("MovieBrowserApp initialized")

    @property
    def browser(self) -> MovieBrowserService:
        return self._browser

    @property
    def navigation_stack(self) -> list[str]:
        """Get a copy of the current navigation stack."""
        return self._navigation_stack.copy()

    @property
    def last_destination(self) -> str | None:
        """The most recently opened destination path."""
        return self._last_destination

    @override
    def compose(self) -> ComposeResult:
        yield Header()
        yield Footer()

    async def on_mount(self) -> None:
        log.info("Application mounted")
        await self.open_path("/")

    async def open_path(self, path: str) -> bool:
        """Navigate to a destination path.

        Args:
            path: Destination such as ``/`` or ``/movies/42``

        Returns:
            True if a screen was pushed for the destination
        """
        self._last_destination = path
        screen_name = resolve_route(path)
        if screen_name is not None:
            await self.push_screen_with_tracking(screen_name)
            return True

        movie_id = parse_detail_path(path)
        if movie_id is not None:
            log.info("Movie detail requested", path=path, movie_id=movie_id)
            self.notify(f"Movie details: {path}")
        else:
            log.warning("Unknown destination requested", path=path)
        return False

    async def push_screen_with_tracking(self, screen_name: str) -> None:
        """Push a screen and track it in the navigation stack.

        Args:
            screen_name: Name of the screen to push
        """
        # Lazy import to avoid circular dependency
        from .screens import get_screen_by_name

        screen = get_screen_by_name(screen_name)
        if screen:
            self._navigation_stack.append(screen_name)
            await self.push_screen(screen)
            log.info("Screen pushed", screen=screen_name, stack_depth=len(self._navigation_stack))
        else:
            log.warning("Unknown screen requested", screen=screen_name)

    async def action_go_back(self) -> None:
        """Navigate back to the previous screen, or quit from the root."""
        if len(self._navigation_stack) > 1:
            current = self._navigation_stack.pop()
            log.info("Navigating back", from_screen=current, stack_depth=len(self._navigation_stack))
            _ = self.pop_screen()
        else:
            log.info("Quit requested from root screen")
            self.exit()

    async def action_show_help(self) -> None:
        log.info("Help requested")
        self.notify(
            "q quit · f search · r refresh · [ ] previous/next page · enter open movie"
        )

    async def on_movie_card_selected(self, event: MovieCard.Selected) -> None:
        """Open the destination of the selected movie card."""
        _ = await self.open_path(movie_detail_path(event.movie.id))
