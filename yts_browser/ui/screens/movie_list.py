"""Movie list screen: filter controls, movie grid and pagination."""

from typing import Any, ClassVar, override

from textual.app import ComposeResult
from textual.binding import Binding, BindingType
from textual.containers import Container, Grid, Horizontal, Vertical, VerticalScroll
from textual.widgets import (
    Button,
    Checkbox,
    ContentSwitcher,
    Input,
    LoadingIndicator,
    Select,
    Static,
)

import structlog

from ...models.movie import Movie
from ...models.options import OrderBy, Quality, QueryOptions, SortBy
from ...models.state import BrowserState, ViewMode, view_mode
from ...services.browser import MovieBrowserService
from ...services.errors import ValidationError
from ..widgets import MovieCard, PaginationStrip

from .base import BaseScreen

log = structlog.stdlib.get_logger()


QUALITY_CHOICES: list[tuple[str, Quality]] = [(q.value, q) for q in Quality]
RATING_CHOICES: list[tuple[str, int]] = [(str(i), i) for i in range(10)]
SORT_CHOICES: list[tuple[str, SortBy]] = [
    ("Title", SortBy.TITLE),
    ("Year", SortBy.YEAR),
    ("Rating", SortBy.RATING),
    ("Most watched", SortBy.DOWNLOAD_COUNT),
    ("Popular", SortBy.LIKE_COUNT),
]
ORDER_CHOICES: list[tuple[str, OrderBy]] = [
    ("Ascending", OrderBy.ASC),
    ("Descending", OrderBy.DESC),
]

# Select widget id -> option it drives
SELECT_OPTIONS: dict[str, str] = {
    "quality-select": "quality",
    "rating-select": "minimum_rating",
    "genre-select": "genre",
    "sort-select": "sort_by",
    "order-select": "order_by",
}


def select_value_to_option(name: str, value: Any) -> Any:
    """Map a Select value to an option value; the blank choice means the default."""
    if value is Select.BLANK or value is None:
        return getattr(QueryOptions(), name)
    return value


def is_new_value(options: QueryOptions, name: str, value: Any) -> bool:
    """Whether a control event carries a value the option does not hold yet.

    Textual also posts change events when a control is set programmatically or
    re-mounted; those echo the current value and must not start a fetch cycle.
    Calls made directly on the browser service are never filtered.
    """
    return getattr(options, name) != value


def describe_results(state: BrowserState) -> tuple[str, str]:
    """Stats line shown above the grid: total matches and the current page."""
    return (
        f"Movies: {state.movie_count}",
        f"Page: {state.options.page}  Showing: {len(state.movies)}",
    )


class MovieListScreen(BaseScreen):
    """Filterable, paginated grid of movies from the catalog.

    Shows exactly one of three views: a loading indicator while a fetch is in
    flight, a full-screen error message when the last fetch failed, or the
    filter controls, movie grid and pagination strip.
    """

    SCREEN_TITLE: ClassVar[str] = "Movies"
    SCREEN_NAME: ClassVar[str] = "movie_list"

    CSS: ClassVar[str] = """
    MovieListScreen {
        align: center middle;
    }

    #browser-container {
        width: 100%;
        height: 100%;
        padding: 0 1;
    }

    #view-switcher {
        height: 1fr;
    }

    #view-loading, #view-error {
        align: center middle;
        height: 100%;
    }

    #error-message {
        text-align: center;
        color: $error;
        text-style: bold;
    }

    .hint {
        text-align: center;
        color: $text-muted;
        margin-top: 1;
    }

    #view-ready {
        height: 100%;
    }

    #search-input {
        width: 100%;
    }

    #filter-row {
        height: auto;
        margin-top: 1;
    }

    #filter-row Select {
        width: 1fr;
        margin-right: 1;
    }

    #rt-checkbox {
        width: auto;
    }

    #stats-row {
        height: auto;
        margin: 1 0;
    }

    .search-stat {
        color: $text-muted;
        margin-right: 2;
        width: auto;
    }

    #movie-scroll {
        height: 1fr;
    }

    #movie-grid {
        grid-size: 4;
        grid-gutter: 1 2;
        height: auto;
    }

    #no-results {
        text-align: center;
        color: $text-muted;
        padding: 2;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("escape", "go_back", "Back", show=True),
        Binding("f", "focus_search", "Search", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        Binding("[", "previous_page", "Prev page", show=True),
        Binding("]", "next_page", "Next page", show=True),
    ]

    _unsubscribe: Any
    _movies_shown: tuple[Movie, ...] | None
    _genres_shown: tuple[str, ...] | None

    def __init__(self) -> None:
        """Initialize the movie list screen."""
        super().__init__()
        self._unsubscribe = None
        self._movies_shown = None
        self._genres_shown = None

    @property
    def browser(self) -> MovieBrowserService:
        return self.browser_app.browser

    @override
    def compose(self) -> ComposeResult:
        """Compose the movie list layout."""
        with Container(id="browser-container"):
            with ContentSwitcher(initial="view-loading", id="view-switcher"):
                with Vertical(id="view-loading"):
                    yield LoadingIndicator()

                with Vertical(id="view-error"):
                    yield Static("", id="error-message", markup=False)
                    yield Static("Press r to try again", classes="hint")

                with Vertical(id="view-ready"):
                    yield Input(placeholder="Search", id="search-input")
                    with Horizontal(id="filter-row"):
                        yield Select(QUALITY_CHOICES, prompt="Quality", id="quality-select")
                        yield Select(RATING_CHOICES, prompt="Rating", id="rating-select")
                        yield Select([], prompt="Genre", id="genre-select")
                        yield Select(SORT_CHOICES, prompt="Sort By", id="sort-select")
                        yield Select(ORDER_CHOICES, prompt="Order By", id="order-select")
                        yield Checkbox("RT ratings", id="rt-checkbox")

                    with Horizontal(id="stats-row"):
                        yield Static("Movies: 0", id="stat-total", classes="search-stat")
                        yield Static("Page: 1", id="stat-page", classes="search-stat")

                    yield Static("No movies match your filters.", id="no-results")
                    with VerticalScroll(id="movie-scroll"):
                        yield Grid(id="movie-grid")
                    yield PaginationStrip(id="pagination")

    @override
    async def on_mount(self) -> None:
        """Subscribe to browser state and issue the movie and genre fetches."""
        await super().on_mount()
        self._unsubscribe = self.browser.subscribe(self._on_state_changed)
        await self._render_state(self.browser.state)

        self._start_movie_fetch(self.browser.refresh())
        self._start_genre_fetch(self.browser.request_genres())

    @override
    async def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        await super().on_unmount()

    def _start_movie_fetch(self, generation: int) -> None:
        # Earlier fetches are left running; their results are discarded as stale
        _ = self.run_worker(
            self.browser.fetch_movies(generation),
            name=f"movies-{generation}",
            group="movies",
        )

    def _start_genre_fetch(self, generation: int) -> None:
        _ = self.run_worker(
            self.browser.fetch_genres(generation),
            name=f"genres-{generation}",
            group="genres",
        )

    def _start_fetch_cycle(self, generation: int) -> None:
        """Fetch movies for a new generation, and the genres again if they failed."""
        self._start_movie_fetch(generation)
        genre_generation = self.browser.retry_genres()
        if genre_generation is not None:
            self._start_genre_fetch(genre_generation)

    def _on_state_changed(self, state: BrowserState) -> None:
        self.call_later(self._render_state, state)

    def _apply_option(self, name: str, value: Any) -> None:
        """Push one control change into the browser and fetch the new page."""
        if not is_new_value(self.browser.options, name, value):
            return
        try:
            generation = self.browser.set_option(name, value)
        except ValidationError as e:
            _ = self.handle_exception(e, "set_option", context={"field": name})
            return
        self._start_fetch_cycle(generation)

    async def _render_state(self, state: BrowserState) -> None:
        """Render the latest browser state."""
        if state is not self.browser.state:
            # A newer render is already queued
            return

        mode = view_mode(state)
        switcher = self.query_one("#view-switcher", ContentSwitcher)
        switcher.current = f"view-{mode.value}"

        if mode == ViewMode.ERROR:
            self.query_one("#error-message", Static).update(f"Error: {state.error}")
            return
        if mode == ViewMode.LOADING:
            return

        total_text, page_text = describe_results(state)
        self.query_one("#stat-total", Static).update(total_text)
        self.query_one("#stat-page", Static).update(page_text)
        self.query_one("#pagination", PaginationStrip).set_current_page(state.options.page)

        if state.genres != self._genres_shown:
            self._update_genre_options(state)

        if state.movies is not self._movies_shown:
            await self._refresh_grid(state.movies)

    def _update_genre_options(self, state: BrowserState) -> None:
        genre_select = self.query_one("#genre-select", Select)
        # Replacing the options blanks the value; that is not a user choice
        with genre_select.prevent(Select.Changed):
            genre_select.set_options([(genre, genre) for genre in state.genres])
            if state.options.genre in state.genres:
                genre_select.value = state.options.genre
        self._genres_shown = state.genres

    async def _refresh_grid(self, movies: tuple[Movie, ...]) -> None:
        """Replace the movie cards with ``movies``."""
        self._movies_shown = movies
        grid = self.query_one("#movie-grid", Grid)
        await grid.remove_children()
        await grid.mount_all([MovieCard(movie) for movie in movies])

        no_results = self.query_one("#no-results", Static)
        scroll = self.query_one("#movie-scroll", VerticalScroll)
        no_results.display = len(movies) == 0
        scroll.display = len(movies) > 0

        log.debug("Movie grid rendered", movie_count=len(movies))

    def on_input_changed(self, event: Input.Changed) -> None:
        """Search term changes refetch as the user types."""
        if event.input.id == "search-input":
            self._apply_option("query_term", event.value)

    def on_select_changed(self, event: Select.Changed) -> None:
        """Handle filter selection changes."""
        name = SELECT_OPTIONS.get(event.select.id or "")
        if name is None:
            return
        self._apply_option(name, select_value_to_option(name, event.value))

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        if event.checkbox.id == "rt-checkbox":
            self._apply_option("with_rt_ratings", event.value)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle pagination buttons."""
        button_id = event.button.id or ""
        if button_id == "page-prev":
            await self.action_previous_page()
        elif button_id == "page-next":
            await self.action_next_page()
        elif button_id.startswith("page-"):
            self._start_fetch_cycle(self.browser.goto_page(int(button_id.removeprefix("page-"))))

    async def action_previous_page(self) -> None:
        self._start_fetch_cycle(self.browser.previous_page())

    async def action_next_page(self) -> None:
        self._start_fetch_cycle(self.browser.next_page())

    def action_refresh(self) -> None:
        """Refetch the current page, and the genres if they failed."""
        self._start_fetch_cycle(self.browser.refresh())

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()
