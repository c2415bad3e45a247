"""Tests for the movie list screen, its widgets and app navigation."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from hypothesis import given, strategies as st, settings
from textual.widgets import ContentSwitcher, Select, Static

from yts_browser.models.movie import Movie, MoviePage, format_movie_card
from yts_browser.models.options import OrderBy, Quality, QueryOptions, SortBy
from yts_browser.models.state import BrowserState
from yts_browser.services.browser import MovieBrowserService
from yts_browser.services.errors import FetchFailure
from yts_browser.ui.app import MovieBrowserApp, parse_detail_path, resolve_route
from yts_browser.ui.screens import (
    MovieListScreen,
    get_registered_screens,
    get_screen_by_name,
)
from yts_browser.ui.screens.movie_list import (
    QUALITY_CHOICES,
    SORT_CHOICES,
    describe_results,
    is_new_value,
    select_value_to_option,
)
from yts_browser.ui.widgets import PAGE_BUTTON_COUNT, MovieCard, pagination_labels


def make_movie(movie_id: int, genres: tuple[str, ...] = ("Drama",)) -> Movie:
    return Movie(
        id=movie_id,
        title=f"Movie {movie_id}",
        year=1999,
        rating=8.5,
        runtime=136,
        genres=genres,
        medium_cover_image=f"https://img.example/{movie_id}/medium-cover.jpg",
    )


def make_browser(
    movies: tuple[Movie, ...] = (),
    genres: tuple[str, ...] = ("Action", "Drama"),
) -> MovieBrowserService:
    catalog = MagicMock()
    catalog.api_url = "https://yts.example/api/v2/list_movies.json"
    catalog.list_movies = AsyncMock(return_value=MoviePage(movies=movies, movie_count=len(movies)))
    catalog.list_genres = AsyncMock(return_value=genres)
    return MovieBrowserService(catalog)


class TestPaginationLabels:
    """Tests for the pagination strip layout."""

    @given(st.integers(min_value=-5, max_value=200))
    @settings(max_examples=100)
    def test_layout_for_any_page(self, current_page: int) -> None:
        buttons = pagination_labels(current_page)

        assert len(buttons) == PAGE_BUTTON_COUNT + 2
        assert buttons[0][:2] == ("page-prev", "Previous")
        assert buttons[-1][:2] == ("page-next", "Next")
        assert [label for _, label, _ in buttons[1:-1]] == [str(n) for n in range(1, 11)]

        highlighted = [label for _, label, is_current in buttons if is_current]
        if 1 <= current_page <= PAGE_BUTTON_COUNT:
            assert highlighted == [str(current_page)]
        else:
            assert highlighted == []


class TestScreenHelpers:
    """Tests for the movie list screen's pure helpers."""

    def test_blank_select_restores_default(self) -> None:
        assert select_value_to_option("quality", Select.BLANK) is Quality.ALL
        assert select_value_to_option("sort_by", Select.BLANK) is SortBy.LIKE_COUNT
        assert select_value_to_option("genre", Select.BLANK) == ""
        assert select_value_to_option("minimum_rating", None) == 0

    def test_selected_value_passes_through(self) -> None:
        assert select_value_to_option("order_by", OrderBy.ASC) is OrderBy.ASC
        assert select_value_to_option("minimum_rating", 7) == 7

    def test_choices_cover_every_enum_member(self) -> None:
        assert {value for _, value in QUALITY_CHOICES} == set(Quality)
        assert {value for _, value in SORT_CHOICES} == set(SortBy)

    def test_echoed_control_value_is_not_new(self) -> None:
        options = QueryOptions(quality=Quality.HD_720P, query_term="heat")
        assert is_new_value(options, "quality", Quality.HD_720P) is False
        assert is_new_value(options, "query_term", "heat") is False
        assert is_new_value(options, "query_term", "heat 1995") is True
        assert is_new_value(options, "sort_by", SortBy.YEAR) is True

    def test_describe_results(self) -> None:
        state = BrowserState(
            options=QueryOptions(page=3),
            movies=(make_movie(1), make_movie(2)),
            movie_count=812,
            loading=False,
        )
        assert describe_results(state) == ("Movies: 812", "Page: 3  Showing: 2")

    def test_format_movie_card(self) -> None:
        info = format_movie_card(make_movie(42, ("Action", "Sci-Fi")))
        assert info["title"] == "Movie 42"
        assert info["details"] == "8.5 / 10 | 1999 | 136 min"
        assert info["cover"] == "https://img.example/42/medium-cover.jpg"
        assert info["genres"] == "Action, Sci-Fi"
        assert info["path"] == "/movies/42"


class TestRouting:
    """Tests for destination paths."""

    def test_root_route(self) -> None:
        assert resolve_route("/") == "movie_list"
        assert resolve_route("/settings") is None

    @pytest.mark.parametrize("path,expected", [
        ("/movies/42", 42),
        ("/movies/0", 0),
        ("/movies/", None),
        ("/movies/abc", None),
        ("/movies/42/extra", None),
        ("/", None),
    ])
    def test_parse_detail_path(self, path: str, expected: int | None) -> None:
        assert parse_detail_path(path) == expected


class TestScreenRegistry:
    """Tests for screen registry functionality."""

    def test_movie_list_is_registered(self) -> None:
        assert "movie_list" in get_registered_screens()
        assert isinstance(get_screen_by_name("movie_list"), MovieListScreen)

    def test_unknown_screen_returns_none(self) -> None:
        assert get_screen_by_name("nonexistent_screen") is None


class TestNavigationStack:
    """Tests for navigation stack management."""

    def test_app_starts_with_empty_navigation_stack(self) -> None:
        app = MovieBrowserApp(browser=make_browser())
        assert app.navigation_stack == []
        assert app.last_destination is None

    def test_navigation_stack_is_copy(self) -> None:
        app = MovieBrowserApp(browser=make_browser())
        stack = app.navigation_stack
        stack.append("test")
        assert "test" not in app.navigation_stack


class TestMovieListScreen:
    """Headless tests of the movie list screen."""

    @pytest.mark.asyncio
    async def test_ready_view_shows_one_card_per_movie(self) -> None:
        browser = make_browser(movies=(make_movie(1), make_movie(2)))
        app = MovieBrowserApp(browser=browser)

        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            await app.workers.wait_for_complete()
            await pilot.pause()
            await pilot.pause()

            screen = app.screen
            assert isinstance(screen, MovieListScreen)
            assert app.navigation_stack == ["movie_list"]
            assert screen.query_one("#view-switcher", ContentSwitcher).current == "view-ready"
            assert len(screen.query(MovieCard)) == 2
            assert browser.state.genres == ("Action", "Drama")

    @pytest.mark.asyncio
    async def test_error_view_replaces_grid(self) -> None:
        browser = make_browser(movies=(make_movie(1),))
        browser.catalog.list_movies = AsyncMock(  # type: ignore[method-assign]
            side_effect=FetchFailure("The server encountered an error. Please try again later.")
        )
        app = MovieBrowserApp(browser=browser)

        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            await app.workers.wait_for_complete()
            await pilot.pause()
            await pilot.pause()

            screen = app.screen
            assert screen.query_one("#view-switcher", ContentSwitcher).current == "view-error"
            message = screen.query_one("#error-message", Static)
            assert "Error: The server encountered an error" in str(message.render())

    @pytest.mark.asyncio
    async def test_selecting_a_card_opens_its_destination(self) -> None:
        browser = make_browser(movies=(make_movie(7),))
        app = MovieBrowserApp(browser=browser)

        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            await app.workers.wait_for_complete()
            await pilot.pause()
            await pilot.pause()

            card = app.screen.query_one(MovieCard)
            card.action_select()
            await pilot.pause(0.1)

            assert app.last_destination == "/movies/7"
            assert app.navigation_stack == ["movie_list"]

    @pytest.mark.asyncio
    async def test_page_change_recovers_from_genre_failure(self) -> None:
        browser = make_browser(movies=(make_movie(1),))
        browser.catalog.list_genres = AsyncMock(  # type: ignore[method-assign]
            side_effect=[FetchFailure("genres down"), ("Action",)]
        )
        app = MovieBrowserApp(browser=browser)

        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            await app.workers.wait_for_complete()
            await pilot.pause()

            screen = app.screen
            assert isinstance(screen, MovieListScreen)
            assert screen.query_one("#view-switcher", ContentSwitcher).current == "view-error"

            await screen.action_next_page()
            await pilot.pause(0.1)
            await app.workers.wait_for_complete()
            await pilot.pause()
            await pilot.pause()

            assert screen.query_one("#view-switcher", ContentSwitcher).current == "view-ready"
            assert browser.options.page == 2
            assert browser.state.genres == ("Action",)
