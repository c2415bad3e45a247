"""Movie browser service: owns the view state and runs the catalog fetches."""

import asyncio
from collections.abc import Callable
from typing import Any

import structlog

from ..models.options import QueryOptions
from ..models.state import (
    BrowserEvent,
    BrowserState,
    FetchFailed,
    FetchSucceeded,
    GenresFailed,
    GenresLoaded,
    GenresRequested,
    OptionsChanged,
    reduce,
)
from .catalog import CatalogService
from .errors import FetchFailure, ValidationError, to_fetch_failure

log = structlog.stdlib.get_logger()

StateListener = Callable[[BrowserState], None]


class MovieBrowserService:
    """Query state holder for the movie list.

    Option changes only trigger a movie fetch. Genres are fetched by an
    independent task, once per mount and again with each later fetch cycle
    while they are failed.
    Results are tagged with the generation they were requested under and
    stale ones are dropped by the state transition.
    """

    def __init__(
        self,
        catalog: CatalogService,
        options: QueryOptions | None = None,
    ) -> None:
        """Initialize the browser service.

        Args:
            catalog: Catalog service used for both fetches
            options: Initial options (defaults when omitted)
        """
        self.catalog: CatalogService = catalog
        self._state: BrowserState = BrowserState(options=options or QueryOptions())
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> BrowserState:
        return self._state

    @property
    def options(self) -> QueryOptions:
        return self._state.options

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a callback invoked after every state change.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: BrowserEvent) -> BrowserState:
        """Apply an event and notify listeners if the state changed."""
        new_state = reduce(self._state, event)
        if new_state is self._state:
            log.debug("Discarded stale result", event=type(event).__name__)
            return new_state
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
        return new_state

    def set_option(self, name: str, value: Any) -> int:
        """Replace one option and start a new movie request generation.

        Args:
            name: Option name
            value: New value

        Returns:
            The generation the caller should pass to ``fetch_movies``

        Raises:
            ValidationError: If the option or value is not legal
        """
        try:
            options = self._state.options.with_option(name, value)
        except ValueError as e:
            raise ValidationError(str(e), field=name, value=value) from e

        state = self.dispatch(OptionsChanged(options))
        log.info("Option changed", option=name, value=str(value), generation=state.generation)
        return state.generation

    def goto_page(self, page: int) -> int:
        return self.set_option("page", page)

    def previous_page(self) -> int:
        """Go one page back. Page 1 goes to page 0; the page is not clamped."""
        return self.goto_page(self._state.options.page - 1)

    def next_page(self) -> int:
        return self.goto_page(self._state.options.page + 1)

    def refresh(self) -> int:
        """Re-issue the current options under a new generation."""
        state = self.dispatch(OptionsChanged(self._state.options))
        log.info("Refresh requested", generation=state.generation)
        return state.generation

    def request_genres(self) -> int:
        """Start a new genre request generation."""
        return self.dispatch(GenresRequested()).genre_generation

    def retry_genres(self) -> int | None:
        """Start a new genre generation if the last genre fetch failed.

        Returns:
            The generation to pass to ``fetch_genres``, or None when the
            genres loaded fine and need no refetch
        """
        if not self._state.genres_error:
            return None
        generation = self.request_genres()
        log.info("Retrying genre fetch", genre_generation=generation)
        return generation

    async def fetch_movies(self, generation: int) -> None:
        """Fetch movies for the current options and record the outcome.

        Args:
            generation: Generation returned by the call that triggered the fetch
        """
        options = self._state.options
        try:
            page = await self.catalog.list_movies(options)
        except asyncio.CancelledError:
            raise
        except FetchFailure as e:
            self.dispatch(FetchFailed(generation, e.message))
            return
        except Exception as e:
            failure = to_fetch_failure(e, url=self.catalog.api_url)
            log.error("Unexpected movie fetch error", error=str(e), exc_info=True)
            self.dispatch(FetchFailed(generation, failure.message))
            return
        self.dispatch(FetchSucceeded(generation, page))

    async def fetch_genres(self, generation: int) -> None:
        """Fetch the distinct genres and record the outcome."""
        try:
            genres = await self.catalog.list_genres()
        except asyncio.CancelledError:
            raise
        except FetchFailure as e:
            self.dispatch(GenresFailed(generation, e.message))
            return
        except Exception as e:
            failure = to_fetch_failure(e, url=self.catalog.api_url)
            log.error("Unexpected genre fetch error", error=str(e), exc_info=True)
            self.dispatch(GenresFailed(generation, failure.message))
            return
        self.dispatch(GenresLoaded(generation, genres))

    async def load(self) -> None:
        """Mount sequence: movies and genres are fetched concurrently."""
        generation = self.refresh()
        genre_generation = self.request_genres()
        log.info("Loading movie browser", generation=generation)
        await asyncio.gather(
            self.fetch_movies(generation),
            self.fetch_genres(genre_generation),
        )
