"""Catalog service: movie listing and genre aggregation over list_movies.json."""

import json

import httpx
import structlog

from ..models.config import DEFAULT_API_URL
from ..models.genres import collect_genres
from ..models.movie import MoviePage
from ..models.options import QueryOptions
from .errors import to_fetch_failure
from .http_client import HttpClientService

log = structlog.stdlib.get_logger()


class CatalogService:
    """Service for querying the public movie catalog."""

    def __init__(
        self,
        http_client: HttpClientService,
        api_url: str = DEFAULT_API_URL,
    ) -> None:
        """Initialize the catalog service.

        Args:
            http_client: HTTP client service for making requests
            api_url: Full URL of the list_movies.json endpoint
        """
        self.http_client: HttpClientService = http_client
        self.api_url: str = api_url
        log.info("Catalog service initialized", api_url=api_url)

    async def list_movies(self, options: QueryOptions) -> MoviePage:
        """Fetch one page of movies matching the options.

        Every option is sent as a query parameter with its current value.

        Args:
            options: Filter, sort and pagination options

        Returns:
            The parsed page of movies

        Raises:
            FetchFailure: On network errors, non-2xx responses or a body
                without the ``data.movies`` shape
        """
        params = options.to_params()
        log.debug("Listing movies", params=params)
        page = await self._fetch_page(params)
        log.info(
            "Movies listed",
            page=options.page,
            returned=len(page.movies),
            movie_count=page.movie_count,
        )
        return page

    async def list_genres(self) -> tuple[str, ...]:
        """Fetch the unfiltered listing and derive its distinct genres.

        Returns:
            Genres in the order the catalog first returned them

        Raises:
            FetchFailure: Same conditions as ``list_movies``
        """
        page = await self._fetch_page(None)
        genres = collect_genres(page.movies)
        log.info("Genres collected", genre_count=len(genres), movies_scanned=len(page.movies))
        return genres

    async def _fetch_page(self, params: dict[str, str] | None) -> MoviePage:
        try:
            response = await self.http_client.get(self.api_url, params=params)
            return MoviePage.from_api(response.json())
        except (httpx.HTTPError, json.JSONDecodeError, ValueError) as e:
            failure = to_fetch_failure(e, url=self.api_url)
            log.warning(
                "Catalog request failed",
                url=self.api_url,
                error=failure.message,
                error_type=type(e).__name__,
            )
            raise failure from e
