"""HTTP client service with optional retry logic."""

import asyncio
from typing import Any

import httpx
import structlog

log = structlog.stdlib.get_logger()


class HttpClientService:
    """HTTP client service with timeout handling and optional retries."""

    def __init__(
        self,
        timeout: float = 30.0,
        max_retries: int = 0,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        verify_ssl: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client service.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum number of retry attempts (0 disables retries)
            base_delay: Base delay for exponential backoff in seconds
            max_delay: Maximum delay between retries in seconds
            verify_ssl: Whether to verify SSL certificates
            transport: Optional transport, used to stub the network in tests
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={
                "User-Agent": "YTS-Movie-Browser/0.1",
                "Accept": "application/json",
            },
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
            verify=verify_ssl,
            transport=transport,
        )

        log.info(
            "HTTP client service initialized",
            timeout=timeout,
            max_retries=max_retries,
            verify_ssl=verify_ssl,
        )

    async def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None
    ) -> httpx.Response:
        """Make a GET request.

        Args:
            url: The URL to request
            headers: Optional additional headers
            params: Optional query parameters

        Returns:
            HTTP response object

        Raises:
            httpx.HTTPStatusError: If the response status is not 2xx
            httpx.RequestError: If the request could not be completed
        """
        for attempt in range(self.max_retries + 1):
            try:
                log.debug(
                    "Making HTTP GET request",
                    url=url,
                    params=params,
                    attempt=attempt + 1,
                    max_attempts=self.max_retries + 1
                )

                response = await self._client.get(url, headers=headers, params=params)
                response.raise_for_status()

                log.info(
                    "HTTP GET request successful",
                    url=url,
                    status_code=response.status_code,
                    content_length=len(response.content)
                )

                return response

            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                log.warning(
                    "HTTP GET request failed",
                    url=url,
                    attempt=attempt + 1,
                    error=str(e),
                    error_type=type(e).__name__
                )

                # Client errors other than rate limiting will not get better on retry
                if isinstance(e, httpx.HTTPStatusError):
                    status_code = e.response.status_code
                    if 400 <= status_code < 500 and status_code != 429:
                        log.error("Client error, not retrying", status_code=status_code)
                        raise

                if attempt == self.max_retries:
                    if self.max_retries:
                        log.error(
                            "HTTP GET request failed after all retries",
                            url=url,
                            total_attempts=self.max_retries + 1
                        )
                    raise

                delay = min(self.base_delay * (2 ** attempt), self.max_delay)
                log.info("Retrying after delay", delay=delay)
                await asyncio.sleep(delay)

        # This should never be reached, but satisfy type checker
        raise RuntimeError("Unexpected end of retry loop")

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._client.aclose()
        log.info("HTTP client closed")

    async def __aenter__(self) -> "HttpClientService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
