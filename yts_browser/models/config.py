"""Configuration data models."""

from dataclasses import dataclass

DEFAULT_API_URL = "https://yts.mx/api/v2/list_movies.json"


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    api_url: str = DEFAULT_API_URL
    request_timeout: float = 30.0
    max_retries: int = 0  # Catalog fetches are not retried by default
    log_level: str = "INFO"
    default_limit: int = 50  # Movies per page
