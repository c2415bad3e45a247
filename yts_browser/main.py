"""Main entry point for the YTS movie browser.

This module provides the application entry point with:
- Command-line argument parsing
- Application initialization and dependency injection
- Resource cleanup on exit
"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from . import __version__
from .models import AppConfig, QueryOptions, ViewMode, format_movie_card, view_mode
from .services.browser import MovieBrowserService
from .services.catalog import CatalogService
from .services.config import ConfigurationService
from .services.http_client import HttpClientService
from .services.logging import setup_logging


log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Container for application services.

    Services are built lazily from the loaded configuration and closed in
    ``cleanup``.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        log_level: str = "INFO",
        log_dir: Path | None = None,
    ) -> None:
        """Initialize the application context.

        Args:
            config_path: Path to configuration file
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (None for console only)
        """
        self._config_path: Path | None = config_path
        self.log_level: str = log_level
        self._log_dir: Path | None = log_dir

        self._config_service: ConfigurationService | None = None
        self._config: AppConfig | None = None
        self._http_client: HttpClientService | None = None
        self._catalog: CatalogService | None = None
        self._browser: MovieBrowserService | None = None

    @property
    def config_service(self) -> ConfigurationService:
        if self._config_service is None:
            self._config_service = ConfigurationService(config_path=self._config_path)
        return self._config_service

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            self._config = self.config_service.load_config()
        return self._config

    @property
    def http_client(self) -> HttpClientService:
        if self._http_client is None:
            self._http_client = HttpClientService(
                timeout=self.config.request_timeout,
                max_retries=self.config.max_retries,
            )
        return self._http_client

    @property
    def catalog(self) -> CatalogService:
        if self._catalog is None:
            self._catalog = CatalogService(
                http_client=self.http_client,
                api_url=self.config.api_url,
            )
        return self._catalog

    @property
    def browser(self) -> MovieBrowserService:
        if self._browser is None:
            self._browser = MovieBrowserService(
                catalog=self.catalog,
                options=QueryOptions(limit=self.config.default_limit),
            )
        return self._browser

    async def cleanup(self) -> None:
        """Close connections."""
        log.info("Cleaning up application resources")
        if self._http_client is not None:
            await self._http_client.close()
        log.info("Application cleanup complete")


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        config: Path | None,
        log_level: str | None,
        log_dir: Path | None,
        no_tui: bool,
    ) -> None:
        self.config: Path | None = config
        self.log_level: str | None = log_level
        self.log_dir: Path | None = log_dir
        self.no_tui: bool = no_tui


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse (defaults to ``sys.argv[1:]``)

    Returns:
        Parsed arguments container
    """
    parser = argparse.ArgumentParser(
        prog="yts-browser",
        description="Browse the YTS movie catalog from the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  yts-browser                          Start the TUI application
  yts-browser --log-level DEBUG        Start with debug logging
  yts-browser --no-tui                 Print the first page and exit
        """
    )

    _ = parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/yts-browser/config.json)"
    )

    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set the logging level (default: log_level from the config file, INFO)"
    )

    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: ./logs in TUI mode, console only otherwise)"
    )

    _ = parser.add_argument(
        "--no-tui",
        action="store_true",
        help="Print the first page of movies instead of starting the TUI"
    )

    ns = parser.parse_args(argv)

    return ParsedArgs(
        config=ns.config,
        log_level=ns.log_level,
        log_dir=ns.log_dir,
        no_tui=bool(ns.no_tui),
    )


def resolve_log_level(cli_level: str | None, config: AppConfig) -> str:
    """The command-line level wins; otherwise the configured one applies."""
    return cli_level or config.log_level


async def run_tui(context: ApplicationContext) -> int:
    """Run the TUI application.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    from .ui.app import MovieBrowserApp

    log.info("Starting TUI application")

    try:
        app = MovieBrowserApp(browser=context.browser)
        await app.run_async()
        log.info("TUI application exited normally")
        return 0

    except Exception as e:
        log.error("TUI application error", error=str(e), exc_info=True)
        return 1
    finally:
        await context.cleanup()


def format_listing(browser: MovieBrowserService) -> list[str]:
    """Text lines for the current browser state, one per movie."""
    state = browser.state
    if view_mode(state) == ViewMode.ERROR:
        return [f"Error: {state.error}"]

    lines = []
    for movie in state.movies:
        info = format_movie_card(movie)
        lines.append(f"{info['title']}  ({info['details']})  {info['path']}")
    if state.genres:
        lines.append(f"Genres: {', '.join(state.genres)}")
    return lines


async def run_listing(context: ApplicationContext) -> int:
    """Fetch the first page with the default options and print it.

    Returns:
        Exit code (0 for success, 1 if the fetch failed)
    """
    try:
        await context.browser.load()
        for line in format_listing(context.browser):
            print(line)
        return 1 if context.browser.state.error else 0
    finally:
        await context.cleanup()


def main() -> None:
    """Main entry point for the application."""
    args = parse_arguments()

    log_dir = args.log_dir
    if log_dir is None and not args.no_tui:
        log_dir = Path("logs")

    context = ApplicationContext(config_path=args.config, log_dir=log_dir)
    log_level = resolve_log_level(args.log_level, context.config)
    context.log_level = log_level

    _ = setup_logging(
        log_level=log_level,
        log_dir=log_dir,
        tui_mode=not args.no_tui,
    )

    log.info(
        "Starting YTS movie browser",
        version=__version__,
        log_level=log_level,
        config_path=str(args.config) if args.config else "default"
    )

    try:
        if args.no_tui:
            log.info("Running in non-TUI mode")
            exit_code = asyncio.run(run_listing(context))
        else:
            exit_code = asyncio.run(run_tui(context))

    except KeyboardInterrupt:
        log.info("Application interrupted by user")
        exit_code = 130  # Standard exit code for SIGINT

    except Exception as e:
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        exit_code = 1

    log.info("Application exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
