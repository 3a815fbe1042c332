"""Main entry point for the OpenCritic release checker.

This module provides:
- Command-line argument parsing
- Service construction and dependency injection
- Top-level error reporting and exit codes
"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog
from rich.console import Console

from opencritic_today import __version__
from opencritic_today.models import AppConfig
from opencritic_today.services.config import ConfigurationService
from opencritic_today.services.errors import handle_error
from opencritic_today.services.http_client import HttpClientService
from opencritic_today.services.hydrator import DetailHydrator
from opencritic_today.services.logging import setup_logging
from opencritic_today.services.opencritic_api import OpenCriticClient
from opencritic_today.services.releases import ReleaseService
from opencritic_today.ui.console import render_error, render_genres, render_platforms, render_report


log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Container for application services.

    Services are built lazily from the loaded configuration and share a
    single HTTP client, which ``cleanup`` closes.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path: Path | None = config_path

        self._config_service: ConfigurationService | None = None
        self._config: AppConfig | None = None
        self._http_client: HttpClientService | None = None
        self._api: OpenCriticClient | None = None
        self._release_service: ReleaseService | None = None

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
                verify_ssl=self.config.verify_ssl,
                max_connections=max(self.config.concurrent_requests, 1),
            )
        return self._http_client

    @property
    def api(self) -> OpenCriticClient:
        if self._api is None:
            self._api = OpenCriticClient(self.http_client, base_url=self.config.base_url)
        return self._api

    @property
    def release_service(self) -> ReleaseService:
        if self._release_service is None:
            hydrator = DetailHydrator(
                self.api,
                concurrent_requests=self.config.concurrent_requests,
                deadline=self.config.hydration_deadline,
            )
            self._release_service = ReleaseService(self.api, hydrator)
        return self._release_service

    async def cleanup(self) -> None:
        """Close network resources."""
        if self._http_client is not None:
            await self._http_client.close()
            self._http_client = None


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        ignore_date: bool,
        platforms: list[str],
        genres: list[str],
        list_platforms: bool,
        list_genres: bool,
        tui: bool,
        config: Path | None,
        log_level: str | None,
        log_dir: Path | None,
    ) -> None:
        self.ignore_date: bool = ignore_date
        self.platforms: list[str] = platforms
        self.genres: list[str] = genres
        self.list_platforms: bool = list_platforms
        self.list_genres: bool = list_genres
        self.tui: bool = tui
        self.config: Path | None = config
        self.log_level: str | None = log_level
        self.log_dir: Path | None = log_dir


def split_platforms(value: str | None) -> list[str]:
    """Split a comma-separated platform list; short names keep their case."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def split_genres(value: str | None) -> list[str]:
    """Split a comma-separated genre list, lower-casing each entry."""
    return [item.lower() for item in split_platforms(value)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opencritic-today",
        description="Checks OpenCritic for games that were released today",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  opencritic-today                          Today's releases
  opencritic-today -i -p PS5,XBXS           Recent releases on PS5 or Xbox Series X/S
  opencritic-today -g rpg,strategy          Today's RPG and strategy releases
  opencritic-today --list-platforms         Show platform short names
        """
    )

    _ = parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    _ = parser.add_argument(
        "-i", "--ignore-date",
        action="store_true",
        help="Show every release from the last 90 days instead of only today's"
    )

    _ = parser.add_argument(
        "-p", "--platforms",
        default=None,
        help="Comma-separated list of platform short names for filtering"
    )

    _ = parser.add_argument(
        "-g", "--genres",
        default=None,
        help="Comma-separated list of genres for filtering (partial names match)"
    )

    lists = parser.add_mutually_exclusive_group()
    _ = lists.add_argument(
        "--list-platforms",
        action="store_true",
        help="List available platforms and their short names, and exit"
    )
    _ = lists.add_argument(
        "--list-genres",
        action="store_true",
        help="List available genres, and exit"
    )

    _ = parser.add_argument(
        "--tui",
        action="store_true",
        help="Show the results in a full-screen table"
    )

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/opencritic-today/config.json)"
    )

    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set the logging level (default: from configuration, WARNING)"
    )

    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: console only)"
    )

    return parser


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to ``sys.argv[1:]``)

    Returns:
        Parsed arguments container
    """
    ns = build_parser().parse_args(argv)

    return ParsedArgs(
        ignore_date=bool(ns.ignore_date),
        platforms=split_platforms(ns.platforms),
        genres=split_genres(ns.genres),
        list_platforms=bool(ns.list_platforms),
        list_genres=bool(ns.list_genres),
        tui=bool(ns.tui),
        config=ns.config,
        log_level=ns.log_level,
        log_dir=ns.log_dir,
    )


async def run(
    context: ApplicationContext,
    args: ParsedArgs,
    console: Console,
    error_console: Console,
) -> int:
    """Run the requested command.

    Returns:
        Exit code (0 for success, including empty results; 1 for errors)
    """
    try:
        service = context.release_service

        if args.list_platforms:
            render_platforms(await service.list_platforms(), console)
            return 0

        if args.list_genres:
            render_genres(await service.list_genres(), console)
            return 0

        report = await service.find_releases(
            ignore_date=args.ignore_date,
            platforms=args.platforms,
            genres=args.genres,
        )

    except Exception as e:
        error = handle_error(e, operation="lookup", component="main")
        render_error(error, error_console)
        return 1

    finally:
        await context.cleanup()

    log.info("Lookup finished", game_count=len(report.games), ignore_date=report.ignore_date)

    if args.tui:
        from opencritic_today.ui.app import ReleasesApp

        await ReleasesApp(report).run_async()
    else:
        render_report(report, console)

    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the application."""
    args = parse_arguments(argv)

    log_level = args.log_level or AppConfig.log_level
    _ = setup_logging(log_level=log_level, log_dir=args.log_dir, tui_mode=args.tui)

    context = ApplicationContext(config_path=args.config)

    # The configured level applies unless overridden on the command line
    if args.log_level is None and context.config.log_level != log_level:
        log_level = context.config.log_level
        _ = setup_logging(log_level=log_level, log_dir=args.log_dir, tui_mode=args.tui)

    log.info(
        "Starting opencritic-today",
        version=__version__,
        log_level=log_level,
        config_path=str(context.config_service.config_path),
    )

    console = Console()
    error_console = Console(stderr=True)

    try:
        exit_code = asyncio.run(run(context, args, console, error_console))

    except KeyboardInterrupt:
        log.info("Application interrupted by user")
        exit_code = 130

    log.info("Application exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
