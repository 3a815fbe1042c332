"""Release lookup service tying fetching, hydration and filtering together."""

from collections.abc import Collection
from datetime import datetime

import structlog

from ..models.game import GenreRef, PlatformRef
from ..models.report import ReleaseReport
from .filters import apply_filters, sort_by_name
from .hydrator import DetailHydrator
from .opencritic_api import OpenCriticClient

log = structlog.stdlib.get_logger()


class ReleaseService:
    """Runs the release pipeline: fetch, hydrate, sort, filter."""

    def __init__(self, api: OpenCriticClient, hydrator: DetailHydrator) -> None:
        self.api: OpenCriticClient = api
        self.hydrator: DetailHydrator = hydrator

    async def find_releases(
        self,
        ignore_date: bool = False,
        platforms: Collection[str] = (),
        genres: Collection[str] = (),
        now: datetime | None = None,
    ) -> ReleaseReport:
        """Find releases matching the given filters.

        Args:
            ignore_date: Keep every recent release instead of only today's
            platforms: Platform short names to keep (empty = all)
            genres: Genre fragments to keep (empty = all)
            now: Reference moment for the date filter

        Returns:
            Report with the matching games sorted by name
        """
        log.info(
            "Looking up releases",
            ignore_date=ignore_date,
            platforms=list(platforms),
            genres=list(genres),
        )

        stubs = await self.api.get_basic_releases()
        if not stubs:
            log.info("No recent releases returned")
            return ReleaseReport(games=[], ignore_date=ignore_date)

        records = await self.hydrator.hydrate_all(stubs)
        games = apply_filters(
            sort_by_name(records),
            date_filter_enabled=not ignore_date,
            platforms=platforms,
            genres=genres,
            now=now,
        )
        return ReleaseReport(games=games, ignore_date=ignore_date)

    async def list_platforms(self) -> list[PlatformRef]:
        """Return every platform, sorted by name."""
        platforms = await self.api.get_platforms()
        return sorted(platforms, key=lambda platform: platform.name)

    async def list_genres(self) -> list[GenreRef]:
        """Return every genre, sorted by name."""
        genres = await self.api.get_genres()
        return sorted(genres, key=lambda genre: genre.name)
