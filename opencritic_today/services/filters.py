"""Ordered filter stages applied to hydrated releases.

Each stage keeps the relative order of the records it lets through, so the
name ordering established by ``sort_by_name`` survives filtering.
"""

from collections.abc import Collection, Iterable
from datetime import datetime

import structlog

from ..models.game import GameRecord

log = structlog.stdlib.get_logger()


def sort_by_name(records: Iterable[GameRecord]) -> list[GameRecord]:
    """Sort records by name (ordinal, ascending)."""
    return sorted(records, key=lambda record: record.name)


def filter_by_date(records: Iterable[GameRecord], now: datetime | None = None) -> list[GameRecord]:
    """Keep records first released on the same calendar day as ``now``."""
    return [record for record in records if record.released_today(now)]


def filter_by_platforms(records: Iterable[GameRecord], platforms: Collection[str]) -> list[GameRecord]:
    """Keep records released on at least one of the given platform short names."""
    return [record for record in records if record.released_for(platforms)]


def filter_by_genres(records: Iterable[GameRecord], genres: Collection[str]) -> list[GameRecord]:
    """Keep records whose genres contain any of the given fragments."""
    return [record for record in records if record.matches_genres(genres)]


def apply_filters(
    records: Iterable[GameRecord],
    date_filter_enabled: bool,
    platforms: Collection[str],
    genres: Collection[str],
    now: datetime | None = None,
) -> list[GameRecord]:
    """Run the date, platform and genre stages in order.

    The date stage runs only when enabled; the other two are skipped when
    their selection is empty.

    Args:
        records: Records sorted by name
        date_filter_enabled: Whether to keep only today's releases
        platforms: Platform short names (exact match)
        genres: Genre fragments (case-insensitive substring match)
        now: Reference moment for the date stage (defaults to the current time)

    Returns:
        Filtered records in their original relative order
    """
    result = list(records)
    total = len(result)

    if date_filter_enabled:
        result = filter_by_date(result, now)
        log.debug("Date filter applied", remaining=len(result))

    if platforms:
        result = filter_by_platforms(result, platforms)
        log.debug("Platform filter applied", platforms=sorted(platforms), remaining=len(result))

    if genres:
        result = filter_by_genres(result, genres)
        log.debug("Genre filter applied", genres=sorted(genres), remaining=len(result))

    log.info("Filters applied", total=total, remaining=len(result))
    return result
