"""Tests for the release lookup pipeline."""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from factories import RELEASE_DAY, make_game
from opencritic_today.models.game import GameRecord, GenreRef, PlatformRef, ReleaseStub
from opencritic_today.services.errors import NetworkError
from opencritic_today.services.hydrator import DetailHydrator
from opencritic_today.services.opencritic_api import OpenCriticClient
from opencritic_today.services.releases import ReleaseService

NOW = RELEASE_DAY + timedelta(hours=12)


def make_service(stubs: list[ReleaseStub], details: dict[int, GameRecord]) -> tuple[ReleaseService, AsyncMock]:
    api = AsyncMock(spec=OpenCriticClient)
    api.get_basic_releases.return_value = stubs

    async def get_game_detail(game_id: int) -> GameRecord:
        return details[game_id]

    api.get_game_detail.side_effect = get_game_detail
    return ReleaseService(api, DetailHydrator(api)), api


def test_platform_scenario_sorts_then_filters() -> None:
    """Stubs B and A hydrate, sort to A, B, and only A is on PS5."""
    service, _ = make_service(
        [ReleaseStub(id=1, name="B"), ReleaseStub(id=2, name="A")],
        {
            1: make_game(name="B", platforms=["Switch"]),
            2: make_game(name="A", platforms=["PS5"]),
        },
    )

    async def run_test() -> None:
        everything = await service.find_releases(ignore_date=True, now=NOW)
        assert [g.name for g in everything.games] == ["A", "B"]

        on_ps5 = await service.find_releases(ignore_date=True, platforms={"PS5"}, now=NOW)
        assert [g.name for g in on_ps5.games] == ["A"]

    asyncio.run(run_test())


@pytest.mark.asyncio
async def test_genre_scenario() -> None:
    service, _ = make_service(
        [ReleaseStub(id=1, name="Hero Quest"), ReleaseStub(id=2, name="Empire")],
        {
            1: make_game(name="Hero Quest", genres=["Action", "RPG"]),
            2: make_game(name="Empire", genres=["Strategy"]),
        },
    )

    report = await service.find_releases(genres=["rpg"], now=NOW)

    assert [g.name for g in report.games] == ["Hero Quest"]
    assert report.heading == "Today's"


@pytest.mark.asyncio
async def test_date_filter_is_on_unless_ignored() -> None:
    service, _ = make_service(
        [ReleaseStub(id=1, name="Today"), ReleaseStub(id=2, name="Last week")],
        {
            1: make_game(name="Today"),
            2: make_game(name="Last week", released=RELEASE_DAY - timedelta(days=7)),
        },
    )

    today = await service.find_releases(now=NOW)
    recent = await service.find_releases(ignore_date=True, now=NOW)

    assert [g.name for g in today.games] == ["Today"]
    assert [g.name for g in recent.games] == ["Last week", "Today"]
    assert recent.heading == "Recent"


@pytest.mark.asyncio
async def test_empty_listing_skips_hydration() -> None:
    service, api = make_service([], {})

    report = await service.find_releases(platforms={"PS5"})

    assert report.is_empty
    assert report.timeframe == "today"
    api.get_game_detail.assert_not_called()


@pytest.mark.asyncio
async def test_nothing_left_after_filtering_is_not_an_error() -> None:
    service, _ = make_service(
        [ReleaseStub(id=1, name="Old")],
        {1: make_game(name="Old", released=datetime(2020, 1, 1, tzinfo=timezone.utc))},
    )

    report = await service.find_releases(ignore_date=False, now=NOW)
    assert report.is_empty
    assert report.timeframe == "today"

    report = await service.find_releases(ignore_date=True, platforms={"PS5"}, now=NOW)
    assert report.is_empty
    assert report.timeframe == "recently"


@pytest.mark.asyncio
async def test_listing_failure_propagates_unchanged() -> None:
    error = NetworkError("Unable to reach OpenCritic.")
    service, api = make_service([], {})
    api.get_basic_releases.side_effect = error

    with pytest.raises(NetworkError) as exc_info:
        await service.find_releases()

    assert exc_info.value is error


@pytest.mark.asyncio
async def test_hydration_failure_aborts_the_run() -> None:
    service, api = make_service([ReleaseStub(id=1, name="A"), ReleaseStub(id=2, name="B")], {})
    api.get_game_detail.side_effect = NetworkError("Server error", status_code=500)

    with pytest.raises(NetworkError):
        await service.find_releases(ignore_date=True)


@pytest.mark.asyncio
async def test_reference_lists_are_sorted_by_name() -> None:
    api = AsyncMock(spec=OpenCriticClient)
    api.get_platforms.return_value = [
        PlatformRef("Xbox Series X/S", "XBXS"),
        PlatformRef("Nintendo Switch", "Switch"),
        PlatformRef("PC", "PC"),
    ]
    api.get_genres.return_value = [GenreRef("Strategy"), GenreRef("Action"), GenreRef("RPG")]
    service = ReleaseService(api, DetailHydrator(api))

    platforms = await service.list_platforms()
    genres = await service.list_genres()

    assert [p.name for p in platforms] == ["Nintendo Switch", "PC", "Xbox Series X/S"]
    assert [g.name for g in genres] == ["Action", "RPG", "Strategy"]
