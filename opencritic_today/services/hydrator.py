"""Concurrent detail lookups for release stubs."""

import asyncio
from collections.abc import Sequence

import structlog

from ..models.game import GameRecord, ReleaseStub
from .errors import HydrationTimeoutError
from .opencritic_api import OpenCriticClient

log = structlog.stdlib.get_logger()


class DetailHydrator:
    """Replaces release stubs with full game records.

    All lookups run concurrently, capped by a semaphore. The call succeeds
    only if every lookup succeeds: the first failure is re-raised as-is and
    the remaining lookups are cancelled.
    """

    def __init__(
        self,
        api: OpenCriticClient,
        concurrent_requests: int = 10,
        deadline: float | None = 60.0,
    ) -> None:
        """Initialize the hydrator.

        Args:
            api: OpenCritic client used for detail lookups
            concurrent_requests: Maximum lookups in flight at once
            deadline: Seconds allowed for the whole fan-out (None = no limit)
        """
        self.api: OpenCriticClient = api
        self.deadline: float | None = deadline
        self._concurrent_requests: int = concurrent_requests
        self._semaphore: asyncio.Semaphore = asyncio.Semaphore(concurrent_requests)

    async def hydrate_all(self, stubs: Sequence[ReleaseStub]) -> list[GameRecord]:
        """Fetch full details for every stub.

        Args:
            stubs: Release stubs to hydrate

        Returns:
            One record per stub, in completion order

        Raises:
            NetworkError: If any lookup fails at the transport level
            DecodeError: If any lookup returns a malformed game
            HydrationTimeoutError: If the deadline expires first
        """
        if not stubs:
            return []

        log.info(
            "Hydrating releases",
            count=len(stubs),
            concurrent_limit=self._concurrent_requests,
            deadline=self.deadline,
        )

        tasks = [asyncio.create_task(self._hydrate_one(stub)) for stub in stubs]
        records: list[GameRecord] = []

        try:
            async with asyncio.timeout(self.deadline):
                for coro in asyncio.as_completed(tasks):
                    records.append(await coro)
        except TimeoutError:
            pending = sum(1 for task in tasks if not task.done())
            log.error("Hydration deadline expired", deadline=self.deadline, pending=pending)
            raise HydrationTimeoutError(self.deadline or 0.0, pending) from None
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            # Reap cancelled and failed tasks so no exception goes unretrieved
            await asyncio.gather(*tasks, return_exceptions=True)

        log.info("Hydration complete", count=len(records))
        return records

    async def _hydrate_one(self, stub: ReleaseStub) -> GameRecord:
        async with self._semaphore:
            log.debug("Fetching game details", game_id=stub.id, name=stub.name)
            return await self.api.get_game_detail(stub.id)
