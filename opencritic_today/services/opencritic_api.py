"""OpenCritic API client: fetches listings and decodes them into models.

Decoding is strict. A missing field, a value of the wrong type or an
unparseable timestamp raises ``DecodeError`` instead of falling back to a
default, since filtering and scoring depend on every field being accurate.
"""

import json
from typing import Any, TypeVar

import structlog
from pydantic import TypeAdapter, ValidationError

from ..models.config import DEFAULT_BASE_URL
from ..models.game import GameRecord, GenreRef, PlatformRef, ReleaseStub
from ..models.payloads import GameDetailPayload, GenrePayload, PlatformPayload, ReleaseStubPayload
from .errors import DecodeError
from .http_client import HttpClientService

log = structlog.stdlib.get_logger()

T = TypeVar("T")

RECENT_RELEASES_PARAMS: dict[str, str] = {
    "time": "last90",
    "sort": "firstReleaseDate",
}

_STUBS = TypeAdapter(list[ReleaseStubPayload])
_PLATFORMS = TypeAdapter(list[PlatformPayload])
_GENRES = TypeAdapter(list[GenrePayload])
_GAME = TypeAdapter(GameDetailPayload)


class OpenCriticClient:
    """Client for the OpenCritic endpoints used by the release checker."""

    def __init__(
        self,
        http_client: HttpClientService,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        """Initialize the OpenCritic client.

        Args:
            http_client: HTTP client service for making requests
            base_url: API root, without a trailing slash
        """
        self.http_client: HttpClientService = http_client
        self.base_url: str = base_url.rstrip("/")
        log.debug("OpenCritic client initialized", base_url=self.base_url)

    @property
    def releases_url(self) -> str:
        return f"{self.base_url}/game"

    @property
    def platforms_url(self) -> str:
        return f"{self.base_url}/platform"

    @property
    def genres_url(self) -> str:
        return f"{self.base_url}/genre"

    def game_url(self, game_id: int) -> str:
        return f"{self.base_url}/game/{game_id}"

    async def get_basic_releases(self) -> list[ReleaseStub]:
        """Fetch games released within the last 90 days, ordered by release date."""
        data = await self._get_json(self.releases_url, params=RECENT_RELEASES_PARAMS)
        stubs = decode_release_stubs(data)
        log.info("Fetched recent releases", count=len(stubs))
        return stubs

    async def get_game_detail(self, game_id: int) -> GameRecord:
        """Fetch the full details of a single game.

        Raises:
            NetworkError: If the request fails
            DecodeError: If the response does not describe a game
        """
        url = self.game_url(game_id)
        data = await self._get_json(url)
        try:
            game = decode_game_record(data)
        except DecodeError as e:
            log.error(
                "Failed to decode game details",
                game_id=game_id,
                url=url,
                field=e.field,
                error=e.message,
            )
            raise
        log.debug("Fetched game details", game_id=game_id, name=game.name)
        return game

    async def get_platforms(self) -> list[PlatformRef]:
        """Fetch every platform known to OpenCritic."""
        data = await self._get_json(self.platforms_url)
        return decode_platforms(data)

    async def get_genres(self) -> list[GenreRef]:
        """Fetch every genre known to OpenCritic."""
        data = await self._get_json(self.genres_url)
        return decode_genres(data)

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        response = await self.http_client.get(url, params=params)
        try:
            return json.loads(response.text)
        except json.JSONDecodeError as e:
            log.error("Response is not valid JSON", url=url, error=str(e))
            raise DecodeError(
                message="The server response could not be parsed as JSON.",
                url=url,
                original_error=e,
            ) from e


def decode_list(data: Any, adapter: TypeAdapter[list[T]], payload: str) -> list[T]:
    """Validate a JSON array of ``payload`` items.

    Raises:
        DecodeError: If the value is not an array or an item is malformed
    """
    if not isinstance(data, list):
        raise DecodeError(
            message=f"Expected a list of {payload}, got {type(data).__name__}.",
            payload=payload,
        )
    return _validate(adapter, data, payload)


def decode_release_stubs(data: Any) -> list[ReleaseStub]:
    return [item.to_stub() for item in decode_list(data, _STUBS, "releases")]


def decode_platforms(data: Any) -> list[PlatformRef]:
    return [item.to_ref() for item in decode_list(data, _PLATFORMS, "platforms")]


def decode_genres(data: Any) -> list[GenreRef]:
    return [item.to_ref() for item in decode_list(data, _GENRES, "genres")]


def decode_game_record(data: Any) -> GameRecord:
    """Decode a game detail payload into a ``GameRecord``."""
    if not isinstance(data, dict):
        raise DecodeError(
            message=f"Expected a game object, got {type(data).__name__}.",
            payload="game",
        )
    return _validate(_GAME, data, "game").to_record()


def _validate(adapter: TypeAdapter[T], data: Any, payload: str) -> T:
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = next((part for part in reversed(first["loc"]) if isinstance(part, str)), None)
        location = ".".join(str(part) for part in first["loc"])
        raise DecodeError(
            message=f"Invalid {payload} payload at '{location}': {first['msg']}.",
            payload=payload,
            field=field,
            original_error=e,
        ) from e
