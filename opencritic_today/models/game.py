"""Game-related data models."""

from collections.abc import Collection
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class GenreRef:
    """A genre as reported by OpenCritic."""
    name: str


@dataclass(frozen=True)
class PlatformRef:
    """A platform with its display name and short code (e.g. "PS5")."""
    name: str
    short_name: str


@dataclass(frozen=True)
class CompanyRef:
    """A developer or publisher credited on a game."""
    name: str
    type: str


@dataclass(frozen=True)
class ReleaseStub:
    """Minimal release entry returned by the listing endpoint."""
    id: int
    name: str


@dataclass(frozen=True)
class GameRecord:
    """Full game details used for filtering and display."""
    name: str
    first_release_date: datetime
    genres: tuple[GenreRef, ...]
    platforms: tuple[PlatformRef, ...]
    average_score: float  # Negative means unscored
    tier: str
    companies: tuple[CompanyRef, ...] = field(default=())

    @property
    def is_scored(self) -> bool:
        return self.average_score >= 0

    def score_text(self) -> str:
        """Render the score as "{tier} {score}/100" or "unscored"."""
        if not self.is_scored:
            return "unscored"
        return f"{self.tier} {self.average_score:.0f}/100"

    def genres_text(self) -> str:
        return ", ".join(genre.name for genre in self.genres)

    def platforms_text(self) -> str:
        return ", ".join(platform.short_name for platform in self.platforms)

    def released_for(self, platforms: Collection[str]) -> bool:
        """Check whether the game is out on any of the given platform short names.

        Matching is exact and case-sensitive. An empty selection matches
        every game.
        """
        if not platforms:
            return True
        return any(platform.short_name in platforms for platform in self.platforms)

    def matches_genres(self, genres: Collection[str]) -> bool:
        """Check whether any requested genre is a substring of this game's genres.

        Both sides are lower-cased, so "rpg" matches "Action RPG". An empty
        selection matches every game.
        """
        if not genres:
            return True
        haystack = self.genres_text().lower()
        return any(genre.lower() in haystack for genre in genres)

    def released_today(self, now: datetime | None = None) -> bool:
        """Check whether the game was first released on the current calendar day.

        The day is evaluated in the time zone the service reported for the
        release date.

        Args:
            now: Reference moment (defaults to the current time)
        """
        release = self.first_release_date
        if now is None:
            current = datetime.now(release.tzinfo)
        else:
            current = now.astimezone(release.tzinfo)
        return (release.year, release.month, release.day) == (
            current.year,
            current.month,
            current.day,
        )
