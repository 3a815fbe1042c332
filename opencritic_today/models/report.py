"""Result models for a release lookup run."""

from dataclasses import dataclass

from .game import GameRecord


@dataclass(frozen=True)
class ReleaseReport:
    """Outcome of one pipeline run, ready for presentation."""
    games: list[GameRecord]
    ignore_date: bool

    @property
    def is_empty(self) -> bool:
        return not self.games

    @property
    def heading(self) -> str:
        return "Recent" if self.ignore_date else "Today's"

    @property
    def timeframe(self) -> str:
        return "recently" if self.ignore_date else "today"
