"""Full-screen Textual view of a release report."""

from typing import ClassVar

from typing_extensions import override

from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.widgets import DataTable, Footer, Header, Static

import structlog

from opencritic_today.models.game import GameRecord
from opencritic_today.models.report import ReleaseReport

from .console import RELEASE_COLUMNS, get_release_row, get_report_heading

log = structlog.stdlib.get_logger()


def sort_games(games: list[GameRecord], by_score: bool) -> list[GameRecord]:
    """Order games by name, or by score (highest first, unscored last)."""
    if by_score:
        return sorted(games, key=lambda game: (not game.is_scored, -game.average_score, game.name))
    return sorted(games, key=lambda game: game.name)


class ReleasesApp(App[None]):
    """Browsable table of the releases found by one lookup run."""

    CSS: ClassVar[str] = """
    Screen {
        background: $surface;
    }

    #report-heading {
        text-align: center;
        text-style: bold;
        color: $primary;
        padding: 1 2;
    }

    #releases-table {
        height: 1fr;
        border: solid $primary-darken-2;
    }

    #releases-table.empty {
        display: none;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("q", "quit", "Quit", show=True, priority=True),
        Binding("n", "sort_by_name", "Sort by name", show=True),
        Binding("s", "sort_by_score", "Sort by score", show=True),
    ]

    _report: ReleaseReport
    _games: list[GameRecord]

    def __init__(self, report: ReleaseReport) -> None:
        """Initialize the application with the report to display.

        Args:
            report: Result of a release lookup
        """
        super().__init__()
        self.title = "OpenCritic releases"  # type: ignore[assignment]
        self.sub_title = f"{report.heading} releases"  # type: ignore[assignment]
        self._report = report
        self._games = list(report.games)

    @property
    def games(self) -> list[GameRecord]:
        """Games in their current display order."""
        return self._games.copy()

    @override
    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(get_report_heading(self._report), id="report-heading", markup=False)
        yield DataTable(id="releases-table", classes="empty" if self._report.is_empty else "")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#releases-table", DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns(*RELEASE_COLUMNS)
        self._populate_table()
        log.info("Releases view mounted", game_count=len(self._games))

    def _populate_table(self) -> None:
        table = self.query_one("#releases-table", DataTable)
        table.clear()
        for game in self._games:
            table.add_row(*get_release_row(game))

    def action_sort_by_name(self) -> None:
        self._games = sort_games(self._games, by_score=False)
        self._populate_table()

    def action_sort_by_score(self) -> None:
        self._games = sort_games(self._games, by_score=True)
        self._populate_table()
