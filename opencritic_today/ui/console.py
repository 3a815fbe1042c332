"""Console rendering of release reports and reference lists."""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from opencritic_today.models.game import GameRecord, GenreRef, PlatformRef
from opencritic_today.models.report import ReleaseReport
from opencritic_today.services.errors import UserFriendlyError, get_error_service

RELEASE_COLUMNS: tuple[str, ...] = ("Name", "Score", "Genres", "Platforms")


def get_release_row(game: GameRecord) -> tuple[str, str, str, str]:
    """Get the display cells for one game, in ``RELEASE_COLUMNS`` order."""
    return (game.name, game.score_text(), game.genres_text(), game.platforms_text())


def get_report_heading(report: ReleaseReport) -> str:
    """Get the line printed above the table, or the "nothing found" message."""
    if report.is_empty:
        return f"🔴 No relevant games released {report.timeframe} 😢"
    return f"📀 {report.heading} releases:"


def build_release_table(games: Sequence[GameRecord]) -> Table:
    table = Table(show_lines=False)
    for column in RELEASE_COLUMNS:
        table.add_column(column)
    for game in games:
        table.add_row(*get_release_row(game))
    return table


def render_report(report: ReleaseReport, console: Console) -> None:
    """Print a release report: heading plus table, or the empty-result message."""
    console.print(get_report_heading(report), markup=False)
    if not report.is_empty:
        console.print(build_release_table(report.games))


def render_platforms(platforms: Sequence[PlatformRef], console: Console) -> None:
    console.print("Available platforms:")
    table = Table()
    table.add_column("Name")
    table.add_column("Short name")
    for platform in platforms:
        table.add_row(platform.name, platform.short_name)
    console.print(table)


def render_genres(genres: Sequence[GenreRef], console: Console) -> None:
    console.print("Available genres:")
    for genre in genres:
        console.print(f"- {genre.name}", markup=False, highlight=False)


def render_error(error: UserFriendlyError, console: Console) -> None:
    """Print a fatal error with its suggested actions."""
    message = get_error_service().create_user_message(error)
    console.print(f"Error: {message}", style="bold red", markup=False, highlight=False)
