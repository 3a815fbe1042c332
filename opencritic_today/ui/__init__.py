"""Presentation layer: console rendering and the optional Textual view."""

from .console import (
    RELEASE_COLUMNS,
    build_release_table,
    get_release_row,
    get_report_heading,
    render_error,
    render_genres,
    render_platforms,
    render_report,
)

__all__ = [
    "RELEASE_COLUMNS",
    "build_release_table",
    "get_release_row",
    "get_report_heading",
    "render_error",
    "render_genres",
    "render_platforms",
    "render_report",
]
