"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
import os
import threading
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .domain.models.rows import SummaryRow
from .errors import ReviewFeedError
from .events.bus import EventBus
from .events.feed_events import PageFailedEvent, PageLoadedEvent
from .gui.layout.rating import RatingRenderer
from .gui.viewmodels.pagination_controller import PaginationController
from .gui.viewmodels.row_catalog import RowCatalog
from .io.provider import FixtureReviewsProvider
from .settings import load_settings

app = typer.Typer(help="Paginated review feed with deterministic row layout")
console = Console()


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ReviewFeedError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _ensure_gui_application():
    """Font metrics need a ``QGuiApplication``; run it headless."""

    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtGui import QGuiApplication

    return QGuiApplication.instance() or QGuiApplication([])


@app.callback()
def main() -> None:
    """Paginated review feed tools."""


@app.command()
@_handle_errors
def browse(
    fixture: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON page fixture"),
    width: float = typer.Option(375.0, help="Row width in points"),
    viewport: float = typer.Option(667.0, help="Viewport height in points"),
    pages: int = typer.Option(0, help="Stop after this many pages (0 = until exhausted)"),
    expand: Optional[List[int]] = typer.Option(None, "--expand", help="Row index to expand"),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Load the fixture page by page, scrolling to the end after each page."""

    _configure_logging(verbose)
    _gui_app = _ensure_gui_application()  # noqa: F841 - must outlive the layout calls
    settings = load_settings(settings_path)

    bus = EventBus()
    settled = threading.Event()
    outcomes: list[object] = []

    def _record(event) -> None:
        outcomes.append(event)
        settled.set()

    bus.subscribe(PageLoadedEvent, _record)
    bus.subscribe(PageFailedEvent, _record)

    controller = PaginationController(
        FixtureReviewsProvider(fixture, latency=settings.fixture_latency),
        page_size=settings.page_size,
        event_bus=bus,
        collapsed_max_lines=settings.collapsed_max_lines,
        prefetch_screens=settings.prefetch_screens,
    )
    catalog = RowCatalog(controller.state)
    controller.state_changed.connect(catalog.update)

    try:
        started = controller.request_page()
        loaded = 0
        while started:
            settled.wait()
            settled.clear()
            outcome = outcomes[-1]
            if isinstance(outcome, PageFailedEvent):
                raise outcome.error
            loaded += 1
            if pages and loaded >= pages:
                break
            content_height = sum(catalog.height_at(i, width) for i in range(catalog.count))
            target_offset = max(0.0, content_height - viewport)
            started = controller.on_scroll_will_end(viewport, content_height, target_offset)
    finally:
        controller.shutdown()

    for index in expand or []:
        row = catalog.row_at(index)
        if not isinstance(row, SummaryRow):
            controller.expand_row(row.id)

    _print_catalog(catalog, width)


def _print_catalog(catalog: RowCatalog, width: float) -> None:
    renderer = RatingRenderer()
    table = Table(title="Reviews")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Rating")
    table.add_column("Lines", justify="right")
    table.add_column("Show more")
    table.add_column("Height", justify="right")

    summary: SummaryRow | None = None
    for index in range(catalog.count):
        row = catalog.row_at(index)
        if isinstance(row, SummaryRow):
            summary = row
            continue
        layout = catalog.layout_at(index, width)
        stars = "".join("★" if filled else "☆" for filled in renderer.glyphs(row.rating))
        table.add_row(
            str(index),
            row.full_name,
            stars,
            "all" if row.is_expanded else str(row.max_lines),
            "yes" if layout.shows_expand_control else "",
            f"{layout.total_height:.0f}",
        )
    console.print(table)
    if summary is not None:
        console.print(f"[bold]{summary.text}[/bold]")


if __name__ == "__main__":  # pragma: no cover
    app()
