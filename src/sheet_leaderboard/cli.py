from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer

from .config import DEFAULT_LAYOUT, NAME_COLUMN, REFRESH_INTERVAL_SECONDS, SCORE_COLUMN, SOURCES, ColumnLayout
from .core.models import Entry
from .core.ranking import format_score
from .fetch.sheets import SheetFetcher
from .present.presenter import Presenter
from .refresh import RefreshOrchestrator, RefreshScheduler


app = typer.Typer(add_completion=False, help="Live top-4 leaderboard from two published sheet ranges")

DEFAULT_OUTPUT = Path("leaderboard.html")


def build_fetcher() -> SheetFetcher:
    return SheetFetcher(SOURCES)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _layout(score_column: int) -> ColumnLayout:
    if score_column == SCORE_COLUMN:
        return DEFAULT_LAYOUT
    return ColumnLayout(name_index=NAME_COLUMN, score_index=score_column)


def _echo_ranking(title: str, ranking: List[Entry]) -> None:
    typer.echo(title)
    if not ranking:
        typer.echo("  (no entries)")
    for i, e in enumerate(ranking, start=1):
        typer.echo(f"  {i}. {e.name} {format_score(e.score)}")


@app.command("watch")
def watch(
    output: Path = typer.Option(DEFAULT_OUTPUT, "--output", "-o", help="HTML page rewritten after every refresh"),
    interval: float = typer.Option(REFRESH_INTERVAL_SECONDS, "--interval", min=0.1, help="seconds between refreshes"),
    score_column: int = typer.Option(SCORE_COLUMN, "--score-column", min=0, help="0-based CSV column holding the score"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Refresh now and then every --interval seconds until interrupted."""
    _setup_logging(verbose)
    presenter = Presenter(SOURCES)

    async def main() -> None:
        async with build_fetcher() as fetcher:
            orchestrator = RefreshOrchestrator(
                fetcher,
                presenter,
                layout=_layout(score_column),
                on_complete=lambda p: p.write_page(output),
            )
            await RefreshScheduler(orchestrator.run_cycle, interval=interval).run()

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        typer.echo("stopped", err=True)


@app.command("once")
def once(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="also write the HTML page here"),
    score_column: int = typer.Option(SCORE_COLUMN, "--score-column", min=0, help="0-based CSV column holding the score"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Run a single refresh cycle and print both rankings."""
    _setup_logging(verbose)
    presenter = Presenter(SOURCES)

    async def main() -> bool:
        async with build_fetcher() as fetcher:
            orchestrator = RefreshOrchestrator(fetcher, presenter, layout=_layout(score_column))
            return await orchestrator.run_cycle()

    if not asyncio.run(main()):
        typer.echo(presenter.status, err=True)
        raise typer.Exit(1)

    title_a, title_b = (s.title for s in SOURCES)
    _echo_ranking(title_a, presenter.rankings.group_a)
    _echo_ranking(title_b, presenter.rankings.group_b)
    typer.echo(f"ceiling: {format_score(presenter.chart.y_max)}")
    if output is not None:
        presenter.write_page(output)
        typer.echo(f"wrote {output}")


if __name__ == "__main__":
    app()
