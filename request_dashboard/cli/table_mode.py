"""Table and stats commands: print the request table view to the terminal."""

import asyncio
from typing import Optional

import typer
from rich.table import Table

from request_dashboard.errors import RecordSourceError
from request_dashboard.models.view import AggregateStats, ViewConfig, ViewState
from request_dashboard.status_store import StatusStore
from request_dashboard.view.aggregates import compute_aggregates
from request_dashboard.view.engine import load_view
from request_dashboard.view.sort_engine import resolve_sort

from .shared import SourceOption, console, logger, open_source, render_table


async def _load(kind: str, config: ViewConfig) -> ViewState:
    async with open_source(kind) as source:
        store = StatusStore()
        await store.load(source)
        return await load_view(source, config, store.snapshot())


def table(
    query: str = typer.Option("", "--query", "-q", help="Case-insensitive search"),
    sort: Optional[str] = typer.Option(
        None, "--sort", "-s", help="Field to sort by, e.g. quantity. Default: newest first"
    ),
    desc: Optional[bool] = typer.Option(None, "--desc/--asc", help="Sort direction"),
    full: bool = typer.Option(False, "--full", help="Show all columns"),
    source: str = SourceOption,
) -> None:
    """Print the filtered, sorted request table."""
    order = resolve_sort(sort, None if desc is None else ("desc" if desc else "asc"))
    config = ViewConfig(
        display_mode="full" if full else "minimal",
        sort_key=order.key,
        sort_direction=order.direction,
        search_query=query,
    )
    log = logger.bind(command="table", source=source)
    state = asyncio.run(_load(source, config))
    if state.status == "error":
        console.print(f"[red]{state.error}[/red]")
        log.error("table.load_error", error=state.error)
        raise typer.Exit(1)
    console.print(render_table(state.view))
    print_stats(state.view.stats)
    log.info("table.ok", rows=state.view.filtered_count)


def print_stats(stats: AggregateStats) -> None:
    widget = Table(title="Summary", show_header=False)
    widget.add_column("Metric", style="cyan")
    widget.add_column("Value", justify="right")
    widget.add_row("Total requests", str(stats.total))
    widget.add_row("Unique users", str(stats.unique_emails))
    widget.add_row("Total quantity", str(stats.total_quantity))
    widget.add_row("Top courier", f"{stats.top_courier} ({stats.top_courier_count})")
    console.print(widget)


def stats(source: str = SourceOption) -> None:
    """Print summary widgets over all requests."""

    async def _run() -> AggregateStats:
        async with open_source(source) as src:
            return compute_aggregates(await src.fetch_all())

    try:
        result = asyncio.run(_run())
    except RecordSourceError as e:
        console.print(f"[red]Failed to load requests: {e}[/red]")
        logger.error("stats.load_error", error=str(e))
        raise typer.Exit(1) from e
    print_stats(result)
