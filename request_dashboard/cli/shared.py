"""Shared CLI helpers: console, logger, source construction and cell rendering."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from request_dashboard.config import COURIER_TIMEOUT_SECONDS, RECORD_SOURCE
from request_dashboard.models.view import ActionCell, Cell, TableView
from request_dashboard.sources import SOURCE_KINDS, RecordSource, build_source
from request_dashboard.utils.logger import get_logger

console = Console()
logger = get_logger("request_dashboard.cli")

SourceOption = typer.Option(
    RECORD_SOURCE,
    "--source",
    help=f"Record source: {', '.join(SOURCE_KINDS)}",
)


@asynccontextmanager
async def open_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=httpx.Timeout(COURIER_TIMEOUT_SECONDS)) as http:
        yield http


@asynccontextmanager
async def open_source(kind: str) -> AsyncIterator[RecordSource]:
    """Record source plus the HTTP client it may need, closed on exit."""
    async with open_http_client() as http:
        try:
            source = build_source(kind, http)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1) from e
        yield source


def cell_text(cell: Cell) -> str:
    """Rich markup for one table cell."""
    if isinstance(cell, str):
        return escape(cell)
    if isinstance(cell, ActionCell):
        return f"[link={cell.message_link.href}]WhatsApp[/link] | {escape(cell.invoice_action)}"
    return ", ".join(f"[link={link.href}]{escape(link.label)}[/link]" for link in cell)


def render_table(view: TableView) -> Table:
    table = Table(title=f"User Requests ({view.filtered_count}/{view.total_count})")
    for column in view.columns:
        table.add_column(column, overflow="fold")
    for row in view.rows:
        table.add_row(*(cell_text(row.cells[column]) for column in view.columns))
    return table
