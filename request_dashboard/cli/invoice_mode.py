"""Invoice command: write a printable invoice for one request and mark it invoiced."""

import asyncio
import webbrowser
from pathlib import Path

import typer

from request_dashboard.config import INVOICE_STATUS_LABEL, OUTPUT_DIR
from request_dashboard.errors import RecordNotFoundError, RecordSourceError
from request_dashboard.invoice import build_invoice, render_invoice_html
from request_dashboard.models.invoice import InvoiceDocument
from request_dashboard.status_store import StatusStore

from request_dashboard.utils.logger import record_context

from .shared import SourceOption, console, logger, open_source


async def _invoice(kind: str, record_id: str) -> InvoiceDocument:
    async with open_source(kind) as source:
        records = await source.fetch_all()
        record = next((r for r in records if r.id == record_id), None)
        if record is None:
            raise RecordNotFoundError(record_id)
        store = StatusStore()
        await store.set(record_id, INVOICE_STATUS_LABEL)
        await store.persist(source, record_id, INVOICE_STATUS_LABEL)
        return build_invoice(record, status=INVOICE_STATUS_LABEL)


def invoice(
    record_id: str = typer.Argument(..., help="Request id"),
    output: Path = typer.Option(None, "--output", "-o", help="HTML file to write"),
    open_browser: bool = typer.Option(False, "--open", help="Open the invoice in a browser"),
    source: str = SourceOption,
) -> None:
    """Render the invoice for a request to HTML."""
    with record_context(record_id, command="invoice"):
        try:
            doc = asyncio.run(_invoice(source, record_id))
        except (RecordNotFoundError, RecordSourceError) as e:
            console.print(f"[red]{e}[/red]")
            logger.error("invoice.fail", error=str(e))
            raise typer.Exit(1) from e
        _write_invoice(doc, output, open_browser)


def _write_invoice(doc: InvoiceDocument, output: Path | None, open_browser: bool) -> None:
    path = output or OUTPUT_DIR / "invoices" / f"{doc.invoice_number}.html"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_invoice_html(doc), encoding="utf-8")
    console.print(f"[green]Invoice written to {path}[/green]")
    logger.info("invoice.written", path=str(path))
    if open_browser:
        webbrowser.open(path.resolve().as_uri())
