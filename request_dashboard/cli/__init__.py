"""CLI commands: one module per mode (serve, table, invoice, orders, import)."""

from typer import Typer

from request_dashboard.cli import import_mode, invoice_mode, order_mode, serve_mode, table_mode
from request_dashboard.view.sort_engine import use_collation_locale

use_collation_locale()

app = Typer(help="User request dashboard")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(serve_mode.serve)
    app.command()(table_mode.table)
    app.command()(table_mode.stats)
    app.command()(invoice_mode.invoice)
    app.command(name="submit-order")(order_mode.submit_order)
    app.command(name="import-json")(import_mode.import_json)


register_commands()
