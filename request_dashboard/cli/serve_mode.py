"""Serve mode: run the dashboard API and courier proxy with uvicorn."""

import sys

import typer
import uvicorn

from request_dashboard.config import RECORD_SOURCE, SERVER_PORT
from request_dashboard.db import init_db
from request_dashboard.server import create_app

from .shared import console, logger


def serve(
    port: int = typer.Option(SERVER_PORT, "--port", "-p", help="Port for the API server"),
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Bind host"),
) -> None:
    """Start the HTTP API (record source comes from RECORD_SOURCE)."""
    if RECORD_SOURCE == "sql":
        init_db()
    log = logger.bind(command="serve", port=port, source=RECORD_SOURCE)
    log.info("serve.start")
    app = create_app()
    console.print(f"[green]Starting request dashboard on http://{host}:{port}[/green]")
    console.print("[dim]Endpoints: GET /requests, GET /requests/stats, POST /api/submitorder, GET /health[/dim]")
    try:
        uvicorn.run(app, host=host, port=port, log_level="info", timeout_graceful_shutdown=15)
    except KeyboardInterrupt:
        console.print("\n[dim]Shutting down...[/dim]")
        sys.exit(0)
