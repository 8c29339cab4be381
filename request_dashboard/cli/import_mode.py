"""Import command: load request documents from a JSON file into the SQL source."""

import json
from pathlib import Path

import typer

from request_dashboard.config import RECORDS_PATH
from request_dashboard.db import init_db
from request_dashboard.db.repositories import upsert_document

from .shared import console, logger


def import_json(
    path: Path = typer.Argument(RECORDS_PATH, help="JSON list of request documents (each with an id)"),
) -> None:
    """Upsert documents from a JSON file into the database."""
    log = logger.bind(command="import-json", path=str(path))
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        console.print(f"[red]Cannot read {path}: {e}[/red]")
        log.error("import_json.read_error", error=str(e))
        raise typer.Exit(1) from e
    items = data if isinstance(data, list) else data.get("value", [])
    init_db()
    imported = skipped = 0
    for item in items:
        if not isinstance(item, dict) or item.get("id") in (None, ""):
            skipped += 1
            continue
        fields = {k: v for k, v in item.items() if k != "id"}
        upsert_document(str(item["id"]), fields)
        imported += 1
    console.print(f"[green]Imported {imported} requests[/green] ({skipped} skipped)")
    log.info("import_json.ok", imported=imported, skipped=skipped)
