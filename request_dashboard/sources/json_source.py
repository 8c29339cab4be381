"""Local JSON file record source: documents in one file, statuses in another."""

import asyncio
import json
from pathlib import Path
from typing import Any

from request_dashboard.errors import RecordSourceError
from request_dashboard.models.record import RequestRecord
from request_dashboard.sources.documents import to_records
from request_dashboard.utils.logger import get_logger

logger = get_logger("request_dashboard.sources.json")


class JsonFileSource:
    """Reads user_requests.json; keeps status labels in request_status.json."""

    def __init__(self, records_path: Path, status_path: Path):
        self._records_path = Path(records_path)
        self._status_path = Path(status_path)
        self._lock = asyncio.Lock()
        logger.info(
            "sources.json.init",
            records_path=str(self._records_path),
            status_path=str(self._status_path),
        )

    def _read_json(self, path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise RecordSourceError(f"Cannot read {path}: {e}") from e

    def _documents(self, data: Any) -> list[tuple[str, dict[str, Any]]]:
        items = data if isinstance(data, list) else data.get("value", data.get("documents", []))
        documents = []
        for index, item in enumerate(items or []):
            if not isinstance(item, dict):
                continue
            doc_id = item.get("id")
            documents.append((str(doc_id) if doc_id is not None else str(index), item))
        return documents

    async def fetch_all(self) -> list[RequestRecord]:
        if not self._records_path.exists():
            logger.warning("sources.json.records_missing", records_path=str(self._records_path))
            return []
        data = self._read_json(self._records_path)
        if not isinstance(data, (list, dict)):
            raise RecordSourceError(f"Unexpected JSON document in {self._records_path}")
        records = to_records(self._documents(data))
        logger.info("sources.json.fetched", count=len(records))
        return records

    async def get_statuses(self) -> dict[str, str]:
        if not self._status_path.exists():
            return {}
        data = self._read_json(self._status_path)
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items() if isinstance(v, str)}

    async def set_status(self, record_id: str, label: str) -> None:
        async with self._lock:
            statuses = await self.get_statuses()
            statuses[record_id] = label
            try:
                self._status_path.parent.mkdir(parents=True, exist_ok=True)
                self._status_path.write_text(json.dumps(statuses, indent=2), encoding="utf-8")
            except OSError as e:
                raise RecordSourceError(f"Cannot write {self._status_path}: {e}") from e
        logger.debug("sources.json.status_written", record_id=record_id, status=label)
