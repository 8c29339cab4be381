"""Status map: action-outcome labels keyed by record id, separate from the records.

Writes merge per key (last write wins for a key, other keys are untouched).
Persistence to the record source is fire-and-forget: a failed write is logged
and the in-memory label stays.
"""

import asyncio
from collections.abc import Mapping

from request_dashboard.errors import RecordSourceError
from request_dashboard.sources.protocol import RecordSource
from request_dashboard.utils.logger import get_logger

logger = get_logger("request_dashboard.status_store")


class StatusStore:
    """In-memory status labels guarded by an asyncio lock."""

    def __init__(self, initial: Mapping[str, str] | None = None):
        self._lock = asyncio.Lock()
        self._labels: dict[str, str] = dict(initial or {})

    def get(self, record_id: str) -> str | None:
        return self._labels.get(record_id)

    def snapshot(self) -> dict[str, str]:
        """Copy of the current map; later writes do not change it."""
        return dict(self._labels)

    async def set(self, record_id: str, label: str) -> None:
        async with self._lock:
            self._labels = {**self._labels, record_id: label}

    async def merge(self, labels: Mapping[str, str]) -> None:
        async with self._lock:
            self._labels = {**self._labels, **labels}

    async def load(self, source: RecordSource) -> int:
        """Merge persisted labels from the source. Returns the number loaded (0 on failure)."""
        try:
            labels = await source.get_statuses()
        except RecordSourceError as e:
            logger.warning("status_store.load_error", error=str(e))
            return 0
        await self.merge(labels)
        logger.debug("status_store.loaded", count=len(labels))
        return len(labels)

    async def persist(self, source: RecordSource, record_id: str, label: str) -> bool:
        """Write one label to the source. Returns False on failure, which is only logged."""
        try:
            await source.set_status(record_id, label)
        except Exception as e:
            logger.warning(
                "status_store.persist_error",
                record_id=record_id,
                status=label,
                error=str(e),
            )
            return False
        logger.debug("status_store.persisted", record_id=record_id, status=label)
        return True
