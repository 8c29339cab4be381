"""Record source protocol: bulk read of request documents plus a status side-collection."""

from typing import Protocol

from request_dashboard.models.record import RequestRecord


class RecordSource(Protocol):
    """Read-only request collection with a writable per-record status collection."""

    async def fetch_all(self) -> list[RequestRecord]:
        """Fetch every request document. Raises RecordSourceError when the store is unreachable."""
        ...

    async def get_statuses(self) -> dict[str, str]:
        """Return persisted status labels keyed by record id."""
        ...

    async def set_status(self, record_id: str, label: str) -> None:
        """Persist a status label for one record id."""
        ...
