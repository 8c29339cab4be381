"""SQL record source: request documents and statuses in SQLAlchemy tables."""

import asyncio

from sqlalchemy.exc import SQLAlchemyError

from request_dashboard.db.repositories import list_documents, list_statuses, upsert_status
from request_dashboard.errors import RecordSourceError
from request_dashboard.models.record import RequestRecord
from request_dashboard.sources.documents import to_records
from request_dashboard.utils.logger import get_logger

logger = get_logger("request_dashboard.sources.sql")


class SqlRecordSource:
    """Runs the sync repository functions in a worker thread."""

    async def fetch_all(self) -> list[RequestRecord]:
        try:
            documents = await asyncio.to_thread(list_documents)
        except SQLAlchemyError as e:
            raise RecordSourceError(f"Database read failed: {e}") from e
        records = to_records(documents)
        logger.info("sources.sql.fetched", count=len(records))
        return records

    async def get_statuses(self) -> dict[str, str]:
        try:
            return await asyncio.to_thread(list_statuses)
        except SQLAlchemyError as e:
            raise RecordSourceError(f"Database read failed: {e}") from e

    async def set_status(self, record_id: str, label: str) -> None:
        try:
            await asyncio.to_thread(upsert_status, record_id, label)
        except SQLAlchemyError as e:
            raise RecordSourceError(f"Database write failed: {e}") from e
        logger.debug("sources.sql.status_written", record_id=record_id, status=label)
