"""Convert raw documents into RequestRecord models."""

from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from request_dashboard.models.record import RequestRecord
from request_dashboard.utils.logger import get_logger

logger = get_logger("request_dashboard.sources.documents")


def to_record(doc_id: str, fields: dict[str, Any]) -> RequestRecord | None:
    """Build a record; the source-assigned id wins over any "id" stored in the document."""
    try:
        return RequestRecord.model_validate({**fields, "id": doc_id})
    except ValidationError as e:
        logger.warning("sources.document_invalid", record_id=doc_id, error=str(e))
        return None


def to_records(documents: Iterable[tuple[str, dict[str, Any]]]) -> list[RequestRecord]:
    records: list[RequestRecord] = []
    seen: set[str] = set()
    for doc_id, fields in documents:
        if doc_id in seen:
            logger.warning("sources.duplicate_id", record_id=doc_id)
            continue
        record = to_record(doc_id, fields)
        if record is not None:
            seen.add(doc_id)
            records.append(record)
    return records
