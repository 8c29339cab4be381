"""Request repository: documents in, (id, fields) pairs out; status labels by id."""

import json
from typing import Any

from sqlalchemy import select

from request_dashboard.db import get_session
from request_dashboard.db.models.request import RequestStatusRow, UserRequestRow
from request_dashboard.models.record import parse_timestamp


def list_documents() -> list[tuple[str, dict[str, Any]]]:
    """Return every stored document as (id, fields), newest submission first."""
    with get_session() as session:
        q = select(UserRequestRow).order_by(
            UserRequestRow.submitted_at.desc(), UserRequestRow.created_at.desc()
        )
        rows = list(session.scalars(q).all())
        documents = []
        for row in rows:
            try:
                fields = json.loads(row.document_json)
            except ValueError:
                fields = {}
            documents.append((row.id, fields if isinstance(fields, dict) else {}))
        return documents


def upsert_document(record_id: str, fields: dict[str, Any]) -> None:
    """Insert or replace one document."""
    submitted = parse_timestamp(fields.get("submittedAt", fields.get("timestamp")))
    payload = json.dumps(fields, default=str)
    with get_session() as session:
        row = session.get(UserRequestRow, record_id)
        if row is None:
            session.add(UserRequestRow(id=record_id, document_json=payload, submitted_at=submitted))
        else:
            row.document_json = payload
            row.submitted_at = submitted


def list_statuses() -> dict[str, str]:
    with get_session() as session:
        rows = session.execute(select(RequestStatusRow.request_id, RequestStatusRow.status)).all()
        return {request_id: status for request_id, status in rows}


def upsert_status(record_id: str, status: str) -> None:
    """Set the status label for a request id (last write wins)."""
    with get_session() as session:
        row = session.get(RequestStatusRow, record_id)
        if row is None:
            session.add(RequestStatusRow(request_id=record_id, status=status))
        else:
            row.status = status
