"""ORM models for stored request documents and their status labels."""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from request_dashboard.db.base import Base, TimestampMixin


class UserRequestRow(Base, TimestampMixin):
    """One request document. The document body is kept as JSON text, schemaless like the hosted store."""

    __tablename__ = "user_requests"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    document_json: Mapped[str] = mapped_column(Text, nullable=False)
    submitted_at: Mapped[Optional[datetime]] = mapped_column(nullable=True, index=True)


class RequestStatusRow(Base, TimestampMixin):
    """Status label for a request, keyed by request id (no foreign key: the label map is auxiliary)."""

    __tablename__ = "request_statuses"

    request_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    status: Mapped[str] = mapped_column(String(128), nullable=False)
