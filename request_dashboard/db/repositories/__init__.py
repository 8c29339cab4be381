"""DB repositories: sync functions over request documents and statuses."""

from request_dashboard.db.repositories.request_repo import (
    list_documents,
    list_statuses,
    upsert_document,
    upsert_status,
)

__all__ = [
    "list_documents",
    "list_statuses",
    "upsert_document",
    "upsert_status",
]
