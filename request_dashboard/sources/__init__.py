"""Record sources: JSON file, SQL and Firestore REST implementations."""

import httpx

from request_dashboard.config import (
    FIRESTORE_API_KEY,
    FIRESTORE_BASE_URL,
    FIRESTORE_COLLECTION,
    FIRESTORE_PAGE_SIZE,
    FIRESTORE_PROJECT_ID,
    FIRESTORE_STATUS_COLLECTION,
    RECORDS_PATH,
    STATUS_PATH,
)
from request_dashboard.sources.firestore_source import FirestoreSource
from request_dashboard.sources.json_source import JsonFileSource
from request_dashboard.sources.protocol import RecordSource
from request_dashboard.sources.sql_source import SqlRecordSource

SOURCE_KINDS = ("json", "sql", "firestore")


def build_source(kind: str, http_client: httpx.AsyncClient | None = None) -> RecordSource:
    """Create the configured record source. Firestore needs the app's shared HTTP client."""
    kind = (kind or "json").strip().lower()
    if kind == "json":
        return JsonFileSource(records_path=RECORDS_PATH, status_path=STATUS_PATH)
    if kind == "sql":
        return SqlRecordSource()
    if kind == "firestore":
        if http_client is None:
            raise ValueError("firestore source requires an http_client")
        if not FIRESTORE_PROJECT_ID:
            raise ValueError("FIRESTORE_PROJECT_ID is not set")
        return FirestoreSource(
            project_id=FIRESTORE_PROJECT_ID,
            http_client=http_client,
            collection=FIRESTORE_COLLECTION,
            status_collection=FIRESTORE_STATUS_COLLECTION,
            api_key=FIRESTORE_API_KEY,
            base_url=FIRESTORE_BASE_URL,
            page_size=FIRESTORE_PAGE_SIZE,
        )
    raise ValueError(f"Unknown record source: {kind!r} (expected one of {', '.join(SOURCE_KINDS)})")


__all__ = [
    "RecordSource",
    "JsonFileSource",
    "SqlRecordSource",
    "FirestoreSource",
    "SOURCE_KINDS",
    "build_source",
]
