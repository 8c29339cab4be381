"""Firestore REST record source (v1 documents API) over httpx."""

import re
from datetime import datetime
from typing import Any

import httpx

from request_dashboard.errors import RecordSourceError
from request_dashboard.models.record import RequestRecord
from request_dashboard.sources.documents import to_records
from request_dashboard.utils.logger import get_logger

logger = get_logger("request_dashboard.sources.firestore")

_FRACTION = re.compile(r"\.\d+")


def decode_value(value: dict[str, Any]) -> Any:
    """Decode one Firestore typed value ({"stringValue": ...}, {"mapValue": ...}, ...)."""
    if not isinstance(value, dict) or not value:
        return None
    kind, raw = next(iter(value.items()))
    if kind == "nullValue":
        return None
    if kind == "stringValue":
        return raw
    if kind == "booleanValue":
        return bool(raw)
    if kind == "integerValue":
        # int64 is transported as a string
        try:
            return int(raw)
        except (TypeError, ValueError):
            return None
    if kind == "doubleValue":
        try:
            return float(raw)
        except (TypeError, ValueError):
            return None
    if kind == "timestampValue":
        # RFC 3339 with up to nanosecond precision; datetime keeps microseconds
        text = _FRACTION.sub(lambda m: m.group(0)[:7], str(raw)).replace("Z", "+00:00")
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    if kind == "arrayValue":
        return [decode_value(v) for v in (raw or {}).get("values", [])]
    if kind == "mapValue":
        return decode_fields((raw or {}).get("fields", {}))
    if kind == "geoPointValue":
        return dict(raw or {})
    # referenceValue, bytesValue: opaque strings
    return raw


def decode_fields(fields: dict[str, Any]) -> dict[str, Any]:
    return {name: decode_value(value) for name, value in (fields or {}).items()}


def document_id(name: str) -> str:
    """Last path segment of a document resource name."""
    return name.rsplit("/", 1)[-1]


class FirestoreSource:
    """Lists a collection page by page until nextPageToken runs out."""

    def __init__(
        self,
        project_id: str,
        http_client: httpx.AsyncClient,
        collection: str = "userRequests",
        status_collection: str = "requestStatus",
        api_key: str = "",
        base_url: str = "https://firestore.googleapis.com/v1",
        page_size: int = 300,
    ):
        self._http = http_client
        self._collection = collection
        self._status_collection = status_collection
        self._api_key = api_key
        self._page_size = page_size
        self._documents_url = f"{base_url.rstrip('/')}/projects/{project_id}/databases/(default)/documents"
        logger.info(
            "sources.firestore.init",
            project_id=project_id,
            collection=collection,
            status_collection=status_collection,
        )

    def _params(self, **extra: Any) -> dict[str, Any]:
        params = {k: v for k, v in extra.items() if v is not None}
        if self._api_key:
            params["key"] = self._api_key
        return params

    async def _list_collection(self, collection: str) -> list[dict[str, Any]]:
        url = f"{self._documents_url}/{collection}"
        documents: list[dict[str, Any]] = []
        page_token: str | None = None
        while True:
            try:
                response = await self._http.get(
                    url, params=self._params(pageSize=self._page_size, pageToken=page_token)
                )
                response.raise_for_status()
                body = response.json()
            except (httpx.HTTPError, ValueError) as e:
                logger.warning("sources.firestore.list_error", collection=collection, error=str(e))
                raise RecordSourceError(f"Firestore list {collection!r} failed: {e}") from e
            documents.extend(body.get("documents", []))
            page_token = body.get("nextPageToken")
            if not page_token:
                return documents

    async def fetch_all(self) -> list[RequestRecord]:
        raw = await self._list_collection(self._collection)
        records = to_records(
            (document_id(doc.get("name", "")), decode_fields(doc.get("fields", {}))) for doc in raw
        )
        logger.info("sources.firestore.fetched", count=len(records))
        return records

    async def get_statuses(self) -> dict[str, str]:
        raw = await self._list_collection(self._status_collection)
        statuses: dict[str, str] = {}
        for doc in raw:
            status = decode_fields(doc.get("fields", {})).get("status")
            if isinstance(status, str):
                statuses[document_id(doc.get("name", ""))] = status
        return statuses

    async def set_status(self, record_id: str, label: str) -> None:
        url = f"{self._documents_url}/{self._status_collection}/{record_id}"
        try:
            response = await self._http.patch(
                url,
                params=self._params(**{"updateMask.fieldPaths": "status"}),
                json={"fields": {"status": {"stringValue": label}}},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise RecordSourceError(f"Firestore status write failed: {e}") from e
        logger.debug("sources.firestore.status_written", record_id=record_id, status=label)
