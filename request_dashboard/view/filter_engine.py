"""Free-text search over request records."""

from collections.abc import Iterable, Iterator

from request_dashboard.models.record import RequestRecord

SEARCHABLE_FIELDS = ("customerName", "userEmail", "address", "phoneNumber", "courier")


def _searchable_values(record: RequestRecord, include_links: bool) -> Iterator[str]:
    for field in SEARCHABLE_FIELDS:
        value = record.get(field)
        if isinstance(value, str):
            yield value
    if include_links:
        yield from record.product_links


def matches(record: RequestRecord, query: str, *, include_links: bool = True) -> bool:
    """True if the lowercased query is a substring of any searchable field."""
    if not query:
        return True
    needle = query.lower()
    return any(needle in value.lower() for value in _searchable_values(record, include_links))


def filter_records(
    records: Iterable[RequestRecord],
    query: str | None,
    *,
    include_links: bool = True,
) -> list[RequestRecord]:
    """Return records matching query, input order preserved. Only the empty query keeps everything."""
    if not query:
        return list(records)
    return [r for r in records if matches(r, query, include_links=include_links)]
