"""Summary widgets over the unfiltered batch."""

from collections import Counter
from collections.abc import Sequence

from request_dashboard.models.record import RequestRecord
from request_dashboard.models.view import AggregateStats

UNSPECIFIED_COURIER = "Unspecified"


def courier_mode(records: Sequence[RequestRecord]) -> tuple[str, int]:
    """Most frequent courier and its count. Ties go to the courier seen first."""
    counts: Counter[str] = Counter()
    for record in records:
        courier = (record.courier or "").strip() or UNSPECIFIED_COURIER
        counts[courier] += 1
    if not counts:
        return UNSPECIFIED_COURIER, 0
    # Counter keeps insertion order and max() returns the first maximal item
    return max(counts.items(), key=lambda item: item[1])


def unique_email_count(records: Sequence[RequestRecord]) -> int:
    return len({r.user_email for r in records if r.user_email})


def compute_aggregates(records: Sequence[RequestRecord]) -> AggregateStats:
    top_courier, top_count = courier_mode(records)
    return AggregateStats(
        total=len(records),
        unique_emails=unique_email_count(records),
        total_quantity=sum(r.quantity for r in records),
        top_courier=top_courier,
        top_courier_count=top_count,
    )
