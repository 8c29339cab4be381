"""Type-aware, stable ordering of request records."""

import locale
from collections.abc import Iterable
from datetime import datetime
from functools import cmp_to_key
from typing import Any, Optional

from request_dashboard.config import SORT_LOCALE
from request_dashboard.models.record import RequestRecord
from request_dashboard.models.view import DEFAULT_SORT_DIRECTION, DEFAULT_SORT_KEY, SortDirection, SortState
from request_dashboard.utils.logger import get_logger

logger = get_logger("request_dashboard.view.sort_engine")


def use_collation_locale(name: str = SORT_LOCALE) -> bool:
    """Set LC_COLLATE for text comparison. Keeps the current collation if the locale is unavailable."""
    try:
        locale.setlocale(locale.LC_COLLATE, name)
    except locale.Error as e:
        logger.warning("sort.locale_unavailable", locale=name, error=str(e))
        return False
    return True


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _compare_text(a: str, b: str) -> int:
    primary_a, primary_b = locale.strxfrm(a.casefold()), locale.strxfrm(b.casefold())
    if primary_a != primary_b:
        return -1 if primary_a < primary_b else 1
    secondary_a, secondary_b = locale.strxfrm(a), locale.strxfrm(b)
    if secondary_a != secondary_b:
        return -1 if secondary_a < secondary_b else 1
    return 0


def compare_values(a: Any, b: Any) -> int:
    """Compare two field values. Values of different or unsupported types compare equal."""
    if isinstance(a, str) and isinstance(b, str):
        return _compare_text(a, b)
    if _is_number(a) and _is_number(b):
        diff = a - b
        return (diff > 0) - (diff < 0)
    if isinstance(a, datetime) and isinstance(b, datetime):
        return (a > b) - (a < b)
    return 0


def sort_records(
    records: Iterable[RequestRecord],
    sort_key: Optional[str],
    direction: SortDirection = "asc",
) -> list[RequestRecord]:
    """Return a new list ordered by sort_key. Equal keys keep their input order."""
    items = list(records)
    if not sort_key:
        return items
    sign = -1 if direction == "desc" else 1

    def _cmp(left: RequestRecord, right: RequestRecord) -> int:
        return sign * compare_values(left.get(sort_key), right.get(sort_key))

    # sorted() is stable, and a negated comparator leaves ties untouched
    return sorted(items, key=cmp_to_key(_cmp))


def resolve_sort(sort_key: Optional[str], direction: Optional[SortDirection] = None) -> SortState:
    """
    Sort requested by a caller. No key means newest first; an explicit key starts ascending.
    An empty key keeps source order.
    """
    if sort_key is None:
        return SortState(key=DEFAULT_SORT_KEY, direction=direction or DEFAULT_SORT_DIRECTION)
    return SortState(key=sort_key or None, direction=direction or "asc")


def toggle_sort(state: SortState, key: str) -> SortState:
    """Same key flips the direction; a new key starts ascending."""
    if state.key == key:
        return SortState(key=key, direction="desc" if state.direction == "asc" else "asc")
    return SortState(key=key, direction="asc")
