"""Request table view engine."""

from request_dashboard.view.aggregates import compute_aggregates, courier_mode
from request_dashboard.view.engine import build_table_view, load_view
from request_dashboard.view.filter_engine import filter_records
from request_dashboard.view.projector import columns_for, format_timestamp, project_record
from request_dashboard.view.sort_engine import (
    compare_values,
    resolve_sort,
    sort_records,
    toggle_sort,
    use_collation_locale,
)

__all__ = [
    "build_table_view",
    "load_view",
    "filter_records",
    "sort_records",
    "compare_values",
    "toggle_sort",
    "resolve_sort",
    "use_collation_locale",
    "columns_for",
    "project_record",
    "format_timestamp",
    "compute_aggregates",
    "courier_mode",
]
