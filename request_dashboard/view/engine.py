"""Table view engine: filter -> sort -> project, with stats over the whole batch."""

from collections.abc import Mapping, Sequence

from request_dashboard.errors import RecordSourceError
from request_dashboard.models.record import RequestRecord
from request_dashboard.models.view import TableRow, TableView, ViewConfig, ViewState
from request_dashboard.sources.protocol import RecordSource
from request_dashboard.utils.logger import get_logger
from request_dashboard.view.aggregates import compute_aggregates
from request_dashboard.view.filter_engine import filter_records
from request_dashboard.view.projector import columns_for, project_record
from request_dashboard.view.sort_engine import sort_records

logger = get_logger("request_dashboard.view.engine")

LOAD_ERROR_PREFIX = "Failed to load requests"


def build_table_view(
    records: Sequence[RequestRecord],
    config: ViewConfig,
    statuses: Mapping[str, str] | None = None,
) -> TableView:
    """Pure: render the table for one configuration."""
    statuses = statuses or {}
    filtered = filter_records(records, config.search_query)
    ordered = sort_records(filtered, config.sort_key, config.sort_direction)
    rows = [
        TableRow(id=r.id, cells=project_record(r, config.display_mode, status=statuses.get(r.id)))
        for r in ordered
    ]
    return TableView(
        config=config,
        columns=columns_for(config.display_mode),
        rows=rows,
        stats=compute_aggregates(records),
        total_count=len(records),
        filtered_count=len(rows),
    )


async def load_view(
    source: RecordSource,
    config: ViewConfig,
    statuses: Mapping[str, str] | None = None,
) -> ViewState:
    """Fetch the batch once and build the view. A fetch failure is a terminal error state."""
    try:
        records = await source.fetch_all()
    except RecordSourceError as e:
        logger.error("view.load.error", error=str(e))
        return ViewState(status="error", error=f"{LOAD_ERROR_PREFIX}: {e}")
    view = build_table_view(records, config, statuses)
    logger.debug(
        "view.load.ok",
        total=view.total_count,
        filtered=view.filtered_count,
        mode=config.display_mode,
        sort_key=config.sort_key,
    )
    return ViewState(status="ready", view=view)
