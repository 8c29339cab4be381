"""View models: table configuration, sort state, cells, rows and aggregate stats."""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

DisplayMode = Literal["minimal", "full"]
SortDirection = Literal["asc", "desc"]

DEFAULT_SORT_KEY = "submittedAt"
DEFAULT_SORT_DIRECTION: SortDirection = "desc"


class SortState(BaseModel):
    """Current sort column and direction. key=None keeps source order."""

    key: Optional[str] = None
    direction: SortDirection = "asc"

    model_config = {"frozen": True}


class ViewConfig(BaseModel):
    """Everything that distinguishes one table view from another. Newest requests first by default."""

    display_mode: DisplayMode = "minimal"
    sort_key: Optional[str] = DEFAULT_SORT_KEY
    sort_direction: SortDirection = DEFAULT_SORT_DIRECTION
    search_query: str = ""

    model_config = {"frozen": True}


class Link(BaseModel):
    """A labeled hyperlink rendered inside a cell."""

    label: str
    href: str


class ActionCell(BaseModel):
    """Per-row actions: outbound message link and invoice trigger."""

    message_link: Link
    invoice_action: str


Cell = Union[str, list[Link], ActionCell]


class TableRow(BaseModel):
    id: str
    cells: dict[str, Cell]


class AggregateStats(BaseModel):
    """Summary widgets computed over the unfiltered batch."""

    total: int = 0
    unique_emails: int = 0
    total_quantity: int = 0
    top_courier: str = "Unspecified"
    top_courier_count: int = 0


class TableView(BaseModel):
    """A rendered table: projected rows plus stats over the whole batch."""

    config: ViewConfig
    columns: list[str]
    rows: list[TableRow] = Field(default_factory=list)
    stats: AggregateStats = Field(default_factory=AggregateStats)
    total_count: int = 0
    filtered_count: int = 0


class ViewState(BaseModel):
    """Outcome of loading a view: ready with a table, or a terminal error message."""

    status: Literal["ready", "error"]
    view: Optional[TableView] = None
    error: Optional[str] = None
