"""Pydantic models for request records, table views and invoices."""

from request_dashboard.models.invoice import InvoiceDocument, InvoiceField, InvoiceLine
from request_dashboard.models.record import PLACEHOLDER, RequestRecord
from request_dashboard.models.view import (
    ActionCell,
    AggregateStats,
    Link,
    SortState,
    TableRow,
    TableView,
    ViewConfig,
    ViewState,
)

__all__ = [
    "PLACEHOLDER",
    "RequestRecord",
    "ActionCell",
    "AggregateStats",
    "Link",
    "SortState",
    "TableRow",
    "TableView",
    "ViewConfig",
    "ViewState",
    "InvoiceDocument",
    "InvoiceField",
    "InvoiceLine",
]
