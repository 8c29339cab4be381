"""Column projection: map a record to display cells for the minimal or full view."""

import re
from datetime import datetime
from typing import Callable, Optional
from urllib.parse import quote
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from request_dashboard.config import DISPLAY_TIME_FORMAT, DISPLAY_TIMEZONE, GREETING_TEMPLATE
from request_dashboard.models.record import PLACEHOLDER, RequestRecord
from request_dashboard.models.view import ActionCell, Cell, DisplayMode, Link

NO_LINKS = "No Links"
WHATSAPP_BASE = "https://wa.me/"

# (label, document field); special columns are keyed by label in _SPECIAL_COLUMNS
MINIMAL_COLUMNS: tuple[tuple[str, str], ...] = (
    ("Name", "customerName"),
    ("Email", "userEmail"),
    ("Phone", "phoneNumber"),
    ("Courier", "courier"),
    ("Quantity", "quantity"),
    ("Submitted", "submittedAt"),
    ("Message", "phoneNumber"),
    ("Status", "status"),
)
FULL_COLUMNS: tuple[tuple[str, str], ...] = MINIMAL_COLUMNS + (
    ("Address", "address"),
    ("Description", "description"),
    ("Product Links", "productLinks"),
)


def columns_for(mode: DisplayMode) -> list[str]:
    """Column labels for a display mode, in display order."""
    return [label for label, _ in (FULL_COLUMNS if mode == "full" else MINIMAL_COLUMNS)]


def _zone(name: str):
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def format_timestamp(
    value: Optional[datetime],
    fmt: str = DISPLAY_TIME_FORMAT,
    tz: str = DISPLAY_TIMEZONE,
) -> str:
    """Human-readable local time, or "N/A" when absent."""
    if value is None:
        return PLACEHOLDER
    zone = _zone(tz)
    if zone is not None:
        value = value.astimezone(zone)
    return value.strftime(fmt)


def phone_digits(phone: Optional[str]) -> str:
    return re.sub(r"\D", "", phone or "")


def build_message_link(record: RequestRecord, greeting_template: str = GREETING_TEMPLATE) -> Link:
    """WhatsApp deep link to the customer with a prefilled greeting."""
    name = record.customer_name or "there"
    greeting = greeting_template.format(name=name)
    href = f"{WHATSAPP_BASE}{phone_digits(record.phone_number)}?text={quote(greeting)}"
    return Link(label=record.phone_number or "WhatsApp", href=href)


def invoice_action_path(record: RequestRecord) -> str:
    return f"/requests/{quote(record.id, safe='')}/invoice"


def _links_cell(record: RequestRecord, status: Optional[str]) -> Cell:
    if not record.product_links:
        return NO_LINKS
    return [Link(label=f"Link-{i}", href=url) for i, url in enumerate(record.product_links, start=1)]


def _submitted_cell(record: RequestRecord, status: Optional[str]) -> Cell:
    return format_timestamp(record.submitted_at)


def _message_cell(record: RequestRecord, status: Optional[str]) -> Cell:
    return ActionCell(message_link=build_message_link(record), invoice_action=invoice_action_path(record))


def _status_cell(record: RequestRecord, status: Optional[str]) -> Cell:
    return status if status else PLACEHOLDER


_SPECIAL_COLUMNS: dict[str, Callable[[RequestRecord, Optional[str]], Cell]] = {
    "Product Links": _links_cell,
    "Submitted": _submitted_cell,
    "Message": _message_cell,
    "Status": _status_cell,
}


def project_record(
    record: RequestRecord,
    mode: DisplayMode = "minimal",
    *,
    status: Optional[str] = None,
) -> dict[str, Cell]:
    """Map one record to {column label: cell} for the given display mode."""
    columns = FULL_COLUMNS if mode == "full" else MINIMAL_COLUMNS
    cells: dict[str, Cell] = {}
    for label, field in columns:
        special = _SPECIAL_COLUMNS.get(label)
        cells[label] = special(record, status) if special else record.display(field)
    return cells
