"""Invoice document models, independent of any rendering surface."""

from datetime import datetime

from pydantic import BaseModel, Field


class InvoiceField(BaseModel):
    label: str
    value: str


class InvoiceLine(BaseModel):
    """One ordered item: a product link."""

    position: int
    label: str
    url: str


class InvoiceDocument(BaseModel):
    """Structured invoice for one request."""

    request_id: str
    invoice_number: str
    title: str
    issued_at: datetime
    customer: list[InvoiceField] = Field(default_factory=list)
    lines: list[InvoiceLine] = Field(default_factory=list)
    quantity: int = 0
    courier: str = "N/A"
    status: str | None = None
    qr_payload: str = ""
