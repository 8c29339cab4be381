"""Invoice actions: build a structured invoice document and render it as HTML."""

import html
from datetime import datetime, timezone
from typing import Optional

import qrcode
from qrcode.constants import ERROR_CORRECT_M
from qrcode.image.svg import SvgPathImage

from request_dashboard.config import SHOP_NAME
from request_dashboard.models.invoice import InvoiceDocument, InvoiceField, InvoiceLine
from request_dashboard.models.record import PLACEHOLDER, RequestRecord
from request_dashboard.view.projector import format_timestamp


def invoice_number(record: RequestRecord) -> str:
    return f"INV-{record.id}"


def qr_payload(record: RequestRecord) -> str:
    """Summary string encoded into the invoice QR code."""
    return "\n".join(
        [
            f"Name: {record.display('customerName')}",
            f"Email: {record.display('userEmail')}",
            f"Phone: {record.display('phoneNumber')}",
            f"Invoice: {invoice_number(record)}",
        ]
    )


def build_invoice(
    record: RequestRecord,
    *,
    shop_name: str = SHOP_NAME,
    status: Optional[str] = None,
    issued_at: Optional[datetime] = None,
) -> InvoiceDocument:
    """Pure: everything a rendering surface needs to print an invoice for one request."""
    customer = [
        InvoiceField(label="Name", value=record.display("customerName")),
        InvoiceField(label="Email", value=record.display("userEmail")),
        InvoiceField(label="Phone", value=record.display("phoneNumber")),
        InvoiceField(label="Address", value=record.display("address")),
        InvoiceField(label="Submitted", value=format_timestamp(record.submitted_at)),
    ]
    if record.description:
        customer.append(InvoiceField(label="Note", value=record.description))
    lines = [
        InvoiceLine(position=i, label=f"Product {i}", url=url)
        for i, url in enumerate(record.product_links, start=1)
    ]
    return InvoiceDocument(
        request_id=record.id,
        invoice_number=invoice_number(record),
        title=f"{shop_name} Invoice",
        issued_at=issued_at or datetime.now(timezone.utc),
        customer=customer,
        lines=lines,
        quantity=record.quantity,
        courier=record.display("courier"),
        status=status,
        qr_payload=qr_payload(record),
    )


def qr_svg(text: str, box_size: int = 8, border: int = 2) -> str:
    """QR code for text as an inline SVG element."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
        image_factory=SvgPathImage,
    )
    qr.add_data(text)
    qr.make(fit=True)
    return qr.make_image().to_string(encoding="unicode")


def render_invoice_html(doc: InvoiceDocument) -> str:
    """Printable HTML page for a browser popup."""
    esc = html.escape
    customer_rows = "\n".join(
        f"<tr><th>{esc(f.label)}</th><td>{esc(f.value)}</td></tr>" for f in doc.customer
    )
    if doc.lines:
        line_rows = "\n".join(
            f'<tr><td>{line.position}</td><td><a href="{esc(line.url)}">{esc(line.label)}</a></td></tr>'
            for line in doc.lines
        )
    else:
        line_rows = "<tr><td colspan=\"2\">No Links</td></tr>"
    status_row = f"<p class=\"status\">Status: {esc(doc.status)}</p>" if doc.status else ""
    issued = doc.issued_at.strftime("%Y-%m-%d %H:%M %Z").strip()
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{esc(doc.invoice_number)}</title>
<style>
body {{ font-family: sans-serif; margin: 2rem; }}
table {{ border-collapse: collapse; margin-bottom: 1rem; }}
th, td {{ border: 1px solid #ccc; padding: 4px 8px; text-align: left; }}
.qr svg {{ width: 128px; height: 128px; }}
</style>
</head>
<body onload="window.print()">
<h1>{esc(doc.title)}</h1>
<p>Invoice: {esc(doc.invoice_number)}<br>Issued: {esc(issued)}</p>
{status_row}
<table>
{customer_rows}
<tr><th>Quantity</th><td>{doc.quantity}</td></tr>
<tr><th>Courier</th><td>{esc(doc.courier or PLACEHOLDER)}</td></tr>
</table>
<table>
<tr><th>#</th><th>Product</th></tr>
{line_rows}
</table>
<div class="qr">{qr_svg(doc.qr_payload)}</div>
</body>
</html>
"""
