"""Tests for invoice document building and HTML rendering."""

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from request_dashboard.invoice import build_invoice, qr_payload, qr_svg, render_invoice_html
from request_dashboard.models.record import RequestRecord
from sample_data import contact_batch

ISSUED = datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc)


class TestBuildInvoice(unittest.TestCase):
    def test_document_fields(self):
        record = contact_batch()[2]
        doc = build_invoice(record, shop_name="Dokan", issued_at=ISSUED)
        self.assertEqual(doc.request_id, "r3")
        self.assertEqual(doc.invoice_number, "INV-r3")
        self.assertEqual(doc.title, "Dokan Invoice")
        self.assertEqual(doc.issued_at, ISSUED)
        self.assertEqual(doc.quantity, 4)
        self.assertEqual(doc.courier, "N/A")
        self.assertIsNone(doc.status)
        customer = {f.label: f.value for f in doc.customer}
        self.assertEqual(customer["Name"], "carol das")
        self.assertEqual(customer["Phone"], "N/A")
        self.assertEqual([line.url for line in doc.lines], record.product_links)
        self.assertEqual([line.position for line in doc.lines], [1, 2])

    def test_qr_payload(self):
        payload = qr_payload(contact_batch()[0])
        self.assertEqual(
            payload.splitlines(),
            ["Name: Alice Rahman", "Email: alice@example.com", "Phone: +880 1711-000001", "Invoice: INV-r1"],
        )

    def test_note_only_when_present(self):
        with_note = build_invoice(RequestRecord(id="1", description="Gift wrap"), issued_at=ISSUED)
        without = build_invoice(RequestRecord(id="2"), issued_at=ISSUED)
        self.assertIn("Note", [f.label for f in with_note.customer])
        self.assertNotIn("Note", [f.label for f in without.customer])


class TestRenderInvoice(unittest.TestCase):
    def test_html_is_escaped(self):
        record = RequestRecord(id="9", customerName="<script>alert(1)</script>")
        page = render_invoice_html(build_invoice(record, status="Invoice Generated", issued_at=ISSUED))
        self.assertIn("&lt;script&gt;", page)
        self.assertNotIn("<script>alert", page)
        self.assertIn("INV-9", page)
        self.assertIn("No Links", page)
        self.assertIn("Status: Invoice Generated", page)

    def test_links_and_qr(self):
        page = render_invoice_html(build_invoice(contact_batch()[2], issued_at=ISSUED))
        self.assertIn('href="https://shop.example/p/scarf"', page)
        self.assertIn('class="qr"', page)

    def test_qr_svg(self):
        svg = qr_svg("Name: Alice")
        self.assertIn("svg", svg)
        self.assertIn("path", svg)


if __name__ == "__main__":
    unittest.main()
