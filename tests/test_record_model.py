"""Tests for RequestRecord: aliases, lenient coercion and placeholder accessors."""

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pydantic import ValidationError

from request_dashboard.models.record import PLACEHOLDER, RequestRecord, parse_timestamp


class TestRequestRecord(unittest.TestCase):
    def test_camel_case_and_legacy_names(self):
        r = RequestRecord.model_validate(
            {"id": "1", "name": "Alice", "email": "a@example.com", "message": "Blue, size M"}
        )
        self.assertEqual(r.customer_name, "Alice")
        self.assertEqual(r.user_email, "a@example.com")
        self.assertEqual(r.description, "Blue, size M")
        self.assertEqual(r.get("customerName"), "Alice")
        self.assertEqual(r.get("name"), "Alice")

    def test_missing_fields_degrade_to_placeholders(self):
        r = RequestRecord(id="x")
        self.assertEqual(r.quantity, 0)
        self.assertEqual(r.product_links, [])
        self.assertIsNone(r.submitted_at)
        for field in ("customerName", "userEmail", "phoneNumber", "address", "description", "courier"):
            self.assertEqual(r.display(field), PLACEHOLDER)
        self.assertEqual(r.display("noSuchField"), PLACEHOLDER)

    def test_malformed_values_never_fail(self):
        r = RequestRecord.model_validate(
            {
                "id": 7,
                "quantity": "lots",
                "phoneNumber": 8801711000000,
                "courier": {"nested": True},
                "submittedAt": "not a date",
                "productLinks": "https://shop.example/p/1",
            }
        )
        self.assertEqual(r.id, "7")
        self.assertEqual(r.quantity, 0)
        self.assertEqual(r.phone_number, "8801711000000")
        self.assertIsNone(r.courier)
        self.assertIsNone(r.submitted_at)
        self.assertEqual(r.product_links, ["https://shop.example/p/1"])

    def test_quantity_coercion(self):
        self.assertEqual(RequestRecord(id="a", quantity="3").quantity, 3)
        self.assertEqual(RequestRecord(id="a", quantity=2.9).quantity, 2)
        self.assertEqual(RequestRecord(id="a", quantity=-4).quantity, 0)
        self.assertEqual(RequestRecord(id="a", quantity=True).quantity, 0)

    def test_extra_fields_are_kept(self):
        r = RequestRecord.model_validate({"id": "1", "size": "XL", "meta": {"a": 1}})
        self.assertEqual(r.get("size"), "XL")
        self.assertEqual(r.display("size"), "XL")
        self.assertEqual(r.display("meta"), PLACEHOLDER)

    def test_records_are_frozen(self):
        r = RequestRecord(id="1", customerName="Alice")
        with self.assertRaises(ValidationError):
            r.customer_name = "Mallory"

    def test_id_is_required(self):
        with self.assertRaises(ValidationError):
            RequestRecord.model_validate({"customerName": "no id"})

    def test_to_document_uses_camel_case(self):
        doc = RequestRecord(id="1", customerName="Alice", quantity=2).to_document()
        self.assertEqual(doc["customerName"], "Alice")
        self.assertEqual(doc["quantity"], 2)
        self.assertNotIn("userEmail", doc)


class TestParseTimestamp(unittest.TestCase):
    def test_formats(self):
        expected = datetime(2024, 1, 5, 14, 3, 9, tzinfo=timezone.utc)
        self.assertEqual(parse_timestamp("2024-01-05T14:03:09Z"), expected)
        self.assertEqual(parse_timestamp(expected.timestamp()), expected)
        self.assertEqual(parse_timestamp({"seconds": int(expected.timestamp()), "nanoseconds": 0}), expected)
        self.assertEqual(parse_timestamp(datetime(2024, 1, 5, 14, 3, 9)), expected)

    def test_unparseable(self):
        self.assertIsNone(parse_timestamp(None))
        self.assertIsNone(parse_timestamp(""))
        self.assertIsNone(parse_timestamp("yesterday"))
        self.assertIsNone(parse_timestamp([1, 2]))
        self.assertIsNone(parse_timestamp(True))


if __name__ == "__main__":
    unittest.main()
