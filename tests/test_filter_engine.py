"""Tests for free-text request search."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from request_dashboard.models.record import RequestRecord
from request_dashboard.view.filter_engine import SEARCHABLE_FIELDS, filter_records, matches
from sample_data import abc_batch, contact_batch


class TestFilterRecords(unittest.TestCase):
    def test_empty_query_returns_batch_unchanged(self):
        batch = contact_batch()
        for query in ("", None):
            out = filter_records(batch, query)
            self.assertEqual([r.id for r in out], [r.id for r in batch])
            self.assertIsNot(out, batch)

    def test_whitespace_is_part_of_the_query(self):
        batch = [
            RequestRecord(id="1", customerName="Bob"),
            RequestRecord(id="2", customerName="Bob Smith"),
        ]
        self.assertEqual([r.id for r in filter_records(batch, "bob ")], ["2"])
        self.assertFalse(matches(batch[0], "bob "))

    def test_blank_query_is_not_a_wildcard(self):
        batch = [
            RequestRecord(id="1", customerName="Bob"),
            RequestRecord(id="2", customerName="Carol", address="Road  4"),
        ]
        self.assertEqual([r.id for r in filter_records(batch, "  ")], ["2"])

    def test_bob_matches_only_bob(self):
        out = filter_records(abc_batch(), "bob")
        self.assertEqual([r.id for r in out], ["2"])

    def test_case_insensitive_substring(self):
        out = filter_records(contact_batch(), "RAHMAN")
        self.assertEqual([r.id for r in out], ["r1"])
        out = filter_records(contact_batch(), "mirpur")
        self.assertEqual([r.id for r in out], ["r2"])

    def test_email_and_phone_and_courier(self):
        self.assertEqual([r.id for r in filter_records(contact_batch(), "alice@")], ["r1", "r3"])
        self.assertEqual([r.id for r in filter_records(contact_batch(), "01811")], ["r2"])
        self.assertEqual([r.id for r in filter_records(contact_batch(), "pathao")], ["r2"])

    def test_product_links_are_optional(self):
        self.assertEqual([r.id for r in filter_records(contact_batch(), "saree")], ["r3"])
        self.assertEqual(filter_records(contact_batch(), "saree", include_links=False), [])

    def test_every_result_matches_a_searchable_field(self):
        batch = contact_batch()
        for query in ("a", "ex", "road", "1", "zzz"):
            for record in filter_records(batch, query):
                values = [record.get(f) for f in SEARCHABLE_FIELDS] + record.product_links
                self.assertTrue(any(isinstance(v, str) and query.lower() in v.lower() for v in values))

    def test_missing_fields_are_skipped(self):
        record = RequestRecord(id="empty")
        self.assertFalse(matches(record, "anything"))
        self.assertTrue(matches(record, ""))

    def test_description_is_not_searched(self):
        record = RequestRecord(id="1", description="fragile parcel")
        self.assertEqual(filter_records([record], "fragile"), [])


if __name__ == "__main__":
    unittest.main()
