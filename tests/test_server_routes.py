"""Tests for the request dashboard API routes."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from fastapi.testclient import TestClient

from request_dashboard.errors import RecordSourceError
from request_dashboard.server import create_app
from sample_data import abc_batch, contact_batch, dated_batch


class MemorySource:
    def __init__(self, records, fail_writes=False):
        self.records = records
        self.fail_writes = fail_writes
        self.writes = []

    async def fetch_all(self):
        return list(self.records)

    async def get_statuses(self):
        return {}

    async def set_status(self, record_id, label):
        if self.fail_writes:
            raise RecordSourceError("write refused")
        self.writes.append((record_id, label))


class DownSource(MemorySource):
    async def fetch_all(self):
        raise RecordSourceError("timeout")


class TestRequestRoutes(unittest.TestCase):
    def setUp(self):
        self.source = MemorySource(abc_batch() + contact_batch())
        self.client = TestClient(create_app(source=self.source, couriers={}))

    def test_health(self):
        r = self.client.get("/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"status": "ok"})

    def test_search(self):
        r = self.client.get("/requests", params={"q": "bob"})
        self.assertEqual(r.status_code, 200)
        view = r.json()["view"]
        self.assertEqual([row["id"] for row in view["rows"]], ["2", "r2"])
        self.assertEqual(view["total_count"], 6)
        self.assertEqual(view["stats"]["total"], 6)

    def test_sort_and_mode(self):
        r = self.client.get("/requests", params={"sort": "quantity", "direction": "desc", "mode": "full"})
        self.assertEqual(r.status_code, 200)
        view = r.json()["view"]
        quantities = [int(row["cells"]["Quantity"]) for row in view["rows"]]
        self.assertEqual(quantities, sorted(quantities, reverse=True))
        self.assertIn("Product Links", view["columns"])

    def test_default_order_is_newest_first(self):
        client = TestClient(create_app(source=MemorySource(dated_batch()), couriers={}))
        rows = client.get("/requests").json()["view"]["rows"]
        self.assertEqual([row["id"] for row in rows], ["d2", "d3", "d1"])
        rows = client.get("/requests", params={"direction": "asc"}).json()["view"]["rows"]
        self.assertEqual([row["id"] for row in rows], ["d1", "d3", "d2"])
        rows = client.get("/requests", params={"sort": ""}).json()["view"]["rows"]
        self.assertEqual([row["id"] for row in rows], ["d1", "d3", "d2"])

    def test_explicit_sort_starts_ascending(self):
        client = TestClient(create_app(source=MemorySource(dated_batch()), couriers={}))
        view = client.get("/requests", params={"sort": "customerName"}).json()["view"]
        self.assertEqual(view["config"]["sort_direction"], "asc")
        self.assertEqual([row["id"] for row in view["rows"]], ["d1", "d3", "d2"])

    def test_invalid_direction(self):
        self.assertEqual(self.client.get("/requests", params={"direction": "sideways"}).status_code, 422)

    def test_stats(self):
        client = TestClient(create_app(source=MemorySource(abc_batch()), couriers={}))
        r = client.get("/requests/stats")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(
            r.json(),
            {"total": 3, "unique_emails": 0, "total_quantity": 10, "top_courier": "A", "top_courier_count": 2},
        )

    def test_invoice_sets_status_and_persists(self):
        r = self.client.post("/requests/r1/invoice")
        self.assertEqual(r.status_code, 200)
        doc = r.json()
        self.assertEqual(doc["invoice_number"], "INV-r1")
        self.assertEqual(doc["status"], "Invoice Generated")
        self.assertEqual(self.source.writes, [("r1", "Invoice Generated")])
        statuses = self.client.get("/requests/statuses").json()["statuses"]
        self.assertEqual(statuses, {"r1": "Invoice Generated"})
        row = next(
            row for row in self.client.get("/requests").json()["view"]["rows"] if row["id"] == "r1"
        )
        self.assertEqual(row["cells"]["Status"], "Invoice Generated")

    def test_status_write_failure_is_silent(self):
        source = MemorySource(abc_batch(), fail_writes=True)
        client = TestClient(create_app(source=source, couriers={}))
        r = client.put("/requests/1/status", json={"status": "Shipped"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(client.get("/requests/statuses").json()["statuses"], {"1": "Shipped"})

    def test_empty_status_rejected(self):
        self.assertEqual(self.client.put("/requests/1/status", json={"status": "  "}).status_code, 400)

    def test_invoice_html(self):
        r = self.client.get("/requests/r3/invoice.html")
        self.assertEqual(r.status_code, 200)
        self.assertIn("text/html", r.headers["content-type"])
        self.assertIn("INV-r3", r.text)

    def test_message_link(self):
        r = self.client.get("/requests/r2/message-link")
        self.assertEqual(r.status_code, 200)
        self.assertTrue(r.json()["href"].startswith("https://wa.me/01811000002?text="))

    def test_unknown_id(self):
        self.assertEqual(self.client.post("/requests/nope/invoice").status_code, 404)
        self.assertEqual(self.client.get("/requests/nope/message-link").status_code, 404)
        self.assertEqual(self.client.put("/requests/nope/status", json={"status": "x"}).status_code, 404)


class TestSourceDown(unittest.TestCase):
    def test_error_state(self):
        client = TestClient(create_app(source=DownSource([]), couriers={}))
        r = client.get("/requests")
        self.assertEqual(r.status_code, 503)
        self.assertEqual(r.json()["status"], "error")
        self.assertIn("Failed to load requests", r.json()["error"])
        self.assertEqual(client.get("/requests/stats").status_code, 503)


if __name__ == "__main__":
    unittest.main()
