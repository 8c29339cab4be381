"""Tests for the CLI table, stats and invoice commands against a JSON source."""

import json
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from typer.testing import CliRunner

from request_dashboard.cli import app

DOCUMENTS = [
    {"id": "1", "customerName": "Alice", "quantity": 5, "courier": "A", "userEmail": "alice@example.com"},
    {"id": "2", "customerName": "Bob", "quantity": 3, "courier": "A"},
    {"id": "3", "customerName": "Carol", "quantity": 2, "courier": "B"},
]


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self.records_path = self.dir / "user_requests.json"
        self.status_path = self.dir / "request_status.json"
        self.records_path.write_text(json.dumps(DOCUMENTS), encoding="utf-8")
        self.patches = [
            patch("request_dashboard.sources.RECORDS_PATH", self.records_path),
            patch("request_dashboard.sources.STATUS_PATH", self.status_path),
        ]
        for p in self.patches:
            p.start()
        self.runner = CliRunner()

    def tearDown(self):
        for p in self.patches:
            p.stop()
        self._tmp.cleanup()

    def test_table_search(self):
        result = self.runner.invoke(app, ["table", "--source", "json", "--query", "bob"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Bob", result.output)
        self.assertNotIn("Carol", result.output)
        self.assertIn("Total requests", result.output)

    def test_stats(self):
        result = self.runner.invoke(app, ["stats", "--source", "json"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("A (2)", result.output)

    def test_table_error_state(self):
        self.records_path.write_text("{broken", encoding="utf-8")
        result = self.runner.invoke(app, ["table", "--source", "json"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Failed to load requests", result.output)

    def test_invoice_writes_html_and_status(self):
        out = self.dir / "inv.html"
        result = self.runner.invoke(app, ["invoice", "2", "--source", "json", "--output", str(out)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("INV-2", out.read_text(encoding="utf-8"))
        self.assertEqual(json.loads(self.status_path.read_text(encoding="utf-8")), {"2": "Invoice Generated"})

    def test_invoice_unknown_id(self):
        result = self.runner.invoke(app, ["invoice", "99", "--source", "json"])
        self.assertEqual(result.exit_code, 1)


if __name__ == "__main__":
    unittest.main()
