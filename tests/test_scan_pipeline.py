"""
Tests for the scan pipeline, expiry status and the CLI.
"""

import json
from datetime import date

import httpx
import pytest

from gs1_decoder.__main__ import main
from modules import api_client
from modules.api_client import APIClient as RealAPIClient
from modules.gs1_client import parse_scan
from modules.products import ProductManager
from modules.utils import expiry_status, safe_get


FULL_SCAN = "(01)00312345678906(17)251231(10)LOT42(21)SN99"


class TestParseScan:

    def test_empty_scan(self):
        assert parse_scan("") == (False, {}, "Empty scan input")
        assert parse_scan("   ")[0] is False

    def test_nothing_decoded(self):
        ok, data, error = parse_scan("ZZZZ", lookup=False)

        assert not ok
        assert data == {}
        assert error == "No GS1 fields found in scan"

    def test_without_lookup(self):
        ok, data, error = parse_scan(FULL_SCAN, lookup=False)

        assert ok
        assert error == ""
        assert data["gtin"] == "00312345678906"
        assert data["expiration"] == "12/31/2025"
        assert data["raw"] == FULL_SCAN

    def test_merges_product(self, json_storage):
        products = ProductManager()
        products.add_product(gtin="00312345678906", ndc="0312-3456-78", proprietary_name="Amoxil")

        ok, data, _ = parse_scan(FULL_SCAN, products=products)

        assert ok
        assert data["ndc"] == "0312-3456-78"
        assert data["proprietary_name"] == "Amoxil"
        assert "_lookup_error" not in data

    def test_unknown_product(self, json_storage):
        ok, data, _ = parse_scan(FULL_SCAN, products=ProductManager())

        assert ok
        assert data["_lookup_error"].endswith("00312345678906")


class TestExpiryStatus:

    TODAY = date(2026, 1, 15)

    def test_expired(self):
        assert expiry_status("01/14/2026", 6, today=self.TODAY) == "Expired"

    def test_near_expiry(self):
        assert expiry_status("01/15/2026", 6, today=self.TODAY) == "Near Expiry"
        assert expiry_status("07/15/2026", 6, today=self.TODAY) == "Near Expiry"

    def test_valid(self):
        assert expiry_status("07/16/2026", 6, today=self.TODAY) == "Valid"

    def test_unknown(self):
        assert expiry_status(None, 6) == "Unknown"
        assert expiry_status("13/99/2099", 6) == "Unknown"

    def test_safe_get(self):
        assert safe_get({"a": None}, "a") == ""
        assert safe_get({"a": 5}, "a") == "5"
        assert safe_get({}, "a", "x") == "x"


class TestCLI:

    def test_json_output(self, capsys):
        code = main([FULL_SCAN, "--json"])

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {
            "gtin": "00312345678906",
            "lot": "LOT42",
            "serial": "SN99",
            "expiration": "12/31/2025",
        }

    def test_json_labels(self, capsys):
        main(["0100312345678906211234", "--json", "--labels"])

        assert json.loads(capsys.readouterr().out) == {
            "GTIN": "00312345678906",
            "Serial Number": "1234",
        }

    def test_text_output(self, capsys):
        code = main(["0100312345678906211234"])
        out = capsys.readouterr().out

        assert code == 0
        assert "Format: positional" in out
        assert "GTIN: '00312345678906'" in out
        assert "Lot: (absent)" in out

    def test_nothing_decoded_exit_code(self, capsys):
        assert main(["not a barcode"]) == 1

    def test_lookup(self, json_storage, capsys):
        ProductManager().add_product(gtin="00312345678906", ndc="0312-3456-78")

        main([FULL_SCAN, "--json", "--lookup"])
        data = json.loads(capsys.readouterr().out)

        assert data["ndc"] == "0312-3456-78"
        assert data["gtin"] == "00312345678906"

    def test_lookup_without_gtin(self, json_storage, capsys):
        main(["(10)LOT42", "--json", "--lookup"])
        data = json.loads(capsys.readouterr().out)

        assert data["_lookup_error"] == "GTIN not found in decoded result"

    def test_lookup_requires_json(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([FULL_SCAN, "--lookup"])

        assert excinfo.value.code == 2
        assert "--lookup requires --json" in capsys.readouterr().err

    def test_api_requires_lookup(self, capsys):
        with pytest.raises(SystemExit):
            main([FULL_SCAN, "--json", "--api"])

        assert "--api requires --lookup" in capsys.readouterr().err


class TestCLIBackendLookup:
    """--lookup --api against a mocked backend."""

    @staticmethod
    def _use_backend(monkeypatch, handler):
        def make_client():
            return RealAPIClient(
                base_url="http://backend.test",
                api_key="secret",
                transport=httpx.MockTransport(handler),
            )

        monkeypatch.setattr(api_client, "APIClient", make_client)

    def test_product_found(self, monkeypatch, capsys):
        self._use_backend(
            monkeypatch,
            lambda request: httpx.Response(200, json={"gtin": "00312345678906", "ndc": "0312-3456-78"}),
        )

        code = main([FULL_SCAN, "--json", "--lookup", "--api"])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data["ndc"] == "0312-3456-78"
        assert "_lookup_error" not in data

    def test_product_missing(self, monkeypatch, capsys):
        self._use_backend(monkeypatch, lambda request: httpx.Response(404, json={"error": "Not found"}))

        main([FULL_SCAN, "--json", "--lookup", "--api"])
        data = json.loads(capsys.readouterr().out)

        assert data["_lookup_error"] == "GTIN not found in product registry: 00312345678906"

    def test_server_error_reported(self, monkeypatch, capsys):
        self._use_backend(monkeypatch, lambda request: httpx.Response(500, json={"error": "database unavailable"}))

        code = main([FULL_SCAN, "--json", "--lookup", "--api"])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data["gtin"] == "00312345678906"
        assert data["_lookup_error"] == "Product lookup failed: database unavailable"

    def test_connection_error_reported(self, monkeypatch, capsys):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        self._use_backend(monkeypatch, handler)

        code = main(["0100312345678906211234", "--json", "--lookup", "--api"])
        data = json.loads(capsys.readouterr().out)

        assert code == 0
        assert data["serial"] == "1234"
        assert data["_lookup_error"] == "Product lookup failed: connection refused"
