"""Tests for the CSV import script."""
import json

import httpx
import pytest

from import_transactions import (
    csv_row_to_transaction,
    import_transactions,
    login,
    parse_transaction_code,
    read_csv_transactions,
)


class TestRowParsing:
    """Tests for CSV row conversion."""

    def test_parse_transaction_code(self):
        assert parse_transaction_code("sale") == 0
        assert parse_transaction_code(" RETURNED ") == 1
        assert parse_transaction_code("1") == 1

    def test_parse_unknown_transaction_code(self):
        with pytest.raises(ValueError):
            parse_transaction_code("REFUND")

    def test_row_to_transaction(self):
        row = {
            "TransactionDate": "25/02/2022",
            "ProductReference": " 443 ",
            "CountryIsoCode": "usa",
            "TransactionCode": "SALE",
            "Unit": "100",
        }
        assert csv_row_to_transaction(row) == {
            "transactionDate": "25/02/2022",
            "productReference": "443",
            "countryIsoCode": "USA",
            "transactionCode": 0,
            "unit": 100,
        }

    def test_row_without_date_omits_it(self):
        row = {"ProductReference": "1", "CountryIsoCode": "ESP", "TransactionCode": "1", "Unit": ""}
        transaction = csv_row_to_transaction(row)
        assert "transactionDate" not in transaction
        assert transaction["unit"] == 0

    def test_read_csv_skips_bad_rows(self, tmp_path):
        csv_file = tmp_path / "transactions.csv"
        csv_file.write_text(
            "TransactionDate,ProductReference,CountryIsoCode,TransactionCode,Unit\n"
            "25/02/2022,443,USA,SALE,100\n"
            "26/02/2022,444,USA,REFUND,1\n"
            "27/02/2022,445,ESP,RETURNED,2\n",
            encoding="utf-8",
        )
        transactions = read_csv_transactions(csv_file)
        assert [t["productReference"] for t in transactions] == ["443", "445"]


class TestApiCalls:
    """Tests for the API client helpers against a mocked server."""

    def _client(self, handler) -> httpx.Client:
        return httpx.Client(base_url="http://test", transport=httpx.MockTransport(handler))

    def test_login_returns_token(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/user/login"
            return httpx.Response(200, json={"success": True, "data": {"token": "abc"}})

        with self._client(handler) as client:
            assert login(client, "a@b.io", "pw") == "abc"

    def test_import_counts_rejected_rows(self):
        def handler(request: httpx.Request) -> httpx.Response:
            payload = json.loads(request.content)
            if payload["countryIsoCode"] == "CA":
                return httpx.Response(
                    422, json={"success": False, "code": 422,
                               "message": "Resource not found: countryIsoCode"},
                )
            return httpx.Response(200, json={"success": True, "data": payload})

        transactions = [
            {"productReference": "1", "countryIsoCode": "USA", "transactionCode": 0, "unit": 1},
            {"productReference": "2", "countryIsoCode": "CA", "transactionCode": 0, "unit": 1},
        ]
        with self._client(handler) as client:
            assert import_transactions(client, transactions) == {"created": 1, "rejected": 1}
