#!/usr/bin/env python
"""
CSV Transaction Import Script

Imports sales/returns transactions from a CSV file into the Sales Registry API.

Expected columns: TransactionDate (dd/mm/yyyy), ProductReference,
CountryIsoCode, TransactionCode (SALE/RETURNED or 0/1), Unit.

Usage:
    python import_transactions.py data/transactions.csv --email me@example.com --password secret
    python import_transactions.py data/transactions.csv --email me@example.com --password secret --limit 100
    python import_transactions.py data/transactions.csv --url http://localhost:8000 --email ... --password ...
"""
import argparse
import csv
import sys
from io import StringIO
from pathlib import Path
from typing import List, Dict, Any, Optional

import httpx

TRANSACTION_CODES = {"SALE": 0, "RETURNED": 1, "0": 0, "1": 1}


def parse_transaction_code(value: str) -> int:
    """
    Parse a transaction code column.

    Args:
        value: "SALE", "RETURNED", "0" or "1" (case-insensitive)

    Returns:
        Numeric transaction code

    Raises:
        ValueError: If the value is not a known code
    """
    try:
        return TRANSACTION_CODES[value.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown transaction code: {value!r}")


def csv_row_to_transaction(row: Dict[str, str]) -> Dict[str, Any]:
    """
    Convert CSV row to the transaction create payload.

    Args:
        row: Dictionary with CSV column headers as keys

    Returns:
        Transaction dictionary ready for API
    """
    transaction = {
        "productReference": row["ProductReference"].strip(),
        "countryIsoCode": row["CountryIsoCode"].strip().upper(),
        "transactionCode": parse_transaction_code(row["TransactionCode"]),
        "unit": int(row.get("Unit") or 0),
    }
    # Without a date the API stores today's
    if row.get("TransactionDate"):
        transaction["transactionDate"] = row["TransactionDate"].strip()
    return transaction


def read_csv_transactions(file_path: Path, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Read transactions from CSV file.

    Args:
        file_path: Path to CSV file
        limit: Optional limit on number of rows to read

    Returns:
        List of transaction dictionaries
    """
    transactions = []

    encodings = ['utf-8', 'latin-1', 'cp1252']
    file_content = None

    for encoding in encodings:
        try:
            with open(file_path, "r", encoding=encoding) as f:
                file_content = f.read()
                break
        except UnicodeDecodeError:
            continue

    if file_content is None:
        raise ValueError(f"Could not decode file with any of the supported encodings: {encodings}")

    reader = csv.DictReader(StringIO(file_content))

    for i, row in enumerate(reader):
        if limit and i >= limit:
            break
        try:
            transactions.append(csv_row_to_transaction(row))
        except (ValueError, KeyError) as e:
            print(f"Skipping row {i+2}: {e}", file=sys.stderr)
            continue

    return transactions


def login(client: httpx.Client, email: str, password: str) -> str:
    """
    Log in and return the bearer token.

    Raises:
        httpx.HTTPStatusError: If the credentials are rejected
    """
    response = client.post("/user/login", json={"email": email, "password": password})
    response.raise_for_status()
    return response.json()["data"]["token"]


def send_transaction(client: httpx.Client, transaction: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create one transaction through the API.

    Returns:
        API response envelope

    Raises:
        httpx.HTTPStatusError: If the API rejects the transaction
    """
    response = client.post("/transactions/create", json=transaction)
    response.raise_for_status()
    return response.json()


def import_transactions(
    client: httpx.Client, transactions: List[Dict[str, Any]]
) -> Dict[str, int]:
    """
    Send every transaction, continuing past rejected ones.

    Returns:
        Counts of created and rejected transactions
    """
    created = 0
    rejected = 0
    for i, transaction in enumerate(transactions, start=1):
        try:
            send_transaction(client, transaction)
            created += 1
        except httpx.HTTPStatusError as e:
            rejected += 1
            try:
                message = e.response.json().get("message")
            except ValueError:
                message = e.response.text
            print(f"   Transaction {i} rejected: {message}", file=sys.stderr)
    return {"created": created, "rejected": rejected}


def main():
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(
        description="Import transactions from CSV to the Sales Registry API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/transactions.csv --email me@example.com --password secret
  %(prog)s data/transactions.csv --limit 1000 --url http://localhost:8000 --email ... --password ...
        """
    )

    parser.add_argument(
        "csv_file",
        type=Path,
        help="Path to CSV file with transaction data"
    )

    parser.add_argument(
        "--url",
        type=str,
        default="http://localhost:8000",
        help="Base API URL (default: http://localhost:8000)"
    )

    parser.add_argument("--email", required=True, help="API user e-mail")
    parser.add_argument("--password", required=True, help="API user password")

    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of rows to import (default: all)"
    )

    parser.add_argument(
        "--timeout",
        type=int,
        default=30,
        help="Request timeout in seconds (default: 30)"
    )

    args = parser.parse_args()

    if not args.csv_file.is_file():
        print(f"Error: File not found: {args.csv_file}", file=sys.stderr)
        sys.exit(1)

    print(f"Reading transactions from {args.csv_file}")

    try:
        transactions = read_csv_transactions(args.csv_file, args.limit)
    except ValueError as e:
        print(f"Error reading CSV: {e}", file=sys.stderr)
        sys.exit(1)

    if not transactions:
        print("No valid transactions found in CSV", file=sys.stderr)
        sys.exit(1)

    print(f"Loaded {len(transactions)} transaction(s)")

    with httpx.Client(base_url=args.url, timeout=args.timeout) as client:
        try:
            token = login(client, args.email, args.password)
        except httpx.HTTPError as e:
            print(f"Login failed: {e}", file=sys.stderr)
            sys.exit(1)

        client.headers["Authorization"] = f"Bearer {token}"
        print(f"Sending {len(transactions)} transaction(s) to {args.url}")
        try:
            counts = import_transactions(client, transactions)
        except httpx.HTTPError as e:
            print(f"Import aborted: {e}", file=sys.stderr)
            sys.exit(1)

    print(f"\nImport complete! Created {counts['created']}, rejected {counts['rejected']}")
    if counts["rejected"]:
        sys.exit(2)


if __name__ == "__main__":
    main()
