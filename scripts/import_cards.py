"""
Card import script — uploads a local file to a running API server.

Usage:
    # Spreadsheet with the default column layout
    python scripts/import_cards.py collection.xlsx

    # Spreadsheet with custom columns
    python scripts/import_cards.py export.csv \
        --column-map '{"playerName": "Athlete", "year": "Year"}'

    # eBay bulk-listing export
    python scripts/import_cards.py listings.csv --ebay

    # Free text, one card per line
    python scripts/import_cards.py cards.txt --text
"""

import argparse
import json
import os
import sys

import requests

_backend_dir = os.path.join(os.path.dirname(__file__), "..")

from dotenv import load_dotenv
load_dotenv(os.path.join(_backend_dir, ".env"))

DEFAULT_BASE_URL = f"http://localhost:{os.getenv('API_PORT', '8000')}"


# ─────────────────────────────────────────────────────────────
# UPLOADS
# ─────────────────────────────────────────────────────────────

def upload_spreadsheet(base_url: str, filepath: str, column_map: str = "", ebay: bool = False) -> dict:
    """POST /api/import or /api/import/ebay"""
    endpoint = "/api/import/ebay" if ebay else "/api/import"
    form = {"columnMap": column_map} if column_map and not ebay else None

    with open(filepath, "rb") as f:
        resp = requests.post(
            f"{base_url}{endpoint}",
            files={"file": (os.path.basename(filepath), f)},
            data=form,
        )
    return _report(resp)


def upload_text(base_url: str, filepath: str) -> dict:
    """POST /api/import/text"""
    with open(filepath, encoding="utf-8") as f:
        text = f.read()

    resp = requests.post(f"{base_url}/api/import/text", json={"text": text})
    return _report(resp)


def _report(resp: requests.Response) -> dict:
    """Return the ImportReport, or exit with the API's error message."""
    if resp.status_code >= 400:
        try:
            error = resp.json().get("error", {})
            message = f"{error.get('code')}: {error.get('message')}"
        except ValueError:
            message = resp.text
        print(f"ERROR ({resp.status_code}): {message}")
        sys.exit(1)
    return resp.json()


def print_report(report: dict, verbose: bool = False) -> None:
    print(report.get("message", ""))
    if report.get("skipped"):
        print(f"  {report['skipped']} empty rows skipped")

    for result in report.get("results", []):
        if not result.get("success"):
            print(f"  row {result.get('row')}: {result.get('error')}")
        elif verbose:
            card = result.get("card") or {}
            print(f"  row {result.get('row')}: #{card.get('id')} {card.get('playerName')} ({card.get('year')})")


def main():
    parser = argparse.ArgumentParser(
        description="Upload cards from a spreadsheet, eBay export or text file."
    )
    parser.add_argument(
        "file",
        help="Path to a .csv/.xlsx file, or a .txt file with --text",
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"Base URL of the running API server (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--column-map",
        default="",
        help="JSON object mapping card fields to column names",
    )
    parser.add_argument(
        "--ebay",
        action="store_true",
        help="Treat the file as an eBay bulk-listing export",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Treat the file as free text, one card per line",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="List imported cards as well as failures",
    )

    args = parser.parse_args()

    if not os.path.isfile(args.file):
        print(f"ERROR: File not found: {args.file}")
        sys.exit(1)

    if args.ebay and args.text:
        print("ERROR: --ebay and --text cannot be combined.")
        sys.exit(1)

    if args.column_map:
        try:
            json.loads(args.column_map)
        except json.JSONDecodeError as e:
            print(f"ERROR: --column-map is not valid JSON: {e.msg}")
            sys.exit(1)

    try:
        if args.text:
            report = upload_text(args.base_url, args.file)
        else:
            report = upload_spreadsheet(args.base_url, args.file, args.column_map, ebay=args.ebay)
    except requests.ConnectionError:
        print(f"ERROR: Could not connect to {args.base_url}. Is the server running?")
        sys.exit(1)

    print_report(report, verbose=args.verbose)
    sys.exit(0 if report.get("failed", 0) == 0 else 2)


if __name__ == "__main__":
    main()
