#!/usr/bin/env python3
"""
Export the PeachTree question log spreadsheet to CSV.
- Writes every sheet of the log spreadsheet to a CSV file under the output directory.
- `--since-days N` keeps only the header plus rows logged in the last N days.
- Supports `--dry-run` to show what would be exported without calling APIs.

Credentials:
- Provide service account JSON via env var `GOOGLE_SERVICE_ACCOUNT_KEY_JSON` (contents)
  or a file path via `--service-account-file`.

Usage examples:
  python export_question_log.py --spreadsheet-id SPREADSHEET_ID --out-dir ./exports
  python export_question_log.py --since-days 7
  python export_question_log.py --dry-run

`--spreadsheet-id` defaults to the SPREADSHEET_ID env var used by the function.
"""
from __future__ import annotations
import os
import sys
import argparse
import json
import csv
import datetime
from typing import List, Optional

from googleapiclient.discovery import build
from google.oauth2 import service_account

from peachtree_assistant.usage_log import rows_since

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]


def load_log_credentials(service_account_file: Optional[str] = None):
    """Service account credentials from GOOGLE_SERVICE_ACCOUNT_KEY_JSON, else from a key file, else None."""
    key_json = os.environ.get("GOOGLE_SERVICE_ACCOUNT_KEY_JSON")
    if key_json:
        return service_account.Credentials.from_service_account_info(json.loads(key_json), scopes=SCOPES)
    if not service_account_file:
        return None
    if not os.path.exists(service_account_file):
        print(f"Service account file not found: {service_account_file}")
        return None
    return service_account.Credentials.from_service_account_file(service_account_file, scopes=SCOPES)


def export_log_to_csv(sheets_service, spreadsheet_id: str, out_dir: str, since_days: Optional[int] = None) -> List[str]:
    meta = sheets_service.spreadsheets().get(spreadsheetId=spreadsheet_id, fields="sheets.properties,properties.title").execute()
    spreadsheet_title = meta.get("properties", {}).get("title") or spreadsheet_id
    now = datetime.datetime.now(datetime.timezone.utc).strftime("%Y%m%d_%H%M%S")
    base_dir = os.path.join(out_dir, f"{spreadsheet_title}_{spreadsheet_id}")
    os.makedirs(base_dir, exist_ok=True)

    written = []
    for s in meta.get("sheets", []):
        title = s.get("properties", {}).get("title")
        safe_title = title.replace("/", "_") if title else "sheet"
        csv_path = os.path.join(base_dir, f"{now}_{safe_title}.csv")
        resp = sheets_service.spreadsheets().values().get(spreadsheetId=spreadsheet_id, range=title).execute()
        values = rows_since(resp.get("values", []), since_days)
        with open(csv_path, "w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh)
            writer.writerows(values)
        print(f"Wrote {len(values)} rows: {csv_path}")
        written.append(csv_path)
    return written


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser()
    p.add_argument("--spreadsheet-id", default=os.environ.get("SPREADSHEET_ID"), help="Question log spreadsheet ID")
    p.add_argument("--out-dir", default="./exports", help="Output directory")
    p.add_argument("--since-days", type=int, help="Only export rows logged in the last N days")
    p.add_argument("--service-account-file", help="Path to service account JSON file")
    p.add_argument("--dry-run", action="store_true", help="Don't call APIs; just print the target")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    if not args.spreadsheet_id:
        print("No spreadsheet. Provide --spreadsheet-id or set SPREADSHEET_ID.")
        sys.exit(2)

    if args.dry_run:
        window = f" (last {args.since_days} days)" if args.since_days else ""
        print(f"Dry run mode. Would export spreadsheet {args.spreadsheet_id}{window} to {args.out_dir}")
        return

    creds = load_log_credentials(args.service_account_file)
    if creds is None:
        print("No credentials found. Set GOOGLE_SERVICE_ACCOUNT_KEY_JSON or --service-account-file, or run with --dry-run.")
        sys.exit(2)

    os.makedirs(args.out_dir, exist_ok=True)
    sheets = build("sheets", "v4", credentials=creds, cache_discovery=False)
    print(f"Exporting spreadsheet {args.spreadsheet_id}...")
    export_log_to_csv(sheets, args.spreadsheet_id, args.out_dir, since_days=args.since_days)


if __name__ == "__main__":
    main()
