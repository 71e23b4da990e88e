"""
Question log kept in a Google Sheet.

Every answered question is appended as one row: timestamp, user email, question.
The first row of the sheet is a header and is ignored when reading.
"""
import logging
from datetime import datetime, timedelta, timezone

from dateutil import parser as date_parser

from . import config
from .google_clients import build_oauth2, build_sheets

logger = logging.getLogger(__name__)

UNKNOWN_USER = "unknown"

# Two defaults that share no date part; a value parsing differently under each is incomplete
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def iso_timestamp(now: datetime) -> str:
    """UTC timestamp with millisecond precision and a Z suffix."""
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def resolve_user_email(creds) -> str:
    info = build_oauth2(creds).userinfo().get().execute()
    return info.get("email") or UNKNOWN_USER


def append_log_entry(sheets, entry: list) -> None:
    sheets.spreadsheets().values().append(
        spreadsheetId=config.spreadsheet_id(),
        range=config.LOG_APPEND_RANGE,
        valueInputOption="USER_ENTERED",
        body={"values": [entry]},
    ).execute()


def log_question(creds, prompt: str, now: datetime = None) -> bool:
    """
    Append the question to the log sheet.

    Best effort: any failure is logged and reported as False, never raised.
    """
    now = now or datetime.now(timezone.utc)
    try:
        email = resolve_user_email(creds)
        append_log_entry(build_sheets(creds), [iso_timestamp(now), email, prompt])
        return True
    except Exception as e:
        logger.error("Failed to log question to Google Sheet: %s", e)
        return False


def fetch_log_rows(sheets) -> list[list]:
    resp = sheets.spreadsheets().values().get(
        spreadsheetId=config.spreadsheet_id(),
        range=config.LOG_READ_RANGE,
    ).execute()
    return resp.get("values", [])


def parse_timestamp(value):
    """
    Parse a logged timestamp; None when it isn't a full date.

    Values missing a year, month or day ("Monday", "10:30", "12") are rejected
    rather than filled in from today. Naive values are taken as UTC.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        ts = date_parser.parse(value, default=_DEFAULT_A)
        if date_parser.parse(value, default=_DEFAULT_B).date() != ts.date():
            return None
    except (ValueError, OverflowError):
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def recent_questions(rows: list[list], now: datetime = None, days: int = config.REPORT_WINDOW_DAYS) -> list[str]:
    """Questions from data rows (header skipped) logged strictly after now - days, in row order."""
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=days)

    questions = []
    for row in rows[1:]:
        ts = parse_timestamp(row[0] if row else None)
        if ts is None or ts <= cutoff:
            continue
        questions.append(row[2] if len(row) > 2 else "")
    return questions


def rows_since(rows: list[list], days: int, now: datetime = None) -> list[list]:
    """The header row plus data rows logged strictly after now - days."""
    if not days or not rows:
        return rows
    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=days)
    kept = [rows[0]]
    for row in rows[1:]:
        ts = parse_timestamp(row[0] if row else None)
        if ts is not None and ts > cutoff:
            kept.append(row)
    return kept
