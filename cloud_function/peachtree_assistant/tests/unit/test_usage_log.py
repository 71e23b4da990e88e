from datetime import datetime, timezone
from unittest.mock import Mock
import pytest

from ... import usage_log
from ...usage_log import iso_timestamp, log_question, parse_timestamp, recent_questions

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
HEADER = ["Timestamp", "Email", "Question"]


def test_recent_questions_keeps_rows_inside_window_in_order():
    rows = [
        HEADER,
        ["2026-10-17T09:00:00.000Z", "a@peachtree.test", "How do I file an invoice?"],
        ["2026-10-01T09:00:00.000Z", "b@peachtree.test", "Too old"],
        ["not a date", "c@peachtree.test", "Malformed"],
        ["10/15/2026 08:30:00", "d@peachtree.test", "Where is the style guide?"],
        [],
        ["2026-10-18T11:00:00Z", "e@peachtree.test"],
    ]

    out = recent_questions(rows, now=NOW)

    assert out == ["How do I file an invoice?", "Where is the style guide?", ""], f"Got {out}"


def test_window_cutoff_is_exclusive():
    rows = [HEADER, ["2026-10-11T12:00:00Z", "a@peachtree.test", "Exactly seven days"]]
    assert recent_questions(rows, now=NOW) == []


def test_header_only_has_no_recent_questions():
    assert recent_questions([HEADER], now=NOW) == []


def test_parse_timestamp():
    assert parse_timestamp("2026-10-17T09:00:00.000Z") == datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)
    assert parse_timestamp("10/15/2026 08:30:00").tzinfo is timezone.utc
    assert parse_timestamp("") is None
    assert parse_timestamp("yesterday-ish") is None
    assert parse_timestamp(None) is None


@pytest.mark.parametrize("value", ["Monday", "10:30", "12", "October 2026", "Oct 17"])
def test_partial_dates_are_not_timestamps(value):
    assert parse_timestamp(value) is None, f"{value!r} should not parse"


def test_partial_dates_never_count_as_recent():
    rows = [
        HEADER,
        ["Monday", "a@peachtree.test", "weekday-only"],
        ["10:30", "b@peachtree.test", "time-only"],
        ["12", "c@peachtree.test", "bare number"],
    ]
    assert recent_questions(rows, now=NOW) == []


def test_rows_since_keeps_header_and_recent_rows():
    rows = [
        HEADER,
        ["2026-10-17T09:00:00.000Z", "a@peachtree.test", "recent"],
        ["2026-09-01T09:00:00.000Z", "b@peachtree.test", "old"],
        ["Monday", "c@peachtree.test", "partial"],
    ]
    assert usage_log.rows_since(rows, 7, now=NOW) == [HEADER, rows[1]]
    assert usage_log.rows_since(rows, None, now=NOW) == rows


def test_iso_timestamp_matches_log_format():
    assert iso_timestamp(datetime(2026, 10, 18, 9, 5, 3, 120000, tzinfo=timezone.utc)) == "2026-10-18T09:05:03.120Z"


def test_log_question_appends_one_row(monkeypatch):
    monkeypatch.setenv("SPREADSHEET_ID", "sheet-123")
    sheets = Mock()
    monkeypatch.setattr(usage_log, "resolve_user_email", lambda creds: "va@peachtree.test")
    monkeypatch.setattr(usage_log, "build_sheets", lambda creds: sheets)

    assert log_question(Mock(), "What is the PTO policy?", now=NOW) is True

    sheets.spreadsheets.return_value.values.return_value.append.assert_called_once_with(
        spreadsheetId="sheet-123",
        range="A1",
        valueInputOption="USER_ENTERED",
        body={"values": [["2026-10-18T12:00:00.000Z", "va@peachtree.test", "What is the PTO policy?"]]},
    )


def test_missing_email_is_logged_as_unknown(monkeypatch):
    oauth2 = Mock()
    oauth2.userinfo.return_value.get.return_value.execute.return_value = {"id": "42"}
    monkeypatch.setattr(usage_log, "build_oauth2", lambda creds: oauth2)

    assert usage_log.resolve_user_email(Mock()) == "unknown"


def test_log_question_swallows_failures(monkeypatch):
    def boom(creds):
        raise RuntimeError("userinfo unavailable")

    monkeypatch.setattr(usage_log, "resolve_user_email", boom)
    assert log_question(Mock(), "anything", now=NOW) is False


def test_log_question_without_spreadsheet_id_is_not_fatal(monkeypatch):
    monkeypatch.delenv("SPREADSHEET_ID", raising=False)
    monkeypatch.setattr(usage_log, "resolve_user_email", lambda creds: "va@peachtree.test")
    monkeypatch.setattr(usage_log, "build_sheets", lambda creds: Mock())

    assert log_question(Mock(), "anything", now=NOW) is False


def test_fetch_log_rows_reads_log_range(monkeypatch):
    monkeypatch.setenv("SPREADSHEET_ID", "sheet-123")
    sheets = Mock()
    sheets.spreadsheets.return_value.values.return_value.get.return_value.execute.return_value = {}

    assert usage_log.fetch_log_rows(sheets) == []
    sheets.spreadsheets.return_value.values.return_value.get.assert_called_once_with(
        spreadsheetId="sheet-123", range="Sheet1!A:C"
    )
