"""Access Rules — verifies session duration formatting."""

from datetime import datetime, timedelta, timezone

from aquatour.core.access_rules import as_utc, format_session_duration

START = datetime(2026, 10, 1, 8, 0, tzinfo=timezone.utc)


def test_hours_and_minutes():
    assert format_session_duration(START, START + timedelta(hours=2, minutes=5)) == "2h 5m"


def test_minutes_only():
    assert format_session_duration(START, START + timedelta(minutes=42, seconds=59)) == "42m"


def test_under_a_minute():
    assert format_session_duration(START, START + timedelta(seconds=30)) == "Less than 1m"


def test_naive_timestamps_read_as_utc():
    naive = START.replace(tzinfo=None)
    assert as_utc(naive) == START
    assert format_session_duration(naive, START + timedelta(minutes=3)) == "3m"
