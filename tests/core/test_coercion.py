"""Coercion — verifies JSON value parsing into column types."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from aquatour.core.coercion import (
    parse_bool, parse_date, parse_datetime, parse_decimal, parse_id_list, parse_int,
)


def test_parse_date_accepts_iso_date_and_datetime_strings():
    assert parse_date("2026-12-01") == date(2026, 12, 1)
    assert parse_date("2026-12-01T10:00:00Z") == date(2026, 12, 1)
    assert parse_date(datetime(2026, 1, 2, 3, 4)) == date(2026, 1, 2)


def test_parse_date_rejects_garbage():
    with pytest.raises(ValueError):
        parse_date("next tuesday")


def test_parse_datetime_handles_zulu_suffix():
    parsed = parse_datetime("2026-12-01T10:00:00Z")
    assert parsed == datetime(2026, 12, 1, 10, tzinfo=timezone.utc)


def test_parse_decimal():
    assert parse_decimal("1200.50") == Decimal("1200.50")
    assert parse_decimal(3) == Decimal("3")
    for bad in ("abc", True, "NaN", "Infinity"):
        with pytest.raises(ValueError):
            parse_decimal(bad)


def test_parse_int():
    assert parse_int("42") == 42
    assert parse_int(7.0) == 7
    for bad in (7.5, True, "x"):
        with pytest.raises(ValueError):
            parse_int(bad)


@pytest.mark.parametrize("value,expected", [
    (True, True), ("true", True), ("sí", True), (1, True),
    ("false", False), ("0", False), (0, False),
])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


def test_parse_bool_rejects_unknown_words():
    with pytest.raises(ValueError):
        parse_bool("maybe")


def test_parse_id_list_accepts_lists_and_csv():
    assert parse_id_list([1, "2"]) == [1, 2]
    assert parse_id_list("3, 4,") == [3, 4]
    with pytest.raises(ValueError):
        parse_id_list({"a": 1})
