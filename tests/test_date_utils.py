from datetime import date, datetime

import pytz

from report_engine.utils.date_utils import (
    days_between,
    format_date,
    format_datetime,
    get_current_timestamp,
    parse_datetime,
)


def test_parse_datetime_shapes():
    assert parse_datetime("2024-01-15T10:30:00Z") == datetime(2024, 1, 15, 10, 30, tzinfo=pytz.UTC)
    assert parse_datetime(date(2024, 1, 15)) == datetime(2024, 1, 15, tzinfo=pytz.UTC)
    assert parse_datetime("not a date") is None
    assert parse_datetime("") is None
    assert parse_datetime(12345) is None


def test_parse_datetime_localizes_naive_values():
    parsed = parse_datetime("2024-01-15 08:00", "Asia/Jakarta")
    assert parsed.utcoffset().total_seconds() == 7 * 3600


def test_format_helpers():
    assert format_date("2024-03-09") == "09-03-2024"
    assert format_date(None) == "-"
    assert format_datetime(None) == ""
    assert format_datetime(datetime(2024, 1, 15, 10, 30), "%d %b %Y %H:%M") == "15 Jan 2024 10:30"


def test_days_between():
    reference = datetime(2024, 1, 15, tzinfo=pytz.UTC)
    assert days_between("2024-01-01", "2024-01-11") == 10
    assert days_between("2024-01-11", "2024-01-01") == 10
    assert days_between("2024-01-05", None, reference=reference) == 10
    assert days_between(None, "2024-01-01") is None


def test_unknown_timezone_falls_back_to_utc():
    assert get_current_timestamp("Mars/Olympus").tzinfo == pytz.UTC
