# FILE: tests/test_dates.py

from datetime import date, datetime

import pytest

from voyage.exceptions import ValidationError
from voyage.services.dates import (
    MONTH_NAMES, annotate, derive_fields, format_date_range, parse_date, validate_date_range
)


def test_single_day_range_collapses():
    """Equal start and end render as one date"""
    assert format_date_range(date(2025, 3, 1), date(2025, 3, 1)) == "Mar 1, 2025"


def test_multi_day_range():
    """Different dates render as start – end"""
    assert format_date_range(date(2025, 3, 1), date(2025, 3, 5)) == "Mar 1, 2025 – Mar 5, 2025"


def test_derive_fields_uses_start_date():
    """Year and month come from the start date, month is 0-based"""
    fields = derive_fields(date(2024, 12, 30), date(2025, 1, 2))

    assert fields["year"] == 2024
    assert fields["month"] == 11
    assert fields["monthName"] == "December"
    assert fields["dateRange"] == "Dec 30, 2024 – Jan 2, 2025"


def test_month_names_table():
    assert len(MONTH_NAMES) == 12
    assert MONTH_NAMES[0] == "January"


def test_end_before_start_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_date_range(date(2025, 3, 5), date(2025, 3, 1))

    assert exc_info.value.kind == "end-before-start"
    assert exc_info.value.errors[0]["field"] == "toDate"


def test_same_day_range_accepted():
    validate_date_range(date(2025, 3, 1), date(2025, 3, 1))


def test_parse_date_variants():
    """Plain dates, datetimes and ISO datetime strings all reduce to a calendar date"""
    assert parse_date("2025-03-01") == date(2025, 3, 1)
    assert parse_date("2025-03-01T10:15:00.000Z") == date(2025, 3, 1)
    assert parse_date(datetime(2025, 3, 1, 23, 59)) == date(2025, 3, 1)

    with pytest.raises(ValidationError):
        parse_date("not-a-date")


def test_annotate_does_not_mutate_record():
    record = {"_id": "x", "fromDate": "2025-03-01", "toDate": "2025-03-01"}
    annotated = annotate(record)

    assert annotated["dateRange"] == "Mar 1, 2025"
    assert annotated["monthName"] == "March"
    assert "dateRange" not in record
