# FILE: voyage/services/dates.py
"""
Date-range validation and derived display fields

Derived fields are computed on every read from the two stored dates and
are never written back to the store.
"""
from datetime import date, datetime
from typing import Any, Dict, Union

from voyage.exceptions import ValidationError

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December"
]

DERIVED_FIELDS = ("year", "month", "monthName", "dateRange")

DATE_RANGE_SEPARATOR = " – "


def parse_date(value: Union[str, date, datetime], field: str = "date") -> date:
    """Coerce an ISO date/datetime string (or date object) to a calendar date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as e:
        raise ValidationError(
            f"Invalid ISO date: {value!r}",
            errors=[{"field": field, "msg": "Must be a valid ISO date"}]
        ) from e


def validate_date_range(from_date: date, to_date: date) -> None:
    """Reject a range whose end falls before its start"""
    if to_date < from_date:
        raise ValidationError(
            "To date must be after from date",
            errors=[{"field": "toDate", "msg": "To date must be after from date"}],
            kind="end-before-start"
        )


def format_display_date(d: date) -> str:
    """Render a date as e.g. 'Mar 1, 2025'"""
    return f"{MONTH_NAMES[d.month - 1][:3]} {d.day}, {d.year}"


def format_date_range(from_date: date, to_date: date) -> str:
    from_str = format_display_date(from_date)
    if from_date == to_date:
        return from_str
    return f"{from_str}{DATE_RANGE_SEPARATOR}{format_display_date(to_date)}"


def derive_fields(from_date: date, to_date: date) -> Dict[str, Any]:
    """Compute year, 0-based month, month name and the date range display"""
    month = from_date.month - 1
    return {
        "year": from_date.year,
        "month": month,
        "monthName": MONTH_NAMES[month],
        "dateRange": format_date_range(from_date, to_date)
    }


def annotate(record: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a stored record with the derived fields attached"""
    annotated = dict(record)
    annotated.update(derive_fields(parse_date(record["fromDate"]), parse_date(record["toDate"])))
    return annotated
