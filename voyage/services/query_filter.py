# FILE: voyage/services/query_filter.py
"""
Query filter builder

Turns the optional list parameters (search text, year, 0-based month) into
a MemoryFilter. The owner predicate is always part of the filter.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple

from voyage.exceptions import ValidationError
from voyage.services.dates import parse_date

logger = logging.getLogger(__name__)

# Placeholder year used by the legacy month-only filter
SENTINEL_YEAR = 2020

SEARCH_FIELDS = ("title", "placeName", "description")

MIN_YEAR = 1
MAX_YEAR = 9998


@dataclass(frozen=True)
class MemoryFilter:
    """Store-agnostic predicate over memory records"""
    owner_id: str
    search: Optional[str] = None
    start_from: Optional[date] = None
    start_before: Optional[date] = None
    month_of_year: Optional[int] = None

    def matches(self, record: Dict[str, Any]) -> bool:
        if record.get("user") != self.owner_id:
            return False

        if self.search is not None:
            needle = self.search.casefold()
            if not any(
                needle in (record.get(field) or "").casefold()
                for field in SEARCH_FIELDS
            ):
                return False

        if self.start_from or self.start_before or self.month_of_year is not None:
            start = parse_date(record["fromDate"])
            if self.start_from and start < self.start_from:
                return False
            if self.start_before and start >= self.start_before:
                return False
            if self.month_of_year is not None and start.month - 1 != self.month_of_year:
                return False

        return True


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """Half-open [first day of month, first day of next month), month 0-based"""
    start = date(year, month + 1, 1)
    if month == 11:
        return start, date(year + 1, 1, 1)
    return start, date(year, month + 2, 1)


def build_filter(
    owner_id: str,
    search: Optional[str] = None,
    year: Optional[int] = None,
    month: Optional[int] = None,
    month_mode: str = "any_year"
) -> MemoryFilter:
    """Build the filter for one owner's memory listing"""
    if not owner_id:
        raise ValueError("owner_id is required")

    errors = []
    if year is not None and not MIN_YEAR <= year <= MAX_YEAR:
        errors.append({"field": "year", "msg": f"Year must be between {MIN_YEAR} and {MAX_YEAR}"})
    if month is not None and not 0 <= month <= 11:
        errors.append({"field": "month", "msg": "Month must be between 0 and 11"})
    if errors:
        raise ValidationError("Invalid filter", errors=errors, kind="invalid-filter")

    search_text = search.strip() if search else None
    if not search_text:
        search_text = None

    start_from = None
    start_before = None
    month_of_year = None

    if year is not None:
        start_from, start_before = date(year, 1, 1), date(year + 1, 1, 1)

    if month is not None:
        if year is not None:
            start_from, start_before = month_bounds(year, month)
        elif month_mode == "sentinel_year":
            start_from, start_before = month_bounds(SENTINEL_YEAR, month)
        else:
            month_of_year = month

    flt = MemoryFilter(
        owner_id=owner_id,
        search=search_text,
        start_from=start_from,
        start_before=start_before,
        month_of_year=month_of_year
    )
    logger.debug(f"Built filter: {flt}")
    return flt
