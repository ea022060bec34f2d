# FILE: voyage/services/grouping.py
"""
Year -> month -> memories grouping for the dashboard
"""
from typing import Any, Dict, Iterable, List, Tuple

from voyage.services.dates import MONTH_NAMES, parse_date

MonthBucket = Dict[str, Any]
GroupedMemories = Dict[str, Dict[str, MonthBucket]]


def group_memories(memories: Iterable[Dict[str, Any]]) -> GroupedMemories:
    """
    Bucket memories by the year and month of their start date.

    Keys iterate in order of first appearance; each bucket keeps the
    memories in input order.
    """
    grouped: GroupedMemories = {}

    for memory in memories:
        start = parse_date(memory["fromDate"])
        year = str(start.year)
        month = start.month - 1
        month_name = MONTH_NAMES[month]

        months = grouped.setdefault(year, {})
        bucket = months.get(month_name)
        if bucket is None:
            bucket = {
                "month": month,
                "monthName": month_name,
                "memories": []
            }
            months[month_name] = bucket
        bucket["memories"].append(memory)

    return grouped


def sorted_groups(grouped: GroupedMemories) -> List[Tuple[str, List[Tuple[str, MonthBucket]]]]:
    """Latest years first, and within a year latest months first"""
    ordered = []
    for year in sorted(grouped, key=int, reverse=True):
        months = sorted(
            grouped[year].items(),
            key=lambda item: item[1]["month"],
            reverse=True
        )
        ordered.append((year, months))
    return ordered
