"""
Read-side views over a group's records: recency, the shelf and the calendar.
"""

import calendar
from datetime import date
from typing import Dict, Iterable, List

from .models import BookRecord, Shelf


def newest_first(records: Iterable[BookRecord]) -> List[BookRecord]:
    return sorted(records, key=lambda r: r.timestamp, reverse=True)


def shelf(records: Iterable[BookRecord]) -> List[Shelf]:
    """
    Group records by title, one shelf spine per title.

    Spines are ordered by the timestamp of the first record stored under the
    title, newest first. Records inside a spine keep their stored order.
    """
    by_title: Dict[str, Shelf] = {}
    for record in records:
        by_title.setdefault(record.title, Shelf(title=record.title)).records.append(record)
    return sorted(by_title.values(), key=lambda s: s.records[0].timestamp, reverse=True)


def records_on(records: Iterable[BookRecord], day: str) -> List[BookRecord]:
    return [r for r in records if r.record_date == day]


def calendar_days(records: Iterable[BookRecord], year: int, month: int) -> Dict[int, List[BookRecord]]:
    """Map each day of the month to the records journaled on it."""
    records = list(records)
    days_in_month = calendar.monthrange(year, month)[1]
    days = {}
    for day in range(1, days_in_month + 1):
        found = records_on(records, date(year, month, day).isoformat())
        if found:
            days[day] = found
    return days


def month_summary(records: Iterable[BookRecord], year: int, month: int) -> dict:
    records = list(records)
    prefix = f"{year:04d}-{month:02d}"
    return {
        "month": prefix,
        "this_month": sum(1 for r in records if r.record_date.startswith(prefix)),
        "total": len(records),
    }
