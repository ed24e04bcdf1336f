"""
Sorting helpers shared by every analyzer.

Both sorts are stable: records that tie on the sort key keep the order in
which they were added to the store.
"""

from datetime import date, datetime
from typing import Iterable, List, Optional, TypeVar, Union

T = TypeVar("T")


def to_datetime(value: Union[date, datetime]) -> datetime:
    """Promote a plain date to midnight so it compares with date-times."""
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def record_timestamp(record) -> datetime:
    return to_datetime(record.date)


def sort_by_odometer(records: Iterable[T]) -> List[T]:
    """Oldest reading first (ascending odometer)."""
    return sorted(records, key=lambda r: r.odometer)


def sort_by_date_desc(records: Iterable[T]) -> List[T]:
    """Newest record first."""
    return sorted(records, key=record_timestamp, reverse=True)


def latest(records: Iterable[T]) -> Optional[T]:
    """The most recent record by date, or None for an empty collection."""
    ordered = sort_by_date_desc(records)
    return ordered[0] if ordered else None
