"""Calendar-date helpers for ledger replay.

All replay arithmetic happens at date-only granularity. ISO date-time
strings are reduced to the calendar date as written, without timezone
conversion, so "2024-03-01T23:30:00-08:00" is 2024-03-01.
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Union

DateLike = Union[str, date, datetime]


class MalformedDateError(ValueError):
    """A ledger or price date could not be parsed."""

    def __init__(self, message: str, transaction_id: str = "", raw_value: object = None):
        self.transaction_id = transaction_id
        self.raw_value = raw_value
        super().__init__(message)


def parse_ledger_date(value: DateLike, transaction_id: str = "") -> date:
    """Parse an ISO date or date-time into a calendar date.

    Raises:
        MalformedDateError: If the value is empty or not ISO-8601.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise MalformedDateError(
            f"Missing or non-string date: {value!r}",
            transaction_id=transaction_id,
            raw_value=value,
        )

    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise MalformedDateError(
            f"Unparseable date: {value!r}",
            transaction_id=transaction_id,
            raw_value=value,
        ) from None


def subtract_years(day: date, years: int) -> date:
    """Shift a date back by whole calendar years (Feb 29 maps to Feb 28)."""
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        return day.replace(year=day.year - years, day=28)


def iter_days(start_date: date, end_date: date) -> Iterator[date]:
    """Yield every calendar day from start_date through end_date inclusive."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)
