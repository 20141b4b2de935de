"""Resolve the requested output window and the internal replay start."""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Optional, Sequence

from config import settings
from models import LedgerEntry
from utils.dates import DateLike, parse_ledger_date, subtract_years


class TimeRange(str, Enum):
    """Lookback selector for the value history chart."""

    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    ALL = "ALL"


LOOKBACK_DAYS = {
    TimeRange.ONE_WEEK: 7,
    TimeRange.ONE_MONTH: 30,
    TimeRange.THREE_MONTHS: 90,
    TimeRange.SIX_MONTHS: 180,
}


@dataclass(frozen=True)
class ReplayWindow:
    """Output window plus the earlier start the simulation must run from."""

    requested_start: date
    replay_start: date
    end_date: date

    @property
    def total_days(self) -> int:
        return (self.end_date - self.replay_start).days + 1

    def includes(self, day: date) -> bool:
        return self.requested_start <= day <= self.end_date


def requested_start_date(
    time_range: TimeRange,
    today: date,
    earliest: date,
    all_buffer_days: int,
) -> date:
    """First date the caller wants to see for a range selector."""
    time_range = TimeRange(time_range)
    if time_range == TimeRange.ALL:
        return earliest - timedelta(days=all_buffer_days)
    if time_range == TimeRange.ONE_YEAR:
        return subtract_years(today, 1)
    return today - timedelta(days=LOOKBACK_DAYS[time_range])


def resolve_window(
    time_range: TimeRange,
    earliest_entry_date: Optional[date],
    today: date,
    all_buffer_days: int = settings.ALL_RANGE_BUFFER_DAYS,
) -> ReplayWindow:
    """Resolve the output window and the replay start for a range selector.

    The replay always starts on or before the first ledger entry so that
    running cost basis is correct, even when only a recent window is shown.
    An empty ledger treats today as the earliest entry.
    """
    earliest = earliest_entry_date or today
    requested = requested_start_date(time_range, today, earliest, all_buffer_days)
    return ReplayWindow(
        requested_start=requested,
        replay_start=min(requested, earliest),
        end_date=today,
    )


def history_start_date(
    asset_id: str,
    date_acquired: Optional[DateLike],
    entries: Sequence[LedgerEntry],
    today: date,
    buffer_days: int = settings.HISTORY_BUFFER_DAYS,
    default_years: int = settings.DEFAULT_HISTORY_YEARS,
) -> date:
    """Start date for fetching an asset's historical prices.

    Priority:
    1. Earliest ledger entry for the asset, minus the buffer
    2. The asset's acquisition date, minus the buffer
    3. ``default_years`` before today

    The buffer makes a price available on the first replayed day.
    """
    asset_dates = [e.date for e in entries if e.asset_id == asset_id]
    if asset_dates:
        return min(asset_dates) - timedelta(days=buffer_days)

    if date_acquired:
        return parse_ledger_date(date_acquired) - timedelta(days=buffer_days)

    return subtract_years(today, default_years)
