"""Unit tests for window resolution and history planning."""

from datetime import date
from decimal import Decimal

import pytest

from models import HoldingsEffect, LedgerEntry, TransactionKind
from services.replay_window import (
    ReplayWindow,
    TimeRange,
    history_start_date,
    resolve_window,
)
from utils.dates import subtract_years

TODAY = date(2025, 6, 30)


def _entry(asset_id: str, day: date) -> LedgerEntry:
    return LedgerEntry(
        transaction_id=f"{asset_id}-{day}",
        asset_id=asset_id,
        kind=TransactionKind.BUY,
        date=day,
        quantity_change=Decimal("1"),
        price_per_unit=Decimal("1"),
        fee=Decimal("0"),
        total=Decimal("1"),
        effect=HoldingsEffect.INCREASE,
    )


class TestResolveWindow:
    @pytest.mark.parametrize(
        "time_range,days",
        [
            (TimeRange.ONE_WEEK, 7),
            (TimeRange.ONE_MONTH, 30),
            (TimeRange.THREE_MONTHS, 90),
            (TimeRange.SIX_MONTHS, 180),
        ],
    )
    def test_fixed_lookbacks(self, time_range, days):
        window = resolve_window(time_range, date(2025, 6, 1), TODAY)
        assert (TODAY - window.requested_start).days == days
        assert window.end_date == TODAY

    def test_one_year(self):
        window = resolve_window(TimeRange.ONE_YEAR, None, TODAY)
        assert window.requested_start == date(2024, 6, 30)

    def test_replay_starts_at_earliest_entry(self):
        """A short window still replays from a much older first entry."""
        window = resolve_window(TimeRange.ONE_WEEK, date(2022, 6, 30), TODAY)

        assert window.requested_start == date(2025, 6, 23)
        assert window.replay_start == date(2022, 6, 30)
        assert not window.includes(date(2025, 6, 22))
        assert window.includes(date(2025, 6, 23))

    def test_all_range_uses_buffer(self):
        window = resolve_window(TimeRange.ALL, date(2023, 1, 1), TODAY, all_buffer_days=2)

        assert window.requested_start == date(2022, 12, 30)
        assert window.replay_start == date(2022, 12, 30)

    def test_empty_ledger_uses_today(self):
        window = resolve_window(TimeRange.ALL, None, TODAY, all_buffer_days=2)
        assert window.requested_start == date(2025, 6, 28)
        assert window.total_days == 3

    def test_accepts_raw_string_selector(self):
        window = resolve_window("1W", None, TODAY)
        assert window.requested_start == date(2025, 6, 23)

    def test_total_days_inclusive(self):
        window = ReplayWindow(date(2025, 1, 1), date(2025, 1, 1), date(2025, 1, 10))
        assert window.total_days == 10


class TestSubtractYears:
    def test_leap_day(self):
        assert subtract_years(date(2024, 2, 29), 1) == date(2023, 2, 28)

    def test_regular_day(self):
        assert subtract_years(date(2025, 3, 15), 5) == date(2020, 3, 15)


class TestHistoryStartDate:
    def test_earliest_entry_minus_buffer(self):
        entries = [_entry("a", date(2024, 3, 10)), _entry("a", date(2024, 1, 10)),
                   _entry("b", date(2020, 1, 1))]
        start = history_start_date("a", "2019-01-01", entries, TODAY, buffer_days=7)
        assert start == date(2024, 1, 3)

    def test_acquisition_date_fallback(self):
        start = history_start_date("a", "2023-01-08", [], TODAY, buffer_days=7)
        assert start == date(2023, 1, 1)

    def test_default_lookback(self):
        start = history_start_date("a", None, [], TODAY, default_years=5)
        assert start == date(2020, 6, 30)
