"""Portfolio replay service — reconstructs daily net worth from the ledger.

Walks every calendar day from the replay start through today, applying
each day's ledger entries to per-asset holdings state and valuing the
holdings at the latest known price. Only days inside the requested window
are emitted.
"""

import hashlib
import json
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from config import settings
from models import (
    AssetRecord,
    DailySnapshot,
    DiagnosticCode,
    HoldingsState,
    LedgerEntry,
    ReplayDiagnostic,
    TransactionRecord,
)
from services.currency_service import CurrencyConverter, ExchangeRates, convert_value
from services.exceptions import CurrencyConversionError
from services.ledger_normalizer import normalize_ledger
from services.price_lookup import RawPriceHistory, build_price_lookup, normalize_price_history
from services.replay_window import ReplayWindow, TimeRange, resolve_window
from utils.dates import iter_days

logger = logging.getLogger(__name__)


@dataclass
class ReplayResult:
    """Outcome of one replay: the emitted series plus non-fatal diagnostics."""

    requested_start: date
    replay_start: date
    end_date: date
    snapshots: list[DailySnapshot] = field(default_factory=list)
    diagnostics: list[ReplayDiagnostic] = field(default_factory=list)
    truncated: bool = False
    days_simulated: int = 0


def compute_replay_key(
    time_range: TimeRange,
    assets: Sequence[AssetRecord],
    transactions: Sequence[TransactionRecord],
    price_history: Optional[RawPriceHistory] = None,
    base_currency: str = settings.BASE_CURRENCY,
    exchange_rates: Optional[ExchangeRates] = None,
    today: Optional[date] = None,
) -> str:
    """Content hash of every replay input, for memoizing results.

    Identical inputs always replay to identical output, so callers can
    cache a ReplayResult under this key.
    """
    payload = {
        "range": TimeRange(time_range).value,
        "assets": [vars(a) for a in assets],
        "transactions": [vars(t) for t in transactions],
        "prices": {
            asset_id: {str(d): str(p) for d, p in series.items()}
            for asset_id, series in (price_history or {}).items()
        },
        "base_currency": base_currency,
        "rates": {k: str(v) for k, v in (exchange_rates or {}).items()},
        "today": (today or date.today()).isoformat(),
    }
    raw = json.dumps(payload, sort_keys=True, default=str)
    return hashlib.sha256(raw.encode()).hexdigest()


class PortfolioReplayService:
    """Forward-replays the ledger into a daily portfolio value series.

    Each call owns its own simulation state; the service holds only
    configuration and is safe to reuse.
    """

    def __init__(
        self,
        converter: Optional[CurrencyConverter] = None,
        max_days: int = settings.MAX_REPLAY_DAYS,
        all_buffer_days: int = settings.ALL_RANGE_BUFFER_DAYS,
    ):
        self._converter = converter or convert_value
        self._max_days = max_days
        self._all_buffer_days = all_buffer_days

    def replay(
        self,
        assets: Sequence[AssetRecord],
        transactions: Sequence[TransactionRecord],
        price_history: Optional[RawPriceHistory] = None,
        time_range: TimeRange = TimeRange.ONE_MONTH,
        base_currency: str = settings.BASE_CURRENCY,
        exchange_rates: Optional[ExchangeRates] = None,
        today: Optional[date] = None,
    ) -> ReplayResult:
        """Reconstruct daily net worth, invested cost and profit/loss.

        Args:
            assets: Snapshot of all asset records.
            transactions: Snapshot of all recorded transactions.
            price_history: Sparse asset_id -> ISO date -> price series.
            time_range: Output window selector.
            base_currency: Currency all values are reported in.
            exchange_rates: USD-based rate table passed to the converter.
            today: Last day to simulate (defaults to date.today()).

        Returns:
            ReplayResult with snapshots for the requested window only.

        Raises:
            TypeError: If assets or transactions is None.
            ValueError: If asset ids are not unique.
        """
        today = today or date.today()
        exchange_rates = {
            code.strip().upper(): rate for code, rate in (exchange_rates or {}).items()
        }

        ledger = normalize_ledger(assets, transactions, today)
        window = resolve_window(
            time_range, ledger.earliest_date, today, self._all_buffer_days
        )

        result = ReplayResult(
            requested_start=window.requested_start,
            replay_start=window.replay_start,
            end_date=window.end_date,
        )
        result.diagnostics.extend(ledger.diagnostics)

        sim_end = self._simulation_end(window, result)

        history, price_diagnostics = normalize_price_history(price_history, assets)
        result.diagnostics.extend(price_diagnostics)
        price_lookup = build_price_lookup(history, window.replay_start, sim_end)

        state: dict[str, HoldingsState] = {a.id: HoldingsState() for a in assets}
        entries_by_day = self._group_by_day(ledger.entries)
        warned: set[tuple[str, str, str]] = set()

        for day in iter_days(window.replay_start, sim_end):
            for entry in entries_by_day.get(day, ()):
                state[entry.asset_id].apply(entry)

            result.days_simulated += 1
            if not window.includes(day):
                continue

            result.snapshots.append(self._aggregate_day(
                day, assets, state, price_lookup,
                base_currency, exchange_rates, result, warned,
            ))

        logger.info(
            "Replayed %d days (%s to %s), emitted %d snapshots, %d diagnostics",
            result.days_simulated,
            window.replay_start,
            sim_end,
            len(result.snapshots),
            len(result.diagnostics),
        )
        return result

    def _simulation_end(self, window: ReplayWindow, result: ReplayResult) -> date:
        """Last day to simulate, honoring the iteration cap."""
        if window.total_days <= self._max_days:
            return window.end_date

        sim_end = window.replay_start + timedelta(days=self._max_days - 1)
        message = (
            f"Replay of {window.total_days} days exceeds the {self._max_days}-day "
            f"limit; results stop at {sim_end}"
        )
        logger.warning(message)
        result.truncated = True
        result.diagnostics.append(ReplayDiagnostic(
            code=DiagnosticCode.ITERATION_CAP_EXCEEDED,
            message=message,
            date=sim_end,
        ))
        return sim_end

    @staticmethod
    def _group_by_day(entries: Sequence[LedgerEntry]) -> dict[date, list[LedgerEntry]]:
        """Bucket entries by date, keeping stream order within a day."""
        by_day: dict[date, list[LedgerEntry]] = {}
        for entry in entries:
            by_day.setdefault(entry.date, []).append(entry)
        return by_day

    def _aggregate_day(
        self,
        day: date,
        assets: Sequence[AssetRecord],
        state: Mapping[str, HoldingsState],
        price_lookup: Mapping[str, Mapping[date, Decimal]],
        base_currency: str,
        exchange_rates: ExchangeRates,
        result: ReplayResult,
        warned: set[tuple[str, str, str]],
    ) -> DailySnapshot:
        """Value every held asset for one day and sum into a snapshot."""
        net_worth = Decimal("0")
        invested_cost = Decimal("0")

        for asset in assets:
            holding = state[asset.id]
            if holding.quantity_held <= 0:
                continue

            price = price_lookup.get(asset.id, {}).get(day, asset.current_price)
            value = self._convert(
                holding.quantity_held * price, asset, day,
                base_currency, exchange_rates, result, warned,
            )

            if asset.is_liability:
                net_worth -= value
            else:
                net_worth += value
                invested_cost += self._convert(
                    holding.cost_basis, asset, day,
                    base_currency, exchange_rates, result, warned,
                )

        return DailySnapshot.from_totals(day, net_worth, invested_cost)

    def _convert(
        self,
        amount: Decimal,
        asset: AssetRecord,
        day: date,
        base_currency: str,
        exchange_rates: ExchangeRates,
        result: ReplayResult,
        warned: set[tuple[str, str, str]],
    ) -> Decimal:
        """Convert into the base currency, falling back to the raw amount.

        A missing rate is reported once per asset and currency pair.
        """
        try:
            return self._converter(amount, asset.currency, base_currency, exchange_rates)
        except CurrencyConversionError as e:
            key = (asset.id, asset.currency, base_currency)
            if key not in warned:
                warned.add(key)
                logger.warning(
                    "Using unconverted value for asset %s from %s: %s",
                    asset.id, day, e,
                )
                result.diagnostics.append(ReplayDiagnostic(
                    code=DiagnosticCode.MISSING_EXCHANGE_RATE,
                    message=str(e),
                    asset_id=asset.id,
                    date=day,
                ))
            return amount
