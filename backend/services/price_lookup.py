"""Forward-filled historical price tables for replay."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional, Sequence, Union

from models import AssetRecord, DiagnosticCode, ReplayDiagnostic
from utils.dates import DateLike, MalformedDateError, iter_days, parse_ledger_date

logger = logging.getLogger(__name__)

PriceValue = Union[Decimal, int, float, str]
RawPriceHistory = Mapping[str, Mapping[DateLike, PriceValue]]
PriceHistory = dict[str, dict[date, Decimal]]


def _to_price(value: PriceValue) -> Decimal:
    """Parse a unit price.

    Raises:
        ValueError: If the value is not a finite, non-negative number.
    """
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValueError(f"Unparseable price: {value!r}") from None
    if not price.is_finite() or price < 0:
        raise ValueError(f"Invalid price: {value!r}")
    return price


def normalize_price_history(
    raw: Optional[RawPriceHistory],
    assets: Sequence[AssetRecord],
) -> tuple[PriceHistory, list[ReplayDiagnostic]]:
    """Parse a caller-supplied sparse price series into date-keyed Decimals.

    Manually-valued assets (cash, real estate, liabilities, other) are
    exempt: any series supplied for them is dropped so they are valued at
    their stored current price for the whole replay. Series for unknown
    asset ids are ignored. Points with an unparseable date, or a price that
    is not a finite non-negative number, are skipped with a diagnostic.

    Returns:
        Tuple of (asset_id -> date -> price, diagnostics for skipped points).
    """
    history: PriceHistory = {}
    diagnostics: list[ReplayDiagnostic] = []
    if not raw:
        return history, diagnostics

    for asset in assets:
        series = raw.get(asset.id)
        if not series:
            continue
        if asset.is_manually_valued:
            logger.debug(
                "Ignoring %d price points for manually-valued asset %s",
                len(series),
                asset.id,
            )
            continue

        prices: dict[date, Decimal] = {}
        for key, value in series.items():
            try:
                price_date = parse_ledger_date(key)
            except MalformedDateError as e:
                logger.warning("Skipping price point for asset %s: %s", asset.id, e)
                diagnostics.append(ReplayDiagnostic(
                    code=DiagnosticCode.MALFORMED_PRICE_DATE,
                    message=str(e),
                    asset_id=asset.id,
                ))
                continue
            try:
                prices[price_date] = _to_price(value)
            except ValueError as e:
                logger.warning(
                    "Skipping price point for asset %s on %s: %s", asset.id, price_date, e
                )
                diagnostics.append(ReplayDiagnostic(
                    code=DiagnosticCode.MALFORMED_PRICE,
                    message=str(e),
                    asset_id=asset.id,
                    date=price_date,
                ))
        history[asset.id] = prices

    return history, diagnostics


def build_price_lookup(
    history: Mapping[str, Mapping[date, Decimal]],
    start_date: date,
    end_date: date,
) -> dict[str, dict[date, Decimal]]:
    """Build an asset -> date -> price mapping with carry-forward.

    For each calendar day in the range, if no price exists for that day,
    the most recent prior price is used, including points dated before
    ``start_date``. Days before the first known point are left out so the
    caller can fall back to the asset's stored price.
    """
    lookup: dict[str, dict[date, Decimal]] = {}

    for asset_id, prices in history.items():
        sorted_prices = sorted(prices.items())

        price_map: dict[date, Decimal] = {}
        last_price: Optional[Decimal] = None
        price_idx = 0

        for current in iter_days(start_date, end_date):
            while (
                price_idx < len(sorted_prices)
                and sorted_prices[price_idx][0] <= current
            ):
                last_price = sorted_prices[price_idx][1]
                price_idx += 1

            if last_price is not None:
                price_map[current] = last_price

        lookup[asset_id] = price_map

    return lookup
