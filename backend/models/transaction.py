"""Ledger transactions and their normalized replay form."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class TransactionKind(str, Enum):
    """Kind of ledger entry as recorded by the user."""

    BUY = "buy"
    SELL = "sell"
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    BORROW = "borrow"
    REPAY = "repay"
    DIVIDEND = "dividend"
    BALANCE_ADJUSTMENT = "balance-adjustment"


INCREASING_KINDS = frozenset({
    TransactionKind.BUY,
    TransactionKind.DEPOSIT,
    TransactionKind.BORROW,
})

DECREASING_KINDS = frozenset({
    TransactionKind.SELL,
    TransactionKind.WITHDRAWAL,
    TransactionKind.REPAY,
})


class HoldingsEffect(str, Enum):
    """What an entry does to an asset's held quantity during replay."""

    INCREASE = "increase"
    DECREASE = "decrease"


def holdings_effect(
    kind: TransactionKind, quantity_change: Decimal
) -> Optional[HoldingsEffect]:
    """Classify a transaction kind into its replay effect.

    Balance adjustments take their direction from the sign of
    ``quantity_change``. Dividends are cash-only and return None.
    """
    if kind in INCREASING_KINDS:
        return HoldingsEffect.INCREASE
    if kind in DECREASING_KINDS:
        return HoldingsEffect.DECREASE
    if kind == TransactionKind.BALANCE_ADJUSTMENT:
        if quantity_change >= 0:
            return HoldingsEffect.INCREASE
        return HoldingsEffect.DECREASE
    return None


@dataclass(frozen=True)
class TransactionRecord:
    """An immutable ledger entry as supplied by the transaction store.

    ``date`` is kept raw (ISO date or date-time string) and parsed by the
    ledger normalizer. ``quantity_change`` is signed; ``total`` is the
    cash-flow magnitude.
    """

    id: str
    asset_id: str
    kind: TransactionKind
    date: Union[str, date, datetime]
    quantity_change: Decimal
    price_per_unit: Decimal = Decimal("0")
    fee: Decimal = Decimal("0")
    total: Decimal = Decimal("0")


@dataclass(frozen=True)
class LedgerEntry:
    """A parsed, classified transaction ready for replay."""

    transaction_id: str
    asset_id: str
    kind: TransactionKind
    date: date
    quantity_change: Decimal
    price_per_unit: Decimal
    fee: Decimal
    total: Decimal
    effect: Optional[HoldingsEffect]
    synthetic: bool = False
