"""Asset records as supplied by the asset store."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class AssetKind(str, Enum):
    """Asset classification; determines valuation treatment."""

    EQUITY = "equity"
    FUND = "fund"
    CRYPTO = "crypto"
    CASH = "cash"
    REAL_ESTATE = "real-estate"
    LIABILITY = "liability"
    OTHER = "other"


# Kinds valued at their stored current price rather than a market series.
MANUALLY_VALUED_KINDS = frozenset({
    AssetKind.REAL_ESTATE,
    AssetKind.LIABILITY,
    AssetKind.OTHER,
    AssetKind.CASH,
})


@dataclass(frozen=True)
class AssetRecord:
    """Identity and stored metadata for a single holding.

    ``quantity``, ``average_cost`` and ``date_acquired`` are only consulted
    when the asset has no transactions of its own (legacy, simple-entry
    holdings).
    """

    id: str
    kind: AssetKind
    quantity: Decimal
    average_cost: Decimal
    current_price: Decimal
    currency: str
    date_acquired: Optional[Union[str, date, datetime]] = None
    symbol: str = ""
    name: str = ""

    @property
    def is_liability(self) -> bool:
        return self.kind == AssetKind.LIABILITY

    @property
    def is_manually_valued(self) -> bool:
        return self.kind in MANUALLY_VALUED_KINDS
