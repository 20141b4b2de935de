"""Historical price provider protocol definitions.

Defines the interface the replay engine expects from a price feed. The
HTTP-backed implementations live outside this package; the engine only
consumes the already-resolved series.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol

from models import AssetRecord


@dataclass
class PricePoint:
    """A single unit price for an asset on a specific date."""

    price_date: date  # Actual trading date (may be sparse: weekends, holidays)
    price: Decimal
    source: str  # e.g., "alphavantage", "coingecko"


class PriceHistoryProvider(Protocol):
    """Protocol for historical price providers."""

    @property
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'alphavantage')."""
        ...

    def get_price_history(
        self, asset: AssetRecord, start_date: date, end_date: date
    ) -> list[PricePoint]:
        """Fetch historical unit prices for one asset.

        Args:
            asset: The asset to price (symbol, kind and currency).
            start_date: Start date (inclusive).
            end_date: End date (inclusive).

        Returns:
            Price points in any order; entries need not be daily.

        Raises:
            ProviderError: On network, API or data failures.
        """
        ...
