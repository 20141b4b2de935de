"""Market data service — thin orchestrator for historical price providers."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from config import settings
from integrations.exceptions import ProviderError
from integrations.market_data_protocol import PriceHistoryProvider, PricePoint
from models import AssetKind, AssetRecord, LedgerEntry
from services.replay_window import history_start_date
from utils.dates import MalformedDateError, subtract_years

logger = logging.getLogger(__name__)


class MarketDataService:
    """Collects sparse price series for every market-priced asset.

    Supports routing crypto assets to a dedicated crypto provider while
    sending equities and funds to the default provider. Manually-valued
    assets are never requested.
    """

    def __init__(
        self,
        provider: PriceHistoryProvider,
        crypto_provider: Optional[PriceHistoryProvider] = None,
    ):
        """Initialize with providers for dependency injection.

        Args:
            provider: Default price provider (equities, funds).
            crypto_provider: Provider for crypto assets. Falls back to the
                            default provider when None.
        """
        self._provider = provider
        self._crypto_provider = crypto_provider

    def provider_for(self, asset: AssetRecord) -> PriceHistoryProvider:
        if asset.kind == AssetKind.CRYPTO and self._crypto_provider is not None:
            return self._crypto_provider
        return self._provider

    def get_price_history(
        self,
        assets: Sequence[AssetRecord],
        entries: Sequence[LedgerEntry],
        today: Optional[date] = None,
    ) -> dict[str, dict[date, Decimal]]:
        """Fetch each asset's price series over its planned history window.

        A retriable provider failure is retried once. Any remaining failure
        for one asset yields an empty series for that asset; the replay then
        values it at its stored current price.

        Args:
            assets: Assets to price.
            entries: Normalized ledger entries, used to plan start dates.
            today: End of the requested range (defaults to date.today()).

        Returns:
            Dict mapping asset id to a date -> price series.
        """
        today = today or date.today()
        result: dict[str, dict[date, Decimal]] = {}

        for asset in assets:
            if asset.is_manually_valued:
                result[asset.id] = {}
                continue

            try:
                start_date = history_start_date(
                    asset.id, asset.date_acquired, entries, today
                )
            except MalformedDateError:
                start_date = subtract_years(today, settings.DEFAULT_HISTORY_YEARS)

            provider = self.provider_for(asset)
            try:
                points = self._fetch(provider, asset, start_date, today)
            except ProviderError as e:
                logger.warning(
                    "Price history fetch failed for %s via %s: %s",
                    asset.symbol or asset.id,
                    e.provider_name or provider.provider_name,
                    e,
                )
                result[asset.id] = {}
                continue

            result[asset.id] = {p.price_date: p.price for p in points}
            logger.debug(
                "Fetched %d price points for %s from %s",
                len(points), asset.id, start_date,
            )

        return result

    @staticmethod
    def _fetch(
        provider: PriceHistoryProvider,
        asset: AssetRecord,
        start_date: date,
        end_date: date,
    ) -> list[PricePoint]:
        """Fetch one asset's points, retrying a transient failure once."""
        try:
            return provider.get_price_history(asset, start_date, end_date)
        except ProviderError as e:
            if not e.retriable:
                raise
            logger.info(
                "Retrying price history for %s via %s after transient error: %s",
                asset.symbol or asset.id,
                provider.provider_name,
                e,
            )
        return provider.get_price_history(asset, start_date, end_date)
