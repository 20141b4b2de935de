"""External collaborator interfaces.

This package contains:
- Price history provider protocol: what the replay engine expects from a price feed
- Provider exceptions: typed failures a provider may raise
"""

from integrations.exceptions import ProviderConnectionError, ProviderError
from integrations.market_data_protocol import PriceHistoryProvider, PricePoint

__all__ = [
    "PriceHistoryProvider",
    "PricePoint",
    "ProviderConnectionError",
    "ProviderError",
]
