"""Service for classifying assets by risk level."""

from enum import Enum

from models import AssetKind, AssetRecord


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# Fiat-pegged tokens with negligible volatility.
STABLECOINS = frozenset({
    "USDT", "USDC", "DAI", "BUSD", "TUSD", "USDD", "FRAX", "USDP",
})

# Large-cap, liquid crypto assets.
MAJOR_CRYPTO = frozenset({"BTC", "ETH"})


def is_stablecoin(symbol: str) -> bool:
    return symbol.strip().upper() in STABLECOINS


def is_major_crypto(symbol: str) -> bool:
    return symbol.strip().upper() in MAJOR_CRYPTO


def get_asset_risk_level(asset: AssetRecord) -> RiskLevel:
    """Classify an asset's risk level.

    Rules:
    - Cash and real estate: low
    - Equities and funds: medium
    - Crypto: stablecoins low, BTC/ETH medium, everything else high
    - Liabilities and other assets: low
    """
    if asset.kind in (AssetKind.CASH, AssetKind.REAL_ESTATE):
        return RiskLevel.LOW

    if asset.kind in (AssetKind.EQUITY, AssetKind.FUND):
        return RiskLevel.MEDIUM

    if asset.kind == AssetKind.CRYPTO:
        if is_stablecoin(asset.symbol):
            return RiskLevel.LOW
        if is_major_crypto(asset.symbol):
            return RiskLevel.MEDIUM
        return RiskLevel.HIGH

    return RiskLevel.LOW
