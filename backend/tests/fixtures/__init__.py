"""Test fixtures and sample data."""
from datetime import date
from decimal import Decimal

import pytest

from models import AssetKind, AssetRecord, TransactionKind, TransactionRecord

# Fixed "today" so replays are deterministic.
TODAY = date(2025, 6, 30)


def make_asset(
    asset_id: str = "asset-1",
    kind: AssetKind = AssetKind.EQUITY,
    quantity: str = "0",
    average_cost: str = "0",
    current_price: str = "100",
    currency: str = "USD",
    date_acquired: str | None = None,
    symbol: str = "",
    name: str = "",
) -> AssetRecord:
    """Build an AssetRecord from string amounts."""
    return AssetRecord(
        id=asset_id,
        kind=kind,
        quantity=Decimal(quantity),
        average_cost=Decimal(average_cost),
        current_price=Decimal(current_price),
        currency=currency,
        date_acquired=date_acquired,
        symbol=symbol,
        name=name,
    )


def make_transaction(
    tx_id: str,
    tx_date: str,
    kind: TransactionKind = TransactionKind.BUY,
    quantity_change: str = "0",
    total: str = "0",
    asset_id: str = "asset-1",
    price_per_unit: str = "0",
    fee: str = "0",
) -> TransactionRecord:
    """Build a TransactionRecord from string amounts."""
    return TransactionRecord(
        id=tx_id,
        asset_id=asset_id,
        kind=kind,
        date=tx_date,
        quantity_change=Decimal(quantity_change),
        price_per_unit=Decimal(price_per_unit),
        fee=Decimal(fee),
        total=Decimal(total),
    )


@pytest.fixture
def equity_asset() -> AssetRecord:
    """An equity with no stored legacy position."""
    return make_asset("aapl", AssetKind.EQUITY, current_price="150", symbol="AAPL")


@pytest.fixture
def legacy_asset() -> AssetRecord:
    """A simple-entry holding with no transactions: 10 units at 100."""
    return make_asset(
        "legacy",
        AssetKind.FUND,
        quantity="10",
        average_cost="100",
        current_price="120",
        date_acquired="2023-01-01",
    )


@pytest.fixture
def liability_asset() -> AssetRecord:
    """A mortgage-style liability valued at 500."""
    return make_asset(
        "loan",
        AssetKind.LIABILITY,
        quantity="1",
        average_cost="500",
        current_price="500",
        date_acquired="2025-01-01",
    )
