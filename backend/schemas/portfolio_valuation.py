"""Pydantic schemas for portfolio valuation endpoints."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models import AssetKind, AssetRecord, DiagnosticCode, TransactionKind, TransactionRecord
from services.replay_window import TimeRange
from services.risk_classification_service import RiskLevel

# Alias for fields named "date", whose default would shadow the type.
DateType = date


class AssetIn(BaseModel):
    """An asset record as sent by the asset store."""

    id: str
    kind: AssetKind
    quantity: Decimal = Field(default=Decimal("0"), ge=0)
    average_cost: Decimal = Field(default=Decimal("0"), ge=0)
    current_price: Decimal = Field(default=Decimal("0"), ge=0)
    currency: str = "USD"
    date_acquired: Optional[str] = None
    symbol: str = ""
    name: str = ""

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.strip().upper()

    def to_record(self) -> AssetRecord:
        return AssetRecord(**self.model_dump())


class TransactionIn(BaseModel):
    """A ledger entry as sent by the transaction store.

    ``date`` stays a plain string so an unparseable value is reported as a
    replay diagnostic instead of failing the whole request.
    """

    id: str
    asset_id: str
    kind: TransactionKind
    date: str
    quantity_change: Decimal
    price_per_unit: Decimal = Decimal("0")
    fee: Decimal = Decimal("0")
    total: Decimal = Decimal("0")

    def to_record(self) -> TransactionRecord:
        return TransactionRecord(**self.model_dump())


class ValueHistoryRequest(BaseModel):
    """Inputs for a value history replay."""

    model_config = ConfigDict(populate_by_name=True)

    assets: list[AssetIn]
    transactions: list[TransactionIn] = []
    price_history: dict[str, dict[str, Decimal]] = {}
    exchange_rates: dict[str, Decimal] = {}
    base_currency: Optional[str] = None
    time_range: TimeRange = Field(default=TimeRange.ONE_MONTH, alias="range")
    today: Optional[date] = None

    @field_validator("exchange_rates")
    @classmethod
    def upper_rate_keys(cls, v: dict[str, Decimal]) -> dict[str, Decimal]:
        return {k.strip().upper(): rate for k, rate in v.items()}


class DailySnapshotResponse(BaseModel):
    """A single day of aggregate portfolio statistics."""

    date: date
    net_worth: Decimal
    invested_cost: Decimal
    profit_loss: Decimal
    profit_loss_percent: Decimal

    model_config = ConfigDict(from_attributes=True)


class DiagnosticResponse(BaseModel):
    """A non-fatal data-quality issue found during replay."""

    code: DiagnosticCode
    message: str
    transaction_id: Optional[str] = None
    asset_id: Optional[str] = None
    date: Optional[DateType] = None

    model_config = ConfigDict(from_attributes=True)


class ValueHistoryResponse(BaseModel):
    """Response for the value history endpoint."""

    requested_start: date
    replay_start: date
    end_date: date
    truncated: bool
    days_simulated: int
    data_points: list[DailySnapshotResponse]
    diagnostics: list[DiagnosticResponse]


class PositionsRequest(BaseModel):
    """Inputs for projecting current positions."""

    assets: list[AssetIn]
    transactions: list[TransactionIn] = []
    today: Optional[date] = None


class PositionResponse(BaseModel):
    """Current position for a single asset, in the asset's currency."""

    asset_id: str
    symbol: str
    name: str
    currency: str
    quantity: Decimal
    average_cost: Decimal
    total_cost: Decimal
    realized_pnl: Decimal
    current_price: Decimal
    current_value: Decimal
    unrealized_pnl: Decimal
    unrealized_pnl_percent: Decimal
    is_liability: bool
    risk_level: RiskLevel

    model_config = ConfigDict(from_attributes=True)


class PositionsResponse(BaseModel):
    """Response for the positions endpoint."""

    positions: list[PositionResponse]
    diagnostics: list[DiagnosticResponse]
