"""Position service — projects the ledger into current per-asset positions."""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from models import AssetRecord, HoldingsEffect, LedgerEntry, TransactionKind
from services.risk_classification_service import RiskLevel, get_asset_risk_level

logger = logging.getLogger(__name__)

# Quantities at or below this are treated as a fully closed position.
DUST_QUANTITY = Decimal("0.000001")


@dataclass
class PositionSummary:
    """Current position for one asset, in the asset's own currency."""

    asset_id: str
    symbol: str
    name: str
    currency: str
    quantity: Decimal = Decimal("0")
    average_cost: Decimal = Decimal("0")
    total_cost: Decimal = Decimal("0")
    realized_pnl: Decimal = Decimal("0")
    current_price: Decimal = Decimal("0")
    current_value: Decimal = Decimal("0")
    unrealized_pnl: Decimal = Decimal("0")
    unrealized_pnl_percent: Decimal = Decimal("0")
    is_liability: bool = False
    risk_level: RiskLevel = RiskLevel.LOW


class PositionService:
    """Replays ledger entries into quantity, cost and realized P&L."""

    @staticmethod
    def apply_entry(position: PositionSummary, entry: LedgerEntry) -> None:
        """Apply one entry using average-cost accounting.

        Sells, withdrawals and repayments realize ``total`` minus the
        average cost of the units removed. Negative balance adjustments
        shrink cost proportionally without realizing anything. Dividends
        are realized income only.
        """
        if entry.kind == TransactionKind.DIVIDEND:
            position.realized_pnl += entry.total
            return

        if entry.effect == HoldingsEffect.INCREASE:
            position.quantity += entry.quantity_change
            position.total_cost += entry.total
            if position.quantity > 0:
                position.average_cost = position.total_cost / position.quantity
            return

        removed = abs(entry.quantity_change)
        if entry.kind == TransactionKind.BALANCE_ADJUSTMENT:
            if position.quantity > 0:
                ratio = min(removed / position.quantity, Decimal("1"))
                position.total_cost -= position.total_cost * ratio
        else:
            cost_removed = removed * position.average_cost
            position.realized_pnl += entry.total - cost_removed
            position.total_cost -= cost_removed

        position.quantity -= removed
        if position.quantity <= DUST_QUANTITY:
            position.quantity = Decimal("0")
            position.total_cost = Decimal("0")
            position.average_cost = Decimal("0")

    def project_positions(
        self,
        assets: Sequence[AssetRecord],
        entries: Sequence[LedgerEntry],
    ) -> list[PositionSummary]:
        """Compute the current position of every asset.

        Args:
            assets: Asset records; output preserves their order.
            entries: Chronologically sorted ledger entries (normalizer output).

        Returns:
            One PositionSummary per asset, valued at its current price.
        """
        positions = {
            a.id: PositionSummary(
                asset_id=a.id,
                symbol=a.symbol,
                name=a.name,
                currency=a.currency,
                current_price=a.current_price,
                is_liability=a.is_liability,
                risk_level=get_asset_risk_level(a),
            )
            for a in assets
        }

        for entry in entries:
            position = positions.get(entry.asset_id)
            if position is None:
                logger.debug(
                    "Ignoring entry %s for unknown asset %s",
                    entry.transaction_id,
                    entry.asset_id,
                )
                continue
            self.apply_entry(position, entry)

        for position in positions.values():
            position.current_value = position.quantity * position.current_price
            position.unrealized_pnl = position.current_value - position.total_cost
            if position.total_cost != 0:
                position.unrealized_pnl_percent = (
                    position.unrealized_pnl / position.total_cost * 100
                )

        return [positions[a.id] for a in assets]
