"""Per-asset running state and daily aggregate output of a replay."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from .transaction import HoldingsEffect, LedgerEntry


@dataclass
class HoldingsState:
    """Quantity held and cost basis for one asset on the simulated day.

    Both fields are kept non-negative. Any decrease in quantity first
    reduces cost basis by the same proportion, so
    ``cost_basis / quantity_held`` tracks the running average cost.
    """

    quantity_held: Decimal = Decimal("0")
    cost_basis: Decimal = Decimal("0")

    def apply(self, entry: LedgerEntry) -> None:
        """Apply a single ledger entry. Entries without an effect are ignored."""
        if entry.effect == HoldingsEffect.INCREASE:
            self.quantity_held += entry.quantity_change
            self.cost_basis += abs(entry.total)
        elif entry.effect == HoldingsEffect.DECREASE:
            removed = abs(entry.quantity_change)
            if self.quantity_held > 0:
                ratio = min(removed / self.quantity_held, Decimal("1"))
                self.cost_basis -= self.cost_basis * ratio
            self.quantity_held -= removed

        if self.quantity_held < 0:
            self.quantity_held = Decimal("0")
        if self.cost_basis < 0:
            self.cost_basis = Decimal("0")


@dataclass(frozen=True)
class DailySnapshot:
    """Aggregate portfolio statistics for one calendar day."""

    date: date
    net_worth: Decimal
    invested_cost: Decimal
    profit_loss: Decimal
    profit_loss_percent: Decimal

    @classmethod
    def from_totals(
        cls, day: date, net_worth: Decimal, invested_cost: Decimal
    ) -> "DailySnapshot":
        """Build a snapshot, deriving profit/loss from the two totals."""
        profit_loss = net_worth - invested_cost
        if invested_cost == 0:
            percent = Decimal("0")
        else:
            percent = profit_loss / invested_cost * 100
        return cls(
            date=day,
            net_worth=net_worth,
            invested_cost=invested_cost,
            profit_loss=profit_loss,
            profit_loss_percent=percent,
        )
