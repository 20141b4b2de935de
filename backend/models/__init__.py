"""Domain models for the valuation replay engine."""

from .asset import MANUALLY_VALUED_KINDS, AssetKind, AssetRecord
from .diagnostics import DiagnosticCode, ReplayDiagnostic
from .holdings import DailySnapshot, HoldingsState
from .transaction import (
    HoldingsEffect,
    LedgerEntry,
    TransactionKind,
    TransactionRecord,
    holdings_effect,
)

__all__ = ["AssetKind", "AssetRecord", "DailySnapshot", "DiagnosticCode", "HoldingsEffect", "HoldingsState", "LedgerEntry", "MANUALLY_VALUED_KINDS", "ReplayDiagnostic", "TransactionKind", "TransactionRecord", "holdings_effect"]
