"""Ledger normalizer — builds the unified chronological replay stream.

Assets with no recorded transactions (legacy, simple-entry holdings) are
represented by one synthetic opening entry built from their stored
quantity, average cost and acquisition date, so every asset can be
replayed purely from the ledger.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from models import (
    AssetRecord,
    DiagnosticCode,
    LedgerEntry,
    ReplayDiagnostic,
    TransactionKind,
    TransactionRecord,
    holdings_effect,
)
from utils.dates import MalformedDateError, parse_ledger_date

logger = logging.getLogger(__name__)

SYNTHETIC_ID_PREFIX = "synthetic-"


@dataclass
class NormalizedLedger:
    """Chronologically sorted entries plus anything that was rejected."""

    entries: list[LedgerEntry] = field(default_factory=list)
    diagnostics: list[ReplayDiagnostic] = field(default_factory=list)

    @property
    def earliest_date(self) -> Optional[date]:
        if not self.entries:
            return None
        return self.entries[0].date


def validate_inputs(
    assets: Sequence[AssetRecord], transactions: Sequence[TransactionRecord]
) -> None:
    """Fail fast on invocation errors (not data-quality problems).

    Raises:
        TypeError: If either input is None.
        ValueError: If two assets share an id.
    """
    if assets is None:
        raise TypeError("assets must be a sequence of AssetRecord, got None")
    if transactions is None:
        raise TypeError("transactions must be a sequence of TransactionRecord, got None")

    seen: set[str] = set()
    for asset in assets:
        if asset.id in seen:
            raise ValueError(f"Duplicate asset id: {asset.id}")
        seen.add(asset.id)


def build_synthetic_entry(asset: AssetRecord, today: date) -> Optional[LedgerEntry]:
    """Create the opening entry for an asset that has no transactions.

    Returns None when the asset holds nothing. Liabilities open with a
    borrow, everything else with a buy.

    Raises:
        MalformedDateError: If ``date_acquired`` is set but unparseable.
    """
    if asset.quantity <= 0:
        return None

    entry_id = f"{SYNTHETIC_ID_PREFIX}{asset.id}"
    if asset.date_acquired:
        entry_date = parse_ledger_date(asset.date_acquired, transaction_id=entry_id)
    else:
        entry_date = today

    kind = TransactionKind.BORROW if asset.is_liability else TransactionKind.BUY
    return LedgerEntry(
        transaction_id=entry_id,
        asset_id=asset.id,
        kind=kind,
        date=entry_date,
        quantity_change=asset.quantity,
        price_per_unit=asset.average_cost,
        fee=Decimal("0"),
        total=asset.quantity * asset.average_cost,
        effect=holdings_effect(kind, asset.quantity),
        synthetic=True,
    )


def to_ledger_entry(tx: TransactionRecord) -> LedgerEntry:
    """Parse and classify a recorded transaction.

    Raises:
        MalformedDateError: If the transaction date cannot be parsed.
    """
    kind = TransactionKind(tx.kind)
    return LedgerEntry(
        transaction_id=tx.id,
        asset_id=tx.asset_id,
        kind=kind,
        date=parse_ledger_date(tx.date, transaction_id=tx.id),
        quantity_change=tx.quantity_change,
        price_per_unit=tx.price_per_unit,
        fee=tx.fee,
        total=tx.total,
        effect=holdings_effect(kind, tx.quantity_change),
    )


def normalize_ledger(
    assets: Sequence[AssetRecord],
    transactions: Sequence[TransactionRecord],
    today: date,
) -> NormalizedLedger:
    """Combine real and synthetic entries into one sorted replay stream.

    An asset counts as having history if its id appears on any input
    transaction, even one later rejected for a bad date. The final sort is
    stable, so entries on the same day keep their input order (real
    transactions before synthetic ones).

    Args:
        assets: Snapshot of all asset records.
        transactions: Snapshot of all recorded transactions.
        today: Date used for synthetic entries with no acquisition date.

    Returns:
        NormalizedLedger with sorted entries and per-transaction diagnostics.
    """
    validate_inputs(assets, transactions)

    result = NormalizedLedger()
    known_ids = {a.id for a in assets}
    ids_with_history = {tx.asset_id for tx in transactions}

    real: list[LedgerEntry] = []
    for tx in transactions:
        if tx.asset_id not in known_ids:
            logger.warning(
                "Skipping transaction %s: unknown asset %s", tx.id, tx.asset_id
            )
            result.diagnostics.append(ReplayDiagnostic(
                code=DiagnosticCode.UNKNOWN_ASSET,
                message=f"Transaction references unknown asset {tx.asset_id}",
                transaction_id=tx.id,
                asset_id=tx.asset_id,
            ))
            continue
        try:
            real.append(to_ledger_entry(tx))
        except MalformedDateError as e:
            logger.warning("Skipping transaction %s: %s", tx.id, e)
            result.diagnostics.append(ReplayDiagnostic(
                code=DiagnosticCode.MALFORMED_DATE,
                message=str(e),
                transaction_id=tx.id,
                asset_id=tx.asset_id,
            ))

    synthetic: list[LedgerEntry] = []
    for asset in assets:
        if asset.id in ids_with_history:
            continue
        try:
            entry = build_synthetic_entry(asset, today)
        except MalformedDateError as e:
            logger.warning(
                "Skipping opening position for asset %s: %s", asset.id, e
            )
            result.diagnostics.append(ReplayDiagnostic(
                code=DiagnosticCode.MALFORMED_DATE,
                message=str(e),
                transaction_id=e.transaction_id,
                asset_id=asset.id,
            ))
            continue
        if entry is not None:
            synthetic.append(entry)

    result.entries = sorted(real + synthetic, key=lambda e: e.date)

    logger.debug(
        "Normalized ledger: %d recorded, %d synthetic, %d rejected",
        len(real),
        len(synthetic),
        len(result.diagnostics),
    )
    return result
