"""Non-fatal diagnostics reported alongside a replay result."""

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DiagnosticCode(str, Enum):
    MALFORMED_DATE = "malformed_date"
    UNKNOWN_ASSET = "unknown_asset"
    MALFORMED_PRICE_DATE = "malformed_price_date"
    MALFORMED_PRICE = "malformed_price"
    MISSING_EXCHANGE_RATE = "missing_exchange_rate"
    ITERATION_CAP_EXCEEDED = "iteration_cap_exceeded"


@dataclass(frozen=True)
class ReplayDiagnostic:
    """A recoverable data-quality issue found during normalization or replay."""

    code: DiagnosticCode
    message: str
    transaction_id: Optional[str] = None
    asset_id: Optional[str] = None
    date: Optional[datetime.date] = None
