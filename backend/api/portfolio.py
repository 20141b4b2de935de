"""Portfolio API endpoints."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from config import settings
from schemas.portfolio_valuation import (
    DailySnapshotResponse,
    DiagnosticResponse,
    PositionResponse,
    PositionsRequest,
    PositionsResponse,
    ValueHistoryRequest,
    ValueHistoryResponse,
)
from services.ledger_normalizer import normalize_ledger
from services.portfolio_replay_service import PortfolioReplayService
from services.position_service import PositionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/portfolio", tags=["portfolio"])


def get_replay_service() -> PortfolioReplayService:
    """Dependency provider so tests can swap in a configured service."""
    return PortfolioReplayService()


def get_position_service() -> PositionService:
    return PositionService()


@router.post("/value-history", response_model=ValueHistoryResponse)
def get_value_history(
    request: ValueHistoryRequest,
    service: PortfolioReplayService = Depends(get_replay_service),
):
    """
    Replay the ledger into a daily net worth series.

    Data-quality problems (bad dates, missing exchange rates, an
    over-long history) are returned as diagnostics alongside the series.

    Returns:
        Daily snapshots for the requested range plus diagnostics

    Raises:
        HTTPException: 400 if the inputs violate the engine contract
    """
    try:
        result = service.replay(
            assets=[a.to_record() for a in request.assets],
            transactions=[t.to_record() for t in request.transactions],
            price_history=request.price_history,
            time_range=request.time_range,
            base_currency=request.base_currency or settings.BASE_CURRENCY,
            exchange_rates=request.exchange_rates,
            today=request.today,
        )
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    if result.truncated:
        logger.warning("Value history truncated after %d days", result.days_simulated)

    return ValueHistoryResponse(
        requested_start=result.requested_start,
        replay_start=result.replay_start,
        end_date=result.end_date,
        truncated=result.truncated,
        days_simulated=result.days_simulated,
        data_points=[DailySnapshotResponse.model_validate(s) for s in result.snapshots],
        diagnostics=[DiagnosticResponse.model_validate(d) for d in result.diagnostics],
    )


@router.post("/positions", response_model=PositionsResponse)
def get_positions(
    request: PositionsRequest,
    service: PositionService = Depends(get_position_service),
):
    """
    Project the ledger into current per-asset positions.

    Returns:
        One position per asset, in request order, plus ledger diagnostics
    """
    assets = [a.to_record() for a in request.assets]
    try:
        ledger = normalize_ledger(
            assets,
            [t.to_record() for t in request.transactions],
            request.today or date.today(),
        )
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    positions = service.project_positions(assets, ledger.entries)
    return PositionsResponse(
        positions=[PositionResponse.model_validate(p) for p in positions],
        diagnostics=[DiagnosticResponse.model_validate(d) for d in ledger.diagnostics],
    )
