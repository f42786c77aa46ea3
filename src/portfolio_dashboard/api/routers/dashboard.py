"""Dashboard endpoints: snapshot, table, sector view, refresh and dismissals."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from portfolio_dashboard.api.deps import get_orchestrator
from portfolio_dashboard.api.schemas import (
    DashboardResponse,
    DerivedStockResponse,
    SectorResponse,
    SnapshotResponse,
    StatsResponse,
)
from portfolio_dashboard.services import (
    RefreshOrchestrator,
    SortField,
    portfolio_stats,
    sector_breakdown,
    sort_stocks,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _dashboard(orchestrator: RefreshOrchestrator) -> DashboardResponse:
    snapshot = orchestrator.snapshot
    stocks = snapshot.stocks if snapshot is not None else []
    return DashboardResponse(
        state=orchestrator.state,
        is_refreshing=orchestrator.in_flight,
        snapshot=SnapshotResponse.model_validate(snapshot) if snapshot is not None else None,
        stats=StatsResponse.model_validate(portfolio_stats(stocks)),
        warnings=orchestrator.warnings,
        error=orchestrator.error,
    )


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    orchestrator: RefreshOrchestrator = Depends(get_orchestrator),
) -> DashboardResponse:
    """Current cycle state, snapshot, summary stats, warnings and error."""
    return _dashboard(orchestrator)


@router.get("/table", response_model=list[DerivedStockResponse])
async def get_table(
    sort_by: Optional[SortField] = Query(None, description="Column to sort by"),
    descending: bool = Query(False),
    orchestrator: RefreshOrchestrator = Depends(get_orchestrator),
) -> list[DerivedStockResponse]:
    """Table rows, optionally sorted. Missing values sort last."""
    snapshot = orchestrator.snapshot
    if snapshot is None:
        return []
    return [
        DerivedStockResponse.model_validate(s)
        for s in sort_stocks(snapshot.stocks, sort_by, descending)
    ]


@router.get("/sectors", response_model=list[SectorResponse])
async def get_sectors(
    orchestrator: RefreshOrchestrator = Depends(get_orchestrator),
) -> list[SectorResponse]:
    """Sector groups, largest present value first."""
    snapshot = orchestrator.snapshot
    if snapshot is None:
        return []
    return [SectorResponse.model_validate(s) for s in sector_breakdown(snapshot)]


@router.post("/refresh", response_model=DashboardResponse)
async def refresh_dashboard(
    orchestrator: RefreshOrchestrator = Depends(get_orchestrator),
) -> DashboardResponse:
    """Manual refresh: full fetch of prices and ratios, stale warnings cleared."""
    await orchestrator.refresh()
    return _dashboard(orchestrator)


@router.delete("/warnings", status_code=204)
async def dismiss_warnings(orchestrator: RefreshOrchestrator = Depends(get_orchestrator)) -> Response:
    orchestrator.dismiss_warnings()
    return Response(status_code=204)


@router.delete("/error", status_code=204)
async def dismiss_error(orchestrator: RefreshOrchestrator = Depends(get_orchestrator)) -> Response:
    orchestrator.dismiss_error()
    return Response(status_code=204)
