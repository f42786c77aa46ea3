"""Holding endpoints: the add/edit/remove forms and the stock catalogue."""

from fastapi import APIRouter, Depends, Response

from portfolio_dashboard.api.deps import get_orchestrator, get_store
from portfolio_dashboard.api.schemas import (
    CatalogEntryResponse,
    HoldingCreateRequest,
    HoldingResponse,
    HoldingUpdateRequest,
)
from portfolio_dashboard.domain.models import POPULAR_STOCKS, HoldingCreate, HoldingUpdate
from portfolio_dashboard.services import PortfolioStore, RefreshOrchestrator

router = APIRouter(prefix="/holdings", tags=["holdings"])


@router.get("", response_model=list[HoldingResponse])
def list_holdings(store: PortfolioStore = Depends(get_store)) -> list[HoldingResponse]:
    """List holdings in insertion order."""
    return [HoldingResponse.model_validate(h) for h in store.list_holdings()]


@router.get("/catalog", response_model=list[CatalogEntryResponse])
def list_catalog() -> list[CatalogEntryResponse]:
    """Popular NSE stocks offered by the add-stock form."""
    return [CatalogEntryResponse.model_validate(entry) for entry in POPULAR_STOCKS]


@router.post("", response_model=HoldingResponse, status_code=201)
async def add_holding(
    data: HoldingCreateRequest,
    orchestrator: RefreshOrchestrator = Depends(get_orchestrator),
) -> HoldingResponse:
    """Add a holding and refresh the dashboard with live data for it."""
    holding = await orchestrator.add_holding(
        HoldingCreate(
            symbol=data.symbol,
            particulars=data.particulars,
            sector=data.sector,
            purchase_price=data.purchase_price,
            quantity=data.quantity,
            exchange=data.exchange,
        )
    )
    return HoldingResponse.model_validate(holding)


@router.patch("/{holding_id}", response_model=HoldingResponse)
async def update_holding(
    holding_id: str,
    data: HoldingUpdateRequest,
    orchestrator: RefreshOrchestrator = Depends(get_orchestrator),
) -> HoldingResponse:
    """Edit a holding (partial update)."""
    holding = await orchestrator.update_holding(
        holding_id,
        HoldingUpdate(**data.model_dump(exclude_unset=True)),
    )
    return HoldingResponse.model_validate(holding)


@router.delete("/{holding_id}", status_code=204)
async def remove_holding(
    holding_id: str,
    orchestrator: RefreshOrchestrator = Depends(get_orchestrator),
) -> Response:
    """Remove a holding. Unknown ids are ignored."""
    orchestrator.remove_holding(holding_id)
    return Response(status_code=204)


@router.delete("", status_code=204)
async def clear_holdings(orchestrator: RefreshOrchestrator = Depends(get_orchestrator)) -> Response:
    """Remove every holding."""
    orchestrator.clear_portfolio()
    return Response(status_code=204)
