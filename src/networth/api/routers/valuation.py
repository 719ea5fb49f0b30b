"""Portfolio valuation and net worth endpoints."""

from fastapi import APIRouter, Depends

from networth.api.deps import get_net_worth_service, get_valuation_service
from networth.api.schemas import (
    HistoryRequest,
    HistoryResponse,
    NetWorthPointResponse,
    NetWorthRequest,
    PositionValuationResponse,
    ValuationRequest,
    ValuationResponse,
)
from networth.domain.views import NetWorthPoint
from networth.services import NetWorthService, ValuationService

router = APIRouter(tags=["valuation"])


def _point_response(point: NetWorthPoint) -> NetWorthPointResponse:
    return NetWorthPointResponse(
        as_of=point.as_of,
        total_value=point.total_value,
        currency=point.currency,
    )


@router.post("/valuation", response_model=ValuationResponse)
async def value_portfolio(
    body: ValuationRequest,
    valuation: ValuationService = Depends(get_valuation_service),
) -> ValuationResponse:
    """
    Value positions at current prices in the base currency.

    Unpriceable positions come back with price 0 and value 0; a missing
    exchange rate fails the whole request.
    """
    result = await valuation.value_portfolio(
        [p.to_domain() for p in body.positions],
        body.base_currency,
    )
    return ValuationResponse(
        total_value=result.total_value,
        base_currency=result.base_currency,
        positions=[
            PositionValuationResponse(
                symbol=detail.position.symbol,
                market=detail.position.market,
                quantity=detail.position.quantity,
                price=detail.price,
                value=detail.value,
                currency=detail.currency,
                name=detail.name,
            )
            for detail in result.positions
        ],
    )


@router.post("/net-worth", response_model=NetWorthPointResponse)
async def current_net_worth(
    body: NetWorthRequest,
    net_worth: NetWorthService = Depends(get_net_worth_service),
) -> NetWorthPointResponse:
    """Current net worth of the holdings replayed from the ledger."""
    point = await net_worth.current_net_worth(
        [t.to_domain() for t in body.transactions],
        body.base_currency,
    )
    return _point_response(point)


@router.post("/history", response_model=HistoryResponse)
async def get_history(
    body: HistoryRequest,
    net_worth: NetWorthService = Depends(get_net_worth_service),
    valuation: ValuationService = Depends(get_valuation_service),
) -> HistoryResponse:
    """Daily net worth curve generated from the ledger using current prices."""
    points = await net_worth.history(
        [t.to_domain() for t in body.transactions],
        base_currency=body.base_currency,
        window_days=body.days,
    )
    return HistoryResponse(
        base_currency=valuation.resolve_base_currency(body.base_currency),
        points=[_point_response(p) for p in points],
    )
