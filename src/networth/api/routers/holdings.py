"""Holdings replay endpoints."""

from decimal import Decimal

from fastapi import APIRouter, Depends

from networth.api.deps import get_net_worth_service, get_valuation_service
from networth.api.schemas import (
    HoldingResponse,
    HoldingsRequest,
    HoldingsResponse,
    ValidateSellRequest,
    ValidateSellResponse,
)
from networth.services import (
    NetWorthService,
    ValuationService,
    holdings_as_of,
    quantity_held,
    validate_sell,
    round_money,
)

router = APIRouter(prefix="/holdings", tags=["holdings"])


@router.post("", response_model=HoldingsResponse)
async def get_holdings(
    body: HoldingsRequest,
    net_worth: NetWorthService = Depends(get_net_worth_service),
    valuation: ValuationService = Depends(get_valuation_service),
) -> HoldingsResponse:
    """
    Replay the supplied ledger as of a date (default: today).

    - include_prices: attach current price, base-currency value and name.
    """
    as_of = body.as_of or net_worth.today()
    holdings = holdings_as_of([t.to_domain() for t in body.transactions], as_of)

    if not body.include_prices:
        return HoldingsResponse(
            as_of=as_of,
            holdings=[
                HoldingResponse(
                    symbol=h.symbol,
                    market=h.market,
                    quantity=h.net_quantity,
                    first_transaction_date=h.first_date,
                    last_transaction_date=h.last_date,
                    transaction_count=h.transaction_count,
                )
                for h in holdings
            ],
        )

    valued = await net_worth.value_holdings(holdings, body.base_currency)
    base_currency = valuation.resolve_base_currency(body.base_currency)
    total = round_money(sum((v.value for v in valued), Decimal("0")))
    return HoldingsResponse(
        as_of=as_of,
        holdings=[
            HoldingResponse(
                symbol=v.holding.symbol,
                market=v.holding.market,
                quantity=v.holding.net_quantity,
                first_transaction_date=v.holding.first_date,
                last_transaction_date=v.holding.last_date,
                transaction_count=v.holding.transaction_count,
                price=v.price,
                value=v.value,
                currency=v.currency,
                base_currency=v.base_currency,
                name=v.name,
            )
            for v in valued
        ],
        total_value=total,
        base_currency=base_currency,
    )


@router.post("/validate-sell", response_model=ValidateSellResponse)
def check_sell(
    body: ValidateSellRequest,
    net_worth: NetWorthService = Depends(get_net_worth_service),
) -> ValidateSellResponse:
    """Check whether the ledger holds enough of an instrument to sell."""
    ledger = [t.to_domain() for t in body.transactions]
    as_of = body.as_of or net_worth.today()
    held = quantity_held(ledger, body.symbol, body.market, as_of)
    return ValidateSellResponse(
        valid=validate_sell(ledger, body.symbol, body.market, body.quantity, as_of),
        quantity_held=held,
    )
