"""Exchange rate endpoint."""

from fastapi import APIRouter, Depends, Query

from networth.api.deps import get_currency_converter
from networth.api.schemas import ExchangeRateResponse
from networth.services import CurrencyConverter

router = APIRouter(prefix="/exchange-rate", tags=["exchange-rate"])


@router.get("", response_model=ExchangeRateResponse)
async def get_exchange_rate(
    from_currency: str = Query("USD", alias="from"),
    to_currency: str = Query("CNY", alias="to"),
    converter: CurrencyConverter = Depends(get_currency_converter),
) -> ExchangeRateResponse:
    """Rate between two currencies (1 for the same currency)."""
    rate = await converter.get_rate(from_currency, to_currency)
    return ExchangeRateResponse(
        rate=rate.rate,
        from_currency=rate.from_currency,
        to_currency=rate.to_currency,
        timestamp=rate.fetched_at,
        fallback=rate.is_fallback,
    )
