"""
Yahoo Finance quotes via yfinance.

yfinance is synchronous, so the lookup runs in a worker thread and is
bounded by a timeout. Only the blocking call leaves the event loop; the
caller still reads and writes the price cache on the loop.
"""

import asyncio
from decimal import Decimal, InvalidOperation
from typing import Optional

from networth.core.exceptions import MalformedSourceResponseError
from networth.domain.views import PriceResult

SOURCE_NAME = "Yahoo Finance"
DEFAULT_TIMEOUT_SECONDS = 10


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _to_price(value) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        return None
    return price if price.is_finite() and price > 0 else None


def quote_from_info(symbol: str, info) -> PriceResult:
    """
    Build a PriceResult from a yfinance `info` mapping.

    Price: regularMarketPrice preferred, then currentPrice.
    Name: shortName preferred, then longName.
    """
    if not isinstance(info, dict):
        raise MalformedSourceResponseError(SOURCE_NAME, f"no quote data for {symbol}")

    price = _to_price(info.get("regularMarketPrice"))
    if price is None:
        price = _to_price(info.get("currentPrice"))
    if price is None:
        raise MalformedSourceResponseError(SOURCE_NAME, f"no price data found for {symbol}")

    name = (info.get("shortName") or info.get("longName") or "").strip() or None
    currency = (info.get("currency") or "USD").strip().upper()
    return PriceResult(symbol=symbol, price=price, currency=currency, name=name)


def _fetch_quote_sync(symbol: str) -> PriceResult:
    yf = _get_yf()
    info = yf.Ticker(symbol).info
    return quote_from_info(symbol, info)


async def fetch_yahoo_quote(
    symbol: str,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
) -> PriceResult:
    """Fetch one quote from Yahoo Finance without blocking the event loop."""
    return await asyncio.wait_for(
        asyncio.to_thread(_fetch_quote_sync, symbol),
        timeout=timeout_seconds,
    )
