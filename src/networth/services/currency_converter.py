"""Currency conversion with a cached live FX source and a static fallback table."""

import logging
import time
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

import httpx

from networth.core.exceptions import ConversionUnavailableError, MalformedSourceResponseError
from networth.core.timezone import now_local
from networth.domain.views import ExchangeRate

logger = logging.getLogger(__name__)

SOURCE_NAME = "ExchangeRate-API"
DEFAULT_BASE_URL = "https://api.exchangerate-api.com/v4/latest"
DEFAULT_TTL_SECONDS = 3600

# Approximate rates used only when the live source fails
FALLBACK_RATES: dict[str, dict[str, Decimal]] = {
    "CNY": {"USD": Decimal("0.137"), "HKD": Decimal("1.07")},
    "HKD": {"USD": Decimal("0.128"), "CNY": Decimal("0.93")},
    "USD": {"CNY": Decimal("7.3"), "HKD": Decimal("7.8")},
}


def _normalize_currency(code: str) -> str:
    return (code or "").strip().upper()


def parse_rates_payload(data, to_currency: str) -> Decimal:
    """Extract `data["rates"][to_currency]` as a positive Decimal."""
    try:
        rate = Decimal(str(data["rates"][to_currency]))
    except (KeyError, TypeError, InvalidOperation):
        raise MalformedSourceResponseError(SOURCE_NAME, f"exchange rate not found for {to_currency}")
    if not rate.is_finite() or rate <= 0:
        raise MalformedSourceResponseError(SOURCE_NAME, f"exchange rate not found for {to_currency}")
    return rate


class CurrencyConverter:
    """
    Converts amounts between currencies.

    Rates are cached per (from, to) pair for the TTL, whether they came from
    the live source or the fallback table. A pair with neither raises
    ConversionUnavailableError; a rate of 1 is never assumed.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        fallback_rates: Optional[dict[str, dict[str, Decimal]]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._ttl = ttl_seconds
        self._fallback_rates = FALLBACK_RATES if fallback_rates is None else fallback_rates
        self._clock = clock
        # (from, to) -> (ExchangeRate, cached_at)
        self._cache: dict[tuple[str, str], tuple[ExchangeRate, float]] = {}

    async def convert(self, amount: Decimal, from_currency: str, to_currency: str) -> Decimal:
        """Convert `amount`; identity when both currencies are the same."""
        source = _normalize_currency(from_currency)
        target = _normalize_currency(to_currency)
        if source == target:
            return amount

        rate = await self.get_rate(source, target)
        result = amount * rate.rate
        logger.debug(
            "Converted %s %s to %s: rate=%s, result=%s",
            amount, source, target, rate.rate, result,
        )
        return result

    async def get_rate(self, from_currency: str, to_currency: str) -> ExchangeRate:
        """Resolve a rate: cache, then live source, then fallback table."""
        source = _normalize_currency(from_currency)
        target = _normalize_currency(to_currency)
        if source == target:
            return ExchangeRate(source, target, Decimal("1"), now_local())

        cached = self._cache.get((source, target))
        if cached and self._clock() - cached[1] < self._ttl:
            logger.debug("FX cache hit for %s to %s: %s", source, target, cached[0].rate)
            return cached[0]

        try:
            rate = await self._fetch_live_rate(source, target)
            exchange_rate = ExchangeRate(source, target, rate, now_local())
            logger.info("Exchange rate %s to %s: %s", source, target, rate)
        except (httpx.HTTPError, MalformedSourceResponseError) as exc:
            logger.warning("Failed to fetch exchange rate %s to %s: %s", source, target, exc)
            fallback = self._fallback_rates.get(source, {}).get(target)
            if fallback is None:
                raise ConversionUnavailableError(source, target) from exc
            logger.info("Using fallback rate for %s to %s: %s", source, target, fallback)
            exchange_rate = ExchangeRate(source, target, fallback, now_local(), is_fallback=True)

        self._cache[(source, target)] = (exchange_rate, self._clock())
        return exchange_rate

    def clear(self) -> None:
        self._cache.clear()

    async def _fetch_live_rate(self, source: str, target: str) -> Decimal:
        response = await self._client.get(f"{self._base_url}/{source}")
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError:
            raise MalformedSourceResponseError(SOURCE_NAME, "response is not JSON")
        return parse_rates_payload(data, target)
