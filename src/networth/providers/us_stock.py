"""US equity prices: Tencent Finance first, Yahoo Finance as the single fallback."""

import logging

import httpx

from networth.core.exceptions import MalformedSourceResponseError, PriceUnavailableError
from networth.domain.models import Market
from networth.domain.views import PriceResult
from networth.providers.symbols import normalize_us_symbol
from networth.providers.tencent import DEFAULT_QUOTE_URL, fetch_tencent_text, parse_tencent_quote
from networth.providers.yahoo import DEFAULT_TIMEOUT_SECONDS, fetch_yahoo_quote
from networth.services.price_cache import PriceCache

logger = logging.getLogger(__name__)


class UsStockAdapter:
    """
    US stocks priced in USD.

    Any primary failure (HTTP error, malformed payload, zero price) falls
    through to Yahoo exactly once; there are no further retries in a call.
    """

    market = Market.US
    currency = "USD"

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: PriceCache,
        quote_url: str = DEFAULT_QUOTE_URL,
        yahoo_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._client = client
        self._cache = cache
        self._quote_url = quote_url
        self._yahoo_timeout = yahoo_timeout_seconds

    def supports_market(self, market: Market) -> bool:
        return market == self.market

    def cache_key(self, symbol: str) -> str:
        return f"{self.market.value}:{normalize_us_symbol(symbol)}"

    async def fetch_price(self, symbol: str) -> PriceResult:
        code = normalize_us_symbol(symbol)
        key = self.cache_key(symbol)
        cached = self._cache.get(key)
        if cached:
            return cached

        try:
            result = await self._fetch_from_tencent(code)
        except (httpx.HTTPError, MalformedSourceResponseError) as exc:
            logger.warning("Tencent Finance failed for US %s, trying Yahoo Finance: %s", code, exc)
            result = await self._fetch_from_yahoo(code)

        self._cache.set(key, result)
        logger.info("Fetched US %s (%s): %s %s", code, result.name, result.currency, result.price)
        return result

    async def _fetch_from_tencent(self, code: str) -> PriceResult:
        text = await fetch_tencent_text(self._client, self._quote_url, f"us{code}")
        return parse_tencent_quote(text, code, self.currency)

    async def _fetch_from_yahoo(self, code: str) -> PriceResult:
        try:
            return await fetch_yahoo_quote(code, timeout_seconds=self._yahoo_timeout)
        except Exception as exc:  # yfinance surfaces network and parse errors untyped
            logger.warning("Yahoo Finance fallback failed for US %s: %s", code, exc)
            raise PriceUnavailableError(code, str(exc) or type(exc).__name__) from exc
