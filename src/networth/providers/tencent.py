"""
Tencent Finance quote feed (qt.gtimg.cn) for CN and HK equities.

The feed answers with GBK-encoded text such as
    v_sh600519="1~贵州茅台~600519~1377.18~1370.00~...";
where field 1 is the display name and field 3 the last price.
"""

import logging
import re
from decimal import Decimal, InvalidOperation

import httpx

from networth.core.exceptions import MalformedSourceResponseError, PriceUnavailableError
from networth.domain.models import Market
from networth.domain.views import PriceResult
from networth.providers.symbols import normalize_cn_symbol, normalize_hk_symbol
from networth.services.price_cache import PriceCache

logger = logging.getLogger(__name__)

SOURCE_NAME = "Tencent Finance"
DEFAULT_QUOTE_URL = "http://qt.gtimg.cn/q="
RESPONSE_ENCODING = "gbk"

_QUOTED_PAYLOAD = re.compile(r'="([^"]+)"')


def parse_tencent_quote(text: str, symbol: str, currency: str) -> PriceResult:
    """
    Parse one Tencent quote line into a PriceResult.

    Raises MalformedSourceResponseError when the payload is missing, too
    short, or carries a zero / non-numeric price.
    """
    match = _QUOTED_PAYLOAD.search(text)
    if not match:
        raise MalformedSourceResponseError(SOURCE_NAME, f"no data found for {symbol}")

    fields = match.group(1).split("~")
    if len(fields) < 5 or not fields[3]:
        raise MalformedSourceResponseError(SOURCE_NAME, f"invalid data format for {symbol}")

    try:
        price = Decimal(fields[3])
    except InvalidOperation:
        raise MalformedSourceResponseError(SOURCE_NAME, f"non-numeric price for {symbol}")
    if not price.is_finite() or price <= 0:
        raise MalformedSourceResponseError(SOURCE_NAME, f"no price found for {symbol}")

    name = fields[1].strip() or None
    return PriceResult(symbol=symbol, price=price, currency=currency, name=name)


async def fetch_tencent_text(client: httpx.AsyncClient, quote_url: str, code: str) -> str:
    """GET the raw quote line for an exchange-qualified code and decode it."""
    response = await client.get(f"{quote_url}{code}")
    response.raise_for_status()
    return response.content.decode(RESPONSE_ENCODING, errors="replace")


class CnStockAdapter:
    """China A-share prices from Tencent Finance, quoted in CNY."""

    market = Market.CN
    currency = "CNY"

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: PriceCache,
        quote_url: str = DEFAULT_QUOTE_URL,
    ):
        self._client = client
        self._cache = cache
        self._quote_url = quote_url

    def supports_market(self, market: Market) -> bool:
        return market == self.market

    def cache_key(self, symbol: str) -> str:
        return f"{self.market.value}:{normalize_cn_symbol(symbol)}"

    async def fetch_price(self, symbol: str) -> PriceResult:
        code = normalize_cn_symbol(symbol)
        key = self.cache_key(symbol)
        cached = self._cache.get(key)
        if cached:
            return cached

        try:
            text = await fetch_tencent_text(self._client, self._quote_url, code)
            result = parse_tencent_quote(text, code[2:], self.currency)
        except (httpx.HTTPError, MalformedSourceResponseError) as exc:
            logger.warning("Tencent Finance failed for CN %s: %s", symbol, exc)
            raise PriceUnavailableError(symbol, str(exc)) from exc

        self._cache.set(key, result)
        logger.info("Fetched CN %s (%s): %s %s", symbol, result.name, result.currency, result.price)
        return result


class HkStockAdapter:
    """Hong Kong equity prices from Tencent Finance, quoted in HKD."""

    market = Market.HK
    currency = "HKD"

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: PriceCache,
        quote_url: str = DEFAULT_QUOTE_URL,
    ):
        self._client = client
        self._cache = cache
        self._quote_url = quote_url

    def supports_market(self, market: Market) -> bool:
        return market == self.market

    def cache_key(self, symbol: str) -> str:
        return f"{self.market.value}:hk{normalize_hk_symbol(symbol)}"

    async def fetch_price(self, symbol: str) -> PriceResult:
        code = normalize_hk_symbol(symbol)
        key = self.cache_key(symbol)
        cached = self._cache.get(key)
        if cached:
            return cached

        try:
            text = await fetch_tencent_text(self._client, self._quote_url, f"hk{code}")
            result = parse_tencent_quote(text, code, self.currency)
        except (httpx.HTTPError, MalformedSourceResponseError) as exc:
            logger.warning("Tencent Finance failed for HK %s: %s", symbol, exc)
            raise PriceUnavailableError(symbol, str(exc)) from exc

        self._cache.set(key, result)
        logger.info("Fetched HK %s (%s): %s %s", symbol, result.name, result.currency, result.price)
        return result
