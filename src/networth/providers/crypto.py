"""Digital-asset prices from the CoinGecko simple price API, quoted in USD."""

import logging
from decimal import Decimal, InvalidOperation

import httpx

from networth.core.exceptions import MalformedSourceResponseError, PriceUnavailableError
from networth.domain.models import Market, normalize_symbol
from networth.domain.views import PriceResult
from networth.services.price_cache import PriceCache

logger = logging.getLogger(__name__)

SOURCE_NAME = "CoinGecko"
DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"

# ticker -> (CoinGecko id, display name)
COIN_IDS: dict[str, tuple[str, str]] = {
    "BTC": ("bitcoin", "Bitcoin"),
    "ETH": ("ethereum", "Ethereum"),
    "BNB": ("binancecoin", "BNB"),
    "SOL": ("solana", "Solana"),
    "ADA": ("cardano", "Cardano"),
    "XRP": ("ripple", "XRP"),
    "DOT": ("polkadot", "Polkadot"),
    "DOGE": ("dogecoin", "Dogecoin"),
    "MATIC": ("matic-network", "Polygon"),
    "AVAX": ("avalanche-2", "Avalanche"),
    "LINK": ("chainlink", "Chainlink"),
    "LTC": ("litecoin", "Litecoin"),
    "ATOM": ("cosmos", "Cosmos"),
    "ETC": ("ethereum-classic", "Ethereum Classic"),
    "XLM": ("stellar", "Stellar"),
    "ALGO": ("algorand", "Algorand"),
    "VET": ("vechain", "VeChain"),
    "ICP": ("internet-computer", "Internet Computer"),
    "FIL": ("filecoin", "Filecoin"),
}


def coin_id_for(symbol: str) -> str:
    """Map a ticker to its CoinGecko id; unknown tickers pass through lower-cased."""
    ticker = normalize_symbol(symbol)
    if ticker in COIN_IDS:
        return COIN_IDS[ticker][0]
    return ticker.lower()


def coin_name_for(symbol: str) -> str:
    ticker = normalize_symbol(symbol)
    if ticker in COIN_IDS:
        return COIN_IDS[ticker][1]
    return ticker


def parse_simple_price(data, coin_id: str, vs_currency: str = "usd") -> Decimal:
    """Extract `data[coin_id][vs_currency]` as a positive Decimal."""
    try:
        raw = data[coin_id][vs_currency]
        price = Decimal(str(raw))
    except (KeyError, TypeError, InvalidOperation):
        raise MalformedSourceResponseError(SOURCE_NAME, f"no price data found for {coin_id}")
    if not price.is_finite() or price <= 0:
        raise MalformedSourceResponseError(SOURCE_NAME, f"no price data found for {coin_id}")
    return price


class CryptoAdapter:
    """Cryptocurrency prices via CoinGecko."""

    market = Market.CRYPTO
    currency = "USD"

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: PriceCache,
        base_url: str = DEFAULT_BASE_URL,
    ):
        self._client = client
        self._cache = cache
        self._base_url = base_url.rstrip("/")

    def supports_market(self, market: Market) -> bool:
        return market == self.market

    def cache_key(self, symbol: str) -> str:
        return f"{self.market.value}:{normalize_symbol(symbol)}"

    async def fetch_price(self, symbol: str) -> PriceResult:
        ticker = normalize_symbol(symbol)
        key = self.cache_key(symbol)
        cached = self._cache.get(key)
        if cached:
            return cached

        coin_id = coin_id_for(ticker)
        try:
            response = await self._client.get(
                f"{self._base_url}/simple/price",
                params={"ids": coin_id, "vs_currencies": self.currency.lower()},
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            try:
                data = response.json()
            except ValueError:
                raise MalformedSourceResponseError(SOURCE_NAME, "response is not JSON")
            price = parse_simple_price(data, coin_id, self.currency.lower())
        except (httpx.HTTPError, MalformedSourceResponseError) as exc:
            logger.warning("CoinGecko failed for %s: %s", ticker, exc)
            raise PriceUnavailableError(ticker, str(exc)) from exc

        result = PriceResult(
            symbol=ticker,
            price=price,
            currency=self.currency,
            name=coin_name_for(ticker),
        )
        self._cache.set(key, result)
        logger.info("Fetched CRYPTO %s (%s): $%s", ticker, result.name, result.price)
        return result
