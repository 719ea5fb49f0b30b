"""Dispatch from market to quote adapter."""

from typing import Iterable

import httpx

from networth.config.settings import Settings
from networth.core.exceptions import UnsupportedMarketError
from networth.domain.models import Market
from networth.providers.crypto import CryptoAdapter
from networth.providers.quote_adapter import QuoteAdapter
from networth.providers.tencent import CnStockAdapter, HkStockAdapter
from networth.providers.us_stock import UsStockAdapter
from networth.services.price_cache import PriceCache


class QuoteAdapterRegistry:
    """Holds one adapter per market and picks the first that supports it."""

    def __init__(self, adapters: Iterable[QuoteAdapter]):
        self._adapters = list(adapters)

    def get(self, market: Market) -> QuoteAdapter:
        for adapter in self._adapters:
            if adapter.supports_market(market):
                return adapter
        raise UnsupportedMarketError(getattr(market, "value", str(market)))


def build_default_registry(
    client: httpx.AsyncClient,
    cache: PriceCache,
    settings: Settings,
) -> QuoteAdapterRegistry:
    """Create the production adapters sharing one HTTP client and price cache."""
    return QuoteAdapterRegistry(
        [
            UsStockAdapter(
                client,
                cache,
                quote_url=settings.tencent_quote_url,
                yahoo_timeout_seconds=settings.yahoo_timeout_seconds,
            ),
            CnStockAdapter(client, cache, quote_url=settings.tencent_quote_url),
            HkStockAdapter(client, cache, quote_url=settings.tencent_quote_url),
            CryptoAdapter(client, cache, base_url=settings.coingecko_base_url),
        ]
    )
