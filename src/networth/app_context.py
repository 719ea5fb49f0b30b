"""Application context: owns the process-wide caches, HTTP client and services."""

from typing import Optional

import httpx

from networth.config.settings import Settings, get_settings
from networth.providers import QuoteAdapterRegistry, build_default_registry
from networth.services import (
    CurrencyConverter,
    NetWorthService,
    PriceCache,
    ValuationService,
)


class AppContext:
    """
    Built once at process start and closed at shutdown.

    The default base currency is read from settings here and not re-read
    per call. Tests build their own contexts (or pass a client with a mock
    transport) so no cache state leaks between them.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
        registry: Optional[QuoteAdapterRegistry] = None,
    ):
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=self.settings.http_timeout_seconds)

        self.price_cache = PriceCache(ttl_seconds=self.settings.price_cache_ttl_seconds)
        self.converter = CurrencyConverter(
            self.client,
            base_url=self.settings.fx_base_url,
            ttl_seconds=self.settings.fx_cache_ttl_seconds,
        )
        self.registry = registry or build_default_registry(
            self.client,
            self.price_cache,
            self.settings,
        )
        self.valuation = ValuationService(
            registry=self.registry,
            converter=self.converter,
            default_base_currency=self.settings.get_base_currency(),
            inter_position_delay_seconds=self.settings.inter_position_delay_seconds,
        )
        self.net_worth = NetWorthService(
            valuation_service=self.valuation,
            default_days=self.settings.history_default_days,
            timezone=self.settings.timezone,
        )

    async def aclose(self) -> None:
        """Release the HTTP client if this context created it."""
        if self._owns_client and not self.client.is_closed:
            await self.client.aclose()


# Global application context (created by the FastAPI lifespan)
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear) the global application context."""
    global _app_context
    _app_context = context
