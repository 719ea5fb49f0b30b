"""Quote adapter protocol."""

from typing import Protocol

from networth.domain.models import Market
from networth.domain.views import PriceResult


class QuoteAdapter(Protocol):
    """
    Protocol for per-market price sources.

    Implementations consult the shared PriceCache before any network access,
    populate it after a successful fetch, and raise PriceUnavailableError
    once every source they know about has failed.
    """

    market: Market

    def supports_market(self, market: Market) -> bool:
        """Return True if this adapter prices instruments of `market`."""
        ...

    def cache_key(self, symbol: str) -> str:
        """Return the market-qualified key for the normalized symbol."""
        ...

    async def fetch_price(self, symbol: str) -> PriceResult:
        """Return the current price for `symbol`."""
        ...
