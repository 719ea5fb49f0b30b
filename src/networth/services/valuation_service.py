"""Valuation aggregator: price and convert positions into one base-currency total."""

import asyncio
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import TYPE_CHECKING, Iterable, Optional

from networth.core.exceptions import PriceUnavailableError
from networth.domain.models import Position
from networth.domain.views import PortfolioValuation, PositionValuation
from networth.services.currency_converter import CurrencyConverter

if TYPE_CHECKING:
    from networth.providers.registry import QuoteAdapterRegistry

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
DEFAULT_INTER_POSITION_DELAY_SECONDS = 0.2


def round_money(value: Decimal) -> Decimal:
    """Round a base-currency amount to 2 decimal places (half up)."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


class ValuationService:
    """
    Values a list of positions in a base currency.

    Positions are processed strictly one after another with a fixed pause
    between them; this sequencing is the rate-limit control for the quote
    sources and must not be replaced by concurrent fetches.
    """

    def __init__(
        self,
        registry: "QuoteAdapterRegistry",
        converter: CurrencyConverter,
        default_base_currency: str = "USD",
        inter_position_delay_seconds: float = DEFAULT_INTER_POSITION_DELAY_SECONDS,
    ):
        self._registry = registry
        self._converter = converter
        self._default_base_currency = default_base_currency.strip().upper()
        self._delay = inter_position_delay_seconds

    @property
    def default_base_currency(self) -> str:
        return self._default_base_currency

    def resolve_base_currency(self, base_currency: Optional[str] = None) -> str:
        """Return the per-call override if given, else the configured default."""
        if base_currency and base_currency.strip():
            return base_currency.strip().upper()
        return self._default_base_currency

    async def value_portfolio(
        self,
        positions: Iterable[Position],
        base_currency: Optional[str] = None,
    ) -> PortfolioValuation:
        """
        Price each position and convert it to the base currency.

        A position whose price cannot be fetched is kept with price 0 and
        value 0 and the run continues. A conversion failure raises
        ConversionUnavailableError and no total is returned. Unsupported
        markets raise UnsupportedMarketError immediately.
        """
        base = self.resolve_base_currency(base_currency)
        results: list[PositionValuation] = []
        total = Decimal("0")

        for index, position in enumerate(positions):
            if index > 0 and self._delay > 0:
                await asyncio.sleep(self._delay)

            adapter = self._registry.get(position.market)
            try:
                quote = await adapter.fetch_price(position.symbol)
            except PriceUnavailableError as exc:
                logger.error("Error pricing %s %s: %s", position.market.value, position.symbol, exc)
                results.append(
                    PositionValuation(
                        position=position,
                        price=Decimal("0"),
                        value=Decimal("0"),
                        currency=base,
                    )
                )
                continue

            value_in_quote_currency = quote.price * position.quantity
            value = await self._converter.convert(value_in_quote_currency, quote.currency, base)
            results.append(
                PositionValuation(
                    position=position,
                    price=quote.price,
                    value=value,
                    currency=quote.currency,
                    name=quote.name,
                )
            )
            total += value

        return PortfolioValuation(
            total_value=round_money(total),
            base_currency=base,
            positions=results,
        )
