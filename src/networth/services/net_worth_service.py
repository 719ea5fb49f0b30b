"""
Net worth service: current snapshot and a synthesized daily history.

History is rebuilt from the ledger one calendar day at a time, but every
day is valued with a single set of present-day unit prices. This is an
approximation of past values, not historical pricing.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from networth.core.exceptions import ValidationError
from networth.core.timezone import get_timezone, now_local, start_of_day, today_local
from networth.domain.models import Market, Transaction
from networth.domain.views import Holding, HoldingValuation, NetWorthPoint
from networth.services.portfolio_engine import holdings_as_of, order_transactions
from networth.services.valuation_service import ValuationService, round_money

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_DAYS = 30


class NetWorthService:
    """Computes net worth points from the transaction ledger."""

    def __init__(
        self,
        valuation_service: ValuationService,
        default_days: int = DEFAULT_HISTORY_DAYS,
        timezone: Optional[str] = None,
    ):
        self._valuation = valuation_service
        self._default_days = default_days
        self._tz = get_timezone(timezone)

    def today(self) -> date:
        return today_local(self._tz)

    async def history(
        self,
        transactions: Iterable[Transaction],
        base_currency: Optional[str] = None,
        window_days: Optional[int] = None,
        today: Optional[date] = None,
    ) -> list[NetWorthPoint]:
        """
        Return one point per calendar day, ascending, ending today.

        The window starts at max(earliest transaction date, today - window_days).
        Prices are fetched once for what is held today; each day's holdings
        are valued with those frozen per-unit prices. Positions that are not
        held today contribute 0 on earlier days. An empty ledger yields [].
        """
        ledger = order_transactions(transactions)
        if not ledger:
            return []

        days = self._default_days if window_days is None else window_days
        if days < 0:
            raise ValidationError("window_days must be >= 0")

        base = self._valuation.resolve_base_currency(base_currency)
        end = today or self.today()
        earliest = ledger[0].effective_date
        if days >= (end - earliest).days:
            start = earliest
        else:
            start = end - timedelta(days=days)
        if start > end:
            return []

        unit_prices = await self._present_unit_prices(ledger, end, base)

        points: list[NetWorthPoint] = []
        day = start
        while day <= end:
            total = Decimal("0")
            for holding in holdings_as_of(ledger, day):
                unit_price = unit_prices.get((holding.symbol, holding.market))
                if unit_price:
                    total += holding.net_quantity * unit_price
            points.append(
                NetWorthPoint(
                    as_of=start_of_day(day, self._tz),
                    total_value=round_money(total),
                    currency=base,
                )
            )
            day += timedelta(days=1)

        logger.info("Generated %d net worth points from %s to %s in %s", len(points), start, end, base)
        return points

    async def current_net_worth(
        self,
        transactions: Iterable[Transaction],
        base_currency: Optional[str] = None,
        today: Optional[date] = None,
    ) -> NetWorthPoint:
        """Value what is held today at present-day prices."""
        base = self._valuation.resolve_base_currency(base_currency)
        holdings = holdings_as_of(transactions, today or self.today())
        if not holdings:
            return NetWorthPoint(as_of=now_local(self._tz), total_value=Decimal("0.00"), currency=base)

        valuation = await self._valuation.value_portfolio(
            [h.to_position() for h in holdings],
            base,
        )
        return NetWorthPoint(
            as_of=now_local(self._tz),
            total_value=valuation.total_value,
            currency=valuation.base_currency,
        )

    async def value_holdings(
        self,
        holdings: list[Holding],
        base_currency: Optional[str] = None,
    ) -> list[HoldingValuation]:
        """Merge holdings with price, value, quote currency and display name."""
        if not holdings:
            return []

        valuation = await self._valuation.value_portfolio(
            [h.to_position() for h in holdings],
            base_currency,
        )
        return [
            HoldingValuation(
                holding=holding,
                price=detail.price,
                value=detail.value,
                currency=detail.currency,
                base_currency=valuation.base_currency,
                name=detail.name,
            )
            for holding, detail in zip(holdings, valuation.positions)
        ]

    async def _present_unit_prices(
        self,
        ledger: list[Transaction],
        today: date,
        base_currency: str,
    ) -> dict[tuple[str, Market], Decimal]:
        """Per-unit base-currency price of everything held today."""
        current = holdings_as_of(ledger, today)
        if not current:
            return {}

        valuation = await self._valuation.value_portfolio(
            [h.to_position() for h in current],
            base_currency,
        )
        unit_prices: dict[tuple[str, Market], Decimal] = {}
        for detail in valuation.positions:
            if detail.position.quantity > 0:
                unit_prices[detail.position.key] = detail.value / detail.position.quantity
        return unit_prices
