"""
Unit tests for NetWorthService.

Tests cover:
- Daily history window and point count
- Present-day prices applied to replayed holdings
- Empty ledgers and future-dated ledgers
- Current net worth snapshot
- Holdings merged with price data
"""

from datetime import date, datetime
from decimal import Decimal

import pytest
import pytz

from networth.core.exceptions import ConversionUnavailableError, ValidationError
from networth.domain.models import Market
from networth.services import NetWorthService, holdings_as_of

from tests.conftest import FxSource, StubQuoteAdapter, buy, sell


TODAY = date(2024, 6, 10)


# =============================================================================
# HISTORY TESTS
# =============================================================================


class TestHistory:
    """Tests for the synthesized daily net worth curve."""

    @pytest.mark.asyncio
    async def test_empty_ledger_returns_empty_list(self, net_worth_service: NetWorthService):
        assert await net_worth_service.history([], "USD", today=TODAY) == []

    @pytest.mark.asyncio
    async def test_single_buy_today_with_one_day_window(self, net_worth_service: NetWorthService):
        """
        GIVEN one BUY of 10 AAPL dated today
        WHEN I request a 1-day window
        THEN exactly one point is returned: 10 x 185.50 = 1855.00 USD
        """
        points = await net_worth_service.history(
            [buy("AAPL", 10, TODAY)],
            "USD",
            window_days=1,
            today=TODAY,
        )

        assert len(points) == 1
        assert points[0].total_value == Decimal("1855.00")
        assert points[0].currency == "USD"

    @pytest.mark.asyncio
    async def test_window_starts_at_first_transaction(self, net_worth_service: NetWorthService):
        """
        GIVEN BUY 10 AAPL on 06-01 and SELL 4 on 06-05
        WHEN I request 30 days ending 06-07
        THEN 7 daily points start at 06-01 and drop from 1855.00 to 1113.00 on 06-05
        """
        ledger = [
            buy("AAPL", 10, date(2024, 6, 1)),
            sell("AAPL", 4, date(2024, 6, 5)),
        ]

        points = await net_worth_service.history(ledger, "USD", window_days=30, today=date(2024, 6, 7))

        assert [p.as_of.date() for p in points] == [date(2024, 6, d) for d in range(1, 8)]
        assert [p.total_value for p in points] == [Decimal("1855.00")] * 4 + [Decimal("1113.00")] * 3

    @pytest.mark.asyncio
    async def test_window_is_capped_by_days(self, net_worth_service: NetWorthService):
        ledger = [buy("AAPL", 1, date(2024, 1, 1))]

        points = await net_worth_service.history(ledger, "USD", window_days=5, today=TODAY)

        assert len(points) == 6
        assert points[0].as_of.date() == date(2024, 6, 5)
        assert points[-1].as_of.date() == TODAY

    @pytest.mark.asyncio
    async def test_window_beyond_calendar_range_starts_at_first_transaction(
        self,
        net_worth_service: NetWorthService,
    ):
        """
        GIVEN one BUY on 06-01
        WHEN I request a 1,000,000-day window ending 06-03
        THEN three points start at the BUY date
        """
        ledger = [buy("AAPL", 1, date(2024, 6, 1))]

        points = await net_worth_service.history(
            ledger,
            "USD",
            window_days=1_000_000,
            today=date(2024, 6, 3),
        )

        assert [p.as_of.date() for p in points] == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]

    @pytest.mark.asyncio
    async def test_window_equal_to_ledger_span(self, net_worth_service: NetWorthService):
        ledger = [buy("AAPL", 1, date(2024, 6, 1))]

        points = await net_worth_service.history(ledger, "USD", window_days=2, today=date(2024, 6, 3))

        assert points[0].as_of.date() == date(2024, 6, 1)
        assert len(points) == 3

    @pytest.mark.asyncio
    async def test_zero_day_window_returns_today_only(self, net_worth_service: NetWorthService):
        ledger = [buy("AAPL", 1, date(2024, 1, 1))]

        points = await net_worth_service.history(ledger, "USD", window_days=0, today=TODAY)

        assert [p.as_of.date() for p in points] == [TODAY]

    @pytest.mark.asyncio
    async def test_default_window_is_thirty_days(self, net_worth_service: NetWorthService):
        ledger = [buy("AAPL", 1, date(2024, 1, 1))]

        points = await net_worth_service.history(ledger, "USD", today=TODAY)

        assert len(points) == 31

    @pytest.mark.asyncio
    async def test_negative_window_rejected(self, net_worth_service: NetWorthService):
        with pytest.raises(ValidationError):
            await net_worth_service.history([buy("AAPL", 1, TODAY)], "USD", window_days=-1, today=TODAY)

    @pytest.mark.asyncio
    async def test_future_dated_ledger_returns_empty_list(self, net_worth_service: NetWorthService):
        ledger = [buy("AAPL", 1, date(2024, 7, 1))]

        assert await net_worth_service.history(ledger, "USD", today=TODAY) == []

    @pytest.mark.asyncio
    async def test_points_are_midnight_in_configured_timezone(self, net_worth_service: NetWorthService):
        points = await net_worth_service.history([buy("AAPL", 1, TODAY)], "USD", window_days=0, today=TODAY)

        assert points[0].as_of == pytz.utc.localize(datetime(2024, 6, 10))

    @pytest.mark.asyncio
    async def test_prices_fetched_once_for_present_holdings(
        self,
        net_worth_service: NetWorthService,
        us_adapter: StubQuoteAdapter,
    ):
        ledger = [
            buy("AAPL", 1, date(2024, 6, 1)),
            buy("MSFT", 1, date(2024, 6, 1)),
            sell("MSFT", 1, date(2024, 6, 3)),
        ]

        await net_worth_service.history(ledger, "USD", today=TODAY)

        assert us_adapter.calls == ["AAPL"]

    @pytest.mark.asyncio
    async def test_position_not_held_today_contributes_zero(self, net_worth_service: NetWorthService):
        """
        GIVEN MSFT was held on 06-01..06-02 and sold on 06-03
        WHEN I build history ending 06-04
        THEN MSFT adds nothing on any day; only AAPL is valued
        """
        ledger = [
            buy("AAPL", 1, date(2024, 6, 1)),
            buy("MSFT", 1, date(2024, 6, 1)),
            sell("MSFT", 1, date(2024, 6, 3)),
        ]

        points = await net_worth_service.history(ledger, "USD", today=date(2024, 6, 4))

        assert {p.total_value for p in points} == {Decimal("185.50")}

    @pytest.mark.asyncio
    async def test_history_converts_to_base_currency(self, net_worth_service: NetWorthService):
        ledger = [buy("600519", 2, TODAY, Market.CN)]

        points = await net_worth_service.history(ledger, "USD", window_days=0, today=TODAY)

        assert points[0].total_value == Decimal("420.00")

    @pytest.mark.asyncio
    async def test_conversion_failure_propagates(self, net_worth_service: NetWorthService, fx_source: FxSource):
        fx_source.failing = True
        ledger = [buy("600519", 2, TODAY, Market.CN)]

        with pytest.raises(ConversionUnavailableError):
            await net_worth_service.history(ledger, "EUR", today=TODAY)


# =============================================================================
# CURRENT NET WORTH TESTS
# =============================================================================


class TestCurrentNetWorth:
    """Tests for the present-day snapshot."""

    @pytest.mark.asyncio
    async def test_nothing_held_is_zero(self, net_worth_service: NetWorthService):
        point = await net_worth_service.current_net_worth([], "CNY", today=TODAY)

        assert point.total_value == Decimal("0.00")
        assert point.currency == "CNY"

    @pytest.mark.asyncio
    async def test_values_current_holdings(self, net_worth_service: NetWorthService):
        ledger = [
            buy("AAPL", 10, date(2024, 6, 1)),
            buy("BTC", "0.1", date(2024, 6, 1), Market.CRYPTO),
        ]

        point = await net_worth_service.current_net_worth(ledger, today=TODAY)

        assert point.total_value == Decimal("7855.00")
        assert point.currency == "USD"


class TestValueHoldings:
    """Tests for holdings merged with price data."""

    @pytest.mark.asyncio
    async def test_merges_price_value_and_name(self, net_worth_service: NetWorthService):
        holdings = holdings_as_of([buy("00700", 100, date(2024, 6, 1), Market.HK)], TODAY)

        valued = await net_worth_service.value_holdings(holdings, "HKD")

        assert len(valued) == 1
        assert valued[0].price == Decimal("380.00")
        assert valued[0].value == Decimal("38000.00")
        assert valued[0].currency == "HKD"
        assert valued[0].base_currency == "HKD"
        assert valued[0].name == "00700 Inc"

    @pytest.mark.asyncio
    async def test_empty_holdings(self, net_worth_service: NetWorthService):
        assert await net_worth_service.value_holdings([], "USD") == []
