"""
Pytest configuration and fixtures for net worth tracker tests.

This module provides:
- Factory helpers for transactions and positions
- A controllable clock for TTL tests
- Deterministic stub quote adapters
- httpx mock transports for the FX and quote sources
- Service fixtures and the FastAPI test client
"""

import asyncio
import json
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from networth.main import app
from networth.api.deps import get_context
from networth.app_context import AppContext
from networth.config.settings import Settings, reset_settings
from networth.core.exceptions import PriceUnavailableError
from networth.domain.models import Market, Position, Transaction, TransactionType
from networth.domain.views import PriceResult
from networth.providers import QuoteAdapterRegistry
from networth.services import CurrencyConverter, NetWorthService, ValuationService


# =============================================================================
# SETTINGS ISOLATION
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings():
    """Force settings to reload for every test."""
    reset_settings()
    yield
    reset_settings()


# =============================================================================
# CLOCK
# =============================================================================


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# STUB QUOTE ADAPTERS
# =============================================================================


class StubQuoteAdapter:
    """
    Quote adapter returning fixed prices for one market.

    Symbols missing from `prices` raise PriceUnavailableError.
    """

    def __init__(
        self,
        market: Market,
        currency: str,
        prices: Optional[dict[str, Decimal]] = None,
    ):
        self.market = market
        self.currency = currency
        self.prices = {k.upper(): Decimal(str(v)) for k, v in (prices or {}).items()}
        self.calls: list[str] = []

    def supports_market(self, market: Market) -> bool:
        return market == self.market

    def cache_key(self, symbol: str) -> str:
        return f"{self.market.value}:{symbol.upper()}"

    async def fetch_price(self, symbol: str) -> PriceResult:
        self.calls.append(symbol)
        price = self.prices.get(symbol.upper())
        if price is None:
            raise PriceUnavailableError(symbol, "stub has no price")
        return PriceResult(symbol=symbol.upper(), price=price, currency=self.currency, name=f"{symbol} Inc")


@pytest.fixture
def us_adapter() -> StubQuoteAdapter:
    return StubQuoteAdapter(
        Market.US,
        "USD",
        {"AAPL": "185.50", "MSFT": "420.00"},
    )


@pytest.fixture
def cn_adapter() -> StubQuoteAdapter:
    return StubQuoteAdapter(Market.CN, "CNY", {"600519": "1500.00"})


@pytest.fixture
def hk_adapter() -> StubQuoteAdapter:
    return StubQuoteAdapter(Market.HK, "HKD", {"00700": "380.00"})


@pytest.fixture
def crypto_adapter() -> StubQuoteAdapter:
    return StubQuoteAdapter(Market.CRYPTO, "USD", {"BTC": "60000"})


@pytest.fixture
def stub_registry(us_adapter, cn_adapter, hk_adapter, crypto_adapter) -> QuoteAdapterRegistry:
    return QuoteAdapterRegistry([us_adapter, cn_adapter, hk_adapter, crypto_adapter])


# =============================================================================
# HTTP MOCK TRANSPORTS
# =============================================================================


# Live rates served by the mock FX source, keyed by base currency
LIVE_RATES = {
    "USD": {"USD": 1, "CNY": 7.2, "HKD": 7.8},
    "CNY": {"CNY": 1, "USD": 0.14, "HKD": 1.08},
    "HKD": {"HKD": 1, "USD": 0.128, "CNY": 0.92},
}


def json_response(payload, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by `handler`."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class FxSource:
    """Mock FX endpoint counting requests; can be switched to failing."""

    def __init__(self, rates: Optional[dict] = None):
        self.rates = LIVE_RATES if rates is None else rates
        self.requests: list[str] = []
        self.failing = False

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url.path)
        if self.failing:
            return httpx.Response(500)
        base = request.url.path.rstrip("/").split("/")[-1]
        if base not in self.rates:
            return httpx.Response(404)
        return json_response({"base": base, "rates": self.rates[base]})


@pytest.fixture
def fx_source() -> FxSource:
    return FxSource()


@pytest.fixture
def converter(fx_source: FxSource, fake_clock: FakeClock) -> CurrencyConverter:
    return CurrencyConverter(
        make_client(fx_source),
        base_url="https://fx.test/v4/latest",
        clock=fake_clock,
    )


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def valuation_service(stub_registry, converter) -> ValuationService:
    return ValuationService(
        registry=stub_registry,
        converter=converter,
        default_base_currency="USD",
        inter_position_delay_seconds=0,
    )


@pytest.fixture
def net_worth_service(valuation_service) -> NetWorthService:
    return NetWorthService(valuation_service, default_days=30, timezone="UTC")


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


def buy(symbol: str, quantity, on: date, market: Market = Market.US) -> Transaction:
    """Helper to create a BUY transaction."""
    return Transaction(
        symbol=symbol,
        market=market,
        txn_type=TransactionType.BUY,
        quantity=Decimal(str(quantity)),
        effective_date=on,
    )


def sell(symbol: str, quantity, on: date, market: Market = Market.US) -> Transaction:
    """Helper to create a SELL transaction."""
    return Transaction(
        symbol=symbol,
        market=market,
        txn_type=TransactionType.SELL,
        quantity=Decimal(str(quantity)),
        effective_date=on,
    )


def position(symbol: str, quantity, market: Market = Market.US) -> Position:
    return Position(symbol=symbol, market=market, quantity=Decimal(str(quantity)))


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


# =============================================================================
# API CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def test_context(stub_registry, fx_source) -> AppContext:
    """AppContext wired to stub adapters and the mock FX source."""
    settings = Settings(
        base_currency="USD",
        timezone="UTC",
        inter_position_delay_seconds=0,
        fx_base_url="https://fx.test/v4/latest",
    )
    http_client = make_client(fx_source)
    context = AppContext(
        settings=settings,
        client=http_client,
        registry=stub_registry,
    )
    yield context
    # The context does not own an injected client
    asyncio.run(http_client.aclose())


@pytest.fixture
def client(test_context: AppContext) -> TestClient:
    """Provide FastAPI test client bound to the test context."""
    app.dependency_overrides[get_context] = lambda: test_context
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
