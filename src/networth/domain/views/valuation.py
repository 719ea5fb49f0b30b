"""View models for valuation, replay and history outputs."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from networth.domain.models import Market, Position


@dataclass
class PriceResult:
    """Current price of one instrument in its quote currency. Price is always > 0."""

    symbol: str
    price: Decimal
    currency: str
    name: Optional[str] = None


@dataclass
class ExchangeRate:
    """Resolved FX rate for a currency pair."""

    from_currency: str
    to_currency: str
    rate: Decimal
    fetched_at: datetime
    is_fallback: bool = False


@dataclass
class Holding:
    """
    Net position derived from the ledger as of a date.

    Never persisted; recomputed from transactions on demand.
    """

    symbol: str
    market: Market
    net_quantity: Decimal
    first_date: date
    last_date: date
    transaction_count: int

    def to_position(self) -> Position:
        return Position(symbol=self.symbol, market=self.market, quantity=self.net_quantity)


@dataclass
class PositionValuation:
    """One position priced and converted to the base currency."""

    position: Position
    price: Decimal  # 0 when the price could not be fetched
    value: Decimal  # in base currency
    currency: str  # quote currency of `price`
    name: Optional[str] = None

    @property
    def is_priced(self) -> bool:
        return self.price > 0


@dataclass
class PortfolioValuation:
    """Result of valuing a list of positions."""

    total_value: Decimal
    base_currency: str
    positions: list[PositionValuation] = field(default_factory=list)


@dataclass
class HoldingValuation:
    """A holding merged with its current price and base-currency value."""

    holding: Holding
    price: Decimal
    value: Decimal
    currency: str
    base_currency: str
    name: Optional[str] = None


@dataclass
class NetWorthPoint:
    """Total portfolio value at a point in time."""

    as_of: datetime
    total_value: Decimal
    currency: str
