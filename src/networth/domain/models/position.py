"""Position domain model."""

from dataclasses import dataclass
from decimal import Decimal

from networth.core.exceptions import ValidationError
from networth.domain.models.enums import Market
from networth.domain.models.transaction import normalize_symbol, to_decimal


@dataclass
class Position:
    """A (symbol, market, quantity) tuple subject to valuation."""

    symbol: str
    market: Market
    quantity: Decimal

    def __post_init__(self) -> None:
        self.symbol = normalize_symbol(self.symbol)
        if isinstance(self.market, str):
            self.market = Market(self.market.strip().upper())
        self.quantity = to_decimal(self.quantity)
        if self.quantity < 0:
            raise ValidationError(f"Position {self.symbol} has negative quantity")

    @property
    def key(self) -> tuple[str, Market]:
        return (self.symbol, self.market)
