"""Pydantic schemas for valuation and net worth endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from networth.api.schemas.ledger import TransactionIn
from networth.domain.models import Market, Position


class PositionIn(BaseModel):
    """A position to value."""

    symbol: str = Field(..., min_length=1)
    market: Market
    quantity: Decimal = Field(..., ge=0)

    def to_domain(self) -> Position:
        return Position(symbol=self.symbol, market=self.market, quantity=self.quantity)


class ValuationRequest(BaseModel):
    positions: list[PositionIn]
    base_currency: Optional[str] = None


class PositionValuationResponse(BaseModel):
    """Per-position valuation detail; price and value are 0 when unpriced."""

    symbol: str
    market: Market
    quantity: Decimal
    price: Decimal
    value: Decimal
    currency: str
    name: Optional[str] = None


class ValuationResponse(BaseModel):
    total_value: Decimal
    base_currency: str
    positions: list[PositionValuationResponse]


class NetWorthRequest(BaseModel):
    transactions: list[TransactionIn]
    base_currency: Optional[str] = None


class HistoryRequest(BaseModel):
    transactions: list[TransactionIn]
    base_currency: Optional[str] = None
    days: Optional[int] = Field(None, ge=0, description="Window length (default from settings)")


class NetWorthPointResponse(BaseModel):
    as_of: datetime
    total_value: Decimal
    currency: str


class HistoryResponse(BaseModel):
    """Daily net worth curve valued at present-day prices."""

    base_currency: str
    price_basis: str = "current"
    points: list[NetWorthPointResponse]


class ExchangeRateResponse(BaseModel):
    """Resolved exchange rate; `fallback` marks a static table rate."""

    rate: Decimal
    from_currency: str = Field(..., serialization_alias="from")
    to_currency: str = Field(..., serialization_alias="to")
    timestamp: datetime
    fallback: bool = False
