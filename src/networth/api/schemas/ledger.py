"""Pydantic schemas for ledger input and holdings output."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from networth.domain.models import Market, Transaction, TransactionType


class TransactionIn(BaseModel):
    """A ledger entry supplied by the caller."""

    symbol: str = Field(..., min_length=1)
    market: Market
    txn_type: TransactionType = TransactionType.BUY
    quantity: Decimal = Field(..., gt=0)
    effective_date: date
    price: Optional[Decimal] = None
    note: Optional[str] = None
    txn_id: Optional[str] = None

    def to_domain(self) -> Transaction:
        return Transaction(
            symbol=self.symbol,
            market=self.market,
            txn_type=self.txn_type,
            quantity=self.quantity,
            effective_date=self.effective_date,
            price=self.price,
            note=self.note,
            txn_id=self.txn_id,
        )


class HoldingsRequest(BaseModel):
    """Request body for holdings replay."""

    transactions: list[TransactionIn]
    as_of: Optional[date] = Field(None, description="Replay cutoff (default: today)")
    include_prices: bool = Field(False, description="Attach current price and value")
    base_currency: Optional[str] = None


class HoldingResponse(BaseModel):
    """A replayed holding, optionally enriched with price data."""

    symbol: str
    market: Market
    quantity: Decimal
    first_transaction_date: date
    last_transaction_date: date
    transaction_count: int
    price: Optional[Decimal] = None
    value: Optional[Decimal] = None
    currency: Optional[str] = None
    base_currency: Optional[str] = None
    name: Optional[str] = None


class HoldingsResponse(BaseModel):
    """Response schema for holdings listing."""

    as_of: date
    holdings: list[HoldingResponse]
    total_value: Optional[Decimal] = None
    base_currency: Optional[str] = None


class ValidateSellRequest(BaseModel):
    """Request body for checking whether a SELL is covered."""

    transactions: list[TransactionIn]
    symbol: str = Field(..., min_length=1)
    market: Market
    quantity: Decimal = Field(..., gt=0)
    as_of: Optional[date] = None


class ValidateSellResponse(BaseModel):
    valid: bool
    quantity_held: Decimal
