"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from networth.core.exceptions import ValidationError
from networth.core.timezone import parse_date
from networth.domain.models.enums import Market, TransactionType


def to_decimal(value) -> Decimal:
    """Convert int/float/str to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def normalize_symbol(symbol: Optional[str]) -> str:
    """Strip whitespace and upper-case a symbol."""
    return (symbol or "").strip().upper()


@dataclass
class Transaction:
    """
    Ledger entry (source of truth for holdings).

    The ledger is append-only: entries are never edited once replayed.
    Ordering is by effective_date; ties keep arrival order.
    """

    symbol: str
    market: Market
    txn_type: TransactionType
    quantity: Decimal
    effective_date: date
    price: Optional[Decimal] = None  # unit price at trade time, informational only
    note: Optional[str] = None
    txn_id: Optional[str] = field(default=None)

    def __post_init__(self) -> None:
        self.symbol = normalize_symbol(self.symbol)
        if not self.symbol:
            raise ValidationError("Transaction requires a symbol")
        if isinstance(self.market, str):
            self.market = Market(self.market.strip().upper())
        if isinstance(self.txn_type, str):
            self.txn_type = TransactionType(self.txn_type.strip().upper())
        self.quantity = to_decimal(self.quantity)
        if self.quantity <= 0:
            raise ValidationError(f"{self.txn_type.value} requires quantity > 0")
        if self.price is not None:
            self.price = to_decimal(self.price)
        self.effective_date = parse_date(self.effective_date)

    @property
    def key(self) -> tuple[str, Market]:
        """Holding identity: (symbol, market)."""
        return (self.symbol, self.market)

    @property
    def signed_quantity(self) -> Decimal:
        """Quantity with sign applied: positive for BUY, negative for SELL."""
        if self.txn_type == TransactionType.SELL:
            return -self.quantity
        return self.quantity
