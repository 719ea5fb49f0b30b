"""Domain layer - pure business models with no I/O."""

from networth.domain.models import (
    Market,
    MarketFamily,
    TransactionType,
    Transaction,
    Position,
)

__all__ = [
    "Market",
    "MarketFamily",
    "TransactionType",
    "Transaction",
    "Position",
]
