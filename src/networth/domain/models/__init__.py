"""Domain models package."""

from networth.domain.models.enums import Market, MarketFamily, TransactionType
from networth.domain.models.transaction import Transaction, normalize_symbol, to_decimal
from networth.domain.models.position import Position

__all__ = [
    "Market",
    "MarketFamily",
    "TransactionType",
    "Transaction",
    "Position",
    "normalize_symbol",
    "to_decimal",
]
