"""Ledger replay: derive holdings as of a date by folding signed quantities."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable

from networth.core.timezone import parse_date
from networth.domain.models import Market, Transaction, normalize_symbol, to_decimal
from networth.domain.views import Holding


def order_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return the ledger ordered by effective_date; ties keep arrival order."""
    return sorted(transactions, key=lambda txn: txn.effective_date)


def holdings_as_of(transactions: Iterable[Transaction], as_of: date) -> list[Holding]:
    """
    Replay the ledger up to and including `as_of`.

    Transactions are grouped by (symbol, market) and netted as
    Σ(+quantity for BUY, -quantity for SELL). Only groups with a positive
    net quantity are returned; flat or short groups are dropped. The result
    is ordered by symbol, then market.
    """
    cutoff = parse_date(as_of)
    net: dict[tuple[str, Market], Decimal] = defaultdict(lambda: Decimal("0"))
    first_dates: dict[tuple[str, Market], date] = {}
    last_dates: dict[tuple[str, Market], date] = {}
    counts: dict[tuple[str, Market], int] = defaultdict(int)

    for txn in order_transactions(transactions):
        if txn.effective_date > cutoff:
            continue
        key = txn.key
        net[key] += txn.signed_quantity
        counts[key] += 1
        first_dates.setdefault(key, txn.effective_date)
        last_dates[key] = txn.effective_date

    return [
        Holding(
            symbol=symbol,
            market=market,
            net_quantity=quantity,
            first_date=first_dates[(symbol, market)],
            last_date=last_dates[(symbol, market)],
            transaction_count=counts[(symbol, market)],
        )
        for (symbol, market), quantity in sorted(net.items(), key=lambda item: (item[0][0], item[0][1].value))
        if quantity > 0
    ]


def quantity_held(
    transactions: Iterable[Transaction],
    symbol: str,
    market: Market,
    as_of: date,
) -> Decimal:
    """Return the net quantity of one instrument as of a date (0 when not held)."""
    key = (normalize_symbol(symbol), Market(market))
    for holding in holdings_as_of(transactions, as_of):
        if (holding.symbol, holding.market) == key:
            return holding.net_quantity
    return Decimal("0")


def validate_sell(
    transactions: Iterable[Transaction],
    symbol: str,
    market: Market,
    quantity: Decimal,
    as_of: date,
) -> bool:
    """
    Validate that a SELL is covered by the replayed position.

    Returns True if at least `quantity` is held as of the date; False otherwise.
    """
    return quantity_held(transactions, symbol, market, as_of) >= to_decimal(quantity)
