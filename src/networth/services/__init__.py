"""Service layer - valuation, ledger replay and net worth history."""

from networth.services.price_cache import PriceCache
from networth.services.currency_converter import CurrencyConverter, FALLBACK_RATES
from networth.services.valuation_service import ValuationService, round_money
from networth.services.portfolio_engine import (
    holdings_as_of,
    order_transactions,
    quantity_held,
    validate_sell,
)
from networth.services.net_worth_service import NetWorthService

__all__ = [
    "PriceCache",
    "CurrencyConverter",
    "FALLBACK_RATES",
    "ValuationService",
    "round_money",
    "holdings_as_of",
    "order_transactions",
    "quantity_held",
    "validate_sell",
    "NetWorthService",
]
