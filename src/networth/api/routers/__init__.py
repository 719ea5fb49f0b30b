"""API routers package."""

from networth.api.routers.valuation import router as valuation_router
from networth.api.routers.holdings import router as holdings_router
from networth.api.routers.exchange_rate import router as exchange_rate_router

__all__ = [
    "valuation_router",
    "holdings_router",
    "exchange_rate_router",
]
