"""View models for service outputs."""

from networth.domain.views.valuation import (
    PriceResult,
    ExchangeRate,
    Holding,
    PositionValuation,
    PortfolioValuation,
    HoldingValuation,
    NetWorthPoint,
)

__all__ = [
    "PriceResult",
    "ExchangeRate",
    "Holding",
    "PositionValuation",
    "PortfolioValuation",
    "HoldingValuation",
    "NetWorthPoint",
]
