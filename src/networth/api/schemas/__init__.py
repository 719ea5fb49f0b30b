"""Pydantic schemas for API request/response validation."""

from networth.api.schemas.ledger import (
    TransactionIn,
    HoldingsRequest,
    HoldingResponse,
    HoldingsResponse,
    ValidateSellRequest,
    ValidateSellResponse,
)
from networth.api.schemas.valuation import (
    PositionIn,
    ValuationRequest,
    PositionValuationResponse,
    ValuationResponse,
    NetWorthRequest,
    HistoryRequest,
    NetWorthPointResponse,
    HistoryResponse,
    ExchangeRateResponse,
)

__all__ = [
    "TransactionIn",
    "HoldingsRequest",
    "HoldingResponse",
    "HoldingsResponse",
    "ValidateSellRequest",
    "ValidateSellResponse",
    "PositionIn",
    "ValuationRequest",
    "PositionValuationResponse",
    "ValuationResponse",
    "NetWorthRequest",
    "HistoryRequest",
    "NetWorthPointResponse",
    "HistoryResponse",
    "ExchangeRateResponse",
]
