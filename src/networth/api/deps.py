"""Dependency injection for FastAPI."""

from fastapi import Depends

from networth.app_context import AppContext, get_app_context
from networth.services import CurrencyConverter, NetWorthService, ValuationService


def get_context() -> AppContext:
    """Provide the process-wide AppContext."""
    return get_app_context()


def get_valuation_service(context: AppContext = Depends(get_context)) -> ValuationService:
    """Provide ValuationService instance."""
    return context.valuation


def get_net_worth_service(context: AppContext = Depends(get_context)) -> NetWorthService:
    """Provide NetWorthService instance."""
    return context.net_worth


def get_currency_converter(context: AppContext = Depends(get_context)) -> CurrencyConverter:
    """Provide CurrencyConverter instance."""
    return context.converter
