"""Quote adapters, one per market."""

from networth.providers.quote_adapter import QuoteAdapter
from networth.providers.registry import QuoteAdapterRegistry, build_default_registry
from networth.providers.tencent import CnStockAdapter, HkStockAdapter, parse_tencent_quote
from networth.providers.us_stock import UsStockAdapter
from networth.providers.crypto import CryptoAdapter

__all__ = [
    "QuoteAdapter",
    "QuoteAdapterRegistry",
    "build_default_registry",
    "CnStockAdapter",
    "HkStockAdapter",
    "UsStockAdapter",
    "CryptoAdapter",
    "parse_tencent_quote",
]
