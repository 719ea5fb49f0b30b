"""Enumerations for domain models."""

from enum import Enum


class MarketFamily(str, Enum):
    """Classes of tradable instruments, each needing its own price source."""

    DOMESTIC_EQUITY = "DOMESTIC_EQUITY"
    CROSS_BORDER_EQUITY = "CROSS_BORDER_EQUITY"
    DIGITAL_ASSET = "DIGITAL_ASSET"


class Market(str, Enum):
    """Markets a position can be held in."""

    CN = "CN"  # China A-shares (Shanghai / Shenzhen)
    HK = "HK"  # Hong Kong
    US = "US"
    CRYPTO = "CRYPTO"

    @property
    def family(self) -> MarketFamily:
        return _MARKET_FAMILIES[self]


_MARKET_FAMILIES = {
    Market.CN: MarketFamily.DOMESTIC_EQUITY,
    Market.HK: MarketFamily.CROSS_BORDER_EQUITY,
    Market.US: MarketFamily.CROSS_BORDER_EQUITY,
    Market.CRYPTO: MarketFamily.DIGITAL_ASSET,
}


class TransactionType(str, Enum):
    """Direction of a ledger transaction."""

    BUY = "BUY"
    SELL = "SELL"
