"""Core utilities and shared functionality."""

from networth.core.timezone import (
    get_timezone,
    now_local,
    today_local,
    start_of_day,
    parse_date,
)
from networth.core.exceptions import (
    AppError,
    ValidationError,
    PriceUnavailableError,
    ConversionUnavailableError,
    UnsupportedMarketError,
    MalformedSourceResponseError,
)

__all__ = [
    "get_timezone",
    "now_local",
    "today_local",
    "start_of_day",
    "parse_date",
    "AppError",
    "ValidationError",
    "PriceUnavailableError",
    "ConversionUnavailableError",
    "UnsupportedMarketError",
    "MalformedSourceResponseError",
]
