"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class PriceUnavailableError(AppError):
    """Raised when every quote source for a symbol is exhausted."""

    def __init__(self, symbol: str, reason: str):
        self.symbol = symbol
        super().__init__(
            f"No price available for {symbol}: {reason}",
            code="PRICE_UNAVAILABLE",
        )


class ConversionUnavailableError(AppError):
    """Raised when neither a live nor a fallback FX rate exists for a pair."""

    def __init__(self, from_currency: str, to_currency: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(
            f"Cannot convert {from_currency} to {to_currency}: no exchange rate available",
            code="CONVERSION_UNAVAILABLE",
        )


class UnsupportedMarketError(AppError):
    """Raised when no quote adapter is registered for a market."""

    def __init__(self, market: str):
        super().__init__(
            f"No quote adapter for market type: {market}",
            code="UNSUPPORTED_MARKET",
        )


class MalformedSourceResponseError(AppError):
    """Raised when an external source answers with an unusable payload."""

    def __init__(self, source: str, detail: str):
        self.source = source
        super().__init__(f"{source}: {detail}", code="MALFORMED_SOURCE_RESPONSE")
