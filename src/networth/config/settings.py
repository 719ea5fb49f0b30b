"""Application settings and configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Net Worth Tracker"
    app_version: str = "0.1.0"

    # Valuation defaults (read once when the app context is built)
    base_currency: str = "USD"
    timezone: str = "UTC"
    history_default_days: int = 30

    # Cache lifetimes
    price_cache_ttl_seconds: float = 600
    fx_cache_ttl_seconds: float = 3600

    # Pause between positions while valuing a portfolio (rate-limit backpressure)
    inter_position_delay_seconds: float = 0.2

    # External sources
    http_timeout_seconds: float = 10
    yahoo_timeout_seconds: float = 10
    tencent_quote_url: str = "http://qt.gtimg.cn/q="
    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    fx_base_url: str = "https://api.exchangerate-api.com/v4/latest"

    log_level: str = "INFO"

    def get_base_currency(self) -> str:
        """Return the configured base currency as an upper-case ISO code."""
        return self.base_currency.strip().upper()


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by tests)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
