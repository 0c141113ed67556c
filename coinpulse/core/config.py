"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here; no scattered magic strings.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_heavy: Rate limit for endpoints that call the price provider.
        cors_origins: Origins allowed by the CORS middleware.

    Price provider:
        coingecko_base_url: Root of the CoinGecko v3 REST API.
        coingecko_api_key: Optional demo/pro API key.
        provider_timeout_seconds: Per-request timeout for provider calls.
        vs_currency: Quote currency for all prices.

    Live broadcast:
        tracked_symbols: Coin ids served by the quote cache and broadcast.
        quote_cache_ttl_seconds: Maximum age of a cached snapshot.
        broadcast_interval_seconds: Period of each subscriber's push job.
        notification_threshold_percent: Absolute valuation move that
            triggers a notification.

    Predictions:
        default_symbol: Coin id used when a request omits one.
        prediction_history_days: Length of the price series fed to the predictor.
        short_window / long_window: Moving-average windows.
        accuracy_window_days: Lookback for the accuracy roll-up.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "CoinPulse"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_default: str = "60/minute"
    rate_limit_heavy: str = "20/minute"
    cors_origins: list[str] = ["*"]

    coingecko_base_url: str = "https://api.coingecko.com/api/v3"
    coingecko_api_key: Optional[str] = None
    provider_timeout_seconds: float = 10.0
    vs_currency: str = "usd"

    tracked_symbols: list[str] = ["bitcoin", "ethereum", "dogecoin", "litecoin"]
    quote_cache_ttl_seconds: float = 60.0
    broadcast_interval_seconds: float = 10.0
    notification_threshold_percent: float = 5.0

    default_symbol: str = "bitcoin"
    prediction_history_days: int = 10
    short_window: int = 5
    long_window: int = 10
    accuracy_window_days: int = 7


settings = Settings()
