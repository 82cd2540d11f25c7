"""Services package."""

from fintrack.services.rates import (
    ExchangeRateError,
    ExchangeRateProvider,
    RateUnavailableError,
    StaticExchangeRateProvider,
    build_rate_table,
    get_exchange_rate,
)

__all__ = [
    # Interfaces
    "ExchangeRateProvider",
    # Exceptions
    "ExchangeRateError",
    "RateUnavailableError",
    # Implementations and helpers
    "StaticExchangeRateProvider",
    "build_rate_table",
    "get_exchange_rate",
]
