"""
Exchange Rate Source Interface

The rate fetch/cache service is an external collaborator. This module
defines the interface the core consumes and the helpers that turn it
into a plain ExchangeRateTable before any calculator runs.

The core never retries and never caches: a rate the provider cannot give
is simply unknown, and the calculators degrade accordingly.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Optional

from fintrack.calculators.rounding import to_decimal
from fintrack.logging_setup import get_logger
from fintrack.models.expense import ExchangeRateTable, rate_key


logger = get_logger(__name__)

ONE = Decimal("1")


class ExchangeRateError(Exception):
    """Base exception for exchange rate lookups."""
    pass


class RateUnavailableError(ExchangeRateError):
    """The provider could not produce a rate for a pair."""

    def __init__(self, from_currency: str, to_currency: str, message: str = ""):
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(message or f"No rate available for {from_currency}->{to_currency}")


class ExchangeRateProvider(ABC):
    """
    Abstract interface for exchange rate sources.

    ``get_rate(FROM, TO)`` returns how many units of TO one unit of FROM
    buys, or None when unknown. Implementations may also raise
    ExchangeRateError; callers treat that the same as None.
    """

    @abstractmethod
    def get_rate(self, from_currency: str, to_currency: str) -> Optional[Decimal]:
        """
        Look up the rate for an ordered currency pair.

        Args:
            from_currency: ISO code of the source currency
            to_currency: ISO code of the target currency

        Returns:
            The rate, or None when unknown

        Raises:
            ExchangeRateError: If the lookup itself failed
        """
        pass


class StaticExchangeRateProvider(ExchangeRateProvider):
    """
    In-memory provider backed by a precomputed rate table.

    Used when the caller already holds a table (e.g., rates fetched and
    cached by the hosting application) and in tests.
    """

    def __init__(self, rates: Optional[Mapping[str, object]] = None):
        self._rates: ExchangeRateTable = {
            key.upper(): to_decimal(value) for key, value in (rates or {}).items()
        }

    def get_rate(self, from_currency: str, to_currency: str) -> Optional[Decimal]:
        if from_currency == to_currency:
            return ONE
        return self._rates.get(rate_key(from_currency.upper(), to_currency.upper()))

    def set_rate(self, from_currency: str, to_currency: str, rate: object) -> None:
        """Store or replace the rate for a pair."""
        self._rates[rate_key(from_currency.upper(), to_currency.upper())] = to_decimal(rate)


def build_rate_table(
    provider: Optional[ExchangeRateProvider],
    currencies: Iterable[str],
) -> ExchangeRateTable:
    """
    Fetch every ordered pair of distinct ``currencies`` into a table.

    Unknown, non-positive and failed lookups are left out of the table.
    """
    table: ExchangeRateTable = {}
    if provider is None:
        return table

    unique = list(dict.fromkeys(c.upper() for c in currencies))
    for from_currency in unique:
        for to_currency in unique:
            if from_currency == to_currency:
                continue
            try:
                rate = provider.get_rate(from_currency, to_currency)
            except ExchangeRateError as e:
                logger.warning(
                    "exchange_rate_lookup_failed",
                    from_currency=from_currency,
                    to_currency=to_currency,
                    error=str(e),
                )
                continue
            if rate is None:
                continue
            rate = to_decimal(rate)
            if rate <= 0:
                logger.warning(
                    "exchange_rate_not_positive",
                    from_currency=from_currency,
                    to_currency=to_currency,
                    rate=str(rate),
                )
                continue
            table[rate_key(from_currency, to_currency)] = rate

    return table


def get_exchange_rate(
    rate_table: Optional[ExchangeRateTable],
    from_currency: str,
    to_currency: str,
) -> Optional[Decimal]:
    """Rate for a pair from a table: 1 for identical currencies, else lookup or None."""
    if from_currency == to_currency:
        return ONE
    if not rate_table:
        return None
    return rate_table.get(rate_key(from_currency, to_currency))
