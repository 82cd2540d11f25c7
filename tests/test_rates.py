"""Tests for the exchange rate provider helpers."""

from decimal import Decimal
from typing import Optional

from fintrack.services import (
    ExchangeRateProvider,
    RateUnavailableError,
    StaticExchangeRateProvider,
    build_rate_table,
    get_exchange_rate,
)


class FailingProvider(ExchangeRateProvider):
    """Provider that fails for one pair and is unknown for the rest."""

    def get_rate(self, from_currency: str, to_currency: str) -> Optional[Decimal]:
        if (from_currency, to_currency) == ("USD", "CRC"):
            raise RateUnavailableError(from_currency, to_currency)
        if (from_currency, to_currency) == ("CRC", "USD"):
            return Decimal("-1")
        return None


class TestStaticProvider:
    """Tests for the in-memory provider."""

    def test_lookup(self):
        """Test rates are looked up by pair."""
        provider = StaticExchangeRateProvider({"usd_crc": 510})
        assert provider.get_rate("USD", "CRC") == Decimal("510")
        assert provider.get_rate("CRC", "USD") is None
        assert provider.get_rate("EUR", "EUR") == Decimal("1")

    def test_set_rate(self):
        """Test storing a rate after creation."""
        provider = StaticExchangeRateProvider()
        provider.set_rate("eur", "usd", 1.08)
        assert provider.get_rate("EUR", "USD") == Decimal("1.08")


class TestBuildRateTable:
    """Tests for build_rate_table."""

    def test_all_ordered_pairs(self):
        """Test every ordered pair the provider knows is fetched."""
        provider = StaticExchangeRateProvider({
            "USD_CRC": "510",
            "CRC_USD": "0.00196",
            "EUR_USD": "1.08",
        })
        table = build_rate_table(provider, ["USD", "CRC", "EUR", "usd"])
        assert table == {
            "USD_CRC": Decimal("510"),
            "CRC_USD": Decimal("0.00196"),
            "EUR_USD": Decimal("1.08"),
        }

    def test_no_provider(self):
        """Test a missing provider gives an empty table."""
        assert build_rate_table(None, ["USD", "CRC"]) == {}

    def test_failures_are_left_out(self):
        """Test failed and non-positive lookups are skipped."""
        assert build_rate_table(FailingProvider(), ["USD", "CRC"]) == {}

    def test_error_message(self):
        """Test the unavailable error names the pair."""
        error = RateUnavailableError("USD", "CRC")
        assert str(error) == "No rate available for USD->CRC"
        assert error.from_currency == "USD"


class TestGetExchangeRate:
    """Tests for table lookups."""

    def test_lookup(self):
        """Test identity, hit and miss."""
        table = {"USD_CRC": Decimal("510")}
        assert get_exchange_rate(table, "USD", "USD") == Decimal("1")
        assert get_exchange_rate(table, "USD", "CRC") == Decimal("510")
        assert get_exchange_rate(table, "CRC", "USD") is None
        assert get_exchange_rate(None, "CRC", "USD") is None
