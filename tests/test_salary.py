"""Tests for the salary breakdown calculator."""

import pytest
from datetime import date
from decimal import Decimal

from fintrack.calculators import (
    calc_salary_breakdown,
    conversion_pair,
    resolve_rent_tax_brackets,
    salary_conversion_rate,
)
from fintrack.models import DEFAULT_RENT_TAX_BRACKETS, DeductionKind, SalaryRecord, SalarySettings

from tests.builders import make_bracket, make_rule


class TestCrcSalary:
    """Tests for local-currency salaries."""

    def test_breakdown(self, crc_record):
        """Test gross -> deductions -> rent tax -> net."""
        breakdown = calc_salary_breakdown(crc_record)

        assert breakdown.gross_fortnightly == Decimal("500000.00")
        assert [d.monthly_amount for d in breakdown.deductions] == [
            Decimal("108300.00"), Decimal("500.00"),
        ]
        assert breakdown.rent_tax.applied_to_crc is True
        assert breakdown.rent_tax.monthly_total == Decimal("8200.00")
        assert breakdown.total_deductions_monthly == Decimal("117000.00")
        assert breakdown.total_deductions_fortnightly == Decimal("58500.00")
        assert breakdown.net_monthly == Decimal("883000.00")
        assert breakdown.net_fortnightly == Decimal("441500.00")

    def test_conversion_divides(self, crc_record):
        """Test a CRC net converts to USD by dividing by CRC per USD."""
        breakdown = calc_salary_breakdown(crc_record, exchange_rate=Decimal("500"))
        assert breakdown.converted_currency == "USD"
        assert breakdown.net_monthly_converted == Decimal("1766.00")
        assert breakdown.net_fortnightly_converted == Decimal("883.00")
        assert breakdown.has_conversion is True

    @pytest.mark.parametrize("rate", [None, Decimal("0")])
    def test_no_rate(self, crc_record, rate):
        """Test a missing or zero rate leaves conversion empty."""
        breakdown = calc_salary_breakdown(crc_record, exchange_rate=rate)
        assert breakdown.converted_currency is None
        assert breakdown.net_monthly_converted is None
        assert breakdown.has_conversion is False

    def test_net_clamped_at_zero(self):
        """Test deductions larger than gross give a zero net."""
        record = SalaryRecord(
            effective_date=date(2025, 1, 1),
            gross_amount=Decimal("1000"),
            deductions=[make_rule("loan", "5000", kind=DeductionKind.FIXED)],
        )
        breakdown = calc_salary_breakdown(record, exchange_rate=Decimal("500"))
        assert breakdown.total_deductions_monthly == Decimal("5000.00")
        assert breakdown.net_monthly == Decimal("0.00")
        assert breakdown.net_fortnightly == Decimal("0.00")
        assert breakdown.net_monthly_converted == Decimal("0.00")

    def test_is_deterministic(self, crc_record):
        """Test the same inputs give the same breakdown."""
        first = calc_salary_breakdown(crc_record, exchange_rate=Decimal("512.34"))
        second = calc_salary_breakdown(crc_record, exchange_rate=Decimal("512.34"))
        assert first == second


class TestForeignSalary:
    """Tests for salaries outside the local currency."""

    def test_no_rent_tax(self):
        """Test rent tax is skipped for non-CRC salaries."""
        record = SalaryRecord(
            effective_date=date(2025, 1, 1),
            gross_amount=Decimal("5000"),
            currency="USD",
            deductions=[make_rule("ccss", "0.1083")],
            rent_tax_brackets=list(DEFAULT_RENT_TAX_BRACKETS),
        )
        breakdown = calc_salary_breakdown(record, exchange_rate=Decimal("510"))

        assert breakdown.rent_tax.applied_to_crc is False
        assert breakdown.rent_tax.brackets == []
        assert breakdown.rent_tax.monthly_total == Decimal("0")
        assert breakdown.net_monthly == Decimal("4458.50")
        assert breakdown.converted_currency == "CRC"
        assert breakdown.net_monthly_converted == Decimal("2273835.00")

    def test_conversion_pair(self):
        """Test rate-table pairs are foreign -> CRC."""
        assert conversion_pair("CRC") == ("USD", "CRC")
        assert conversion_pair("usd") == ("USD", "CRC")
        assert conversion_pair("EUR") == ("EUR", "CRC")

    def test_conversion_rate_lookup(self):
        """Test looking up the salary rate in a table."""
        table = {"USD_CRC": Decimal("505"), "EUR_CRC": Decimal("550")}
        assert salary_conversion_rate("CRC", table) == Decimal("505")
        assert salary_conversion_rate("EUR", table) == Decimal("550")
        assert salary_conversion_rate("GBP", table) is None


class TestRentTaxBracketSource:
    """Tests for which bracket table a record uses."""

    def test_record_snapshot_wins(self):
        """Test the record's own brackets win over settings."""
        own = [make_bracket("flat", "0", None, "0.5")]
        record = SalaryRecord(
            effective_date=date(2025, 1, 1),
            gross_amount=Decimal("100"),
            rent_tax_brackets=own,
        )
        settings = SalarySettings(rent_tax_brackets=[make_bracket("other", "0", None, "0.1")])

        assert resolve_rent_tax_brackets(record, settings) == own
        breakdown = calc_salary_breakdown(record, settings=settings)
        assert breakdown.rent_tax.monthly_total == Decimal("50.00")

    def test_settings_then_defaults(self, crc_record):
        """Test settings apply when the record has none, then the defaults."""
        settings = SalarySettings(rent_tax_brackets=[make_bracket("flat", "0", None, "0.1")])
        assert [b.id for b in resolve_rent_tax_brackets(crc_record, settings)] == ["flat"]
        assert resolve_rent_tax_brackets(crc_record) == list(DEFAULT_RENT_TAX_BRACKETS)
