"""Tests for the settings validator."""

import pytest
from decimal import Decimal

from fintrack.models import (
    DEFAULT_PAYMENT_PERIODS,
    DEFAULT_RENT_TAX_BRACKETS,
    DEFAULT_SALARY_DEDUCTIONS,
    DeductionKind,
    PaymentPeriod,
    SalarySettings,
    StocksSettings,
)
from fintrack.validation import SettingsValidator

from tests.builders import make_bracket, make_rule, make_stock_rule


@pytest.fixture
def validator():
    return SettingsValidator()


def issue_types(result):
    return [issue.issue_type for issue in result.issues]


class TestTaxBracketValidation:
    """Tests for bracket table checks."""

    def test_defaults_are_valid(self, validator):
        """Test the built-in schedule passes."""
        result = validator.validate_tax_brackets(DEFAULT_RENT_TAX_BRACKETS)
        assert result.is_valid
        assert result.issues == []

    def test_empty(self, validator):
        """Test an empty schedule is an error."""
        assert issue_types(validator.validate_tax_brackets([])) == ["missing"]

    def test_gap(self, validator):
        """Test a gap between brackets."""
        result = validator.validate_tax_brackets([
            make_bracket("a", "0", "100", "0"),
            make_bracket("b", "150", None, "0.1"),
        ])
        assert issue_types(result) == ["gap"]
        assert result.issues[0].suggested_fix == "Start bracket 'b' at 100"

    def test_overlap(self, validator):
        """Test overlapping brackets."""
        result = validator.validate_tax_brackets([
            make_bracket("a", "0", "100", "0"),
            make_bracket("b", "50", None, "0.1"),
        ])
        assert issue_types(result) == ["overlap"]

    def test_first_must_start_at_zero(self, validator):
        """Test the lowest bracket must start at 0."""
        result = validator.validate_tax_brackets([make_bracket("a", "10", None, "0.1")])
        assert issue_types(result) == ["gap"]

    def test_unbounded_in_middle(self, validator):
        """Test only the top bracket may be unbounded."""
        result = validator.validate_tax_brackets([
            make_bracket("a", "0", None, "0"),
            make_bracket("b", "100", None, "0.1"),
        ])
        assert "unbounded" in issue_types(result)

    def test_bounded_top_is_warning(self, validator):
        """Test a bounded top bracket only warns."""
        result = validator.validate_tax_brackets([make_bracket("a", "0", "100", "0.1")])
        assert result.is_valid
        assert issue_types(result) == ["bounded_top"]

    def test_rate_out_of_range(self, validator):
        """Test rates above 1 are rejected."""
        result = validator.validate_tax_brackets([make_bracket("a", "0", None, "10")])
        assert issue_types(result) == ["out_of_range"]


class TestDeductionValidation:
    """Tests for deduction rule checks."""

    def test_defaults_are_valid(self, validator):
        """Test the built-in deductions pass."""
        assert validator.validate_deductions(DEFAULT_SALARY_DEDUCTIONS).issues == []

    def test_duplicate_ids(self, validator):
        """Test duplicate rule ids."""
        result = validator.validate_deductions([make_rule("a", "0.1"), make_rule("a", "0.2")])
        assert issue_types(result) == ["duplicate"]

    def test_bad_rates(self, validator):
        """Test percentage above 1 and negative fixed amount."""
        result = validator.validate_deductions([
            make_rule("a", "10.83"),
            make_rule("b", "-5", kind=DeductionKind.FIXED),
        ])
        assert issue_types(result) == ["out_of_range", "negative"]

    def test_all_inactive_is_info(self, validator):
        """Test all-inactive rules are reported but allowed."""
        result = validator.validate_deductions([make_rule("a", "0.1", active=False)])
        assert result.is_valid
        assert issue_types(result) == ["all_inactive"]

    def test_salary_settings(self, validator):
        """Test deductions and brackets are checked together."""
        settings = SalarySettings(
            deductions=[make_rule("a", "2")],
            rent_tax_brackets=[make_bracket("a", "5", None, "0.1")],
        )
        result = validator.validate_salary_settings(settings)
        assert result.subject == "salary_settings"
        assert result.error_count == 2


class TestPaymentPeriodValidation:
    """Tests for payment period checks."""

    def test_defaults_are_valid(self, validator):
        """Test the default periods pass."""
        assert validator.validate_payment_periods(DEFAULT_PAYMENT_PERIODS).is_valid

    def test_overlap(self, validator):
        """Test overlapping day windows."""
        result = validator.validate_payment_periods([
            PaymentPeriod(period=1, start_day=1, end_day=15),
            PaymentPeriod(period=2, start_day=15, end_day=31),
        ])
        assert issue_types(result) == ["overlap"]

    def test_start_after_end(self, validator):
        """Test a window that ends before it starts."""
        result = validator.validate_payment_periods([
            PaymentPeriod(period=1, start_day=20, end_day=10),
        ])
        assert issue_types(result) == ["invalid_range"]

    def test_empty(self, validator):
        """Test at least one period is required."""
        assert issue_types(validator.validate_payment_periods([])) == ["missing"]


class TestStocksSettingsValidation:
    """Tests for stock settings checks."""

    def test_defaults_are_valid(self, validator):
        """Test all-zero settings pass."""
        assert validator.validate_stocks_settings(StocksSettings()).issues == []

    def test_invalid_values(self, validator):
        """Test percentages above 1 and a negative broker cost."""
        settings = StocksSettings(
            us_tax_percentage=Decimal("30"),
            broker_cost_usd=Decimal("-1"),
            other_deductions=[make_stock_rule("Fee", "1.5")],
        )
        result = validator.validate_stocks_settings(settings)
        assert issue_types(result) == ["out_of_range", "negative", "out_of_range"]
