"""Tests for the deduction engine and progressive tax calculator."""

import pytest
from decimal import Decimal

from fintrack.calculators import (
    apply_brackets,
    apply_deductions,
    bracket_label,
    halve,
    round_money,
    total_deductions,
)
from fintrack.models import DEFAULT_RENT_TAX_BRACKETS, DeductionKind

from tests.builders import make_bracket, make_rule


class TestApplyDeductions:
    """Tests for apply_deductions."""

    def test_percentage_and_fixed(self):
        """Test both rule kinds against the same base."""
        results = apply_deductions(Decimal("1000000"), [
            make_rule("ccss", "0.1083"),
            make_rule("provision", "500", kind=DeductionKind.FIXED),
        ])
        assert [r.monthly_amount for r in results] == [Decimal("108300.00"), Decimal("500.00")]
        assert [r.fortnightly_amount for r in results] == [Decimal("54150.00"), Decimal("250.00")]

    def test_inactive_rules_are_skipped(self):
        """Test inactive rules produce no result line."""
        results = apply_deductions(Decimal("1000"), [
            make_rule("a", "0.10"),
            make_rule("b", "0.20", active=False),
        ])
        assert [r.id for r in results] == ["a"]

    def test_empty_rules(self):
        """Test an empty or all-inactive list yields nothing."""
        assert apply_deductions(Decimal("1000"), []) == []
        assert apply_deductions(Decimal("1000"), [make_rule("a", "0.1", active=False)]) == []

    def test_rules_are_independent_of_order(self):
        """Test each rule is computed against the base, not a running remainder."""
        rules = [make_rule("a", "0.10"), make_rule("b", "0.50")]
        forward = apply_deductions(Decimal("1000"), rules)
        backward = apply_deductions(Decimal("1000"), list(reversed(rules)))
        assert {r.id: r.monthly_amount for r in forward} == {r.id: r.monthly_amount for r in backward}
        assert forward[1].monthly_amount == Decimal("500.00")

    def test_rounding_half_up(self):
        """Test amounts round to cents, half cents up."""
        results = apply_deductions(Decimal("333.33"), [make_rule("a", "0.10")])
        assert results[0].monthly_amount == Decimal("33.33")
        assert results[0].fortnightly_amount == Decimal("16.67")

    def test_float_base_is_accepted(self):
        """Test float bases are converted without binary noise."""
        results = apply_deductions(0.1, [make_rule("a", "1")])
        assert results[0].monthly_amount == Decimal("0.10")

    def test_total_deductions(self):
        """Test the total sums rounded monthly amounts."""
        results = apply_deductions(Decimal("1000"), [
            make_rule("a", "0.10"),
            make_rule("b", "25", kind=DeductionKind.FIXED),
        ])
        assert total_deductions(results) == Decimal("125.00")
        assert total_deductions([]) == Decimal("0")


class TestApplyBrackets:
    """Tests for the marginal bracket walk."""

    def test_second_bracket_example(self):
        """Test 1,000,000 CRC against the default schedule."""
        result = apply_brackets(Decimal("1000000"), DEFAULT_RENT_TAX_BRACKETS)
        assert [(b.id, b.taxable_amount, b.monthly_amount) for b in result.brackets] == [
            ("exempt", Decimal("918000.00"), Decimal("0.00")),
            ("b10", Decimal("82000.00"), Decimal("8200.00")),
        ]
        assert result.monthly_total == Decimal("8200.00")
        assert result.fortnightly_total == Decimal("4100.00")

    def test_top_bracket(self):
        """Test an income in the unbounded bracket."""
        result = apply_brackets(Decimal("5000000"), DEFAULT_RENT_TAX_BRACKETS)
        taxes = [b.monthly_amount for b in result.brackets]
        assert taxes == [
            Decimal("0.00"),
            Decimal("42900.00"),
            Decimal("152550.00"),
            Decimal("472600.00"),
            Decimal("68250.00"),
        ]
        assert result.monthly_total == Decimal("736300.00")

    @pytest.mark.parametrize("base", ["0.01", "918000", "1234567.89", "9999999.99"])
    def test_taxable_amounts_cover_base(self, base):
        """Test taxable slices add up to the base when brackets tile [0, inf)."""
        result = apply_brackets(Decimal(base), DEFAULT_RENT_TAX_BRACKETS)
        assert sum(b.taxable_amount for b in result.brackets) == Decimal(base)

    def test_zero_base(self):
        """Test a zero base reaches no bracket."""
        result = apply_brackets(Decimal("0"), DEFAULT_RENT_TAX_BRACKETS)
        assert result.brackets == []
        assert result.monthly_total == Decimal("0")

    def test_base_on_boundary(self):
        """Test a base equal to a bracket minimum does not enter that bracket."""
        result = apply_brackets(Decimal("918000"), DEFAULT_RENT_TAX_BRACKETS)
        assert [b.id for b in result.brackets] == ["exempt"]

    def test_unsorted_input(self):
        """Test brackets are sorted by min before the walk."""
        ordered = apply_brackets(Decimal("3000000"), DEFAULT_RENT_TAX_BRACKETS)
        shuffled = apply_brackets(Decimal("3000000"), list(reversed(DEFAULT_RENT_TAX_BRACKETS)))
        assert shuffled == ordered

    def test_empty_schedule(self):
        """Test no brackets means no tax."""
        result = apply_brackets(Decimal("1000"), [])
        assert result.monthly_total == Decimal("0")

    def test_zero_rate_band_kept(self):
        """Test zero-rate bands are reported with zero tax."""
        brackets = [
            make_bracket("low", "0", "100", "0.10"),
            make_bracket("free", "100", "200", "0"),
            make_bracket("top", "200", None, "0.50"),
        ]
        result = apply_brackets(Decimal("300"), brackets)
        assert [b.monthly_amount for b in result.brackets] == [
            Decimal("10.00"), Decimal("0.00"), Decimal("50.00"),
        ]

    def test_labels(self):
        """Test bracket labels."""
        exempt, b10, *_, top = DEFAULT_RENT_TAX_BRACKETS
        assert bracket_label(exempt) == "Up to ₡918,000.00"
        assert bracket_label(b10) == "₡918,000.00 – ₡1,347,000.00"
        assert bracket_label(top) == "Over ₡4,727,000.00"


class TestRoundMoney:
    """Tests for cent rounding."""

    @pytest.mark.parametrize("value, expected", [
        ("2.345", "2.35"),
        ("0.005", "0.01"),
        ("-0.005", "0.00"),
        ("-2.345", "-2.34"),
        ("-2.346", "-2.35"),
        ("-10.005", "-10.00"),
    ])
    def test_ties_toward_positive_infinity(self, value, expected):
        """Test half cents round up for positive and negative values alike."""
        assert round_money(Decimal(value)) == Decimal(expected)

    def test_halve_negative(self):
        """Test halving a negative amount uses the same tie rule."""
        assert halve(Decimal("-0.01")) == Decimal("0.00")
