"""
Calculators Package

Pure, synchronous functions over the value types in ``fintrack.models``.
No calculator performs I/O, keeps state between calls, or mutates its
inputs; calling one twice with the same inputs yields identical output.
"""

from fintrack.calculators.aguinaldo import aguinaldo_months, calc_aguinaldo
from fintrack.calculators.currency import (
    aggregate_expenses,
    calc_grand_total,
    convert_amount,
    iter_amounts,
    observed_currencies,
    sum_by_currency,
)
from fintrack.calculators.dashboard import (
    calc_currency_year_totals,
    calc_dashboard_stats,
    calc_month_comparison,
    calc_monthly_trends,
    calc_paid_vs_pending,
    calc_pending_payments,
)
from fintrack.calculators.deductions import apply_deductions, total_deductions
from fintrack.calculators.periods import group_by_payment_period, resolve_payment_period
from fintrack.calculators.rounding import halve, round_money
from fintrack.calculators.salary import (
    calc_salary_breakdown,
    conversion_pair,
    resolve_rent_tax_brackets,
    salary_conversion_rate,
)
from fintrack.calculators.stocks import calc_period_breakdown, calc_year_totals
from fintrack.calculators.tax_brackets import apply_brackets, bracket_label
from fintrack.calculators.templates import (
    materialize_template,
    materialize_templates,
    template_due_date,
)

__all__ = [
    # Salary
    "apply_deductions",
    "total_deductions",
    "apply_brackets",
    "bracket_label",
    "calc_salary_breakdown",
    "conversion_pair",
    "resolve_rent_tax_brackets",
    "salary_conversion_rate",
    # Stocks
    "calc_period_breakdown",
    "calc_year_totals",
    # Expenses
    "aggregate_expenses",
    "calc_grand_total",
    "convert_amount",
    "iter_amounts",
    "observed_currencies",
    "sum_by_currency",
    "group_by_payment_period",
    "resolve_payment_period",
    "materialize_template",
    "materialize_templates",
    "template_due_date",
    # Dashboard
    "calc_currency_year_totals",
    "calc_dashboard_stats",
    "calc_month_comparison",
    "calc_monthly_trends",
    "calc_paid_vs_pending",
    "calc_pending_payments",
    # Year-end bonus
    "aguinaldo_months",
    "calc_aguinaldo",
    # Rounding
    "halve",
    "round_money",
]
