"""
Payment Period Grouping

Expenses are grouped into day-of-month windows ("payment periods").
A period key looks like ``2025-03-2``: year-month plus period number.
"""

from collections.abc import Sequence
from datetime import date
from typing import Optional

from fintrack.models.expense import DEFAULT_PAYMENT_PERIODS, Expense, PaymentPeriod


def resolve_payment_period(
    due_date: date,
    periods: Optional[Sequence[PaymentPeriod]] = None,
) -> str:
    """
    Period key for ``due_date``.

    The first period whose day window contains the day wins. A day no
    period covers falls into period 1.
    """
    periods = periods or DEFAULT_PAYMENT_PERIODS
    year_month = due_date.strftime("%Y-%m")
    for period in periods:
        if period.start_day <= due_date.day <= period.end_day:
            return f"{year_month}-{period.period}"
    return f"{year_month}-1"


def group_by_payment_period(
    expenses: Sequence[Expense],
    periods: Optional[Sequence[PaymentPeriod]] = None,
) -> dict[str, list[Expense]]:
    """
    Group expenses by period key, keys in ascending order.

    A stored ``payment_period`` wins; otherwise it is resolved from the
    due date.
    """
    grouped: dict[str, list[Expense]] = {}
    for expense in expenses:
        key = expense.payment_period or resolve_payment_period(expense.due_date, periods)
        grouped.setdefault(key, []).append(expense)
    return {key: grouped[key] for key in sorted(grouped)}
