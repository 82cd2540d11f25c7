"""
Dashboard Stats Aggregator

Calendar-window rollups (current month, previous month, current year)
over an expense set. All per-currency summation goes through
``sum_by_currency`` so the paid/pending rules match the expense totals.

Expects expenses already narrowed to the current year plus the previous
month; anything else is ignored.
"""

import calendar
from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Optional

from fintrack.calculators.currency import iter_amounts, observed_currencies, sum_by_currency
from fintrack.calculators.rounding import ZERO
from fintrack.logging_setup import get_logger
from fintrack.models.dashboard import (
    CurrencyTotal,
    DashboardStats,
    ExchangeRateDisplay,
    MonthComparison,
    MonthlyTrend,
    PaidVsPending,
)
from fintrack.models.expense import ExchangeRateTable, Expense, rate_key


logger = get_logger(__name__)

HUNDRED = Decimal("100")


def previous_month(year: int, month: int) -> tuple[int, int]:
    """(year, month) of the calendar month before ``year``/``month``."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def in_month(expense: Expense, year: int, month: int) -> bool:
    return expense.due_date.year == year and expense.due_date.month == month


def _by_total_desc(totals: list[CurrencyTotal]) -> list[CurrencyTotal]:
    return sorted(totals, key=lambda t: t.total, reverse=True)


def calc_pending_payments(expenses: Sequence[Expense], today: date) -> list[CurrencyTotal]:
    """Unpaid amounts due in the current calendar month, per currency."""
    current = [e for e in expenses if in_month(e, today.year, today.month)]
    totals = sum_by_currency(iter_amounts(current))
    return _by_total_desc([
        CurrencyTotal(currency=currency, total=t.pending, count=t.pending_count)
        for currency, t in totals.items()
        if t.pending_count
    ])


def calc_month_comparison(expenses: Sequence[Expense], today: date) -> list[MonthComparison]:
    """Current vs. previous month per currency; percent is 0 without prior spend."""
    prev_year, prev_month = previous_month(today.year, today.month)

    current = sum_by_currency(iter_amounts(
        e for e in expenses if in_month(e, today.year, today.month)
    ))
    previous = sum_by_currency(iter_amounts(
        e for e in expenses if in_month(e, prev_year, prev_month)
    ))

    currencies = list(dict.fromkeys([*current, *previous]))
    comparisons = []
    for currency in currencies:
        current_total = current[currency].total if currency in current else ZERO
        previous_total = previous[currency].total if currency in previous else ZERO
        change = current_total - previous_total
        change_percent = change / previous_total * HUNDRED if previous_total > 0 else ZERO
        comparisons.append(MonthComparison(
            currency=currency,
            current_month=current_total,
            previous_month=previous_total,
            change=change,
            change_percent=change_percent,
        ))

    return sorted(comparisons, key=lambda c: c.current_month, reverse=True)


def calc_monthly_trends(expenses: Sequence[Expense], year: int) -> list[MonthlyTrend]:
    """Twelve month slots of per-currency totals for ``year``."""
    trends = []
    for month in range(1, 13):
        totals = sum_by_currency(iter_amounts(e for e in expenses if in_month(e, year, month)))
        trends.append(MonthlyTrend(
            month=f"{year}-{month:02d}",
            month_label=calendar.month_abbr[month],
            totals={currency: t.total for currency, t in totals.items()},
        ))
    return trends


def calc_currency_year_totals(expenses: Sequence[Expense], year: int) -> list[CurrencyTotal]:
    """Year-to-date totals per currency, largest first."""
    totals = sum_by_currency(iter_amounts(e for e in expenses if e.due_date.year == year))
    return _by_total_desc([
        CurrencyTotal(currency=currency, total=t.total, count=t.count)
        for currency, t in totals.items()
    ])


def calc_paid_vs_pending(expenses: Sequence[Expense], year: int) -> PaidVsPending:
    """Paid and pending sums per currency for ``year``."""
    totals = sum_by_currency(iter_amounts(e for e in expenses if e.due_date.year == year))
    return PaidVsPending(
        paid=[
            CurrencyTotal(currency=currency, total=t.paid, count=t.paid_count)
            for currency, t in totals.items()
            if t.paid_count
        ],
        pending=[
            CurrencyTotal(currency=currency, total=t.pending, count=t.pending_count)
            for currency, t in totals.items()
            if t.pending_count
        ],
    )


def calc_exchange_rates_display(
    currencies: Sequence[str],
    primary_currency: str,
    rate_table: Optional[ExchangeRateTable],
) -> list[ExchangeRateDisplay]:
    """Known rates between the primary currency and every other one, both ways."""
    if not rate_table:
        return []

    rates = []
    for currency in currencies:
        if currency == primary_currency:
            continue
        for from_currency, to_currency in ((currency, primary_currency), (primary_currency, currency)):
            rate = rate_table.get(rate_key(from_currency, to_currency))
            if rate:
                rates.append(ExchangeRateDisplay(
                    from_currency=from_currency,
                    to_currency=to_currency,
                    rate=rate,
                ))
    return rates


def calc_dashboard_stats(
    expenses: Sequence[Expense],
    primary_currency: str,
    today: date,
    rate_table: Optional[ExchangeRateTable] = None,
) -> DashboardStats:
    """
    Build every dashboard figure for the reference date ``today``.

    Year-based figures use expenses due in ``today.year``; the month
    comparison also looks at the previous month, which may fall in the
    prior year.
    """
    primary_currency = primary_currency.upper()
    year_expenses = [e for e in expenses if e.due_date.year == today.year]
    currencies = observed_currencies(year_expenses)
    prev_year, prev_month = previous_month(today.year, today.month)

    stats = DashboardStats(
        pending_payments=calc_pending_payments(year_expenses, today),
        month_comparison=calc_month_comparison(expenses, today),
        monthly_trends=calc_monthly_trends(year_expenses, today.year),
        year_totals=calc_currency_year_totals(year_expenses, today.year),
        paid_vs_pending=calc_paid_vs_pending(year_expenses, today.year),
        exchange_rates_display=calc_exchange_rates_display(currencies, primary_currency, rate_table),
        currencies=currencies,
        primary_currency=primary_currency,
        current_year=today.year,
        current_month_name=calendar.month_name[today.month],
        previous_month_name=calendar.month_name[prev_month],
        total_expenses_count=len(year_expenses),
    )

    logger.debug(
        "dashboard_stats_computed",
        reference_date=today.isoformat(),
        previous_month=f"{prev_year}-{prev_month:02d}",
        expense_count=len(year_expenses),
        currencies=currencies,
    )

    return stats
