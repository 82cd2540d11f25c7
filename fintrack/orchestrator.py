"""
Orchestration Layer

Thin adapters between the hosting application (UI, API handlers) and the
pure calculators. A flow:
1. Resolves defaults (settings, reference date)
2. Fetches exchange rates from the provider into a plain table
3. Hands records + table to the calculators
4. Returns the view models unchanged

All I/O happens in step 2 and finishes before any calculator runs.
Flows hold configuration only; they keep no per-call state.
"""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Optional

from fintrack.calculators import (
    aggregate_expenses,
    calc_aguinaldo,
    calc_dashboard_stats,
    calc_period_breakdown,
    calc_salary_breakdown,
    calc_year_totals,
    conversion_pair,
    group_by_payment_period,
    materialize_templates,
    observed_currencies,
    salary_conversion_rate,
)
from fintrack.config import get_settings
from fintrack.logging_setup import configure_logging, get_logger
from fintrack.models.bonus import AguinaldoSummary, SalaryPayment
from fintrack.models.dashboard import DashboardStats
from fintrack.models.expense import (
    ExchangeRateTable,
    Expense,
    ExpenseAggregate,
    ExpenseTemplate,
    PaymentPeriod,
)
from fintrack.models.salary import SalaryBreakdown, SalaryRecord, SalarySettings
from fintrack.models.stock import StockBreakdown, StockPeriod, StocksSettings, StockYearTotals
from fintrack.services.rates import ExchangeRateProvider, build_rate_table


logger = get_logger(__name__)


class SalaryFlow:
    """
    Salary breakdowns with the paired-currency conversion.

    Records carry their own deductions; ``settings`` is only a fallback
    for the rent tax brackets of records that have none.
    """

    def __init__(
        self,
        rate_provider: Optional[ExchangeRateProvider] = None,
        settings: Optional[SalarySettings] = None,
    ):
        self._rate_provider = rate_provider
        self._settings = settings

    def conversion_rate(self, currency: str) -> Optional[Decimal]:
        """Fetch the conversion rate for a salary in ``currency``, or None."""
        table = build_rate_table(self._rate_provider, conversion_pair(currency))
        return salary_conversion_rate(currency, table)

    def breakdown(self, record: SalaryRecord) -> SalaryBreakdown:
        """Break down one record, converting net when a rate is known."""
        rate = self.conversion_rate(record.currency)
        if rate is None:
            logger.info(
                "salary_rate_unavailable",
                record_id=str(record.id),
                currency=record.currency,
            )
        return calc_salary_breakdown(record, exchange_rate=rate, settings=self._settings)

    def history(self, records: Sequence[SalaryRecord]) -> list[SalaryBreakdown]:
        """Breakdowns of every record, most recent effective date first."""
        ordered = sorted(records, key=lambda r: r.effective_date, reverse=True)
        return [self.breakdown(record) for record in ordered]

    def aguinaldo(
        self,
        year: int,
        payments: Sequence[SalaryPayment],
        currency: str = "CRC",
    ) -> AguinaldoSummary:
        """Year-end bonus for ``year``."""
        return calc_aguinaldo(year, payments, currency)


class StocksFlow:
    """Stock period breakdowns under the current global stock settings."""

    def __init__(self, settings: Optional[StocksSettings] = None):
        self._settings = settings

    def breakdowns(self, periods: Sequence[StockPeriod]) -> list[StockBreakdown]:
        """Breakdown of each period, in vesting date order."""
        ordered = sorted(periods, key=lambda p: p.vesting_date)
        results = [calc_period_breakdown(period, self._settings) for period in ordered]
        warned = sum(1 for result in results if result.warning)
        if warned:
            logger.warning("stock_periods_over_deducted", count=warned)
        return results

    def year_totals(self, periods: Sequence[StockPeriod], year: Optional[int] = None) -> StockYearTotals:
        """Totals for the periods vesting in ``year`` (all periods when None)."""
        if year is not None:
            periods = [p for p in periods if p.vesting_date.year == year]
        return calc_year_totals(periods, self._settings)


class ExpensesFlow:
    """Multi-currency expense totals and payment period grouping."""

    def __init__(
        self,
        rate_provider: Optional[ExchangeRateProvider] = None,
        payment_periods: Optional[Sequence[PaymentPeriod]] = None,
    ):
        self._rate_provider = rate_provider
        self._payment_periods = list(payment_periods) if payment_periods else None

    def rate_table(self, expenses: Sequence[Expense]) -> ExchangeRateTable:
        """Rates between every pair of currencies present in ``expenses``."""
        return build_rate_table(self._rate_provider, observed_currencies(expenses))

    def summarize(self, expenses: Sequence[Expense]) -> ExpenseAggregate:
        """Per-currency and grand totals for ``expenses``."""
        return aggregate_expenses(expenses, self.rate_table(expenses))

    def by_period(self, expenses: Sequence[Expense]) -> dict[str, ExpenseAggregate]:
        """Totals for each payment period, keys in ascending order."""
        table = self.rate_table(expenses)
        grouped = group_by_payment_period(expenses, self._payment_periods)
        return {
            period: aggregate_expenses(period_expenses, table)
            for period, period_expenses in grouped.items()
        }

    def create_from_templates(
        self,
        templates: Sequence[ExpenseTemplate],
        base_date: Optional[date] = None,
    ) -> list[Expense]:
        """Unpaid expenses for ``templates``; ``base_date`` defaults to today."""
        base_date = base_date or date.today()
        expenses = materialize_templates(templates, base_date, self._payment_periods)
        logger.info("expenses_created_from_templates", count=len(expenses), base_date=str(base_date))
        return expenses


class DashboardFlow:
    """Dashboard statistics for a reference date."""

    def __init__(
        self,
        rate_provider: Optional[ExchangeRateProvider] = None,
        primary_currency: Optional[str] = None,
    ):
        self._rate_provider = rate_provider
        self._primary_currency = primary_currency

    @property
    def primary_currency(self) -> str:
        return self._primary_currency or get_settings().tracker.primary_currency

    def stats(self, expenses: Sequence[Expense], today: Optional[date] = None) -> DashboardStats:
        """Dashboard figures; ``today`` defaults to the current date."""
        today = today or date.today()
        year_currencies = observed_currencies(e for e in expenses if e.due_date.year == today.year)
        table = build_rate_table(self._rate_provider, year_currencies + [self.primary_currency])
        return calc_dashboard_stats(expenses, self.primary_currency, today, table)


def create_app_components(
    rate_provider: Optional[ExchangeRateProvider] = None,
    salary_settings: Optional[SalarySettings] = None,
    stocks_settings: Optional[StocksSettings] = None,
    payment_periods: Optional[Sequence[PaymentPeriod]] = None,
) -> tuple[SalaryFlow, StocksFlow, ExpensesFlow, DashboardFlow]:
    """
    Factory function to create all application components.

    Args:
        rate_provider: Exchange rate source. None means every conversion
                       degrades to 'unavailable'.
        salary_settings: Fallback rent tax brackets for salary records.
        stocks_settings: Global stock tax policy (all-zero when None).
        payment_periods: Day windows for grouping expenses.

    Returns:
        (salary_flow, stocks_flow, expenses_flow, dashboard_flow)
    """
    configure_logging()

    if rate_provider is None:
        logger.warning("rate_provider_not_configured")

    return (
        SalaryFlow(rate_provider=rate_provider, settings=salary_settings),
        StocksFlow(settings=stocks_settings),
        ExpensesFlow(rate_provider=rate_provider, payment_periods=payment_periods),
        DashboardFlow(rate_provider=rate_provider),
    )
