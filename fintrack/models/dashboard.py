"""Dashboard view models."""

from decimal import Decimal

from pydantic import BaseModel, Field


class CurrencyTotal(BaseModel):
    """A total and the number of amounts behind it."""

    currency: str
    total: Decimal = Decimal("0")
    count: int = 0


class MonthComparison(BaseModel):
    """Current vs. previous calendar month for one currency."""

    currency: str
    current_month: Decimal
    previous_month: Decimal
    change: Decimal
    change_percent: Decimal = Field(
        description="0 when there was no spend in the previous month"
    )


class MonthlyTrend(BaseModel):
    """One slot of the 12-month trend series."""

    month: str = Field(description="YYYY-MM")
    month_label: str = Field(description="Abbreviated month name")
    totals: dict[str, Decimal] = Field(default_factory=dict)


class PaidVsPending(BaseModel):
    paid: list[CurrencyTotal] = Field(default_factory=list)
    pending: list[CurrencyTotal] = Field(default_factory=list)


class ExchangeRateDisplay(BaseModel):
    from_currency: str
    to_currency: str
    rate: Decimal


class DashboardStats(BaseModel):
    """Everything the dashboard renders for one reference date."""

    pending_payments: list[CurrencyTotal] = Field(default_factory=list)
    month_comparison: list[MonthComparison] = Field(default_factory=list)
    monthly_trends: list[MonthlyTrend] = Field(default_factory=list)
    year_totals: list[CurrencyTotal] = Field(default_factory=list)
    paid_vs_pending: PaidVsPending = Field(default_factory=PaidVsPending)
    exchange_rates_display: list[ExchangeRateDisplay] = Field(default_factory=list)

    currencies: list[str] = Field(default_factory=list)
    primary_currency: str
    current_year: int
    current_month_name: str
    previous_month_name: str
    total_expenses_count: int = 0
