"""
Expense Models

An Expense holds one or more currency amounts. Each amount carries its
own paid flag and, optionally, an exchange rate fixed on the record.

Invariant: ``Expense.is_paid`` is True iff every nested amount is paid.
The writer maintains it (see ``Expense.with_amount_paid``); aggregators
read the nested flags directly and never re-derive it.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


# "{FROM}_{TO}" -> 1 unit of FROM expressed in TO. Missing key = unknown.
ExchangeRateTable = dict[str, Decimal]


def rate_key(from_currency: str, to_currency: str) -> str:
    """Build the rate table key for an ordered currency pair."""
    return f"{from_currency}_{to_currency}"


class RateSource(str, Enum):
    """Where an amount's exchange rate came from."""
    API = "api"
    MANUAL = "manual"


# =============================================================================
# INPUT MODELS
# =============================================================================

class ExpenseAmount(BaseModel):
    """One currency amount of an expense."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    currency: str = Field(
        ...,
        min_length=3,
        max_length=3,
        description="ISO currency code"
    )
    amount: Decimal = Field(
        ...,
        description="Amount in ``currency``"
    )
    exchange_rate: Optional[Decimal] = Field(
        default=None,
        gt=0,
        description="Rate fixed on this record; always wins over the rate table"
    )
    exchange_rate_source: Optional[RateSource] = Field(
        default=None,
        description="api or manual, None when no rate is fixed"
    )
    paid: bool = Field(
        default=False,
        description="Whether this amount has been paid"
    )

    @field_validator('currency')
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()


class Expense(BaseModel):
    """A dated expense with one or more currency amounts."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique expense ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Expense name"
    )
    due_date: date = Field(
        ...,
        description="Payment due date"
    )
    amounts: list[ExpenseAmount] = Field(
        default_factory=list,
        description="Currency amounts of this expense"
    )
    is_paid: bool = Field(
        default=False,
        description="True iff every amount is paid (maintained by the writer)"
    )
    payment_period: Optional[str] = Field(
        default=None,
        pattern=r"^\d{4}-\d{2}-\d+$",
        description="Payment period key, e.g. '2025-03-2'"
    )
    template_id: Optional[UUID] = Field(
        default=None,
        description="Template this expense was created from, if any"
    )

    def with_amount_paid(self, currency: str, paid: bool) -> "Expense":
        """
        Return a copy with the ``currency`` amount marked paid/unpaid.

        ``is_paid`` is re-derived from the nested flags.
        """
        currency = currency.upper()
        amounts = [
            amount.model_copy(update={"paid": paid}) if amount.currency == currency else amount
            for amount in self.amounts
        ]
        is_paid = bool(amounts) and all(amount.paid for amount in amounts)
        return self.model_copy(update={"amounts": amounts, "is_paid": is_paid})


class TemplateAmount(BaseModel):
    """A currency amount on a template; the amount may be left blank."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    currency: str = Field(..., min_length=3, max_length=3)
    amount: Optional[Decimal] = None

    @field_validator('currency')
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()


class ExpenseTemplate(BaseModel):
    """
    A reusable expense definition.

    Recurring templates fall due on ``recurrence_day`` of the month they
    are created for; the others fall due on the date they are created for.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=200)
    amounts: list[TemplateAmount] = Field(default_factory=list)
    is_recurring: bool = False
    recurrence_day: Optional[int] = Field(
        default=None,
        ge=1,
        le=31,
        description="Day of month a recurring template falls due"
    )


class PaymentPeriod(BaseModel):
    """A day-of-month window expenses are grouped into."""
    model_config = ConfigDict(frozen=True)

    period: int = Field(..., ge=1, description="1-based period number")
    start_day: int = Field(..., ge=1, le=31)
    end_day: int = Field(..., ge=1, le=31)


DEFAULT_PAYMENT_PERIODS: tuple[PaymentPeriod, ...] = (
    PaymentPeriod(period=1, start_day=1, end_day=15),
    PaymentPeriod(period=2, start_day=16, end_day=31),
)


# =============================================================================
# RESULT MODELS
# =============================================================================

class CurrencyTotals(BaseModel):
    """Per-currency sums over a set of expense amounts."""

    currency: str
    total: Decimal = Decimal("0")
    paid: Decimal = Decimal("0")
    pending: Decimal = Decimal("0")
    count: int = 0
    paid_count: int = 0
    pending_count: int = 0


class GrandTotal(BaseModel):
    """
    Every amount of an expense set converted into one target currency.

    When some amount could not be converted, it is left out of ``total``,
    ``has_all_rates`` is False, and the unresolved pairs are listed.
    """

    currency: str
    total: Decimal = Decimal("0")
    has_all_rates: bool = True
    missing_pairs: list[str] = Field(default_factory=list)


class ExpenseAggregate(BaseModel):
    """Result of aggregating a multi-currency expense set."""

    per_currency_totals: dict[str, CurrencyTotals] = Field(default_factory=dict)
    grand_totals: dict[str, GrandTotal] = Field(default_factory=dict)

    @property
    def currencies(self) -> list[str]:
        """Currencies observed in the data, in first-seen order."""
        return list(self.per_currency_totals)
