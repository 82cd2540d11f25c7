"""
Stock Vesting Models

Unlike salary records, stock settings are global: one StocksSettings
object applies to every vesting period at read time.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fintrack.models.salary import DeductionKind, DeductionRule


class StockPeriod(BaseModel):
    """A single vesting event."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique period ID"
    )
    vesting_date: date = Field(
        ...,
        description="Date the shares vested"
    )
    quantity: Decimal = Field(
        ...,
        description="Number of shares vested"
    )
    stock_price_usd: Decimal = Field(
        ...,
        description="Share price in USD at vesting"
    )
    notes: Optional[str] = Field(
        default=None,
        max_length=1000,
        description="User notes about this period"
    )


class StockDeductionRule(DeductionRule):
    """
    An additional deduction on vesting proceeds.

    Stored stock settings keep these as ``{name, type, amount}`` without
    an id, so that shape is accepted as-is and ``id`` defaults to empty.
    """

    id: str = Field(
        default="",
        description="Optional identifier; stored stock deductions have none"
    )

    @model_validator(mode='before')
    @classmethod
    def accept_stored_shape(cls, data: object) -> object:
        """Map the stored ``type`` and ``amount`` keys onto ``kind`` and ``rate``."""
        if isinstance(data, dict):
            data = dict(data)
            if "type" in data and "kind" not in data:
                data["kind"] = data.pop("type")
            if "amount" in data and "rate" not in data:
                data["rate"] = data.pop("amount")
        return data


class StocksSettings(BaseModel):
    """
    Tax and cost policy applied uniformly to every vesting period.

    Percentages are decimal fractions (0.30 = 30%).
    """
    model_config = ConfigDict(frozen=True)

    us_tax_percentage: Decimal = Field(
        default=Decimal("0"),
        description="Flat US withholding rate"
    )
    local_tax_percentage: Decimal = Field(
        default=Decimal("0"),
        description="Flat local tax rate"
    )
    broker_cost_usd: Decimal = Field(
        default=Decimal("0"),
        description="Flat broker fee per period, not scaled by quantity"
    )
    other_deductions: list[StockDeductionRule] = Field(
        default_factory=list,
        description="Additional deductions applied against gross"
    )


DEFAULT_STOCKS_SETTINGS = StocksSettings()


class StockDeductionResult(BaseModel):
    """A computed 'other deduction' line for one period."""

    id: str
    name: str
    kind: DeductionKind
    rate: Decimal
    amount: Decimal


class StockBreakdown(BaseModel):
    """
    Gross-to-net breakdown of one vesting period, in USD.

    ``warning`` is advisory: it is set whenever deductions exceed gross
    and the net was clamped to zero. Callers must surface it.
    """

    gross_usd: Decimal
    us_tax_usd: Decimal
    after_us_tax_usd: Decimal
    local_tax_usd: Decimal
    broker_cost_usd: Decimal
    other_deductions: list[StockDeductionResult] = Field(default_factory=list)
    other_deductions_usd: Decimal
    net_usd: Decimal = Field(ge=0)
    warning: Optional[str] = None


class StockYearTotals(BaseModel):
    """Sum of period breakdowns for one year."""

    gross_usd: Decimal = Decimal("0")
    us_tax_usd: Decimal = Decimal("0")
    local_tax_usd: Decimal = Decimal("0")
    broker_cost_usd: Decimal = Decimal("0")
    other_deductions_usd: Decimal = Decimal("0")
    net_usd: Decimal = Decimal("0")
    period_count: int = Field(default=0, ge=0)
