"""
Salary Models

Inputs (deduction rules, tax brackets, salary records, salary settings)
and outputs (the itemized salary breakdown) of the salary calculators.

CRITICAL: A SalaryRecord carries its own copy of the deduction rules and
rent tax brackets. Global SalarySettings only seed new records; they are
never consulted when an existing record is broken down, so historical
breakdowns stay stable when settings change later.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


LOCAL_CURRENCY = "CRC"
FOREIGN_CURRENCY = "USD"


# =============================================================================
# ENUMS
# =============================================================================

class DeductionKind(str, Enum):
    """How a deduction rule's ``rate`` is interpreted."""
    PERCENTAGE = "percentage"  # rate is a decimal fraction of the base
    FIXED = "fixed"            # rate is a currency amount


# =============================================================================
# INPUT MODELS
# =============================================================================

class DeductionRule(BaseModel):
    """
    A single payroll deduction.

    Inactive rules are kept for display and editing but excluded
    from every total.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Stable identifier of the rule"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name (e.g., CCSS)"
    )
    kind: DeductionKind = Field(
        ...,
        description="percentage or fixed"
    )
    rate: Decimal = Field(
        ...,
        description="Decimal fraction (0.1083 = 10.83%) or a currency amount"
    )
    active: bool = Field(
        default=True,
        description="Inactive rules are excluded from totals"
    )

    @field_validator('kind', mode='before')
    @classmethod
    def accept_nominal_alias(cls, v: object) -> object:
        """Older records store fixed deductions as 'nominal'."""
        if isinstance(v, str) and v.strip().lower() == "nominal":
            return DeductionKind.FIXED
        return v


class TaxBracket(BaseModel):
    """
    One band of a progressive tax schedule.

    ``max=None`` marks the unbounded top bracket.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Stable identifier of the bracket"
    )
    min: Decimal = Field(
        ...,
        description="Lower bound of the band"
    )
    max: Optional[Decimal] = Field(
        default=None,
        description="Upper bound of the band, None when unbounded"
    )
    rate: Decimal = Field(
        ...,
        description="Marginal rate for the band as a decimal fraction"
    )


class SalaryRecord(BaseModel):
    """
    An immutable salary snapshot effective from a given date.

    ``rent_tax_brackets`` is the record's own bracket table. When it is
    empty the caller-supplied settings (or the built-in defaults) apply.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique record ID"
    )
    label: str = Field(
        default="",
        max_length=200,
        description="Free-text label (e.g., 'Promotion 2025')"
    )
    effective_date: date = Field(
        ...,
        description="Date from which this salary applies"
    )
    gross_amount: Decimal = Field(
        ...,
        description="Gross monthly salary"
    )
    currency: str = Field(
        default=LOCAL_CURRENCY,
        min_length=3,
        max_length=3,
        description="ISO currency code of the salary"
    )
    deductions: list[DeductionRule] = Field(
        default_factory=list,
        description="Deduction rules copied into this record"
    )
    rent_tax_brackets: list[TaxBracket] = Field(
        default_factory=list,
        description="Rent tax brackets copied into this record"
    )

    @field_validator('currency')
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()


class SalarySettings(BaseModel):
    """Process-wide defaults used to seed new salary records."""
    model_config = ConfigDict(frozen=True)

    deductions: list[DeductionRule] = Field(default_factory=list)
    rent_tax_brackets: list[TaxBracket] = Field(default_factory=list)


# =============================================================================
# RESULT MODELS
# =============================================================================

class DeductionResult(BaseModel):
    """A computed deduction line."""

    id: str
    name: str
    kind: DeductionKind
    rate: Decimal
    monthly_amount: Decimal
    fortnightly_amount: Decimal


class BracketResult(BaseModel):
    """Tax computed for one bracket the base actually reaches."""

    id: str
    label: str
    rate: Decimal
    taxable_amount: Decimal
    monthly_amount: Decimal
    fortnightly_amount: Decimal


class ProgressiveTaxResult(BaseModel):
    """Per-bracket results plus totals of a progressive schedule."""

    brackets: list[BracketResult] = Field(default_factory=list)
    monthly_total: Decimal = Decimal("0")
    fortnightly_total: Decimal = Decimal("0")


class RentTaxResult(ProgressiveTaxResult):
    """Rent tax section of a salary breakdown."""

    applied_to_crc: bool = Field(
        default=False,
        description="False when the salary is not in the local currency"
    )


class SalaryBreakdown(BaseModel):
    """
    Monthly and fortnightly view of a salary record.

    Conversion fields are None when no exchange rate was available;
    that is a valid state the UI renders as 'unavailable'.
    """

    gross_monthly: Decimal
    gross_fortnightly: Decimal
    currency: str

    deductions: list[DeductionResult] = Field(default_factory=list)
    rent_tax: RentTaxResult

    total_deductions_monthly: Decimal
    total_deductions_fortnightly: Decimal
    net_monthly: Decimal = Field(ge=0)
    net_fortnightly: Decimal = Field(ge=0)

    converted_currency: Optional[str] = None
    exchange_rate: Optional[Decimal] = None
    net_monthly_converted: Optional[Decimal] = None
    net_fortnightly_converted: Optional[Decimal] = None

    @property
    def has_conversion(self) -> bool:
        """Whether converted figures are available."""
        return self.net_monthly_converted is not None


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_SALARY_DEDUCTIONS: tuple[DeductionRule, ...] = (
    DeductionRule(id="ccss", name="CCSS", kind=DeductionKind.PERCENTAGE, rate=Decimal("0.1083")),
    DeductionRule(id="aso", name="AsoAmazon", kind=DeductionKind.PERCENTAGE, rate=Decimal("0.05")),
    DeductionRule(id="provision", name="Provisión AsoAmazon", kind=DeductionKind.FIXED, rate=Decimal("500")),
    DeductionRule(id="creditos", name="Créditos AsoAmazon", kind=DeductionKind.FIXED, rate=Decimal("0")),
)

DEFAULT_RENT_TAX_BRACKETS: tuple[TaxBracket, ...] = (
    TaxBracket(id="exempt", min=Decimal("0"), max=Decimal("918000"), rate=Decimal("0")),
    TaxBracket(id="b10", min=Decimal("918000"), max=Decimal("1347000"), rate=Decimal("0.10")),
    TaxBracket(id="b15", min=Decimal("1347000"), max=Decimal("2364000"), rate=Decimal("0.15")),
    TaxBracket(id="b20", min=Decimal("2364000"), max=Decimal("4727000"), rate=Decimal("0.20")),
    TaxBracket(id="b25", min=Decimal("4727000"), max=None, rate=Decimal("0.25")),
)


def seed_salary_record(
    effective_date: date,
    gross_amount: Decimal,
    currency: str = LOCAL_CURRENCY,
    label: str = "",
    settings: Optional[SalarySettings] = None,
) -> SalaryRecord:
    """
    Create a new salary record seeded from settings.

    Deductions and brackets are deep-copied from ``settings`` (falling
    back to the built-in defaults when settings are missing or empty),
    so the record no longer depends on the settings object.
    """
    deductions = (
        settings.deductions if settings and settings.deductions
        else DEFAULT_SALARY_DEDUCTIONS
    )
    brackets = (
        settings.rent_tax_brackets if settings and settings.rent_tax_brackets
        else DEFAULT_RENT_TAX_BRACKETS
    )
    return SalaryRecord(
        label=label,
        effective_date=effective_date,
        gross_amount=gross_amount,
        currency=currency,
        deductions=[rule.model_copy(deep=True) for rule in deductions],
        rent_tax_brackets=[bracket.model_copy(deep=True) for bracket in brackets],
    )
