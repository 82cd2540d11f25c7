"""
Year-End Bonus (Aguinaldo) Models

The aguinaldo for year X is one twelfth of the gross salary paid from
December of X-1 through November of X. Salary is paid twice a month,
so each month holds up to two payments.
"""

from decimal import Decimal
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SalaryPayment(BaseModel):
    """A single gross salary payment (first or second of the month)."""
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    year: int = Field(..., ge=1900, le=9999)
    month: int = Field(..., ge=1, le=12)
    payment_number: Literal[1, 2] = Field(
        ...,
        description="1 = first fortnight, 2 = second fortnight"
    )
    gross_amount: Decimal = Field(..., ge=0)
    currency: str = Field(default="CRC", min_length=3, max_length=3)

    @field_validator('currency')
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()


class AguinaldoMonth(BaseModel):
    """One month of the aguinaldo window."""

    year: int
    month: int
    first_payment: Decimal = Decimal("0")
    second_payment: Decimal = Decimal("0")
    total: Decimal = Decimal("0")


class AguinaldoSummary(BaseModel):
    """The twelve-month window, its sum and the resulting bonus."""

    year: int
    currency: str
    months: list[AguinaldoMonth] = Field(default_factory=list)
    grand_total: Decimal = Decimal("0")
    aguinaldo: Decimal = Decimal("0")
