"""Monetary rounding helpers shared by every calculator."""

from decimal import ROUND_HALF_DOWN, ROUND_HALF_UP, Decimal
from typing import Union


ZERO = Decimal("0")
CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert ``value`` to Decimal; floats go through ``str`` to keep 0.1 as 0.1."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Number) -> Decimal:
    """
    Round to cents, ties toward positive infinity.

    2.345 -> 2.35 and -2.345 -> -2.34, the same as ``round(x * 100) / 100``
    on a spreadsheet or in a browser.
    """
    value = to_decimal(value)
    rounding = ROUND_HALF_UP if value >= 0 else ROUND_HALF_DOWN
    return value.quantize(CENT, rounding=rounding)


def halve(value: Number) -> Decimal:
    """Fortnightly figure of a monthly amount (payroll runs twice a month)."""
    return round_money(to_decimal(value) / 2)
