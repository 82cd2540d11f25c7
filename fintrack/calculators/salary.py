"""
Salary Breakdown Calculator

Gross monthly salary -> itemized deductions -> rent tax (local-currency
salaries only) -> net, plus an optional converted net.

Exchange rates follow one convention: the rate is the number of local
currency units (CRC) per one unit of the paired foreign currency. A CRC
salary is converted to USD by dividing; any other salary is converted to
CRC by multiplying.
"""

from decimal import Decimal
from typing import Optional

from fintrack.calculators.deductions import apply_deductions, total_deductions
from fintrack.calculators.rounding import ZERO, halve, round_money, to_decimal
from fintrack.calculators.tax_brackets import apply_brackets
from fintrack.logging_setup import get_logger
from fintrack.models.expense import ExchangeRateTable, rate_key
from fintrack.models.salary import (
    DEFAULT_RENT_TAX_BRACKETS,
    FOREIGN_CURRENCY,
    LOCAL_CURRENCY,
    RentTaxResult,
    SalaryBreakdown,
    SalaryRecord,
    SalarySettings,
    TaxBracket,
)


logger = get_logger(__name__)


def conversion_pair(currency: str) -> tuple[str, str]:
    """
    Rate-table pair (FROM, TO) whose rate converts a salary in ``currency``.

    Always expressed as foreign -> local: USD_CRC for a CRC salary,
    EUR_CRC for a EUR salary.
    """
    currency = currency.upper()
    foreign = FOREIGN_CURRENCY if currency == LOCAL_CURRENCY else currency
    return foreign, LOCAL_CURRENCY


def converted_currency(currency: str) -> str:
    """Currency a salary's net is converted into."""
    return FOREIGN_CURRENCY if currency.upper() == LOCAL_CURRENCY else LOCAL_CURRENCY


def salary_conversion_rate(currency: str, rate_table: ExchangeRateTable) -> Optional[Decimal]:
    """Look up the conversion rate for a salary in ``currency``, or None."""
    return rate_table.get(rate_key(*conversion_pair(currency)))


def resolve_rent_tax_brackets(
    record: SalaryRecord,
    settings: Optional[SalarySettings] = None,
) -> list[TaxBracket]:
    """
    Bracket table used for a record.

    The record's own snapshot wins; then the caller's settings; then the
    built-in defaults.
    """
    if record.rent_tax_brackets:
        return list(record.rent_tax_brackets)
    if settings is not None and settings.rent_tax_brackets:
        return list(settings.rent_tax_brackets)
    return list(DEFAULT_RENT_TAX_BRACKETS)


def calc_salary_breakdown(
    record: SalaryRecord,
    exchange_rate: Optional[Decimal] = None,
    settings: Optional[SalarySettings] = None,
) -> SalaryBreakdown:
    """
    Break a salary record down into monthly and fortnightly figures.

    Args:
        record: The salary snapshot to break down.
        exchange_rate: CRC per unit of the paired currency. None or zero
            leaves the conversion fields empty.
        settings: Only consulted for the rent tax brackets when the record
            carries none of its own.

    Net is clamped at zero even when deductions exceed gross.
    """
    gross_monthly = record.gross_amount
    gross_fortnightly = halve(gross_monthly)
    is_local = record.currency == LOCAL_CURRENCY

    deductions = apply_deductions(gross_monthly, record.deductions)

    if is_local:
        schedule = apply_brackets(gross_monthly, resolve_rent_tax_brackets(record, settings))
        rent_tax = RentTaxResult(
            brackets=schedule.brackets,
            monthly_total=schedule.monthly_total,
            fortnightly_total=schedule.fortnightly_total,
            applied_to_crc=True,
        )
    else:
        rent_tax = RentTaxResult(applied_to_crc=False)

    total_monthly = round_money(total_deductions(deductions) + rent_tax.monthly_total)
    net_monthly = round_money(max(ZERO, gross_monthly - total_monthly))
    net_fortnightly = halve(net_monthly)

    paired_currency = None
    net_monthly_converted = None
    net_fortnightly_converted = None
    rate = to_decimal(exchange_rate) if exchange_rate else None

    if rate is not None:
        paired_currency = converted_currency(record.currency)
        if is_local:
            net_monthly_converted = round_money(net_monthly / rate)
            net_fortnightly_converted = round_money(net_fortnightly / rate)
        else:
            net_monthly_converted = round_money(net_monthly * rate)
            net_fortnightly_converted = round_money(net_fortnightly * rate)
    else:
        logger.debug(
            "salary_conversion_unavailable",
            record_id=str(record.id),
            currency=record.currency,
        )

    logger.debug(
        "salary_breakdown_computed",
        record_id=str(record.id),
        currency=record.currency,
        deduction_count=len(deductions),
        rent_tax_brackets=len(rent_tax.brackets),
    )

    return SalaryBreakdown(
        gross_monthly=gross_monthly,
        gross_fortnightly=gross_fortnightly,
        currency=record.currency,
        deductions=deductions,
        rent_tax=rent_tax,
        total_deductions_monthly=total_monthly,
        total_deductions_fortnightly=halve(total_monthly),
        net_monthly=net_monthly,
        net_fortnightly=net_fortnightly,
        converted_currency=paired_currency,
        exchange_rate=rate,
        net_monthly_converted=net_monthly_converted,
        net_fortnightly_converted=net_fortnightly_converted,
    )
