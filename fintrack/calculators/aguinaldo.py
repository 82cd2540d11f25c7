"""
Year-End Bonus (Aguinaldo) Calculator

The aguinaldo for year X is the sum of gross salary paid from December
of X-1 through November of X, divided by twelve.
"""

from collections.abc import Sequence

from fintrack.calculators.rounding import ZERO, round_money
from fintrack.logging_setup import get_logger
from fintrack.models.bonus import AguinaldoMonth, AguinaldoSummary, SalaryPayment


logger = get_logger(__name__)


def aguinaldo_months(year: int) -> list[tuple[int, int]]:
    """(year, month) pairs of the window, in display order: Dec, Jan..Nov."""
    return [(year - 1, 12)] + [(year, month) for month in range(1, 12)]


def calc_aguinaldo(
    year: int,
    payments: Sequence[SalaryPayment],
    currency: str = "CRC",
) -> AguinaldoSummary:
    """
    Compute the aguinaldo for ``year`` from the payments in ``currency``.

    Missing payments count as zero. When the same slot appears twice,
    the later payment replaces the earlier one.
    """
    currency = currency.upper()
    slots: dict[tuple[int, int, int], SalaryPayment] = {}
    skipped = 0
    for payment in payments:
        if payment.currency != currency:
            skipped += 1
            continue
        slots[(payment.year, payment.month, payment.payment_number)] = payment

    if skipped:
        logger.info(
            "aguinaldo_payments_skipped",
            year=year,
            currency=currency,
            skipped=skipped,
        )

    months = []
    grand_total = ZERO
    for month_year, month in aguinaldo_months(year):
        first = slots.get((month_year, month, 1))
        second = slots.get((month_year, month, 2))
        first_amount = first.gross_amount if first else ZERO
        second_amount = second.gross_amount if second else ZERO
        total = first_amount + second_amount
        grand_total += total
        months.append(AguinaldoMonth(
            year=month_year,
            month=month,
            first_payment=first_amount,
            second_payment=second_amount,
            total=total,
        ))

    return AguinaldoSummary(
        year=year,
        currency=currency,
        months=months,
        grand_total=grand_total,
        aguinaldo=round_money(grand_total / 12),
    )
