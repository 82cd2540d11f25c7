"""
Progressive Tax Calculator

Marginal-bracket walk over a tax schedule: each bracket taxes only the
slice of the base that falls inside its own span.

Rounding happens per bracket (taxable amount, then tax), and totals are
sums of already-rounded figures.
"""

from collections.abc import Sequence
from decimal import Decimal

from fintrack.calculators.rounding import ZERO, Number, halve, round_money, to_decimal
from fintrack.logging_setup import get_logger
from fintrack.models.salary import BracketResult, ProgressiveTaxResult, TaxBracket


logger = get_logger(__name__)


def format_colones(amount: Decimal) -> str:
    """Format a CRC amount for bracket labels (e.g., ₡918,000.00)."""
    return f"₡{round_money(amount):,.2f}"


def bracket_label(bracket: TaxBracket) -> str:
    """Human-readable label of a bracket's span."""
    if bracket.rate == 0:
        return f"Up to {format_colones(bracket.max if bracket.max is not None else ZERO)}"
    if bracket.max is None:
        return f"Over {format_colones(bracket.min)}"
    return f"{format_colones(bracket.min)} – {format_colones(bracket.max)}"


def apply_brackets(base: Number, brackets: Sequence[TaxBracket]) -> ProgressiveTaxResult:
    """
    Apply ``brackets`` to ``base``.

    Brackets are sorted by ``min`` regardless of input order. Only the
    brackets the base reaches (``base > min``) appear in the result;
    zero-rate brackets are kept with a zero tax.
    """
    base = to_decimal(base)
    remaining = base
    monthly_total = ZERO
    results = []

    for bracket in sorted(brackets, key=lambda b: b.min):
        if not base > bracket.min:
            continue

        if bracket.max is None:
            span = remaining
        else:
            span = min(remaining, bracket.max - bracket.min)

        taxable = round_money(span)
        tax = round_money(taxable * bracket.rate)
        remaining -= taxable
        monthly_total += tax

        results.append(BracketResult(
            id=bracket.id,
            label=bracket_label(bracket),
            rate=bracket.rate,
            taxable_amount=taxable,
            monthly_amount=tax,
            fortnightly_amount=halve(tax),
        ))

    logger.debug(
        "progressive_tax_applied",
        base=str(base),
        brackets_reached=len(results),
        monthly_total=str(monthly_total),
    )

    return ProgressiveTaxResult(
        brackets=results,
        monthly_total=round_money(monthly_total),
        fortnightly_total=halve(monthly_total),
    )
