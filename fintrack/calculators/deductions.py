"""
Deduction Engine

Applies an ordered list of deduction rules to a base amount. Every rule
is computed independently against the base (not against a running
remainder); input order is display order only.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from fintrack.calculators.rounding import ZERO, Number, halve, round_money, to_decimal
from fintrack.models.salary import DeductionKind, DeductionResult, DeductionRule


def apply_deductions(base: Number, rules: Sequence[DeductionRule]) -> list[DeductionResult]:
    """
    Compute each active rule against ``base``.

    Inactive rules are skipped; an empty or all-inactive list yields [].
    """
    base = to_decimal(base)
    results = []
    for rule in rules:
        if not rule.active:
            continue
        raw = base * rule.rate if rule.kind == DeductionKind.PERCENTAGE else rule.rate
        monthly = round_money(raw)
        results.append(DeductionResult(
            id=rule.id,
            name=rule.name,
            kind=rule.kind,
            rate=rule.rate,
            monthly_amount=monthly,
            fortnightly_amount=halve(monthly),
        ))
    return results


def total_deductions(results: Iterable[DeductionResult]) -> Decimal:
    """Sum of already-rounded monthly amounts."""
    return sum((result.monthly_amount for result in results), ZERO)
