"""
Multi-Currency Aggregator

Sums heterogeneous-currency expense amounts per currency and converts
everything into each observed currency to produce grand totals.

Conversion order for one amount into a target currency:
1. Same currency -> identity.
2. Rate fixed on the amount -> amount * rate (always wins).
3. Rate table entry "{FROM}_{TO}" -> amount * rate.
4. Otherwise unresolvable: the amount is left out of that target's
   total and the total is flagged incomplete.

The currency set is derived from the data on every call.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Optional

from fintrack.calculators.rounding import ZERO
from fintrack.logging_setup import get_logger
from fintrack.models.expense import (
    CurrencyTotals,
    ExchangeRateTable,
    Expense,
    ExpenseAggregate,
    ExpenseAmount,
    GrandTotal,
    rate_key,
)


logger = get_logger(__name__)


def iter_amounts(expenses: Iterable[Expense]) -> Iterable[ExpenseAmount]:
    """Every nested amount of ``expenses``, in order."""
    for expense in expenses:
        yield from expense.amounts


def observed_currencies(expenses: Iterable[Expense]) -> list[str]:
    """Currencies present in ``expenses``, in first-seen order."""
    seen: dict[str, None] = {}
    for amount in iter_amounts(expenses):
        seen.setdefault(amount.currency, None)
    return list(seen)


def sum_by_currency(amounts: Iterable[ExpenseAmount]) -> dict[str, CurrencyTotals]:
    """
    Per-currency total, paid and pending sums.

    Paid/pending split follows each amount's own ``paid`` flag. A currency
    only appears once an amount in it has been seen.
    """
    buckets: dict[str, dict] = {}

    for amount in amounts:
        bucket = buckets.setdefault(amount.currency, {
            "total": ZERO, "paid": ZERO, "pending": ZERO,
            "count": 0, "paid_count": 0, "pending_count": 0,
        })
        bucket["total"] += amount.amount
        bucket["count"] += 1
        if amount.paid:
            bucket["paid"] += amount.amount
            bucket["paid_count"] += 1
        else:
            bucket["pending"] += amount.amount
            bucket["pending_count"] += 1

    return {
        currency: CurrencyTotals(currency=currency, **bucket)
        for currency, bucket in buckets.items()
    }


def convert_amount(
    amount: ExpenseAmount,
    target: str,
    rate_table: Optional[ExchangeRateTable] = None,
) -> Optional[Decimal]:
    """Convert ``amount`` into ``target``; None when no rate resolves it."""
    if amount.currency == target:
        return amount.amount
    if amount.exchange_rate is not None:
        return amount.amount * amount.exchange_rate
    if rate_table:
        rate = rate_table.get(rate_key(amount.currency, target))
        if rate is not None:
            return amount.amount * rate
    return None


def calc_grand_total(
    amounts: Sequence[ExpenseAmount],
    target: str,
    rate_table: Optional[ExchangeRateTable] = None,
) -> GrandTotal:
    """Convert every amount into ``target`` and sum what resolves."""
    total = ZERO
    missing: list[str] = []

    for amount in amounts:
        converted = convert_amount(amount, target, rate_table)
        if converted is None:
            pair = rate_key(amount.currency, target)
            if pair not in missing:
                missing.append(pair)
            continue
        total += converted

    if missing:
        logger.warning(
            "exchange_rate_missing",
            target_currency=target,
            missing_pairs=missing,
        )

    return GrandTotal(
        currency=target,
        total=total,
        has_all_rates=not missing,
        missing_pairs=missing,
    )


def aggregate_expenses(
    expenses: Sequence[Expense],
    rate_table: Optional[ExchangeRateTable] = None,
) -> ExpenseAggregate:
    """
    Per-currency totals and, for every observed currency, a grand total.

    Never raises for missing rates; incomplete grand totals carry
    ``has_all_rates=False``.
    """
    amounts = list(iter_amounts(expenses))
    per_currency = sum_by_currency(amounts)

    grand_totals = {
        currency: calc_grand_total(amounts, currency, rate_table)
        for currency in per_currency
    }

    logger.debug(
        "expenses_aggregated",
        expense_count=len(expenses),
        currencies=list(per_currency),
    )

    return ExpenseAggregate(
        per_currency_totals=per_currency,
        grand_totals=grand_totals,
    )
