"""
Expense Templates

Turns a reusable template into a concrete, unpaid expense for a given
date. Blank template amounts become zero; no exchange rate is fixed.
"""

import calendar
from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Optional

from fintrack.calculators.periods import resolve_payment_period
from fintrack.models.expense import Expense, ExpenseAmount, ExpenseTemplate, PaymentPeriod


def template_due_date(template: ExpenseTemplate, base_date: date) -> date:
    """
    Due date of ``template`` for the month of ``base_date``.

    A recurring template with a recurrence day falls due on that day of
    the month, clamped to the month's last day (31 in February -> 28/29).
    Anything else falls due on ``base_date`` itself.
    """
    if not (template.is_recurring and template.recurrence_day):
        return base_date
    last_day = calendar.monthrange(base_date.year, base_date.month)[1]
    return base_date.replace(day=min(template.recurrence_day, last_day))


def materialize_template(
    template: ExpenseTemplate,
    base_date: date,
    periods: Optional[Sequence[PaymentPeriod]] = None,
) -> Expense:
    """Build the expense ``template`` describes for ``base_date``."""
    due_date = template_due_date(template, base_date)
    amounts = [
        ExpenseAmount(currency=item.currency, amount=item.amount or Decimal("0"))
        for item in template.amounts
    ]
    return Expense(
        name=template.name,
        due_date=due_date,
        amounts=amounts,
        is_paid=False,
        payment_period=resolve_payment_period(due_date, periods),
        template_id=template.id,
    )


def materialize_templates(
    templates: Sequence[ExpenseTemplate],
    base_date: date,
    periods: Optional[Sequence[PaymentPeriod]] = None,
) -> list[Expense]:
    """One expense per template, in input order."""
    return [materialize_template(template, base_date, periods) for template in templates]
