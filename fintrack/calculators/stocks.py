"""
Stock Period Breakdown Calculator

gross -> flat US tax -> broker fee -> flat local tax -> other deductions
-> net, all in USD.

Every reported figure is rounded to cents, but net and the over-deduction
warning are computed from the unrounded intermediate figures.
"""

from collections.abc import Sequence
from typing import Optional

from fintrack.calculators.deductions import apply_deductions, total_deductions
from fintrack.calculators.rounding import ZERO, round_money
from fintrack.logging_setup import get_logger
from fintrack.models.stock import (
    DEFAULT_STOCKS_SETTINGS,
    StockBreakdown,
    StockDeductionResult,
    StockPeriod,
    StocksSettings,
    StockYearTotals,
)


logger = get_logger(__name__)

OVER_DEDUCTION_WARNING = "Taxes and costs exceed gross amount"


def calc_period_breakdown(
    period: StockPeriod,
    settings: Optional[StocksSettings] = None,
) -> StockBreakdown:
    """
    Break one vesting period down from gross to net.

    Missing settings fall back to the all-zero defaults.
    """
    effective = settings if settings is not None else DEFAULT_STOCKS_SETTINGS

    gross = period.quantity * period.stock_price_usd
    us_tax = gross * effective.us_tax_percentage
    broker_cost = effective.broker_cost_usd
    after_us_tax = gross - us_tax - broker_cost

    # A negative base must not produce a negative tax
    local_tax = max(ZERO, after_us_tax) * effective.local_tax_percentage

    other = apply_deductions(gross, effective.other_deductions)
    other_total = total_deductions(other)

    total = us_tax + local_tax + broker_cost + other_total
    net = max(ZERO, gross - total)

    warning = None
    if total > gross:
        warning = OVER_DEDUCTION_WARNING
        logger.warning(
            "stock_deductions_exceed_gross",
            period_id=str(period.id),
            gross_usd=str(round_money(gross)),
            total_deductions_usd=str(round_money(total)),
        )

    return StockBreakdown(
        gross_usd=round_money(gross),
        us_tax_usd=round_money(us_tax),
        after_us_tax_usd=round_money(after_us_tax),
        local_tax_usd=round_money(local_tax),
        broker_cost_usd=round_money(broker_cost),
        other_deductions=[
            StockDeductionResult(
                id=result.id,
                name=result.name,
                kind=result.kind,
                rate=result.rate,
                amount=result.monthly_amount,
            )
            for result in other
        ],
        other_deductions_usd=round_money(other_total),
        net_usd=round_money(net),
        warning=warning,
    )


def calc_year_totals(
    periods: Sequence[StockPeriod],
    settings: Optional[StocksSettings] = None,
) -> StockYearTotals:
    """Sum the rounded breakdowns of every period in a year."""
    if not periods:
        return StockYearTotals()

    breakdowns = [calc_period_breakdown(period, settings) for period in periods]

    return StockYearTotals(
        gross_usd=round_money(sum((b.gross_usd for b in breakdowns), ZERO)),
        us_tax_usd=round_money(sum((b.us_tax_usd for b in breakdowns), ZERO)),
        local_tax_usd=round_money(sum((b.local_tax_usd for b in breakdowns), ZERO)),
        broker_cost_usd=round_money(sum((b.broker_cost_usd for b in breakdowns), ZERO)),
        other_deductions_usd=round_money(sum((b.other_deductions_usd for b in breakdowns), ZERO)),
        net_usd=round_money(sum((b.net_usd for b in breakdowns), ZERO)),
        period_count=len(periods),
    )
