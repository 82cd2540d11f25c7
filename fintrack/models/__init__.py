"""
Data Models Package

This package contains all Pydantic models used by the calculation core.
All data flowing into and out of the calculators conforms to these schemas.
"""

from fintrack.models.bonus import (
    AguinaldoMonth,
    AguinaldoSummary,
    SalaryPayment,
)
from fintrack.models.dashboard import (
    CurrencyTotal,
    DashboardStats,
    ExchangeRateDisplay,
    MonthComparison,
    MonthlyTrend,
    PaidVsPending,
)
from fintrack.models.expense import (
    DEFAULT_PAYMENT_PERIODS,
    CurrencyTotals,
    ExchangeRateTable,
    Expense,
    ExpenseAggregate,
    ExpenseAmount,
    ExpenseTemplate,
    GrandTotal,
    PaymentPeriod,
    RateSource,
    TemplateAmount,
    rate_key,
)
from fintrack.models.salary import (
    DEFAULT_RENT_TAX_BRACKETS,
    DEFAULT_SALARY_DEDUCTIONS,
    FOREIGN_CURRENCY,
    LOCAL_CURRENCY,
    BracketResult,
    DeductionKind,
    DeductionResult,
    DeductionRule,
    ProgressiveTaxResult,
    RentTaxResult,
    SalaryBreakdown,
    SalaryRecord,
    SalarySettings,
    TaxBracket,
    seed_salary_record,
)
from fintrack.models.stock import (
    DEFAULT_STOCKS_SETTINGS,
    StockBreakdown,
    StockDeductionResult,
    StockDeductionRule,
    StockPeriod,
    StocksSettings,
    StockYearTotals,
)
from fintrack.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Salary models
    "DEFAULT_RENT_TAX_BRACKETS",
    "DEFAULT_SALARY_DEDUCTIONS",
    "FOREIGN_CURRENCY",
    "LOCAL_CURRENCY",
    "BracketResult",
    "DeductionKind",
    "DeductionResult",
    "DeductionRule",
    "ProgressiveTaxResult",
    "RentTaxResult",
    "SalaryBreakdown",
    "SalaryRecord",
    "SalarySettings",
    "TaxBracket",
    "seed_salary_record",
    # Stock models
    "DEFAULT_STOCKS_SETTINGS",
    "StockBreakdown",
    "StockDeductionResult",
    "StockDeductionRule",
    "StockPeriod",
    "StocksSettings",
    "StockYearTotals",
    # Expense models
    "DEFAULT_PAYMENT_PERIODS",
    "CurrencyTotals",
    "ExchangeRateTable",
    "Expense",
    "ExpenseAggregate",
    "ExpenseAmount",
    "ExpenseTemplate",
    "GrandTotal",
    "PaymentPeriod",
    "RateSource",
    "TemplateAmount",
    "rate_key",
    # Dashboard models
    "CurrencyTotal",
    "DashboardStats",
    "ExchangeRateDisplay",
    "MonthComparison",
    "MonthlyTrend",
    "PaidVsPending",
    # Bonus models
    "AguinaldoMonth",
    "AguinaldoSummary",
    "SalaryPayment",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
