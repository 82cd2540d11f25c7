"""
SJ Financial Tracker - Calculation Core

Pure calculation engine behind the personal finance tracker:
salary breakdowns, stock vesting breakdowns, year-end bonus,
and multi-currency expense aggregation.

DESIGN PRINCIPLES:
1. Calculators are pure functions over immutable value types
2. Missing data degrades to flags and fallbacks, never exceptions
3. Salary history is a snapshot, stock tax policy is always-current
4. Rates are fetched before calculation, never during it
"""

__version__ = "1.0.0"
__author__ = "SJ Financial Tracker Team"
