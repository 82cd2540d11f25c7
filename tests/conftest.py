"""Shared fixtures for the calculator tests."""

from datetime import date
from decimal import Decimal

import pytest

from fintrack.models import DeductionKind, SalaryRecord

from tests.builders import make_rule


@pytest.fixture
def crc_record() -> SalaryRecord:
    """A CRC salary with one percentage and one fixed deduction."""
    return SalaryRecord(
        effective_date=date(2025, 1, 1),
        gross_amount=Decimal("1000000"),
        currency="CRC",
        deductions=[
            make_rule("ccss", "0.1083"),
            make_rule("provision", "500", kind=DeductionKind.FIXED),
        ],
    )
