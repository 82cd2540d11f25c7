"""
Settings Validation

The calculators assume their inputs were checked before they were saved
(form-level validation) and never re-validate. These checks are that
upstream step for the user-editable settings:

- Rent tax brackets: must tile [0, inf) without gaps or overlaps
- Deduction rules: sane rates, unique ids
- Payment periods: valid, non-overlapping day windows
- Stock settings: percentages within [0, 1], non-negative broker cost

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for the user to correct.
"""

from collections.abc import Sequence
from decimal import Decimal

from fintrack.logging_setup import get_logger
from fintrack.models.expense import PaymentPeriod
from fintrack.models.salary import DeductionKind, DeductionRule, SalarySettings, TaxBracket
from fintrack.models.stock import StocksSettings
from fintrack.models.validation import ValidationIssue, ValidationResult


logger = get_logger(__name__)

ZERO = Decimal("0")
ONE = Decimal("1")


class SettingsValidator:
    """Validates user-editable salary, stock and expense settings."""

    def validate_tax_brackets(self, brackets: Sequence[TaxBracket]) -> ValidationResult:
        """
        Check that brackets, sorted by ``min``, tile [0, inf).

        Checks:
        - At least one bracket
        - First bracket starts at 0
        - Each bracket starts where the previous one ends
        - Only the last bracket is unbounded, and the last one is
        - ``max > min`` and rate within [0, 1]
        """
        issues = []

        if not brackets:
            issues.append(ValidationIssue(
                field="rent_tax_brackets",
                issue_type="missing",
                message="At least one tax bracket is required",
                severity="error",
                suggested_fix="Restore the default bracket table",
            ))
            return self._result("rent_tax_brackets", issues)

        ordered = sorted(brackets, key=lambda b: b.min)

        if ordered[0].min != ZERO:
            issues.append(ValidationIssue(
                field="rent_tax_brackets[0].min",
                issue_type="gap",
                message=f"The first bracket must start at 0, not {ordered[0].min}",
                severity="error",
                suggested_fix="Set the lowest bracket's minimum to 0",
            ))

        for index, bracket in enumerate(ordered):
            field = f"rent_tax_brackets[{index}]"
            is_last = index == len(ordered) - 1

            if not ZERO <= bracket.rate <= ONE:
                issues.append(ValidationIssue(
                    field=f"{field}.rate",
                    issue_type="out_of_range",
                    message=f"Bracket '{bracket.id}' rate {bracket.rate} is outside 0-1",
                    severity="error",
                    suggested_fix="Enter the rate as a decimal fraction (0.10 = 10%)",
                ))

            if bracket.max is None:
                if not is_last:
                    issues.append(ValidationIssue(
                        field=f"{field}.max",
                        issue_type="unbounded",
                        message=f"Only the top bracket may be unbounded; '{bracket.id}' is not the top",
                        severity="error",
                    ))
            elif bracket.max <= bracket.min:
                issues.append(ValidationIssue(
                    field=f"{field}.max",
                    issue_type="invalid_range",
                    message=f"Bracket '{bracket.id}' maximum must be greater than its minimum",
                    severity="error",
                ))
            elif is_last:
                issues.append(ValidationIssue(
                    field=f"{field}.max",
                    issue_type="bounded_top",
                    message=f"Income above {bracket.max} is not covered by any bracket",
                    severity="warning",
                    suggested_fix="Leave the top bracket's maximum empty",
                ))

            if index > 0:
                previous = ordered[index - 1]
                if previous.max is not None and bracket.min > previous.max:
                    issues.append(ValidationIssue(
                        field=f"{field}.min",
                        issue_type="gap",
                        message=f"Gap between {previous.max} and {bracket.min}",
                        severity="error",
                        suggested_fix=f"Start bracket '{bracket.id}' at {previous.max}",
                    ))
                elif previous.max is not None and bracket.min < previous.max:
                    issues.append(ValidationIssue(
                        field=f"{field}.min",
                        issue_type="overlap",
                        message=f"Bracket '{bracket.id}' overlaps '{previous.id}'",
                        severity="error",
                        suggested_fix=f"Start bracket '{bracket.id}' at {previous.max}",
                    ))

        return self._result("rent_tax_brackets", issues)

    def validate_deductions(
        self,
        rules: Sequence[DeductionRule],
        subject: str = "deductions",
    ) -> ValidationResult:
        """Percentage rates within [0, 1], fixed amounts >= 0, unique ids."""
        issues = []
        seen_ids: set[str] = set()

        for index, rule in enumerate(rules):
            field = f"{subject}[{index}]"

            if rule.id and rule.id in seen_ids:
                issues.append(ValidationIssue(
                    field=f"{field}.id",
                    issue_type="duplicate",
                    message=f"Deduction id '{rule.id}' is used more than once",
                    severity="error",
                ))
            seen_ids.add(rule.id)

            if rule.kind == DeductionKind.PERCENTAGE and not ZERO <= rule.rate <= ONE:
                issues.append(ValidationIssue(
                    field=f"{field}.rate",
                    issue_type="out_of_range",
                    message=f"'{rule.name}' percentage {rule.rate} is outside 0-1",
                    severity="error",
                    suggested_fix="Enter the rate as a decimal fraction (0.1083 = 10.83%)",
                ))
            elif rule.kind == DeductionKind.FIXED and rule.rate < ZERO:
                issues.append(ValidationIssue(
                    field=f"{field}.rate",
                    issue_type="negative",
                    message=f"'{rule.name}' amount cannot be negative",
                    severity="error",
                ))

        if rules and not any(rule.active for rule in rules):
            issues.append(ValidationIssue(
                field=subject,
                issue_type="all_inactive",
                message="Every deduction is inactive",
                severity="info",
            ))

        return self._result(subject, issues)

    def validate_salary_settings(self, settings: SalarySettings) -> ValidationResult:
        """Deductions and bracket table of the salary settings together."""
        deductions = self.validate_deductions(settings.deductions)
        issues = list(deductions.issues)
        if settings.rent_tax_brackets:
            issues.extend(self.validate_tax_brackets(settings.rent_tax_brackets).issues)
        return self._result("salary_settings", issues)

    def validate_payment_periods(self, periods: Sequence[PaymentPeriod]) -> ValidationResult:
        """Each period starts no later than it ends; sorted periods never overlap."""
        issues = []

        if not periods:
            issues.append(ValidationIssue(
                field="payment_periods",
                issue_type="missing",
                message="At least one payment period is required",
                severity="error",
            ))
            return self._result("payment_periods", issues)

        ordered = sorted(periods, key=lambda p: p.start_day)
        for index, period in enumerate(ordered):
            if period.start_day > period.end_day:
                issues.append(ValidationIssue(
                    field=f"payment_periods[{period.period}]",
                    issue_type="invalid_range",
                    message=f"Period {period.period} starts after it ends",
                    severity="error",
                    suggested_fix="Make the start day less than or equal to the end day",
                ))
            if index > 0 and period.start_day <= ordered[index - 1].end_day:
                issues.append(ValidationIssue(
                    field=f"payment_periods[{period.period}]",
                    issue_type="overlap",
                    message="Payment periods cannot overlap",
                    severity="error",
                    suggested_fix=f"Start period {period.period} after day {ordered[index - 1].end_day}",
                ))

        return self._result("payment_periods", issues)

    def validate_stocks_settings(self, settings: StocksSettings) -> ValidationResult:
        """Percentages within [0, 1], non-negative broker cost, sane deductions."""
        issues = []

        for name in ("us_tax_percentage", "local_tax_percentage"):
            value = getattr(settings, name)
            if not ZERO <= value <= ONE:
                issues.append(ValidationIssue(
                    field=name,
                    issue_type="out_of_range",
                    message=f"{name} {value} is outside 0-1",
                    severity="error",
                    suggested_fix="Enter the rate as a decimal fraction (0.30 = 30%)",
                ))

        if settings.broker_cost_usd < ZERO:
            issues.append(ValidationIssue(
                field="broker_cost_usd",
                issue_type="negative",
                message="Broker cost cannot be negative",
                severity="error",
            ))

        issues.extend(
            self.validate_deductions(settings.other_deductions, subject="other_deductions").issues
        )
        return self._result("stocks_settings", issues)

    def _result(self, subject: str, issues: list[ValidationIssue]) -> ValidationResult:
        result = ValidationResult(subject=subject, issues=issues)
        if result.has_errors:
            logger.info(
                "settings_validation_failed",
                subject=subject,
                error_count=result.error_count,
            )
        return result
