"""
Validation Models

Results of the settings validators. Validation reports problems for
the user to fix; it never corrects values silently.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue (e.g., 'rent_tax_brackets[2].max')"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'gap', 'overlap', 'out_of_range')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """Outcome of validating one settings object."""

    subject: str = Field(
        ...,
        description="What was validated (e.g., 'rent_tax_brackets')"
    )
    validated_at: datetime = Field(
        default_factory=datetime.utcnow
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def is_valid(self) -> bool:
        """Valid when no error-level issue was found; warnings don't block."""
        return not self.has_errors

    @property
    def warnings(self) -> list[str]:
        """Messages of warning-level issues."""
        return [issue.message for issue in self.issues if issue.severity == "warning"]
