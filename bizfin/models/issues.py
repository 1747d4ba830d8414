"""
Validation Issue Models

Problems found while turning raw backend rows into typed models.
Parsing NEVER silently drops a row: every skip is reported here.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    record_index: Optional[int] = Field(
        default=None,
        description="Position of the row in the input, when parsing in bulk"
    )
    record_id: Optional[str] = Field(
        default=None,
        description="Identifier of the row if it had one"
    )
    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'custom_interval_missing')"
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


class ParseReport(BaseModel, Generic[T]):
    """
    Result of parsing a batch of rows.

    records holds the rows that made it through; issues holds everything
    found along the way, including warnings on rows that were kept.
    """

    records: list[T] = Field(default_factory=list)
    issues: list[ValidationIssue] = Field(default_factory=list)
    total_rows: int = Field(default=0, ge=0)

    @property
    def skipped_count(self) -> int:
        return self.total_rows - len(self.records)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    def issues_for(self, record_index: int) -> list[ValidationIssue]:
        return [i for i in self.issues if i.record_index == record_index]


def issue_from_error(error: dict[str, Any], **context: Any) -> ValidationIssue:
    """Build a ValidationIssue from one entry of pydantic's ValidationError.errors()."""
    loc = ".".join(str(part) for part in error.get("loc", ())) or "record"
    return ValidationIssue(
        field=loc,
        issue_type=error.get("type", "invalid"),
        message=error.get("msg", "Invalid value"),
        severity="error",
        **context,
    )
