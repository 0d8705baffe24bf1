"""
Validation Models

Results of the configuration checks. None of these block a plan run:
the engine always produces an answer. They exist so the user can see
which parts of their configuration the engine will quietly ignore.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single configuration issue found."""

    field: str = Field(
        ...,
        description="Configuration field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing_anchor', 'no_destination_pot')"
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
    """Outcome of checking one PlanConfiguration."""

    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All issues found"
    )

    @property
    def is_clean(self) -> bool:
        return not self.issues

    @property
    def warnings(self) -> list[str]:
        return [i.message for i in self.issues if i.severity == "warning"]

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)
