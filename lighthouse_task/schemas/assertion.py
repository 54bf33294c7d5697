"""Audit assertion schemas."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from lighthouse_task.errors.exceptions import AssertionsFailedError


class Operator(str, Enum):
    """Comparison operator of an audit assertion."""

    EQUAL = "="
    GREATER = ">"  # Non-strict: passes when the score equals the bound
    LOWER = "<"  # Non-strict: passes when the score equals the bound


class AssertionErrorKind(str, Enum):
    MALFORMED = "malformed_assertion"
    AUDIT_NOT_FOUND = "audit_not_found"
    ASSERTION_FAILED = "assertion_failed"


def format_score(value: float) -> str:
    """Render a score without a trailing ``.0`` for whole numbers."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class Assertion(BaseModel):
    """A parsed ``<audit-name> <operator> <score>`` assertion."""

    model_config = ConfigDict(frozen=True)

    audit_name: str
    operator: Operator
    score: float = Field(ge=0)

    def __str__(self) -> str:
        return f"{self.audit_name} {self.operator.value} {format_score(self.score)}"


class AssertionIssue(BaseModel):
    """One failed, unknown or malformed assertion line."""

    kind: AssertionErrorKind
    line: int
    assertion: str
    message: str


class EvaluationResult(BaseModel):
    """Aggregated outcome of evaluating an assertion block."""

    success_count: int = 0
    skipped_count: int = 0
    errors: list[AssertionIssue] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        return "\n".join(issue.message for issue in self.errors)

    def unwrap(self) -> int:
        """
        Return the success count.

        Raises:
            AssertionsFailedError: If any assertion line produced an issue.
        """
        if self.errors:
            raise AssertionsFailedError(self)
        return self.success_count
