"""Common schemas and enums shared across the task."""

from enum import Enum


class TaskResult(str, Enum):
    """Result reported back to the pipeline agent."""

    SUCCEEDED = "Succeeded"
    SUCCEEDED_WITH_ISSUES = "SucceededWithIssues"
    FAILED = "Failed"
