"""Custom exception classes for the Lighthouse task."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lighthouse_task.schemas.assertion import EvaluationResult


class TaskError(Exception):
    """Base exception for task failures."""

    pass


class ValidationError(TaskError):
    """Exception for input validation failures."""

    pass


class MalformedAssertionError(ValidationError):
    """Raised when an audit assertion line does not match the grammar."""

    pass


class AssertionsFailedError(TaskError):
    """Raised when one or more audit assertions did not hold.

    The message is every issue message joined by newlines, in line order.
    """

    def __init__(self, result: EvaluationResult) -> None:
        super().__init__(result.message)
        self.result = result

    @property
    def errors(self):
        return self.result.errors


class LighthouseNotFoundError(TaskError):
    """Raised when Lighthouse is not installed and could not be installed."""

    pass


class LighthouseRunError(TaskError):
    """Raised when Lighthouse did not produce the expected reports."""

    pass
