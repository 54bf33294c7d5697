"""Custom exceptions."""

from lighthouse_task.errors.exceptions import (
    AssertionsFailedError,
    LighthouseNotFoundError,
    LighthouseRunError,
    MalformedAssertionError,
    TaskError,
    ValidationError,
)

__all__ = [
    "TaskError",
    "ValidationError",
    "MalformedAssertionError",
    "AssertionsFailedError",
    "LighthouseNotFoundError",
    "LighthouseRunError",
]
