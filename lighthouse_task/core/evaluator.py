"""Audit assertion evaluator - checks assertion blocks against a Lighthouse report."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from lighthouse_task.core.assertions import parse_assertion
from lighthouse_task.errors.exceptions import MalformedAssertionError
from lighthouse_task.schemas.assertion import (
    Assertion,
    AssertionErrorKind,
    AssertionIssue,
    EvaluationResult,
    Operator,
    format_score,
)
from lighthouse_task.schemas.report import Audit, LighthouseResult

logger = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")


def _coerce_report(report: LighthouseResult | Mapping[str, Any] | None) -> LighthouseResult:
    if report is None:
        return LighthouseResult()
    if isinstance(report, LighthouseResult):
        return report
    return LighthouseResult.model_validate(report)


def _split_lines(assertions: str | None) -> list[tuple[int, str]]:
    """Return ``(line_number, text)`` for every non-blank line, in order."""
    lines = _LINE_SPLIT.split(assertions or "")
    return [
        (number, line.strip())
        for number, line in enumerate(lines, start=1)
        if line.strip()
    ]


def _failure_message(assertion: Assertion, audit: Audit, actual: float) -> str:
    expected = format_score(assertion.score)
    got = format_score(actual)
    name = assertion.audit_name

    if assertion.operator == Operator.EQUAL:
        message = f'Expected {expected} for audit "{name}" score but got {got}'
    elif assertion.operator == Operator.GREATER:
        message = f'Expected a score greater than {expected} for audit "{name}" but got {got}'
    else:
        message = f'Expected a score lower than {expected} for audit "{name}" but got {got}'

    if audit.display_value:
        message += f", friendly display value: {audit.display_value}"
    return message


def _holds(operator: Operator, actual: float, expected: float) -> bool:
    if operator == Operator.EQUAL:
        return actual == expected
    if operator == Operator.GREATER:
        return actual >= expected
    return actual <= expected


class AuditEvaluator:
    """Evaluates newline-separated audit assertions against a report."""

    @staticmethod
    def check(
        report: LighthouseResult | Mapping[str, Any] | None,
        assertions: str | None,
    ) -> EvaluationResult:
        """
        Evaluate every assertion line and collect all issues.

        Lines are trimmed and blank lines dropped. A malformed line, an
        unknown audit or a failed comparison is recorded and evaluation
        carries on with the next line. Audits without a score are skipped.
        """
        lh_report = _coerce_report(report)
        result = EvaluationResult()

        for line_number, text in _split_lines(assertions):
            try:
                assertion = parse_assertion(text)
            except MalformedAssertionError as e:
                result.errors.append(
                    AssertionIssue(
                        kind=AssertionErrorKind.MALFORMED,
                        line=line_number,
                        assertion=text,
                        message=str(e),
                    )
                )
                continue

            audit = lh_report.audits.get(assertion.audit_name)
            if audit is None:
                result.errors.append(
                    AssertionIssue(
                        kind=AssertionErrorKind.AUDIT_NOT_FOUND,
                        line=line_number,
                        assertion=text,
                        message=f'Could not find audit "{assertion.audit_name}"',
                    )
                )
                continue

            # Informative or not-applicable audits
            if audit.score is None:
                logger.debug(f'Skipping audit "{assertion.audit_name}" without a score')
                result.skipped_count += 1
                continue

            if _holds(assertion.operator, audit.score, assertion.score):
                result.success_count += 1
            else:
                result.errors.append(
                    AssertionIssue(
                        kind=AssertionErrorKind.ASSERTION_FAILED,
                        line=line_number,
                        assertion=text,
                        message=_failure_message(assertion, audit, audit.score),
                    )
                )

        return result

    @classmethod
    def evaluate(
        cls,
        report: LighthouseResult | Mapping[str, Any] | None,
        assertions: str | None,
    ) -> int:
        """
        Evaluate assertions and return how many of them were satisfied.

        Raises:
            AssertionsFailedError: If any line was malformed, referenced an
                unknown audit or did not hold. The message lists every issue.
        """
        return cls.check(report, assertions).unwrap()


def evaluate_assertions(
    report: LighthouseResult | Mapping[str, Any] | None, assertions: str | None
) -> int:
    """Shortcut for :meth:`AuditEvaluator.evaluate`."""
    return AuditEvaluator.evaluate(report, assertions)
