"""Audit assertion parser - turns ``performance > 0.9`` into an Assertion."""

import re

from lighthouse_task.errors.exceptions import MalformedAssertionError
from lighthouse_task.schemas.assertion import Assertion, Operator

ASSERTION_PATTERN = re.compile(
    r"([a-z-]+)\s*([=<>])\s*([0-9]+(?:\.[0-9]+)?)", re.IGNORECASE | re.ASCII
)


def parse_assertion(text: str | None) -> Assertion:
    """
    Parse a single assertion line.

    The audit name keeps the casing it was written with. The whole
    (stripped) line must match; partial matches are rejected.

    Raises:
        MalformedAssertionError: If the line is empty or does not match.
    """
    if text is None or not text.strip():
        raise MalformedAssertionError("Audit assertion string is null or empty.")

    text = text.strip()
    match = ASSERTION_PATTERN.fullmatch(text)
    if match is None:
        raise MalformedAssertionError(f'Audit assertion "{text}" is malformed.')

    audit_name, operator, score = match.groups()
    return Assertion(audit_name=audit_name, operator=Operator(operator), score=float(score))
