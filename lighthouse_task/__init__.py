"""Lighthouse pipeline task - runs Lighthouse and checks audit score assertions."""

from lighthouse_task.core.assertions import parse_assertion
from lighthouse_task.core.evaluator import AuditEvaluator, evaluate_assertions
from lighthouse_task.core.task import LighthouseTask
from lighthouse_task.schemas.assertion import Assertion, EvaluationResult, Operator
from lighthouse_task.schemas.common import TaskResult
from lighthouse_task.schemas.report import Audit, LighthouseResult

__all__ = [
    "parse_assertion",
    "evaluate_assertions",
    "AuditEvaluator",
    "LighthouseTask",
    "Assertion",
    "EvaluationResult",
    "Operator",
    "TaskResult",
    "Audit",
    "LighthouseResult",
]
