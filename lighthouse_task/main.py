"""CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from lighthouse_task.core.evaluator import AuditEvaluator
from lighthouse_task.core.lighthouse import read_report
from lighthouse_task.core.task import LighthouseTask
from lighthouse_task.errors.exceptions import TaskError, ValidationError
from lighthouse_task.schemas.common import TaskResult

logger = logging.getLogger(__name__)


def _read_assertions(args: argparse.Namespace) -> str:
    if args.assertions_file:
        try:
            return Path(args.assertions_file).read_text(encoding="utf-8")
        except OSError as e:
            raise ValidationError(f"Could not read assertions file: {e}")
    if args.assertions is None:
        raise ValidationError("Either --assertions or --assertions-file is required")
    return args.assertions


def evaluate_command(args: argparse.Namespace) -> int:
    """Evaluate assertions against an existing JSON report and print a summary."""
    report = read_report(Path(args.report))
    result = AuditEvaluator.check(report, _read_assertions(args))

    print(
        json.dumps(
            {
                "status": "success" if result.ok else "failed",
                **result.model_dump(mode="json"),
            },
            indent=2,
        )
    )
    return 0 if result.ok else 1


def run_command(args: argparse.Namespace) -> int:
    """Run the pipeline task with inputs from the agent environment."""
    result = LighthouseTask().run()
    return 0 if result != TaskResult.FAILED else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lighthouse pipeline task")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run Lighthouse as a pipeline task")
    run_parser.set_defaults(func=run_command)

    evaluate_parser = subparsers.add_parser(
        "evaluate", help="Evaluate audit assertions against a Lighthouse JSON report"
    )
    evaluate_parser.add_argument("--report", required=True, help="Path to the JSON report")
    group = evaluate_parser.add_mutually_exclusive_group()
    group.add_argument("--assertions", help="Newline-separated audit assertions")
    group.add_argument("--assertions-file", help="File containing audit assertions")
    evaluate_parser.set_defaults(func=evaluate_command)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch; defaults to running the task."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    load_dotenv()

    func = getattr(args, "func", run_command)
    try:
        code = func(args)
    except TaskError as e:
        print(json.dumps({"status": "failed", "error": str(e)}))
        code = 1
    except Exception as e:
        logger.exception("Unexpected error")
        print(json.dumps({"status": "failed", "error": f"Unexpected error: {str(e)}"}))
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
