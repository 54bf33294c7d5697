"""Pipeline task orchestration: run Lighthouse, attach reports, evaluate assertions."""

from __future__ import annotations

import logging

from lighthouse_task.config.settings import TaskConfig, get_config
from lighthouse_task.core.evaluator import AuditEvaluator
from lighthouse_task.core.lighthouse import (
    ReportPaths,
    build_lighthouse_args,
    read_report,
    resolve_lighthouse_command,
    run_lighthouse,
)
from lighthouse_task.errors.exceptions import LighthouseRunError, TaskError
from lighthouse_task.schemas.common import TaskResult
from lighthouse_task.schemas.report import LighthouseResult, ReportMeta
from lighthouse_task.services import pipeline
from lighthouse_task.services.sanitizers import make_filename_from_url

logger = logging.getLogger(__name__)

HTML_ATTACHMENT_TYPE = "lighthouse_html_result"
META_ATTACHMENT_TYPE = "lighthouse_meta_result"


class LighthouseTask:
    """
    Runs Lighthouse for the configured URL and publishes the result.

    The HTML report is attached whenever Lighthouse produced one, even when
    a later step such as assertion evaluation failed.
    """

    def __init__(self, config: TaskConfig | None = None) -> None:
        self.config = config
        self.paths: ReportPaths | None = None
        self.report: LighthouseResult | None = None
        self.success_count: int | None = None

    def run(self) -> TaskResult:
        result = TaskResult.SUCCEEDED
        try:
            self._run()
        except TaskError as e:
            logger.error(f"Lighthouse task failed: {e}")
            result = TaskResult.FAILED
            pipeline.set_result(result, str(e))
        except Exception as e:
            logger.exception("Unexpected error in Lighthouse task")
            result = TaskResult.FAILED
            pipeline.set_result(result, f"Unexpected error: {e}")
        finally:
            if self.paths is not None and self.paths.html.exists():
                _add_attachments(self.paths)
        return result

    def _run(self) -> None:
        config = self.config or get_config()
        self.config = config
        logger.info(f"Lighthouse target URL: {config.url}")
        logger.info(f"Working directory: {config.working_directory}")

        try:
            config.temp_directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LighthouseRunError(
                f"Could not create temporary directory {config.temp_directory}: {e}"
            )
        logger.info(f"Temporary directory: {config.temp_directory}")

        hostname = make_filename_from_url(config.url)
        paths = ReportPaths.for_report(config.temp_directory, f"{hostname}-{config.report_suffix}")
        self.paths = paths
        logger.info(f"Lighthouse HTML report will be saved at: {paths.html}")
        logger.info(f"Lighthouse JSON report will be saved at: {paths.json}")

        command = resolve_lighthouse_command(
            config.working_directory,
            config.temp_directory,
            npm_timeout=config.npm_install_timeout,
        )
        command += build_lighthouse_args(
            config.url,
            paths.base,
            cli_args=config.cli_args,
            chrome_flags=config.chrome_flags,
        )

        run_lighthouse(command, paths, timeout=config.lighthouse_timeout)

        self.report = read_report(paths.json)
        _write_meta(paths, tab_name=hostname)

        if config.evaluate_audit_rules:
            self.success_count = AuditEvaluator.evaluate(self.report, config.audit_rules)
            logger.info(f"{self.success_count} audit assertion(s) satisfied")


def _write_meta(paths: ReportPaths, tab_name: str) -> None:
    """Write the sidecar file that names the report tab."""
    meta = ReportMeta(
        tab_name=tab_name,
        report_file_name=paths.html.name,
        meta_file_name=paths.meta.name,
    )
    try:
        paths.meta.write_text(meta.model_dump_json(by_alias=True), encoding="utf-8")
    except OSError as e:
        raise LighthouseRunError(f"Could not write report metadata {paths.meta}: {e}")


def _add_attachments(paths: ReportPaths) -> None:
    logger.info("Adding the report as attachment of this build / release")
    pipeline.add_attachment(HTML_ATTACHMENT_TYPE, paths.html.name, str(paths.html))
    if paths.meta.is_file():
        pipeline.add_attachment(META_ATTACHMENT_TYPE, paths.meta.name, str(paths.meta))
    pipeline.upload_file(str(paths.html))
    if paths.json.is_file():
        pipeline.upload_file(str(paths.json))
