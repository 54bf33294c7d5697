"""Lighthouse runner - locates the CLI, runs it and reads back its reports."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from lighthouse_task.errors.exceptions import LighthouseNotFoundError, LighthouseRunError
from lighthouse_task.schemas.report import LighthouseResult
from lighthouse_task.services.sanitizers import sanitize_chrome_flags, sanitize_cli_args

logger = logging.getLogger(__name__)

# Lighthouse 10 moved its CLI entry point from lighthouse-cli/ to cli/
LIGHTHOUSE_ENTRYPOINTS = (
    Path("lighthouse") / "cli" / "index.js",
    Path("lighthouse") / "lighthouse-cli" / "index.js",
)


@dataclass(frozen=True)
class ReportPaths:
    """Files Lighthouse writes for a given output base path."""

    base: Path

    @classmethod
    def for_report(cls, directory: Path, name: str) -> ReportPaths:
        return cls(base=directory / name)

    @property
    def name(self) -> str:
        return self.base.name

    @property
    def html(self) -> Path:
        return self.base.with_name(f"{self.name}.report.html")

    @property
    def json(self) -> Path:
        return self.base.with_name(f"{self.name}.report.json")

    @property
    def meta(self) -> Path:
        return self.base.with_name(f"{self.name}.meta.json")


def find_local_lighthouse(directory: Path) -> Path | None:
    """Find a Lighthouse CLI script installed under ``directory/node_modules``."""
    node_modules = directory / "node_modules"
    for entrypoint in LIGHTHOUSE_ENTRYPOINTS:
        exec_path = node_modules / entrypoint
        if exec_path.is_file():
            return exec_path
    return None


def find_global_lighthouse() -> str | None:
    """Find a globally installed ``lighthouse`` executable in PATH."""
    return shutil.which("lighthouse")


def _which_or_raise(tool: str) -> str:
    exec_path = shutil.which(tool)
    if exec_path is None:
        raise LighthouseNotFoundError(f"{tool} not found in PATH. Node.js and npm are required")
    return exec_path


def install_lighthouse(prefix: Path, timeout: float = 300.0) -> Path | None:
    """
    Install Lighthouse with npm under ``prefix`` and return its CLI script.

    Returns None if npm finished but the CLI script is still missing.

    Raises:
        LighthouseNotFoundError: If npm is missing or the install timed out.
    """
    existing = find_local_lighthouse(prefix)
    if existing:
        return existing

    npm = _which_or_raise("npm")
    prefix.mkdir(parents=True, exist_ok=True)
    logger.info(f"Existing Lighthouse installation not found, installing with npm at: {prefix}")

    try:
        result = subprocess.run(
            [npm, "install", "lighthouse", "--prefix", str(prefix), "--loglevel=error"],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise LighthouseNotFoundError(f"Installing Lighthouse with npm timed out after {e.timeout}s")
    except OSError as e:
        raise LighthouseNotFoundError(f"OS error installing Lighthouse with npm: {e}")

    logger.info(f"Installing Lighthouse with npm returned: {result.returncode}")
    if result.returncode != 0 and result.stderr:
        logger.warning(result.stderr.strip())

    return find_local_lighthouse(prefix)


def resolve_lighthouse_command(
    working_directory: Path,
    install_directory: Path,
    npm_timeout: float = 300.0,
) -> list[str]:
    """
    Resolve the command prefix used to invoke Lighthouse.

    Looks for a local install in the working directory, then a global
    install, then installs it with npm into ``install_directory``.

    Raises:
        LighthouseNotFoundError: If no installation could be found or made.
    """
    exec_path = find_local_lighthouse(working_directory)
    if exec_path:
        logger.info(f"Locally installed Lighthouse found at {exec_path}")
        return [_which_or_raise("node"), str(exec_path)]

    global_path = find_global_lighthouse()
    if global_path:
        logger.info(f"Globally installed Lighthouse found at {global_path}")
        return [global_path]

    exec_path = install_lighthouse(install_directory, timeout=npm_timeout)
    if exec_path:
        logger.info(f"Locally installed Lighthouse found at {exec_path}")
        return [_which_or_raise("node"), str(exec_path)]

    raise LighthouseNotFoundError('npm package "lighthouse" is not installed globally or locally')


def build_lighthouse_args(
    url: str,
    output_base: Path,
    cli_args: str = "",
    chrome_flags: str = "",
) -> list[str]:
    """Build the Lighthouse arguments: URL, user arguments, then task-owned outputs."""
    return [
        url,
        *sanitize_cli_args(cli_args),
        "--output=html",
        "--output=json",
        f"--output-path={output_base}",
        f"--chrome-flags={' '.join(sanitize_chrome_flags(chrome_flags))}",
    ]


def run_lighthouse(command: list[str], paths: ReportPaths, timeout: float = 600.0) -> int:
    """
    Run Lighthouse and check that both reports were written.

    A non-zero exit code alone is not a failure; Lighthouse can exit with an
    error after writing usable reports.

    Returns:
        The Lighthouse exit code.

    Raises:
        LighthouseRunError: On timeout, OS error or missing report files.
    """
    logger.info("Executing Lighthouse...")
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise LighthouseRunError(f"Lighthouse timed out after {e.timeout}s")
    except OSError as e:
        raise LighthouseRunError(f"OS error running Lighthouse: {e}")

    if result.stdout:
        logger.info(result.stdout.strip())
    if result.returncode != 0 and result.stderr:
        logger.warning(result.stderr.strip())

    if not paths.json.exists():
        raise LighthouseRunError(
            f"Lighthouse did not generate a JSON output. Error code: {result.returncode}"
        )
    if not paths.html.exists():
        raise LighthouseRunError(
            f"Lighthouse did not generate a HTML output. Error code: {result.returncode}"
        )

    logger.info(f"Lighthouse returned code: {result.returncode}")
    return result.returncode


def read_report(path: Path) -> LighthouseResult:
    """
    Read a Lighthouse JSON report.

    Raises:
        LighthouseRunError: If the file is missing or not a valid report.
    """
    try:
        with open(path, encoding="utf-8") as f:
            lh_json = json.load(f)
        return LighthouseResult.model_validate(lh_json or {})
    except FileNotFoundError:
        raise LighthouseRunError(f"Lighthouse output file not found: {path}")
    except json.JSONDecodeError as e:
        raise LighthouseRunError(f"Failed to parse Lighthouse output: {e}")
    except PydanticValidationError as e:
        raise LighthouseRunError(f"Unexpected Lighthouse output format: {e}")
    except OSError as e:
        raise LighthouseRunError(f"OS error reading Lighthouse output: {e}")
