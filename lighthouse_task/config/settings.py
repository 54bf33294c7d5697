"""Centralized configuration loading."""

import os
import time
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from lighthouse_task.errors.exceptions import ValidationError
from lighthouse_task.services.pipeline import get_bool_input, get_input, get_variable

TASK_TEMP_FOLDER = "__lighthouse"


@dataclass(frozen=True)
class TaskConfig:
    """Task configuration, read from the pipeline inputs and variables."""

    # Inputs
    url: str
    cli_args: str
    chrome_flags: str
    evaluate_audit_rules: bool
    audit_rules: str

    # Directories
    working_directory: Path
    temp_directory: Path

    # Report naming
    report_suffix: str

    # Timeouts
    lighthouse_timeout: float
    npm_install_timeout: float


def _get_optional_env(key: str, default: str) -> str:
    """Get optional environment variable with default."""
    value = os.getenv(key)
    return value.strip() if value else default


def _get_working_directory() -> Path:
    source_directory = get_variable("build.sourceDirectory") or get_variable(
        "build.sourcesDirectory"
    )
    working_directory = get_input("cwd") or source_directory
    if not working_directory:
        raise ValidationError("Working directory is not defined")
    return Path(working_directory)


def _get_temp_directory() -> Path:
    agent_temp = get_variable("agent.tempDirectory")
    if not agent_temp:
        raise ValidationError("Agent temporary directory is not defined")
    return Path(agent_temp) / TASK_TEMP_FOLDER


def load_config() -> TaskConfig:
    """Load and validate configuration from environment."""
    load_dotenv()

    return TaskConfig(
        url=get_input("url", required=True) or "",
        cli_args=get_input("args") or "",
        chrome_flags=get_input("chromeFlags") or "",
        evaluate_audit_rules=get_bool_input("evaluateAuditRules"),
        audit_rules=get_input("auditRulesStr") or "",
        working_directory=_get_working_directory(),
        temp_directory=_get_temp_directory(),
        report_suffix=_get_optional_env(
            "LIGHTHOUSE_REPORT_SUFFIX", str(int(time.time() * 1000))
        ),
        lighthouse_timeout=float(_get_optional_env("LIGHTHOUSE_TIMEOUT", "600")),
        npm_install_timeout=float(_get_optional_env("LIGHTHOUSE_NPM_TIMEOUT", "300")),
    )


# Singleton config instance (lazy loaded)
_config: TaskConfig | None = None


def get_config() -> TaskConfig:
    """Get the configuration singleton."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset config singleton (useful for testing)."""
    global _config
    _config = None
