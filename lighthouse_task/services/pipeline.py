"""Azure Pipelines agent protocol: task inputs, variables and logging commands."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

from lighthouse_task.errors.exceptions import ValidationError
from lighthouse_task.schemas.common import TaskResult

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1", "yes", "on")


def _env_name(name: str) -> str:
    return name.replace(".", "_").replace(" ", "_").upper()


def get_variable(name: str) -> str | None:
    """Get a pipeline variable such as ``agent.tempDirectory``."""
    value = os.getenv(_env_name(name))
    return value.strip() if value and value.strip() else None


def get_input(name: str, required: bool = False) -> str | None:
    """
    Get a task input as exposed by the agent (``INPUT_<NAME>``).

    Raises:
        ValidationError: If the input is required but missing or blank.
    """
    value = os.getenv(f"INPUT_{_env_name(name)}")
    if value is None or not value.strip():
        if required:
            raise ValidationError(f"Input required: {name}")
        return None
    return value.strip()


def get_bool_input(name: str, default: bool = False) -> bool:
    value = get_input(name)
    if value is None:
        return default
    return value.lower() in _TRUE_VALUES


def escape_data(value: str) -> str:
    return value.replace("%", "%AZP25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace("]", "%5D").replace(";", "%3B")


def format_command(command: str, properties: dict[str, str] | None = None, data: str = "") -> str:
    """Format a ``##vso[area.action key=value;]data`` logging command."""
    props = "".join(
        f"{key}={escape_property(str(value))};"
        for key, value in (properties or {}).items()
        if value is not None
    )
    prefix = f"##vso[{command} {props}]" if props else f"##vso[{command}]"
    return prefix + escape_data(data)


def issue_command(
    command: str,
    properties: dict[str, str] | None = None,
    data: str = "",
    stream: TextIO | None = None,
) -> None:
    out = stream or sys.stdout
    out.write(format_command(command, properties, data) + "\n")
    out.flush()


def add_attachment(attachment_type: str, name: str, path: str) -> None:
    """Attach a file to the current timeline record."""
    logger.info(f"Adding attachment {name} ({attachment_type}): {path}")
    issue_command("task.addattachment", {"type": attachment_type, "name": name}, path)


def upload_file(path: str) -> None:
    """Upload a file so it is downloadable with the task logs."""
    issue_command("task.uploadfile", None, path)


def set_result(result: TaskResult, message: str = "") -> None:
    """
    Report the task result to the agent.

    A failure is also logged as an error issue so the message shows up in
    the run summary.
    """
    if result == TaskResult.FAILED and message:
        issue_command("task.logissue", {"type": "error"}, message)
    issue_command("task.complete", {"result": result.value}, message)
