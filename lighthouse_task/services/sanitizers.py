"""Sanitizers for user-supplied Lighthouse arguments, Chrome flags and report filenames."""

import re
from urllib.parse import urlparse

from lighthouse_task.errors.exceptions import ValidationError

# Arguments the task sets itself or that would block a headless run
ILLEGAL_CLI_ARGS = (
    "--help",
    "--version",
    "--view",
    "--output=",
    "--output-path=",
    "--chrome-flags=",
)

DEFAULT_CHROME_FLAGS = ("--headless",)

_CHROME_FLAG_PATTERN = re.compile(r"--[a-z0-9]+(?:-[a-z0-9]+)*(?:=\S*)?", re.IGNORECASE)
_LINE_SPLIT = re.compile(r"\r?\n")


def sanitize_cli_args(args: str | None) -> list[str]:
    """
    Split the ``args`` input into Lighthouse CLI arguments.

    Arguments may be spread over several lines. Any argument the task
    controls itself (output format, output path, Chrome flags) is dropped.
    """
    results: list[str] = []
    for line in _LINE_SPLIT.split(args or ""):
        for token in line.split():
            if not token.startswith(ILLEGAL_CLI_ARGS):
                results.append(token)
    return results


def sanitize_chrome_flags(flags: str | None) -> list[str]:
    """Return the Chrome flags to pass to Lighthouse, always headless."""
    results = list(DEFAULT_CHROME_FLAGS)
    for token in (flags or "").split():
        if token in results:
            continue
        if _CHROME_FLAG_PATTERN.fullmatch(token):
            results.append(token)
    return results


def make_filename_from_url(url: str) -> str:
    """
    Build a report base name from the hostname of an absolute URL.

    Raises:
        ValidationError: If the URL is not an absolute http(s) URL.
    """
    if not url or not url.strip():
        raise ValidationError("URL is required and must be a non-empty string")

    try:
        parsed = urlparse(url.strip())
        hostname = parsed.hostname
    except ValueError as e:
        raise ValidationError(f"Invalid URL format: {str(e)}")

    if parsed.scheme not in ("http", "https"):
        raise ValidationError(f'"{url}" is not an absolute http or https URL')

    if not hostname or " " in hostname:
        raise ValidationError(f'"{url}" does not include a valid hostname')

    return re.sub(r"[^a-z0-9.-]", "_", hostname.lower())
