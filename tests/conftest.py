"""Pytest fixtures for Lighthouse task tests."""

import json
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from lighthouse_task.config.settings import reset_config

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True, scope="function")
def reset_singletons(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Reset the config singleton and keep .env files out of the tests."""
    monkeypatch.setattr("lighthouse_task.config.settings.load_dotenv", lambda: None)
    monkeypatch.setattr("lighthouse_task.main.load_dotenv", lambda: None)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def lighthouse_json() -> dict[str, Any]:
    """Raw Lighthouse JSON report fixture."""
    with open(FIXTURES_DIR / "lighthouse.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def lighthouse_json_path() -> Path:
    return FIXTURES_DIR / "lighthouse.json"
