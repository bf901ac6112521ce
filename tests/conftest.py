"""Pytest configuration and fixtures."""

import os
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from e2e_common.errors.reporter import ErrorReporter

HARNESS_ENV_VARS = [
    "APP",
    "ENV",
    "HEADLESS",
    "TIMEOUT",
    "SLOW_MO",
    "AI_ASSISTED",
    "ERROR_REPORTING",
    "ERROR_SCREENSHOTS",
    "ERROR_LOG_CONSOLE",
    "ERROR_LOG_FILE",
    "ERROR_MAX_AGE",
    "E2E_ROOT_DIR",
    "QA_BASE_URL",
    "SAUCE_DEMO_QA_URL",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's shell environment out of config resolution."""
    url_vars = [name for name in os.environ if name.startswith("SAUCE_DEMO_") or name.endswith("BASE_URL")]
    for name in HARNESS_ENV_VARS + url_vars:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    monkeypatch.setenv("OPENAI_API_KEY", "test-openai-key")


@pytest.fixture
def mock_page():
    page = MagicMock()
    page.url = "https://www.saucedemo.com/inventory.html"
    page.title = AsyncMock(return_value="Swag Labs")

    async def _screenshot(path=None, full_page=False, **kwargs):
        Path(path).write_bytes(b"\x89PNG\r\n\x1a\n")
        return b"\x89PNG\r\n\x1a\n"

    page.screenshot = AsyncMock(side_effect=_screenshot)
    return page


@pytest.fixture
def results_dir(tmp_path):
    return tmp_path / "test-results"


@pytest.fixture
def reporter(mock_page, results_dir):
    return ErrorReporter(mock_page, results_dir=results_dir, run_id="test-run")
