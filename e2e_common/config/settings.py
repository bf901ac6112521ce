"""Harness settings.

Values are merged in order of precedence: defaults, then environment
variables, then explicit overrides passed to :func:`load_settings`.
"""

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from e2e_common.config.apps import Environment, get_api_base_url, get_base_url, get_test_results_dir
from e2e_common.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_APP = "sauce-demo"
DEFAULT_ENV = "qa"


class ErrorReportingSettings(BaseModel):
    """Controls the side effects of error reporting."""

    enabled: bool = True
    capture_screenshots: bool = True
    log_to_console: bool = True
    log_to_file: bool = True
    max_error_age_days: int = 30


class Viewport(BaseModel):
    width: int = 1280
    height: int = 720


class HarnessSettings(BaseModel):
    """Resolved configuration for one application/environment pair."""

    app: str = DEFAULT_APP
    env: Environment = DEFAULT_ENV
    base_url: str
    api_base_url: str
    test_results_dir: Path
    headless: bool = True
    timeout_ms: int = 30000
    slow_mo_ms: int = 0
    viewport: Viewport = Field(default_factory=Viewport)
    ai_assisted: bool = False
    error_reporting: ErrorReportingSettings = Field(default_factory=ErrorReportingSettings)


class AdvisorSettings(BaseModel):
    """Settings for the AI maintenance advisor (OpenAI-compatible endpoint)."""

    api_key: str | None = None
    base_url: str | None = None
    model: str = "gpt-4o-mini"
    temperature: float = 0.3
    max_tokens: int = 2000
    timeout: int = 60

    @classmethod
    def from_env(cls) -> "AdvisorSettings":
        values: dict[str, Any] = {
            "api_key": os.environ.get("OPENAI_API_KEY"),
            "base_url": os.environ.get("OPENAI_BASE_URL"),
        }
        if os.environ.get("OPENAI_MODEL"):
            values["model"] = os.environ["OPENAI_MODEL"]
        return cls(**values)


def _env_bool(name: str) -> bool | None:
    raw = os.environ.get(name)
    if raw is None:
        return None
    return raw.strip().lower() == "true"


def _env_int(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def _drop_unset(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


def _error_reporting_from_env() -> dict[str, Any]:
    return _drop_unset(
        {
            "enabled": _env_bool("ERROR_REPORTING"),
            "capture_screenshots": _env_bool("ERROR_SCREENSHOTS"),
            "log_to_console": _env_bool("ERROR_LOG_CONSOLE"),
            "log_to_file": _env_bool("ERROR_LOG_FILE"),
            "max_error_age_days": _env_int("ERROR_MAX_AGE"),
        }
    )


def load_settings(
    app: str | None = None,
    env: str | None = None,
    root: Path | None = None,
    **overrides: Any,
) -> HarnessSettings:
    """Resolve settings for an application and environment.

    Args:
        app: Application name (falls back to ``APP``, then ``sauce-demo``)
        env: Environment name (falls back to ``ENV``, then ``qa``)
        root: Repository root holding ``apps/`` (defaults to ``E2E_ROOT_DIR`` or cwd)
        **overrides: Field values taking precedence over the environment

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If the application, environment or a value is invalid
    """
    app = app or os.environ.get("APP") or DEFAULT_APP
    env = env or os.environ.get("ENV") or DEFAULT_ENV

    values: dict[str, Any] = _drop_unset(
        {
            "headless": _env_bool("HEADLESS"),
            "timeout_ms": _env_int("TIMEOUT"),
            "slow_mo_ms": _env_int("SLOW_MO"),
            "ai_assisted": _env_bool("AI_ASSISTED"),
        }
    )

    error_reporting = _error_reporting_from_env()
    error_overrides = overrides.pop("error_reporting", None)
    if isinstance(error_overrides, ErrorReportingSettings):
        error_overrides = error_overrides.model_dump()
    error_reporting.update(error_overrides or {})

    values.update(
        {
            "app": app,
            "env": env,
            "base_url": get_base_url(app, env, root),
            "api_base_url": get_api_base_url(app, env, root),
            "test_results_dir": get_test_results_dir(app, root),
            "error_reporting": error_reporting,
        }
    )
    values.update(overrides)

    try:
        settings = HarnessSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid harness configuration: {e}")

    logger.debug(f"Loaded settings for {settings.app}/{settings.env}: {settings.base_url}")
    return settings
