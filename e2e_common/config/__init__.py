"""Harness configuration."""

from e2e_common.config.apps import (
    ENVIRONMENTS,
    AppConfig,
    Environment,
    get_api_base_url,
    get_app_config,
    get_applications,
    get_base_url,
    get_test_results_dir,
)
from e2e_common.config.settings import (
    AdvisorSettings,
    ErrorReportingSettings,
    HarnessSettings,
    Viewport,
    load_settings,
)

__all__ = [
    "ENVIRONMENTS",
    "Environment",
    "AppConfig",
    "get_applications",
    "get_app_config",
    "get_base_url",
    "get_api_base_url",
    "get_test_results_dir",
    "AdvisorSettings",
    "ErrorReportingSettings",
    "HarnessSettings",
    "Viewport",
    "load_settings",
]
