"""Application registry: per-environment URLs and result locations."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from e2e_common.core.exceptions import ConfigurationError

Environment = Literal["dev", "staging", "prod", "qa"]

ENVIRONMENTS: tuple[str, ...] = ("dev", "staging", "prod", "qa")


@dataclass
class AppConfig:
    description: str
    environments: dict[str, str]
    api_environments: dict[str, str]
    base_path: Path
    valid_environments: list[str] = field(default_factory=lambda: list(ENVIRONMENTS))

    @property
    def test_results_dir(self) -> Path:
        return self.base_path / "test-results"


def root_dir() -> Path:
    """Repository root holding the ``apps/`` tree (``E2E_ROOT_DIR`` or cwd)."""
    return Path(os.environ.get("E2E_ROOT_DIR") or Path.cwd())


def _url(env_var: str, default: str) -> str:
    return os.environ.get(env_var) or default


def get_applications(root: Path | None = None) -> dict[str, AppConfig]:
    """Build the application registry.

    URLs are read from the environment on each call so overrides set by a
    test session are honoured.
    """
    apps_dir = (root or root_dir()) / "apps"
    return {
        "sauce-demo": AppConfig(
            description="Sauce Demo E-commerce Website",
            environments={
                env: _url(f"SAUCE_DEMO_{env.upper()}_URL", "https://www.saucedemo.com")
                for env in ENVIRONMENTS
            },
            api_environments={
                "dev": _url("SAUCE_DEMO_DEV_API_URL", "https://api.saucedemo.com/dev"),
                "staging": _url("SAUCE_DEMO_STAGING_API_URL", "https://api.saucedemo.com/staging"),
                "prod": _url("SAUCE_DEMO_PROD_API_URL", "https://api.saucedemo.com"),
                "qa": _url("SAUCE_DEMO_QA_API_URL", "https://api.saucedemo.com/qa"),
            },
            base_path=apps_dir / "sauce-demo",
        ),
        "generic": AppConfig(
            description="Generic Test Application",
            environments={
                "dev": _url("DEV_BASE_URL", "http://localhost:3000"),
                "staging": _url("STAGING_BASE_URL", "https://staging.example.com"),
                "prod": _url("PROD_BASE_URL", "https://www.example.com"),
                "qa": _url("QA_BASE_URL", "https://qa.example.com"),
            },
            api_environments={
                "dev": _url("DEV_API_BASE_URL", "http://localhost:3001/api"),
                "staging": _url("STAGING_API_BASE_URL", "https://api.staging.example.com"),
                "prod": _url("PROD_API_BASE_URL", "https://api.example.com"),
                "qa": _url("QA_API_BASE_URL", "https://api.qa.example.com"),
            },
            base_path=apps_dir / "generic",
        ),
    }


def get_app_config(app_name: str, root: Path | None = None) -> AppConfig:
    """Look up an application by name.

    Raises:
        ConfigurationError: If the application is not registered
    """
    applications = get_applications(root)
    config = applications.get(app_name)
    if config is None:
        raise ConfigurationError(
            f"Application configuration not found for: {app_name} "
            f"(available: {', '.join(sorted(applications))})"
        )
    return config


def _checked(app_name: str, env: str, root: Path | None) -> AppConfig:
    config = get_app_config(app_name, root)
    if env not in config.valid_environments:
        raise ConfigurationError(f"Invalid environment '{env}' for application '{app_name}'")
    return config


def get_base_url(app_name: str, env: str, root: Path | None = None) -> str:
    return _checked(app_name, env, root).environments[env]


def get_api_base_url(app_name: str, env: str, root: Path | None = None) -> str:
    return _checked(app_name, env, root).api_environments[env]


def get_test_results_dir(app_name: str, root: Path | None = None) -> Path:
    return get_app_config(app_name, root).test_results_dir
