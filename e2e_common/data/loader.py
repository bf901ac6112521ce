"""Test data loader for per-application YAML files."""

import logging
import random
import time
from pathlib import Path
from typing import Any, Literal

import yaml

from e2e_common.config.apps import ENVIRONMENTS, root_dir

logger = logging.getLogger(__name__)

DataKind = Literal["email", "username", "password", "phone", "name"]


def data_file_path(app_name: str, file_name: str, root: Path | None = None) -> Path:
    return (root or root_dir()) / "apps" / app_name / "testdata" / f"{file_name}.yaml"


def load_test_data(
    app_name: str,
    file_name: str,
    env: str | None = None,
    root: Path | None = None,
) -> Any:
    """Load a YAML test data file, optionally filtered for one environment.

    Two layouts are supported:
    - user type -> environment -> details
    - environment -> user type -> details (or nested entries tagged with ``env:``)

    Args:
        app_name: Application name (directory under ``apps/``)
        file_name: File name without the ``.yaml`` extension
        env: Environment to filter for; no filtering when omitted
        root: Repository root (defaults to ``E2E_ROOT_DIR`` or cwd)

    Returns:
        Parsed (and filtered) data
    """
    path = data_file_path(app_name, file_name, root)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading test data from {path}: {e}")
        raise

    if env and data:
        return filter_by_environment(data, env)
    return data


def is_user_first_layout(data: Any) -> bool:
    """True when the first entry maps environments to details (user -> env -> details)."""
    if not isinstance(data, dict) or not data:
        return False
    first_value = next(iter(data.values()))
    return isinstance(first_value, dict) and any(env in first_value for env in ENVIRONMENTS)


def filter_by_environment(data: Any, env: str) -> Any:
    if not isinstance(data, (dict, list)):
        return data

    if is_user_first_layout(data):
        return {
            user_type: details[env]
            for user_type, details in data.items()
            if isinstance(details, dict) and details.get(env)
        }

    if isinstance(data, dict) and data.get(env):
        return data[env]

    if isinstance(data, list):
        return [_filter_value(value, env) for value in data if _keep(value, env)]
    return {key: _filter_value(value, env) for key, value in data.items() if _keep(value, env)}


def _keep(value: Any, env: str) -> bool:
    if isinstance(value, dict) and "env" in value:
        return value["env"] == env
    return True


def _filter_value(value: Any, env: str) -> Any:
    if isinstance(value, dict) and "env" in value:
        return value
    return filter_by_environment(value, env)


def generate_test_data(kind: DataKind) -> str:
    """Generate a unique throwaway value for form input."""
    stamp = int(time.time() * 1000)
    if kind == "email":
        return f"test.user.{stamp}@example.com"
    if kind == "username":
        return f"testuser{stamp}"
    if kind == "password":
        return f"Password{stamp}!"
    if kind == "phone":
        return f"555{random.randint(1_000_000, 9_999_999)}"
    if kind == "name":
        return f"Test User {stamp}"
    raise ValueError(f"Unsupported test data type: {kind}")
