"""YAML-driven test data."""

from e2e_common.data.loader import filter_by_environment, generate_test_data, load_test_data

__all__ = ["load_test_data", "filter_by_environment", "generate_test_data"]
