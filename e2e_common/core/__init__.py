"""Core catalog, models and exceptions."""

from e2e_common.core.catalog import (
    CATALOG,
    CATEGORY_RANGES,
    ErrorCategory,
    ErrorCode,
    ErrorCodeEntry,
    as_entry,
    entries_for,
    lookup_code,
)
from e2e_common.core.exceptions import (
    AdvisorError,
    AdvisorRateLimitError,
    AdvisorTimeoutError,
    CatalogError,
    ClassifiedError,
    ConfigurationError,
    HarnessError,
)
from e2e_common.core.models import ErrorRecord, LogScan, MaintenanceReport

__all__ = [
    # Catalog
    "CATALOG",
    "CATEGORY_RANGES",
    "ErrorCategory",
    "ErrorCode",
    "ErrorCodeEntry",
    "as_entry",
    "entries_for",
    "lookup_code",
    # Exceptions
    "HarnessError",
    "CatalogError",
    "ClassifiedError",
    "ConfigurationError",
    "AdvisorError",
    "AdvisorRateLimitError",
    "AdvisorTimeoutError",
    # Models
    "ErrorRecord",
    "LogScan",
    "MaintenanceReport",
]
