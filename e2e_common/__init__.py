"""E2E Common - error taxonomy and reporting for Playwright end-to-end suites."""

from e2e_common.config import (
    AdvisorSettings,
    ErrorReportingSettings,
    HarnessSettings,
    load_settings,
)
from e2e_common.core import (
    CATALOG,
    AdvisorError,
    CatalogError,
    ClassifiedError,
    ConfigurationError,
    ErrorCategory,
    ErrorCode,
    ErrorCodeEntry,
    ErrorRecord,
    HarnessError,
    LogScan,
    MaintenanceReport,
    entries_for,
    lookup_code,
)
from e2e_common.errors import ErrorHandler, ErrorReporter, FailureKind, classify_failure
from e2e_common.maintenance import MaintenanceAdvisor, MaintenanceAggregator, MaintenanceReportGenerator
from e2e_common.pages import BasePage

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Catalog
    "CATALOG",
    "ErrorCategory",
    "ErrorCode",
    "ErrorCodeEntry",
    "entries_for",
    "lookup_code",
    # Models
    "ErrorRecord",
    "LogScan",
    "MaintenanceReport",
    # Exceptions
    "HarnessError",
    "CatalogError",
    "ClassifiedError",
    "ConfigurationError",
    "AdvisorError",
    # Reporting
    "ErrorReporter",
    "ErrorHandler",
    "FailureKind",
    "classify_failure",
    # Maintenance
    "MaintenanceAggregator",
    "MaintenanceReportGenerator",
    "MaintenanceAdvisor",
    # Pages
    "BasePage",
    # Config
    "AdvisorSettings",
    "ErrorReportingSettings",
    "HarnessSettings",
    "load_settings",
]
