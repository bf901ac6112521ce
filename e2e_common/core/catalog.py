"""
Error catalog for the e2e harness.

Every failure the harness reports is classified against a fixed catalog of
numbered entries. Codes are grouped by category in contiguous numeric
ranges so that logs can be grouped for analysis and targeted maintenance.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from e2e_common.core.exceptions import CatalogError


class ErrorCategory(str, Enum):
    """Category of a reported failure."""

    DATA = "DATA"  # bad or missing test input
    ELEMENT = "ELEMENT"  # UI element state problems
    NAVIGATION = "NAVIGATION"  # page load and navigation failures
    ASSERTION = "ASSERTION"
    NETWORK = "NETWORK"
    AUTH = "AUTH"
    PERFORMANCE = "PERFORMANCE"  # threshold breaches
    VISUAL = "VISUAL"  # visual regression mismatches
    API = "API"
    FRAMEWORK = "FRAMEWORK"  # framework or configuration problems
    UNKNOWN = "UNKNOWN"


# Inclusive code range owned by each category.
CATEGORY_RANGES: dict[ErrorCategory, tuple[int, int]] = {
    ErrorCategory.DATA: (1000, 1999),
    ErrorCategory.ELEMENT: (2000, 2999),
    ErrorCategory.NAVIGATION: (3000, 3999),
    ErrorCategory.ASSERTION: (4000, 4999),
    ErrorCategory.NETWORK: (5000, 5999),
    ErrorCategory.AUTH: (6000, 6999),
    ErrorCategory.PERFORMANCE: (7000, 7999),
    ErrorCategory.VISUAL: (8000, 8999),
    ErrorCategory.API: (9000, 9999),
    ErrorCategory.FRAMEWORK: (10000, 10999),
    ErrorCategory.UNKNOWN: (99000, 99999),
}


@dataclass(frozen=True)
class ErrorCodeEntry:
    """A single catalog entry."""

    code: int
    category: ErrorCategory
    title: str
    message: str


def _entry(code: int, category: ErrorCategory, message: str, title: str) -> ErrorCodeEntry:
    return ErrorCodeEntry(code=code, category=category, title=title, message=message)


class ErrorCode(Enum):
    """Catalog of known failures, referenced by name.

    Example:
        >>> ErrorCode.ERROR_NETWORK_TIMEOUT.code
        5002
    """

    # Data (1000-1999)
    ERROR_INVALID_DATA = _entry(1001, ErrorCategory.DATA, "Invalid test data provided", "Invalid Data")
    ERROR_MISSING_DATA = _entry(1002, ErrorCategory.DATA, "Required test data is missing", "Missing Data")
    ERROR_DATA_FORMAT = _entry(1003, ErrorCategory.DATA, "Test data format is incorrect", "Data Format Error")
    ERROR_ENV_DATA_NOT_FOUND = _entry(
        1004, ErrorCategory.DATA, "Environment-specific data not found", "Environment Data Not Found"
    )

    # Element (2000-2999)
    ERROR_LOCATOR_NOT_FOUND = _entry(2001, ErrorCategory.ELEMENT, "Element locator not found", "Element Not Found")
    ERROR_ELEMENT_NOT_VISIBLE = _entry(2002, ErrorCategory.ELEMENT, "Element is not visible", "Element Not Visible")
    ERROR_ELEMENT_NOT_CLICKABLE = _entry(
        2003, ErrorCategory.ELEMENT, "Element is not clickable", "Element Not Clickable"
    )
    ERROR_ELEMENT_WRONG_STATE = _entry(2004, ErrorCategory.ELEMENT, "Element is in wrong state", "Element Wrong State")
    ERROR_ELEMENT_ATTRIBUTE_MISSING = _entry(
        2005, ErrorCategory.ELEMENT, "Element attribute is missing", "Missing Element Attribute"
    )
    ERROR_STALE_ELEMENT = _entry(
        2006, ErrorCategory.ELEMENT, "Element is stale or no longer attached to DOM", "Stale Element"
    )
    ERROR_ELEMENT_TIMEOUT = _entry(2007, ErrorCategory.ELEMENT, "Element interaction timed out", "Element Timeout")

    # Navigation (3000-3999)
    ERROR_PAGE_NOT_LOADED = _entry(3001, ErrorCategory.NAVIGATION, "Page failed to load", "Page Load Failed")
    ERROR_NAVIGATION_FAILED = _entry(3002, ErrorCategory.NAVIGATION, "Navigation to page failed", "Navigation Failed")
    ERROR_REDIRECT_UNEXPECTED = _entry(
        3003, ErrorCategory.NAVIGATION, "Unexpected redirect occurred", "Unexpected Redirect"
    )
    ERROR_URL_MISMATCH = _entry(
        3004, ErrorCategory.NAVIGATION, "Current URL does not match expected URL", "URL Mismatch"
    )

    # Assertion (4000-4999)
    ERROR_ASSERTION_TEXT = _entry(4001, ErrorCategory.ASSERTION, "Text assertion failed", "Text Assertion Failed")
    ERROR_ASSERTION_VISIBILITY = _entry(
        4002, ErrorCategory.ASSERTION, "Visibility assertion failed", "Visibility Assertion Failed"
    )
    ERROR_ASSERTION_COUNT = _entry(4003, ErrorCategory.ASSERTION, "Count assertion failed", "Count Assertion Failed")
    ERROR_ASSERTION_STATE = _entry(4004, ErrorCategory.ASSERTION, "State assertion failed", "State Assertion Failed")
    ERROR_ASSERTION_PROPERTY = _entry(
        4005, ErrorCategory.ASSERTION, "Property assertion failed", "Property Assertion Failed"
    )

    # Network (5000-5999)
    ERROR_NETWORK_REQUEST_FAILED = _entry(
        5001, ErrorCategory.NETWORK, "Network request failed", "Network Request Failed"
    )
    ERROR_NETWORK_TIMEOUT = _entry(5002, ErrorCategory.NETWORK, "Network request timed out", "Network Timeout")
    ERROR_STATUS_CODE_UNEXPECTED = _entry(
        5003, ErrorCategory.NETWORK, "Unexpected HTTP status code", "Unexpected Status Code"
    )

    # Auth (6000-6999)
    ERROR_AUTH_FAILED = _entry(6001, ErrorCategory.AUTH, "Authentication failed", "Authentication Failed")
    ERROR_SESSION_EXPIRED = _entry(6002, ErrorCategory.AUTH, "Session expired", "Session Expired")
    ERROR_UNAUTHORIZED = _entry(6003, ErrorCategory.AUTH, "Unauthorized access", "Unauthorized Access")

    # Performance (7000-7999)
    ERROR_PERFORMANCE_TIMEOUT = _entry(
        7001, ErrorCategory.PERFORMANCE, "Operation timed out due to performance issues", "Performance Timeout"
    )
    ERROR_PERFORMANCE_THRESHOLD = _entry(
        7002, ErrorCategory.PERFORMANCE, "Performance threshold exceeded", "Performance Threshold Exceeded"
    )

    # Visual (8000-8999)
    ERROR_VISUAL_MISMATCH = _entry(8001, ErrorCategory.VISUAL, "Visual comparison failed", "Visual Comparison Failed")
    ERROR_VISUAL_BASELINE_MISSING = _entry(
        8002, ErrorCategory.VISUAL, "Visual baseline image missing", "Missing Visual Baseline"
    )

    # API (9000-9999)
    ERROR_API_RESPONSE_INVALID = _entry(9001, ErrorCategory.API, "Invalid API response", "Invalid API Response")
    ERROR_API_SCHEMA_VALIDATION = _entry(
        9002, ErrorCategory.API, "API schema validation failed", "API Schema Validation Failed"
    )

    # Framework (10000-10999)
    ERROR_CONFIG_INVALID = _entry(
        10001, ErrorCategory.FRAMEWORK, "Invalid framework configuration", "Invalid Configuration"
    )
    ERROR_DEPENDENCY_MISSING = _entry(
        10002, ErrorCategory.FRAMEWORK, "Required dependency is missing", "Missing Dependency"
    )

    # Unknown (99000-99999)
    ERROR_UNKNOWN = _entry(99999, ErrorCategory.UNKNOWN, "Unknown error occurred", "Unknown Error")

    @property
    def entry(self) -> ErrorCodeEntry:
        return self.value

    @property
    def code(self) -> int:
        return self.value.code

    @property
    def category(self) -> ErrorCategory:
        return self.value.category

    @property
    def title(self) -> str:
        return self.value.title

    @property
    def message(self) -> str:
        return self.value.message


def _build_index() -> dict[int, ErrorCodeEntry]:
    """Index entries by code, enforcing uniqueness and category ranges."""
    by_code: dict[int, ErrorCodeEntry] = {}
    for member in ErrorCode:
        entry = member.value
        if entry.code in by_code:
            raise CatalogError(f"Duplicate error code {entry.code} ({member.name})")
        low, high = CATEGORY_RANGES[entry.category]
        if not low <= entry.code <= high:
            raise CatalogError(
                f"Error code {entry.code} ({member.name}) outside {entry.category.value} range {low}-{high}"
            )
        by_code[entry.code] = entry
    return by_code


_BY_CODE = MappingProxyType(_build_index())

CATALOG = MappingProxyType({member.name: member.value for member in ErrorCode})


def lookup_code(code: int) -> ErrorCodeEntry:
    """Return the catalog entry for a numeric code.

    Raises:
        KeyError: If the code is not in the catalog
    """
    return _BY_CODE[code]


def entries_for(category: ErrorCategory) -> list[ErrorCodeEntry]:
    """Return all entries of a category, ordered by code."""
    return sorted(
        (entry for entry in _BY_CODE.values() if entry.category == category),
        key=lambda e: e.code,
    )


def as_entry(error_code: "ErrorCode | ErrorCodeEntry") -> ErrorCodeEntry:
    """Accept either a catalog member or a bare entry."""
    if isinstance(error_code, ErrorCode):
        return error_code.value
    return error_code
