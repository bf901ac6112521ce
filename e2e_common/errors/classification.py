"""Map raw page-action failures onto catalog entries.

Failures are classified by exception type, never by message text: a
Playwright timeout (or the built-in TimeoutError) is a timeout, an
AssertionError raised by ``expect`` is an assertion, anything else is
ambiguous and falls back to the action's default entry.
"""

from enum import Enum

from playwright.async_api import TimeoutError as PlaywrightTimeout

from e2e_common.core.catalog import ErrorCode, ErrorCodeEntry


class FailureKind(str, Enum):
    """Kind of a raw page-action failure, derived from its exception type."""

    TIMEOUT = "timeout"
    ASSERTION = "assertion"
    OTHER = "other"


# action -> {failure kind -> entry}; OTHER is the fallback for kinds not listed
ACTION_ENTRIES: dict[str, dict[FailureKind, ErrorCode]] = {
    "navigate": {
        FailureKind.OTHER: ErrorCode.ERROR_NAVIGATION_FAILED,
        FailureKind.TIMEOUT: ErrorCode.ERROR_PAGE_NOT_LOADED,
    },
    "click": {
        FailureKind.OTHER: ErrorCode.ERROR_ELEMENT_NOT_CLICKABLE,
        FailureKind.TIMEOUT: ErrorCode.ERROR_ELEMENT_TIMEOUT,
        FailureKind.ASSERTION: ErrorCode.ERROR_ELEMENT_WRONG_STATE,
    },
    "fill": {
        FailureKind.OTHER: ErrorCode.ERROR_ELEMENT_NOT_VISIBLE,
        FailureKind.TIMEOUT: ErrorCode.ERROR_ELEMENT_TIMEOUT,
        FailureKind.ASSERTION: ErrorCode.ERROR_ELEMENT_WRONG_STATE,
    },
    "wait_for_element": {
        FailureKind.OTHER: ErrorCode.ERROR_ELEMENT_NOT_VISIBLE,
        FailureKind.TIMEOUT: ErrorCode.ERROR_ELEMENT_TIMEOUT,
    },
    "select_option": {
        FailureKind.OTHER: ErrorCode.ERROR_ELEMENT_WRONG_STATE,
        FailureKind.TIMEOUT: ErrorCode.ERROR_ELEMENT_TIMEOUT,
    },
    "is_visible": {FailureKind.OTHER: ErrorCode.ERROR_LOCATOR_NOT_FOUND},
    "get_text": {
        FailureKind.OTHER: ErrorCode.ERROR_LOCATOR_NOT_FOUND,
        FailureKind.TIMEOUT: ErrorCode.ERROR_ELEMENT_TIMEOUT,
    },
    "expect_text_to_contain": {FailureKind.OTHER: ErrorCode.ERROR_ASSERTION_TEXT},
    "expect_to_be_visible": {FailureKind.OTHER: ErrorCode.ERROR_ASSERTION_VISIBILITY},
    "expect_count": {FailureKind.OTHER: ErrorCode.ERROR_ASSERTION_COUNT},
    "expect_url": {FailureKind.OTHER: ErrorCode.ERROR_URL_MISMATCH},
    "expect_title": {FailureKind.OTHER: ErrorCode.ERROR_ASSERTION_PROPERTY},
}


def failure_kind(exc: BaseException) -> FailureKind:
    # asyncio.TimeoutError is an alias of the built-in since 3.11
    if isinstance(exc, (PlaywrightTimeout, TimeoutError)):
        return FailureKind.TIMEOUT
    if isinstance(exc, AssertionError):
        return FailureKind.ASSERTION
    return FailureKind.OTHER


def classify_failure(exc: BaseException, action: str) -> ErrorCodeEntry:
    """Return the catalog entry for a failed page action.

    Kinds an action does not list fall back to its OTHER entry; unknown
    actions map to ERROR_UNKNOWN.
    """
    entries = ACTION_ENTRIES.get(action)
    if entries is None:
        return ErrorCode.ERROR_UNKNOWN.entry

    return entries.get(failure_kind(exc), entries[FailureKind.OTHER]).entry
