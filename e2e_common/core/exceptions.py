"""Custom exceptions for the e2e harness."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from e2e_common.core.models import ErrorRecord
    from e2e_common.core.catalog import ErrorCodeEntry


class HarnessError(Exception):
    """Base exception for harness errors."""


class CatalogError(HarnessError):
    """Raised when the error catalog violates its code invariants."""


class ConfigurationError(HarnessError):
    """Raised when the harness configuration is invalid."""


class ClassifiedError(HarnessError):
    """Failure raised after an error has been reported.

    Carries the catalog classification so callers can branch on
    ``code``/``category`` instead of parsing the message.
    """

    def __init__(
        self,
        entry: "ErrorCodeEntry",
        message: str | None = None,
        record: "ErrorRecord | None" = None,
    ) -> None:
        """Initialize error.

        Args:
            entry: Catalog entry describing the failure
            message: Extra context appended to the default message
            record: The persisted record, if the error was reported
        """
        self.entry = entry
        self.code = entry.code
        self.category = entry.category
        self.title = entry.title
        self.record = record
        self.detail = message

        text = f"[ERROR {entry.code}] {entry.title} ({entry.category.value}): {entry.message}"
        if message:
            text = f"{text}: {message}"
        super().__init__(text)


class AdvisorError(HarnessError):
    """Raised when the maintenance advisor cannot produce suggestions."""


class AdvisorRateLimitError(AdvisorError):
    """Raised when the completion endpoint rate limits the advisor."""


class AdvisorTimeoutError(AdvisorError):
    """Raised when the completion request times out."""
