import json
import logging
from typing import Any

from e2e_common.core.catalog import ErrorCode, ErrorCodeEntry, as_entry
from e2e_common.core.models import ErrorRecord
from e2e_common.errors.reporter import ErrorReporter

logger = logging.getLogger(__name__)


def detail_message(details: Any) -> str | None:
    """Extra message for a raised error: ``details["message"]`` or the JSON form of ``details``."""
    if details is None:
        return None
    if isinstance(details, dict) and details.get("message"):
        return str(details["message"])
    return json.dumps(details, default=str)


class ErrorHandler:
    """Bridges reporting and control flow.

    Report-and-throw is used where no meaningful result exists (click, fill,
    navigate, assertions); report-only where the caller can carry on with a
    degraded default (visibility checks, text reads).
    """

    def __init__(self, reporter: ErrorReporter):
        self.reporter = reporter

    async def handle(
        self,
        error_code: ErrorCode | ErrorCodeEntry,
        details: Any = None,
        throw_after_report: bool = True,
        message: str | None = None,
    ) -> ErrorRecord:
        """Report a failure, then raise a ClassifiedError unless told not to.

        Args:
            error_code: Catalog entry classifying the failure
            details: Free-form context stored with the record
            throw_after_report: Raise after reporting
            message: Extra message for the raised error (defaults to one derived from details)

        Returns:
            The reported record (only when ``throw_after_report`` is False)

        Raises:
            ClassifiedError: If ``throw_after_report`` is True
        """
        entry = as_entry(error_code)
        record = await self.reporter.report(entry, details)

        if throw_after_report:
            extra = message or detail_message(record.details)
            raise self.reporter.create_error(entry, extra, record=record)

        return record
