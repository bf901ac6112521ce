"""Error reporting, handling and classification."""

from e2e_common.core.catalog import ErrorCategory, ErrorCode, ErrorCodeEntry
from e2e_common.core.exceptions import ClassifiedError
from e2e_common.core.models import ErrorRecord, LogScan
from e2e_common.errors.classification import FailureKind, classify_failure, failure_kind
from e2e_common.errors.handler import ErrorHandler
from e2e_common.errors.reporter import ErrorReporter

__all__ = [
    "ErrorCategory",
    "ErrorCode",
    "ErrorCodeEntry",
    "ClassifiedError",
    "ErrorRecord",
    "LogScan",
    "ErrorReporter",
    "ErrorHandler",
    "FailureKind",
    "failure_kind",
    "classify_failure",
]
