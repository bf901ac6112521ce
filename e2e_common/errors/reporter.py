"""
Error reporting for page actions.

Turns a classified failure into a persisted, analyzable record: one JSON
document per failure under ``error-logs/`` plus a best-effort full-page
screenshot under ``error-screenshots/``. Reporting never raises; every
step degrades independently (missing page info, missing screenshot, failed
persistence) so a broken report cannot fail the calling test.
"""

import itertools
import json
import logging
import os
import time
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from e2e_common.config.settings import ErrorReportingSettings, load_settings
from e2e_common.core.catalog import ErrorCategory, ErrorCode, ErrorCodeEntry, as_entry
from e2e_common.core.exceptions import ClassifiedError
from e2e_common.core.models import ErrorRecord, LogScan

if TYPE_CHECKING:
    from playwright.async_api import Page
else:
    Page = Any

logger = logging.getLogger(__name__)

ERROR_LOGS_DIRNAME = "error-logs"
ERROR_SCREENSHOTS_DIRNAME = "error-screenshots"
SECONDS_PER_DAY = 24 * 60 * 60


def default_run_id() -> str:
    """Per-process token mixed into file names so parallel workers never collide."""
    return f"{os.getpid()}-{uuid.uuid4().hex[:8]}"


def normalize_details(details: Any) -> Any:
    """Return the JSON form of ``details``.

    Values json cannot encode natively are stringified and non-finite floats
    become None, matching what is persisted. Payloads that cannot be encoded
    at all (e.g. circular references) are replaced with their repr.
    """
    if details is None:
        return None
    try:
        return json.loads(json.dumps(details, default=str), parse_constant=lambda _: None)
    except (TypeError, ValueError, RecursionError):
        try:
            fallback = repr(details)
        except Exception:
            fallback = f"<unrepresentable {type(details).__name__}>"
        return {"unserializable": fallback}


class ErrorReporter:
    """
    Reports classified failures to the on-disk error store.

    The reporter owns ``<results_dir>/error-logs`` and
    ``<results_dir>/error-screenshots``. Aggregation methods re-read the
    store on every call; there is no in-memory index.
    """

    def __init__(
        self,
        page: Page | None = None,
        results_dir: str | Path | None = None,
        settings: ErrorReportingSettings | None = None,
        run_id: str | None = None,
    ):
        if results_dir is None:
            harness = load_settings()
            results_dir = harness.test_results_dir
            settings = settings or harness.error_reporting

        self.page = page
        self.results_dir = Path(results_dir)
        self.settings = settings or ErrorReportingSettings()
        self.run_id = run_id or default_run_id()
        self.log_dir = self.results_dir / ERROR_LOGS_DIRNAME
        self.screenshot_dir = self.results_dir / ERROR_SCREENSHOTS_DIRNAME
        self._sequence = itertools.count(1)

        for directory in (self.log_dir, self.screenshot_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.error(f"Failed to create error directory {directory}: {e}")

    async def report(
        self,
        error_code: ErrorCode | ErrorCodeEntry,
        details: Any = None,
        screenshot_name: str | None = None,
    ) -> ErrorRecord:
        """Report a failure.

        Args:
            error_code: Catalog entry classifying the failure
            details: Free-form context (selector, expected/actual values, action)
            screenshot_name: File name override for the screenshot

        Returns:
            The error record, persisted when file logging is enabled
        """
        entry = as_entry(error_code)
        timestamp = datetime.now(UTC)
        suffix = f"{self.run_id}-{next(self._sequence):04d}"

        location = await self._page_location()

        screenshot = None
        if self.settings.enabled and self.settings.capture_screenshots:
            screenshot = await self._capture_screenshot(entry, timestamp, suffix, screenshot_name)

        record = ErrorRecord(
            code=entry.code,
            category=entry.category,
            title=entry.title,
            message=entry.message,
            details=normalize_details(details),
            location=location,
            screenshot=screenshot,
            timestamp=timestamp,
        )

        if self.settings.log_to_console:
            detail_text = f"\nDetails: {json.dumps(record.details)}" if record.details is not None else ""
            logger.error(
                f"[ERROR {entry.code}] {entry.title} ({entry.category.value}): {entry.message}{detail_text}"
            )

        if self.settings.enabled and self.settings.log_to_file:
            self._write_record(record, suffix)

        return record

    def create_error(
        self,
        error_code: ErrorCode | ErrorCodeEntry,
        message: str | None = None,
        record: ErrorRecord | None = None,
    ) -> ClassifiedError:
        """Build (but do not raise) a classified error for a catalog entry."""
        return ClassifiedError(as_entry(error_code), message, record=record)

    def scan_records(self) -> LogScan:
        """Read every persisted record, skipping unreadable or malformed files."""
        scan = LogScan()
        for path in self._log_files():
            try:
                scan.records.append(ErrorRecord.model_validate_json(path.read_text(encoding="utf-8")))
            except (OSError, ValueError, ValidationError) as e:
                logger.warning(f"Skipping unreadable error log {path.name}: {e}")
                scan.skipped.append(path)
        return scan

    def get_statistics(self) -> dict[ErrorCategory, int]:
        """Count persisted records per category; every category is present."""
        stats = {category: 0 for category in ErrorCategory}
        for record in self.scan_records().records:
            stats[record.category] += 1
        return stats

    def get_by_category(self, category: ErrorCategory | str) -> list[ErrorRecord]:
        """Return all persisted records of one category (re-scans on each call)."""
        category = ErrorCategory(category)
        return [record for record in self.scan_records().records if record.category == category]

    def prune_older_than(self, days: float | None = None) -> int:
        """Delete records whose file mtime is strictly older than ``days`` ago.

        Returns:
            Number of files deleted
        """
        if days is None:
            days = self.settings.max_error_age_days
        cutoff = time.time() - days * SECONDS_PER_DAY

        removed = 0
        for path in self._log_files():
            try:
                if path.stat().st_mtime < cutoff:
                    path.unlink()
                    removed += 1
            except OSError as e:
                logger.error(f"Failed to remove old error log {path.name}: {e}")

        if removed:
            logger.info(f"🗑️ Removed {removed} error logs older than {days} days")
        return removed

    def _log_files(self) -> list[Path]:
        try:
            return sorted(p for p in self.log_dir.glob("*.json") if p.is_file())
        except OSError as e:
            logger.error(f"Failed to list error logs in {self.log_dir}: {e}")
            return []

    async def _page_location(self) -> str | None:
        if self.page is None:
            return None
        try:
            url = self.page.url
            try:
                title = await self.page.title()
            except Exception:
                title = "Unknown"
            return f"URL: {url}, Title: {title}"
        except Exception:
            return "Unable to get page info"

    async def _capture_screenshot(
        self,
        entry: ErrorCodeEntry,
        timestamp: datetime,
        suffix: str,
        screenshot_name: str | None,
    ) -> str | None:
        if self.page is None:
            return None

        if not screenshot_name:
            token = timestamp.isoformat().replace(":", "-").replace(".", "-")
            screenshot_name = f"{entry.category.value}_{entry.code}_{token}_{suffix}.png"
        path = self.screenshot_dir / screenshot_name

        try:
            await self.page.screenshot(path=str(path), full_page=True)
        except Exception as e:
            logger.error(f"Failed to capture error screenshot: {e}")
            return None

        if path.is_relative_to(self.results_dir):
            return path.relative_to(self.results_dir).as_posix()
        return path.as_posix()

    def _write_record(self, record: ErrorRecord, suffix: str) -> Path | None:
        epoch_ms = int(record.timestamp.timestamp() * 1000)
        path = self.log_dir / f"error_{record.code}_{epoch_ms}_{suffix}.json"
        try:
            path.write_text(json.dumps(record.to_json_dict(), indent=2), encoding="utf-8")
        except Exception as e:
            logger.error(f"Failed to write error log to file: {e}")
            return None
        return path
