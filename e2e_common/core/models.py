"""Core data models for error reporting."""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from e2e_common.core.catalog import ErrorCategory


class ErrorRecord(BaseModel):
    """A persisted, timestamped instance of a failure."""

    model_config = ConfigDict(frozen=True)

    code: int
    category: ErrorCategory
    title: str
    message: str
    details: Any = None
    location: str | None = None
    screenshot: str | None = None  # relative to the results dir
    timestamp: datetime

    def to_json_dict(self) -> dict[str, Any]:
        """JSON-ready dict, omitting absent optional fields."""
        return self.model_dump(mode="json", exclude_none=True)


class LogScan(BaseModel):
    """Outcome of a best-effort scan of the error log store."""

    records: list[ErrorRecord] = Field(default_factory=list)
    skipped: list[Path] = Field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class MaintenanceReport(BaseModel):
    """Aggregated error statistics handed to maintenance tooling."""

    statistics: dict[ErrorCategory, int]
    most_frequent_category: ErrorCategory | None = None
    top_errors: list[ErrorRecord] = Field(default_factory=list)
    total_errors: int = 0
    skipped_files: int = 0
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
