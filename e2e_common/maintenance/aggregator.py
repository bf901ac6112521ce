import logging

from e2e_common.core.catalog import ErrorCategory
from e2e_common.core.models import MaintenanceReport
from e2e_common.errors.reporter import ErrorReporter

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 10


def most_frequent_category(statistics: dict[ErrorCategory, int]) -> ErrorCategory | None:
    """Category with the highest count; ties go to the lexically first name.

    Returns None when no errors were recorded.
    """
    ranked = sorted(statistics.items(), key=lambda item: (-item[1], item[0].value))
    if not ranked or ranked[0][1] == 0:
        return None
    return ranked[0][0]


class MaintenanceAggregator:
    """Builds maintenance reports from the persisted error store."""

    def __init__(self, reporter: ErrorReporter, top_n: int = DEFAULT_TOP_N):
        self.reporter = reporter
        self.top_n = top_n

    def build_report(self) -> MaintenanceReport:
        scan = self.reporter.scan_records()

        statistics = {category: 0 for category in ErrorCategory}
        for record in scan.records:
            statistics[record.category] += 1

        top_category = most_frequent_category(statistics)
        top_errors = []
        if top_category is not None:
            matching = [r for r in scan.records if r.category == top_category]
            matching.sort(key=lambda r: r.timestamp, reverse=True)
            top_errors = matching[: self.top_n]

        report = MaintenanceReport(
            statistics=statistics,
            most_frequent_category=top_category,
            top_errors=top_errors,
            total_errors=sum(statistics.values()),
            skipped_files=scan.skipped_count,
        )
        logger.info(
            f"Maintenance report: {report.total_errors} errors, "
            f"most frequent {top_category.value if top_category else 'n/a'}, "
            f"{report.skipped_files} skipped files"
        )
        return report
