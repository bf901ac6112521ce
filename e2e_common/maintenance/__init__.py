"""Maintenance reporting over the persisted error store."""

from e2e_common.maintenance.advisor import MaintenanceAdvisor, build_prompt
from e2e_common.maintenance.aggregator import MaintenanceAggregator, most_frequent_category
from e2e_common.maintenance.report_generator import MaintenanceReportGenerator

__all__ = [
    "MaintenanceAggregator",
    "MaintenanceReportGenerator",
    "MaintenanceAdvisor",
    "build_prompt",
    "most_frequent_category",
]
