"""
Report Generator for error maintenance reports.

Generates Markdown reports for humans and JSON summaries for tooling.
"""

import json
import logging
from pathlib import Path

from e2e_common.core.models import MaintenanceReport

logger = logging.getLogger(__name__)


class MaintenanceReportGenerator:
    """
    Renders a MaintenanceReport in Markdown and JSON formats.

    Reports include:
    - Error statistics table (per category)
    - Top failure categories ranked by count
    - The most recent errors of the most frequent category
    """

    def __init__(self, report: MaintenanceReport):
        self.report = report

    def generate_markdown(self, output_path: Path | None = None) -> str:
        r = self.report

        lines = [
            "# Error Maintenance Report",
            "",
            f"**Generated**: {r.generated_at.isoformat()}",
            f"**Total Errors**: {r.total_errors}",
            f"**Most Frequent Category**: {r.most_frequent_category.value if r.most_frequent_category else 'N/A'}",
        ]
        if r.skipped_files:
            lines.append(f"**Skipped Log Files**: {r.skipped_files}")

        lines.extend(
            [
                "",
                "## Error Statistics",
                "",
                "| Category | Count |",
                "|----------|-------|",
            ]
        )
        for category, count in r.statistics.items():
            lines.append(f"| {category.value} | {count} |")
        lines.append("")

        lines.extend(["## Top Failure Categories", ""])
        ranked = sorted(
            ((c, n) for c, n in r.statistics.items() if n > 0),
            key=lambda item: (-item[1], item[0].value),
        )
        if ranked:
            for position, (category, count) in enumerate(ranked, start=1):
                share = (count / r.total_errors) * 100
                lines.append(f"{position}. **{category.value}**: {count} ({share:.1f}%)")
        else:
            lines.append("No errors recorded.")
        lines.append("")

        if r.top_errors:
            lines.extend([f"## Recent {r.most_frequent_category.value} Errors", ""])
            for record in r.top_errors:
                lines.extend(
                    [
                        f"### [{record.code}] {record.title}",
                        "",
                        f"- Message: {record.message}",
                        f"- Timestamp: {record.timestamp.isoformat()}",
                    ]
                )
                if record.location:
                    lines.append(f"- Location: {record.location}")
                if record.details is not None:
                    lines.append(f"- Details: `{json.dumps(record.details)}`")
                if record.screenshot:
                    lines.extend(["", f"![{record.title}]({record.screenshot})"])
                lines.append("")

        content = "\n".join(lines)

        if output_path:
            output_path.write_text(content)
            logger.info(f"📄 Report saved: {output_path}")

        return content

    def generate_json(self, output_path: Path | None = None) -> dict:
        summary = self.report.model_dump(mode="json")

        if output_path:
            output_path.write_text(json.dumps(summary, indent=2))
            logger.info(f"📄 JSON summary saved: {output_path}")

        return summary

    def save_all(self, output_dir: Path) -> tuple[Path, Path]:
        """Save both Markdown and JSON reports."""
        output_dir.mkdir(parents=True, exist_ok=True)

        md_path = output_dir / "maintenance_report.md"
        json_path = output_dir / "maintenance_report.json"

        self.generate_markdown(md_path)
        self.generate_json(json_path)

        return md_path, json_path
