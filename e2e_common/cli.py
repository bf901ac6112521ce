import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from e2e_common.config.settings import AdvisorSettings, HarnessSettings, load_settings
from e2e_common.core.exceptions import AdvisorError, ConfigurationError
from e2e_common.errors.reporter import ErrorReporter
from e2e_common.maintenance.advisor import MaintenanceAdvisor
from e2e_common.maintenance.aggregator import MaintenanceAggregator
from e2e_common.maintenance.report_generator import MaintenanceReportGenerator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Error store maintenance for e2e test runs")
    parser.add_argument("--app", help="Application name (default: $APP or sauce-demo)")
    parser.add_argument("--env", help="Environment (default: $ENV or qa)")
    parser.add_argument("--results-dir", help="Override the test results directory")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("stats", help="Print error counts per category")

    report = sub.add_parser("report", help="Write Markdown and JSON maintenance reports")
    report.add_argument("--output", help="Directory for the reports (default: results dir)")

    prune = sub.add_parser("prune", help="Delete error logs older than N days")
    prune.add_argument("--days", type=float, help="Age cutoff in days (default: ERROR_MAX_AGE or 30)")

    suggest = sub.add_parser("suggest", help="Ask the AI advisor for maintenance suggestions")
    suggest.add_argument("--model", help="Override the completion model")
    return parser


def _reporter(args: argparse.Namespace, settings: HarnessSettings) -> ErrorReporter:
    results_dir = Path(args.results_dir) if args.results_dir else settings.test_results_dir
    return ErrorReporter(results_dir=results_dir, settings=settings.error_reporting)


def run(args: argparse.Namespace) -> int:
    settings = load_settings(app=args.app, env=args.env)
    reporter = _reporter(args, settings)

    if args.command == "stats":
        stats = reporter.get_statistics()
        print(json.dumps({category.value: count for category, count in stats.items()}, indent=2))
        return 0

    if args.command == "prune":
        removed = reporter.prune_older_than(args.days)
        print(f"Removed {removed} error logs")
        return 0

    report = MaintenanceAggregator(reporter).build_report()

    if args.command == "report":
        output_dir = Path(args.output) if args.output else reporter.results_dir
        md_path, json_path = MaintenanceReportGenerator(report).save_all(output_dir)
        print(f"Reports written to {md_path} and {json_path}")
        return 0

    if args.command == "suggest":
        if not settings.ai_assisted:
            raise ConfigurationError("AI assistance is disabled (set AI_ASSISTED=true)")
        advisor_settings = AdvisorSettings.from_env()
        if args.model:
            advisor_settings.model = args.model
        advisor = MaintenanceAdvisor(advisor_settings)
        print(asyncio.run(advisor.suggest(report)))
        return 0

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    try:
        code = run(args)
    except (ConfigurationError, AdvisorError) as e:
        logger.error(str(e))
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
