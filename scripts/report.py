"""
Sales dashboard entry point.
Prints the ranked tasks and analytics for a task feed, optionally exporting
the visible tasks as CSV.
"""

import argparse
import json
import sys
import time
from pathlib import Path

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from sales_tracker.core.orchestrator import DashboardFactory, DashboardReport
from sales_tracker.core.config_manager import Config
from sales_tracker.services.csv_service import export_csv
from sales_tracker.services.seed import generate_sales_tasks
from sales_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sales task dashboard report")
    parser.add_argument("--source", help=f"Task JSON file or URL (default: {Config.TASKS_SOURCE})")
    parser.add_argument("--seed", type=int, metavar="N", help="Use N generated demo tasks instead of --source")
    parser.add_argument("--query", help="Case-insensitive title search")
    parser.add_argument("--status", default="All", help="Todo, In Progress, Done or All")
    parser.add_argument("--priority", default="All", help="High, Medium, Low or All")
    parser.add_argument("--horizon", type=int, default=Config.FORECAST_HORIZON, help="Forecast horizon in weeks")
    parser.add_argument("--export", metavar="FILE", help="Write the visible tasks to a CSV file")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON")
    return parser.parse_args(argv)


def print_report(report: DashboardReport) -> None:
    m = report.metrics
    print("\n" + "=" * 60)
    print("SALES DASHBOARD")
    print("=" * 60)
    print(f"Total revenue:     {m.total_revenue:,.2f}")
    print(f"Time taken:        {m.total_time_taken:,.1f} h")
    print(f"Efficiency:        {m.time_efficiency_pct:.1f}%")
    print(f"Revenue / hour:    {m.revenue_per_hour:,.2f}")
    print(f"Average ROI:       {m.average_roi:,.1f} ({m.performance_grade.value})")
    print(f"Weighted pipeline: {report.weighted_pipeline:,.2f}")

    f = report.funnel
    print(f"\nFunnel: Todo {f.todo} -> In Progress {f.in_progress} -> Done {f.done}")
    print(f"  Todo->In Progress {f.conversion_todo_to_in_progress:.0%}, "
          f"In Progress->Done {f.conversion_in_progress_to_done:.0%}")

    print("\nVelocity (days):")
    for priority, stats in report.velocity.items():
        print(f"  {priority.value:<7} avg {stats.avg_days:.1f}, median {stats.median_days}")

    if report.forecast:
        print("\nForecast:")
        for point in report.forecast:
            print(f"  {point.week:>4}  {point.revenue:,.2f}")

    print("\nTop tasks:")
    for task in report.tasks[:10]:
        print(f"  {task.roi:>9.2f}  {task.priority.value:<6}  {task.status.value:<11}  {task.title}")


def main(argv=None) -> int:
    """
    Main execution function.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_args(argv)
    start_time = time.time()

    try:
        orchestrator = DashboardFactory.create(source=args.source, horizon=args.horizon)
    except ValueError as e:
        logger.error(str(e))
        return 1

    if args.seed is not None:
        tasks = generate_sales_tasks(args.seed)
        report = orchestrator.build_report(tasks, query=args.query, status=args.status, priority=args.priority)
    else:
        report = orchestrator.run(query=args.query, status=args.status, priority=args.priority)

    if not report.ok:
        print(f"\nCould not load tasks: {report.error}")
        print("Check the source and run the report again.")
        return 1

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print_report(report)

    if args.export:
        path = export_csv(report.tasks, args.export)
        print(f"\nExported {len(report.tasks)} tasks to {path}")

    logger.info(f"Report finished in {time.time() - start_time:.2f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
