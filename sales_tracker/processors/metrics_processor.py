# File: sales_tracker/processors/metrics_processor.py
"""
Aggregate KPI reducers over a task collection.

Each reducer treats an empty collection as 0 and guards every division, so
no input can produce NaN or Infinity.
"""

import math
from typing import Any, Iterable, Sequence

from sales_tracker.core.config_manager import Config
from sales_tracker.models import Task, Metrics, PerformanceGrade, coerce_number
from sales_tracker.processors.roi import safe_roi
from sales_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


def finite_or_zero(value: Any) -> float:
    """Numeric contribution of a loosely typed value; non-finite counts as 0."""
    number = coerce_number(value)
    return number if math.isfinite(number) else 0.0


def compute_total_revenue(tasks: Iterable[Task]) -> float:
    """Sum of revenue over Done tasks only."""
    return sum(finite_or_zero(t.revenue) for t in tasks if t.is_done())


def compute_total_time_taken(tasks: Iterable[Task]) -> float:
    return sum(finite_or_zero(t.time_taken) for t in tasks)


def compute_time_efficiency(tasks: Sequence[Task]) -> float:
    """Percentage of tasks that are Done (0..100)."""
    if not tasks:
        return 0.0
    done = sum(1 for t in tasks if t.is_done())
    return done / len(tasks) * 100


def compute_revenue_per_hour(tasks: Sequence[Task]) -> float:
    revenue = compute_total_revenue(tasks)
    time = compute_total_time_taken(tasks)
    return revenue / time if time > 0 else 0.0


def compute_average_roi(tasks: Sequence[Task]) -> float:
    """Mean guarded ROI, rounded to 1 decimal place."""
    rois = [safe_roi(t.revenue, t.time_taken) for t in tasks]
    if not rois:
        return 0.0
    return round(sum(rois) / len(rois), 1)


def compute_performance_grade(avg_roi: float) -> PerformanceGrade:
    """Excellent above 500, Good from 200 to 500 inclusive, else Needs Improvement."""
    if avg_roi > Config.GRADE_EXCELLENT_ABOVE:
        return PerformanceGrade.EXCELLENT
    if avg_roi >= Config.GRADE_GOOD_FROM:
        return PerformanceGrade.GOOD
    return PerformanceGrade.NEEDS_IMPROVEMENT


def compute_metrics(tasks: Sequence[Task]) -> Metrics:
    """Bundle all aggregate KPIs for the given tasks."""
    tasks = list(tasks)
    if not tasks:
        return Metrics()

    average_roi = compute_average_roi(tasks)
    metrics = Metrics(
        total_revenue=compute_total_revenue(tasks),
        total_time_taken=compute_total_time_taken(tasks),
        time_efficiency_pct=compute_time_efficiency(tasks),
        revenue_per_hour=compute_revenue_per_hour(tasks),
        average_roi=average_roi,
        performance_grade=compute_performance_grade(average_roi),
    )
    logger.debug(
        f"Metrics over {len(tasks)} tasks: revenue={metrics.total_revenue}, "
        f"avg ROI={metrics.average_roi} ({metrics.performance_grade.value})"
    )
    return metrics
