# File: sales_tracker/processors/analytics.py
"""
Funnel, pipeline, throughput, velocity and cohort analytics.

Tasks only carry their current status, not a transition log, so the funnel
treats In Progress and Done as "past Todo" and Done as "past In Progress".
"""

import math
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Sequence

from sales_tracker.core.config_manager import Config
from sales_tracker.models import (
    Task, DerivedTask, Priority, Status,
    FunnelCounts, VelocityStats, WeeklyThroughput, CohortRevenue,
    ensure_utc,
)
from sales_tracker.processors.metrics_processor import finite_or_zero
from sales_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)

SECONDS_PER_DAY = 24 * 3600
PRIORITY_ORDER = {p: i for i, p in enumerate(Priority)}


def compute_funnel(tasks: Iterable[Task]) -> FunnelCounts:
    counts = {status: 0 for status in Status}
    for t in tasks:
        counts[t.status] += 1

    todo = counts[Status.TODO]
    in_progress = counts[Status.IN_PROGRESS]
    done = counts[Status.DONE]
    total = todo + in_progress + done

    return FunnelCounts(
        todo=todo,
        in_progress=in_progress,
        done=done,
        conversion_todo_to_in_progress=(in_progress + done) / total if total else 0.0,
        conversion_in_progress_to_done=done / in_progress if in_progress else 0.0,
    )


def compute_weighted_pipeline(tasks: Iterable[Task]) -> float:
    """Probability-weighted revenue: Todo 10%, In Progress 50%, Done 100%."""
    return sum(finite_or_zero(t.revenue) * Config.STAGE_WEIGHTS[t.status] for t in tasks)


def iso_week_key(dt: datetime) -> str:
    """
    ISO-8601 week key 'YYYY-Www' of a timestamp, evaluated in UTC.

    The week belongs to the year of its Thursday; the week number counts
    from the week holding January 4th, which always contains that year's
    first Thursday.
    """
    day = ensure_utc(dt).date()
    thursday = day + timedelta(days=3 - day.weekday())
    week_one = date(thursday.year, 1, 4)
    week = 1 + round((thursday - week_one).days / 7)
    return f"{thursday.year}-W{week:02d}"


def days_between(start: datetime, end: datetime) -> int:
    """Whole days from start to end, rounded half up and clamped at 0."""
    seconds = (ensure_utc(end) - ensure_utc(start)).total_seconds()
    return max(0, math.floor(seconds / SECONDS_PER_DAY + 0.5))


def compute_throughput_by_week(tasks: Iterable[Task]) -> List[WeeklyThroughput]:
    """Completed-task count and revenue per ISO week of completion, oldest first."""
    by_week: Dict[str, WeeklyThroughput] = {}
    for t in tasks:
        if not t.completed_at:
            continue
        key = iso_week_key(t.completed_at)
        entry = by_week.setdefault(key, WeeklyThroughput(week=key, count=0, revenue=0.0))
        entry.count += 1
        entry.revenue += finite_or_zero(t.revenue)

    logger.debug(f"Throughput spans {len(by_week)} ISO weeks")
    return [by_week[key] for key in sorted(by_week)]


def compute_velocity_by_priority(tasks: Iterable[Task]) -> Dict[Priority, VelocityStats]:
    """
    Cycle time (created -> completed) per priority.

    median_days is the element at index n // 2 of the sorted durations, so an
    even-length bucket reports the upper of its two middle values.
    """
    groups: Dict[Priority, List[int]] = {p: [] for p in Priority}
    for t in tasks:
        if t.completed_at:
            groups[t.priority].append(days_between(t.created_at, t.completed_at))

    stats = {}
    for priority, durations in groups.items():
        if not durations:
            stats[priority] = VelocityStats(avg_days=0.0, median_days=0)
            continue
        ordered = sorted(durations)
        stats[priority] = VelocityStats(
            avg_days=sum(ordered) / len(ordered),
            median_days=ordered[len(ordered) // 2],
        )
    return stats


def compute_cohort_revenue(tasks: Iterable[Task]) -> List[CohortRevenue]:
    """Revenue by (ISO week of creation, priority), oldest week first."""
    by_key: Dict[tuple, float] = defaultdict(float)
    for t in tasks:
        by_key[(iso_week_key(t.created_at), t.priority)] += finite_or_zero(t.revenue)

    ordered = sorted(by_key.items(), key=lambda item: (item[0][0], PRIORITY_ORDER[item[0][1]]))
    return [
        CohortRevenue(week=week, priority=priority, revenue=revenue)
        for (week, priority), revenue in ordered
    ]


def compute_revenue_by_priority(tasks: Iterable[Task]) -> Dict[Priority, float]:
    totals = {p: 0.0 for p in Priority}
    for t in tasks:
        totals[t.priority] += finite_or_zero(t.revenue)
    return totals


def compute_revenue_by_status(tasks: Iterable[Task]) -> Dict[Status, float]:
    totals = {s: 0.0 for s in Status}
    for t in tasks:
        totals[t.status] += finite_or_zero(t.revenue)
    return totals


ROI_BUCKETS = ("<200", "200-500", ">500", "N/A")


def compute_roi_buckets(tasks: Sequence[DerivedTask]) -> Dict[str, int]:
    """
    Count derived tasks per ROI band.

    Tasks whose ROI is not applicable go to 'N/A' only; their fallback ROI of
    0 is not counted in '<200'.
    """
    buckets = {label: 0 for label in ROI_BUCKETS}
    for t in tasks:
        if not t.roi_applicable:
            buckets["N/A"] += 1
        elif t.roi < 200:
            buckets["<200"] += 1
        elif t.roi <= 500:
            buckets["200-500"] += 1
        else:
            buckets[">500"] += 1
    return buckets
