# File: sales_tracker/processors/roi.py
"""
ROI calculator and the derivation stage.

safe_roi is the guard that keeps NaN/Infinity out of sorting and
aggregation: every input shape yields a finite number.
"""

import math
from dataclasses import fields
from typing import Any, Iterable, List

from sales_tracker.core.config_manager import Config
from sales_tracker.models import Task, DerivedTask, Priority, coerce_number, parse_enum


def safe_roi(revenue: Any, time_taken: Any) -> float:
    """
    Return revenue per hour rounded to 2 decimals, or 0 for unusable input.

    Args:
        revenue: Anything numeric-coercible
        time_taken: Hours spent; must be finite and > 0

    Returns:
        A finite float
    """
    r = coerce_number(revenue)
    t = coerce_number(time_taken)

    if not math.isfinite(r):
        return 0.0
    if not math.isfinite(t) or t <= 0:
        return 0.0

    roi = round(r / t, 2)
    # Huge revenue over a tiny time can still overflow to inf
    return roi if math.isfinite(roi) else 0.0


def roi_applicable(revenue: Any, time_taken: Any) -> bool:
    """True when safe_roi computes a real ratio rather than falling back to 0."""
    r = coerce_number(revenue)
    t = coerce_number(time_taken)
    return math.isfinite(r) and math.isfinite(t) and t > 0 and math.isfinite(r / t)


def compute_priority_weight(priority: Any) -> int:
    """High -> 3, Medium -> 2, Low -> 1; anything unrecognized ranks as 1."""
    if not isinstance(priority, Priority):
        priority = parse_enum(Priority, priority, None)
    return Config.PRIORITY_WEIGHTS.get(priority, Config.DEFAULT_PRIORITY_WEIGHT)


def with_derived(task: Task) -> DerivedTask:
    """Convert a Task into a DerivedTask carrying roi and priority_weight."""
    base = {f.name: getattr(task, f.name) for f in fields(Task)}
    return DerivedTask(
        **base,
        roi=safe_roi(task.revenue, task.time_taken),
        priority_weight=compute_priority_weight(task.priority),
        roi_applicable=roi_applicable(task.revenue, task.time_taken),
    )


def derive_all(tasks: Iterable[Task]) -> List[DerivedTask]:
    return [with_derived(t) for t in tasks]
