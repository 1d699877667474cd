from .enums import Priority, Status, PerformanceGrade, ActivityType
from .common import parse_iso_datetime, ensure_utc, to_iso, coerce_number, parse_enum
from .tasks import Task, DerivedTask, task_from_dict
from .metrics import (
    Metrics,
    FunnelCounts,
    VelocityStats,
    WeeklyThroughput,
    CohortRevenue,
    ForecastPoint,
    LinearTrend,
)
from .activity import ActivityItem
from .errors import (
    SalesTrackerError,
    TaskLoadError,
    TaskNotFoundError,
    TaskValidationError,
    DuplicateTitleError,
)

__all__ = [
    "Priority",
    "Status",
    "PerformanceGrade",
    "ActivityType",
    "parse_iso_datetime",
    "ensure_utc",
    "to_iso",
    "coerce_number",
    "parse_enum",
    "Task",
    "DerivedTask",
    "task_from_dict",
    "Metrics",
    "FunnelCounts",
    "VelocityStats",
    "WeeklyThroughput",
    "CohortRevenue",
    "ForecastPoint",
    "LinearTrend",
    "ActivityItem",
    "SalesTrackerError",
    "TaskLoadError",
    "TaskNotFoundError",
    "TaskValidationError",
    "DuplicateTitleError",
]
