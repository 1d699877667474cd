# File: sales_tracker/models/metrics.py
"""
Result records produced by the analytics processors.
"""

from dataclasses import dataclass, asdict

from .enums import PerformanceGrade, Priority


@dataclass
class Metrics:
    """Aggregate KPIs over the current task set."""
    total_revenue: float = 0.0
    total_time_taken: float = 0.0
    time_efficiency_pct: float = 0.0
    revenue_per_hour: float = 0.0
    average_roi: float = 0.0
    performance_grade: PerformanceGrade = PerformanceGrade.NEEDS_IMPROVEMENT

    def to_dict(self) -> dict:
        data = asdict(self)
        data['performance_grade'] = self.performance_grade.value
        return data


@dataclass
class FunnelCounts:
    """Status funnel with approximate stage conversion rates."""
    todo: int = 0
    in_progress: int = 0
    done: int = 0
    conversion_todo_to_in_progress: float = 0.0
    conversion_in_progress_to_done: float = 0.0

    @property
    def total(self) -> int:
        return self.todo + self.in_progress + self.done

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class VelocityStats:
    """Cycle time summary for one priority bucket, in whole days."""
    avg_days: float = 0.0
    median_days: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class WeeklyThroughput:
    """Completed tasks and their revenue for one ISO week."""
    week: str
    count: int
    revenue: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class CohortRevenue:
    """Revenue of the tasks created in one ISO week with one priority."""
    week: str
    priority: Priority
    revenue: float

    def to_dict(self) -> dict:
        return {'week': self.week, 'priority': self.priority.value, 'revenue': self.revenue}


@dataclass
class ForecastPoint:
    """A projected revenue value, labelled '+1', '+2', ..."""
    week: str
    revenue: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class LinearTrend:
    """Least-squares fit revenue = slope * index + intercept."""
    slope: float
    intercept: float

    def predict(self, index: float) -> float:
        return self.slope * index + self.intercept
