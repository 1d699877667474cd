# File: sales_tracker/core/orchestrator.py
"""
Dashboard orchestrator for the sales tracker.
Loads the task collection and runs every analytics processor over it.

Each processor is a pure function of the task list, so a report is always
rebuilt from scratch and never goes stale.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from sales_tracker.core.config_manager import Config
from sales_tracker.models import (
    Task, DerivedTask, Metrics, FunnelCounts, VelocityStats,
    WeeklyThroughput, CohortRevenue, ForecastPoint,
    Priority, Status, TaskLoadError,
)
from sales_tracker.processors.task_processor import TaskProcessor
from sales_tracker.processors.metrics_processor import compute_metrics
from sales_tracker.processors.analytics import (
    compute_funnel,
    compute_weighted_pipeline,
    compute_throughput_by_week,
    compute_velocity_by_priority,
    compute_cohort_revenue,
    compute_revenue_by_priority,
    compute_revenue_by_status,
    compute_roi_buckets,
)
from sales_tracker.processors.forecast import compute_forecast
from sales_tracker.services.task_loader import TaskLoader
from sales_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class DashboardReport:
    """Everything the dashboard shows for one (filtered) task set."""
    tasks: List[DerivedTask] = field(default_factory=list)
    metrics: Metrics = field(default_factory=Metrics)
    funnel: FunnelCounts = field(default_factory=FunnelCounts)
    weighted_pipeline: float = 0.0
    throughput: List[WeeklyThroughput] = field(default_factory=list)
    velocity: Dict[Priority, VelocityStats] = field(
        default_factory=lambda: {p: VelocityStats() for p in Priority}
    )
    cohorts: List[CohortRevenue] = field(default_factory=list)
    forecast: List[ForecastPoint] = field(default_factory=list)
    revenue_by_priority: Dict[Priority, float] = field(default_factory=dict)
    revenue_by_status: Dict[Status, float] = field(default_factory=dict)
    roi_buckets: Dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view of the report."""
        return {
            'tasks': [t.to_dict() for t in self.tasks],
            'metrics': self.metrics.to_dict(),
            'funnel': self.funnel.to_dict(),
            'weighted_pipeline': self.weighted_pipeline,
            'throughput': [w.to_dict() for w in self.throughput],
            'velocity': {p.value: v.to_dict() for p, v in self.velocity.items()},
            'cohorts': [c.to_dict() for c in self.cohorts],
            'forecast': [f.to_dict() for f in self.forecast],
            'revenue_by_priority': {p.value: r for p, r in self.revenue_by_priority.items()},
            'revenue_by_status': {s.value: r for s, r in self.revenue_by_status.items()},
            'roi_buckets': dict(self.roi_buckets),
            'error': self.error,
        }


class DashboardOrchestrator:
    """
    Coordinates loading and the analytics pipeline.

    The metrics, funnel and charts follow the filtered view, as the
    dashboard shows them for whatever the user is currently looking at.
    """

    def __init__(self, loader: Optional[TaskLoader] = None, horizon: int = Config.FORECAST_HORIZON):
        """
        Args:
            loader: Source of the initial task collection
            horizon: Forecast horizon in weeks
        """
        self.loader = loader or TaskLoader()
        self.horizon = horizon
        self.task_processor = TaskProcessor()

    def build_report(
        self,
        tasks: Sequence[Task],
        query: Optional[str] = None,
        status: Optional[Any] = None,
        priority: Optional[Any] = None,
    ) -> DashboardReport:
        """Run every processor over the tasks that pass the filters."""
        visible = self.task_processor.ranked_view(tasks, query=query, status=status, priority=priority)
        throughput = compute_throughput_by_week(visible)

        report = DashboardReport(
            tasks=visible,
            metrics=compute_metrics(visible),
            funnel=compute_funnel(visible),
            weighted_pipeline=compute_weighted_pipeline(visible),
            throughput=throughput,
            velocity=compute_velocity_by_priority(visible),
            cohorts=compute_cohort_revenue(visible),
            forecast=compute_forecast(throughput, self.horizon),
            revenue_by_priority=compute_revenue_by_priority(visible),
            revenue_by_status=compute_revenue_by_status(visible),
            roi_buckets=compute_roi_buckets(visible),
        )
        logger.info(
            f"Report built: {len(visible)} tasks, {len(throughput)} weeks, "
            f"{len(report.forecast)} forecast points"
        )
        return report

    def run(
        self,
        query: Optional[str] = None,
        status: Optional[Any] = None,
        priority: Optional[Any] = None,
    ) -> DashboardReport:
        """
        Load the tasks and build the report.

        A load failure is reported on the returned report rather than raised,
        so callers can show it and offer a reload.
        """
        logger.info("=" * 60)
        logger.info("Building sales dashboard")
        logger.info("=" * 60)

        try:
            tasks = self.loader.load()
        except TaskLoadError as e:
            logger.error(f"Could not load tasks: {e}")
            return DashboardReport(error=str(e))

        return self.build_report(tasks, query=query, status=status, priority=priority)


class DashboardFactory:
    """Factory for creating DashboardOrchestrator instances."""

    @staticmethod
    def create(source: Optional[str] = None, horizon: Optional[int] = None, clock=None) -> DashboardOrchestrator:
        """
        Raises:
            ValueError: If configuration is invalid
        """
        if not Config.validate():
            raise ValueError("Configuration validation failed. Check the SALES_TRACKER_* environment variables.")

        loader = TaskLoader(source=source, clock=clock)
        return DashboardOrchestrator(loader=loader, horizon=horizon or Config.FORECAST_HORIZON)
