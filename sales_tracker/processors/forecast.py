# File: sales_tracker/processors/forecast.py
"""
Least-squares revenue forecast over a weekly series.
"""

from typing import Any, Iterable, List, Sequence

from sales_tracker.core.config_manager import Config
from sales_tracker.models import ForecastPoint, LinearTrend
from sales_tracker.processors.metrics_processor import finite_or_zero
from sales_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


def _revenue_of(point: Any) -> float:
    """Revenue of a series point given as a record or a mapping."""
    if isinstance(point, dict):
        return finite_or_zero(point.get('revenue'))
    return finite_or_zero(getattr(point, 'revenue', None))


def fit_linear_trend(values: Sequence[float]) -> LinearTrend:
    """
    Fit values[i] = slope * i + intercept by ordinary least squares.

    A zero denominator (n * sum(x^2) - sum(x)^2) is replaced by 1.
    """
    n = len(values)
    xs = range(n)
    sum_x = sum(xs)
    sum_y = sum(values)
    sum_xy = sum(x * y for x, y in zip(xs, values))
    sum_xx = sum(x * x for x in xs)

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        denominator = 1

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n if n else 0.0
    return LinearTrend(slope=slope, intercept=intercept)


def compute_forecast(weekly: Iterable[Any], horizon: int = Config.FORECAST_HORIZON) -> List[ForecastPoint]:
    """
    Project revenue `horizon` periods past the end of a weekly series.

    Args:
        weekly: Ordered points with a revenue field (WeeklyThroughput,
            ForecastPoint or {'week': ..., 'revenue': ...} dicts)
        horizon: Number of future periods

    Returns:
        Points labelled '+1'..'+horizon' with revenue floored at 0, or an
        empty list when fewer than two points are available.
    """
    values = [_revenue_of(p) for p in weekly]
    if len(values) < 2:
        logger.debug(f"Forecast skipped: {len(values)} point(s) is not enough data")
        return []

    trend = fit_linear_trend(values)
    last_index = len(values) - 1
    logger.debug(f"Forecast trend slope={trend.slope:.2f} intercept={trend.intercept:.2f}")

    return [
        ForecastPoint(week=f"+{i}", revenue=max(0.0, trend.predict(last_index + i)))
        for i in range(1, horizon + 1)
    ]
