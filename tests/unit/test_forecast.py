# File: tests/unit/test_forecast.py
"""
Unit tests for the least-squares forecast.
"""

import pytest

from sales_tracker.models import ForecastPoint, WeeklyThroughput
from sales_tracker.processors.forecast import fit_linear_trend, compute_forecast


def series(*revenues):
    return [{'week': f"2024-W{i + 1:02d}", 'revenue': r} for i, r in enumerate(revenues)]


class TestFitLinearTrend:
    """Tests for fit_linear_trend."""

    def test_two_points(self):
        trend = fit_linear_trend([100, 200])
        assert trend.slope == 100
        assert trend.intercept == 100

    def test_flat_series(self):
        trend = fit_linear_trend([50, 50, 50])
        assert trend.slope == 0
        assert trend.intercept == 50

    def test_zero_denominator_falls_back(self):
        # A single point has n*sum(x^2) - sum(x)^2 == 0
        trend = fit_linear_trend([80])
        assert trend.slope == 0
        assert trend.intercept == 80

    def test_noisy_series(self):
        trend = fit_linear_trend([1, 3, 2, 4])
        assert trend.slope == pytest.approx(0.8)
        assert trend.intercept == pytest.approx(1.3)


class TestComputeForecast:
    """Tests for compute_forecast."""

    def test_spec_example(self):
        assert compute_forecast(series(100, 200), horizon=1) == [ForecastPoint(week="+1", revenue=300)]

    def test_default_horizon_is_four(self):
        result = compute_forecast(series(100, 200))
        assert [p.week for p in result] == ["+1", "+2", "+3", "+4"]
        assert [p.revenue for p in result] == [300, 400, 500, 600]

    @pytest.mark.parametrize("points", [[], series(100)])
    def test_insufficient_data(self, points):
        assert compute_forecast(points, horizon=3) == []

    def test_floored_at_zero(self):
        result = compute_forecast(series(300, 100), horizon=3)
        # slope -200 would project -100, -300, -500
        assert [p.revenue for p in result] == [0, 0, 0]

    def test_partial_floor(self):
        result = compute_forecast(series(300, 200), horizon=3)
        assert [p.revenue for p in result] == [100, 0, 0]

    def test_accepts_throughput_records(self):
        weekly = [
            WeeklyThroughput(week="2024-W10", count=1, revenue=100),
            WeeklyThroughput(week="2024-W11", count=2, revenue=200),
        ]
        assert compute_forecast(weekly, horizon=1)[0].revenue == 300

    def test_non_numeric_revenue_counts_as_zero(self):
        result = compute_forecast([{'revenue': 'x'}, {'revenue': 100}], horizon=1)
        assert result == [ForecastPoint(week="+1", revenue=200)]
