# File: tests/integration/test_orchestrator.py
"""
Integration tests for the dashboard pipeline.
Runs loading, ranking and every analytics processor end to end.
"""

import importlib.util
import json
from pathlib import Path
from unittest.mock import Mock

import pytest

from sales_tracker.core.orchestrator import DashboardOrchestrator, DashboardFactory, DashboardReport
from sales_tracker.models import Priority, Status, TaskLoadError
from sales_tracker.services.csv_service import from_csv, to_csv
from sales_tracker.services.seed import generate_sales_tasks
from sales_tracker.services.task_loader import TaskLoader
from sales_tracker.services.task_store import TaskStore


@pytest.fixture
def feed_file(tmp_path, raw_feed):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps(raw_feed), encoding="utf-8")
    return path


class TestDashboardOrchestrator:
    """Tests for DashboardOrchestrator."""

    def test_run_from_file(self, feed_file, fixed_clock):
        orchestrator = DashboardOrchestrator(TaskLoader(str(feed_file), clock=fixed_clock), horizon=2)

        report = orchestrator.run()

        assert report.ok
        # Ranked by ROI: 800/1, 450/3, then the zero-revenue task
        assert [t.id for t in report.tasks] == ["t-2", "t-1", "t-3"]
        assert report.tasks[1].roi == 150.0
        assert report.metrics.total_revenue == 450
        assert report.funnel.done == 1
        assert report.weighted_pipeline == pytest.approx(450 + 800 * 0.5)
        assert [w.week for w in report.throughput] == ["2024-W10"]
        assert report.velocity[Priority.HIGH].median_days == 3
        # A single week of throughput is not enough to forecast
        assert report.forecast == []

    def test_load_failure_is_reported_not_raised(self):
        loader = Mock()
        loader.load.side_effect = TaskLoadError("tasks.json", "file not found")

        report = DashboardOrchestrator(loader).run()

        assert not report.ok
        assert "file not found" in report.error
        assert report.tasks == []
        assert report.metrics.total_revenue == 0

    def test_filters_apply_to_analytics(self, fixed_clock):
        tasks = generate_sales_tasks(30, fixed_clock)
        orchestrator = DashboardOrchestrator(Mock())

        report = orchestrator.build_report(tasks, priority="Medium", status="Done")

        assert report.tasks
        assert all(t.priority == Priority.MEDIUM and t.status == Status.DONE for t in report.tasks)
        assert report.funnel.done == len(report.tasks)
        assert report.revenue_by_priority[Priority.LOW] == 0

    def test_seeded_report_forecasts(self, fixed_clock):
        tasks = generate_sales_tasks(50, fixed_clock)

        report = DashboardOrchestrator(Mock(), horizon=4).build_report(tasks)

        assert len(report.throughput) >= 2
        assert [p.week for p in report.forecast] == ["+1", "+2", "+3", "+4"]
        assert all(p.revenue >= 0 for p in report.forecast)
        assert sum(report.roi_buckets.values()) == 50
        assert report.roi_buckets["N/A"] == 0

    def test_report_to_dict_is_json_serializable(self, fixed_clock):
        tasks = generate_sales_tasks(12, fixed_clock)
        data = DashboardOrchestrator(Mock()).build_report(tasks).to_dict()

        decoded = json.loads(json.dumps(data))
        assert decoded['metrics']['performance_grade'] in {"Excellent", "Good", "Needs Improvement"}
        assert set(decoded['velocity']) == {"High", "Medium", "Low"}
        assert decoded['error'] is None

    def test_empty_report_defaults(self):
        report = DashboardReport()
        assert report.ok
        assert report.to_dict()['velocity']['High'] == {'avg_days': 0.0, 'median_days': 0}


class TestDashboardFactory:
    """Tests for DashboardFactory."""

    def test_create_uses_source(self, feed_file):
        orchestrator = DashboardFactory.create(source=str(feed_file), horizon=3)
        assert orchestrator.loader.source == str(feed_file)
        assert orchestrator.horizon == 3


class TestStoreToExport:
    """Store mutations flow through ranking into the CSV export."""

    def test_round_trip_after_edits(self, fixed_clock, id_generator):
        store = TaskStore(clock=fixed_clock, id_generator=id_generator)
        demo = store.add("Product demo", 900, 3, "High", "Todo", notes='Bring "v2" deck, slides\nand pricing')
        store.add("Cold call", 100, 4, "Low", "Todo")
        store.update(demo.id, status="Done")

        records = from_csv(to_csv(store.derived_sorted()))

        assert [r['title'] for r in records] == ["Product demo", "Cold call"]
        assert records[0]['notes'] == 'Bring "v2" deck, slides\nand pricing'
        assert records[0]['status'] == "Done"


# ==================== CLI Tests ====================

def _load_report_script():
    path = Path(__file__).resolve().parents[2] / "scripts" / "report.py"
    spec = importlib.util.spec_from_file_location("report_script", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestReportCli:
    """Tests for scripts/report.py."""

    def test_seed_and_export(self, tmp_path, capsys):
        report_script = _load_report_script()
        target = tmp_path / "out.csv"

        code = report_script.main(["--seed", "9", "--priority", "High", "--export", str(target)])

        assert code == 0
        records = from_csv(target.read_text(encoding="utf-8"))
        assert len(records) == 3
        assert all(r['priority'] == "High" for r in records)
        assert "SALES DASHBOARD" in capsys.readouterr().out

    def test_json_output(self, feed_file, capsys):
        report_script = _load_report_script()

        assert report_script.main(["--source", str(feed_file), "--json"]) == 0
        out = capsys.readouterr().out
        # Log lines may share stdout with the report
        data, _ = json.JSONDecoder().raw_decode(out[out.index("{"):])
        assert len(data['tasks']) == 3

    def test_missing_source_fails(self, tmp_path, capsys):
        report_script = _load_report_script()

        assert report_script.main(["--source", str(tmp_path / "missing.json")]) == 1
        assert "Could not load tasks" in capsys.readouterr().out
