# File: tests/unit/test_task_loader.py
"""
Unit tests for the task loader and normalizer.
"""

import json
from datetime import timedelta
from unittest.mock import Mock, patch

import pytest
import requests

from sales_tracker.models import Priority, Status, TaskLoadError
from sales_tracker.services.task_loader import TaskLoader, normalize_task, normalize_tasks


class TestNormalizeTasks:
    """Tests for normalize_tasks."""

    def test_coerces_fields(self, raw_feed, fixed_clock):
        tasks = normalize_tasks(raw_feed, fixed_clock)

        assert [t.id for t in tasks] == ["t-1", "t-2", "t-3"]
        assert tasks[0].revenue == 450.0
        assert tasks[0].priority == Priority.HIGH
        assert tasks[1].status == Status.IN_PROGRESS

    def test_time_taken_clamped_to_one(self, raw_feed, fixed_clock):
        tasks = normalize_tasks(raw_feed, fixed_clock)
        assert tasks[1].time_taken == 1.0

    def test_non_numeric_revenue_becomes_zero(self, raw_feed, fixed_clock):
        tasks = normalize_tasks(raw_feed, fixed_clock)
        assert tasks[2].revenue == 0.0
        assert tasks[2].notes == 'Call back, "urgent"'

    def test_missing_created_at_uses_clock(self, raw_feed, fixed_clock, now):
        tasks = normalize_tasks(raw_feed, fixed_clock)
        # Third record (index 2) defaults to three days before now
        assert tasks[2].created_at == now - timedelta(days=3)

    def test_completed_at_kept_or_synthesized(self, fixed_clock, now):
        done_without_stamp = {'id': 'x', 'title': 'Closed deal', 'status': 'Done',
                              'createdAt': '2024-03-01T10:00:00Z'}
        task = normalize_task(done_without_stamp, 0, fixed_clock)

        assert task.completed_at == task.created_at + timedelta(days=1)

    def test_open_task_has_no_completion(self, raw_feed, fixed_clock):
        tasks = normalize_tasks(raw_feed, fixed_clock)
        assert tasks[1].completed_at is None

    def test_snake_case_keys(self, fixed_clock):
        task = normalize_task({'id': 'a', 'title': 'Demo', 'time_taken': 4,
                               'created_at': '2024-03-01T00:00:00Z'}, 0, fixed_clock)
        assert task.time_taken == 4.0
        assert task.priority == Priority.LOW
        assert task.status == Status.TODO

    def test_missing_title_and_id(self, fixed_clock):
        task = normalize_task({}, 4, fixed_clock)
        assert task.id == "task-5"
        assert task.title == "Untitled Task"

    @pytest.mark.parametrize("raw", [None, {}, "tasks", 42])
    def test_non_list_yields_empty(self, raw, fixed_clock):
        assert normalize_tasks(raw, fixed_clock) == []

    def test_non_object_records_are_skipped(self, fixed_clock):
        tasks = normalize_tasks([1, {'id': 'a', 'title': 'Demo'}], fixed_clock)
        assert [t.id for t in tasks] == ["a"]


class TestTaskLoaderFile:
    """Tests for loading from a local JSON file."""

    def test_load_file(self, tmp_path, raw_feed, fixed_clock):
        source = tmp_path / "tasks.json"
        source.write_text(json.dumps(raw_feed), encoding="utf-8")

        tasks = TaskLoader(str(source), clock=fixed_clock).load()

        assert len(tasks) == 3

    def test_missing_file_raises_load_error(self, tmp_path, fixed_clock):
        loader = TaskLoader(str(tmp_path / "missing.json"), clock=fixed_clock)
        with pytest.raises(TaskLoadError, match="file not found"):
            loader.load()

    def test_invalid_json_raises_load_error(self, tmp_path, fixed_clock):
        source = tmp_path / "tasks.json"
        source.write_text("{not json", encoding="utf-8")
        with pytest.raises(TaskLoadError, match="invalid JSON"):
            TaskLoader(str(source), clock=fixed_clock).load()


class TestTaskLoaderHttp:
    """Tests for loading over HTTP with requests mocked."""

    URL = "https://example.test/tasks.json"

    @patch("sales_tracker.services.task_loader.requests.get")
    def test_load_url(self, mock_get, raw_feed, fixed_clock):
        mock_get.return_value = Mock(ok=True, status_code=200, json=Mock(return_value=raw_feed))

        tasks = TaskLoader(self.URL, clock=fixed_clock, timeout=5).load()

        mock_get.assert_called_once_with(self.URL, timeout=5)
        assert [t.id for t in tasks] == ["t-1", "t-2", "t-3"]

    @patch("sales_tracker.services.task_loader.requests.get")
    def test_non_ok_response_means_no_tasks(self, mock_get, fixed_clock):
        mock_get.return_value = Mock(ok=False, status_code=404)
        assert TaskLoader(self.URL, clock=fixed_clock).load() == []

    @patch("sales_tracker.services.task_loader.requests.get")
    def test_network_error_raises_load_error(self, mock_get, fixed_clock):
        mock_get.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(TaskLoadError, match="refused"):
            TaskLoader(self.URL, clock=fixed_clock).load()

    @patch("sales_tracker.services.task_loader.requests.get")
    def test_timeout_raises_load_error(self, mock_get, fixed_clock):
        mock_get.side_effect = requests.exceptions.Timeout()
        with pytest.raises(TaskLoadError, match="timed out"):
            TaskLoader(self.URL, clock=fixed_clock).load()

    @patch("sales_tracker.services.task_loader.requests.get")
    def test_bad_json_body_raises_load_error(self, mock_get, fixed_clock):
        mock_get.return_value = Mock(ok=True, status_code=200, json=Mock(side_effect=ValueError("bad")))
        with pytest.raises(TaskLoadError, match="invalid JSON"):
            TaskLoader(self.URL, clock=fixed_clock).load()
