# File: sales_tracker/services/task_loader.py
"""
Loads the initial task collection and normalizes raw records into Tasks.

Loading is the one boundary that can fail. Failures surface as
TaskLoadError, which callers report as recoverable (reload to retry).
"""

import json
import math
from datetime import timedelta
from pathlib import Path
from typing import Any, List, Optional

import requests

from sales_tracker.core.clock import SystemClock
from sales_tracker.core.config_manager import Config
from sales_tracker.models import (
    Task, Priority, Status, TaskLoadError,
    coerce_number, parse_enum, parse_iso_datetime,
)
from sales_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


def _pick(record: dict, *keys):
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def normalize_task(record: dict, index: int, clock) -> Task:
    """
    Normalize one raw record.

    Args:
        record: Raw mapping (camelCase or snake_case keys)
        index: Position in the feed; missing created_at defaults to
            index + 1 days before now
        clock: Object with a now() method
    """
    now = clock.now()
    created = parse_iso_datetime(_pick(record, 'created_at', 'createdAt'))
    if created is None:
        created = now - timedelta(days=index + 1)

    status = parse_enum(Status, record.get('status'), Status.TODO)
    completed = parse_iso_datetime(_pick(record, 'completed_at', 'completedAt'))
    if completed is None and status == Status.DONE:
        completed = created + timedelta(days=1)

    revenue = coerce_number(record.get('revenue'))
    if not math.isfinite(revenue):
        revenue = 0.0

    time_taken = coerce_number(_pick(record, 'time_taken', 'timeTaken'))
    if not math.isfinite(time_taken) or time_taken <= 0:
        time_taken = 1.0

    return Task(
        id=str(record.get('id') or f"task-{index + 1}"),
        title=str(record.get('title') or 'Untitled Task'),
        revenue=revenue,
        time_taken=time_taken,
        priority=parse_enum(Priority, record.get('priority'), Priority.LOW),
        status=status,
        created_at=created,
        notes=record.get('notes') or None,
        completed_at=completed,
    )


def normalize_tasks(raw: Any, clock=None) -> List[Task]:
    """Normalize a raw feed into Tasks; anything that is not a list yields []."""
    clock = clock or SystemClock()
    if not isinstance(raw, list):
        logger.warning(f"Expected a list of tasks, got {type(raw).__name__}; using no tasks")
        return []

    tasks: List[Task] = []
    for index, record in enumerate(raw):
        if not isinstance(record, dict):
            logger.warning(f"Skipping task record #{index}: not an object")
            continue
        tasks.append(normalize_task(record, index, clock))
    return tasks


class TaskLoader:
    """Fetches raw task JSON from a local file or an http(s) URL."""

    def __init__(self, source: Optional[str] = None, clock=None, timeout: float = Config.HTTP_TIMEOUT):
        """
        Args:
            source: File path or URL (default: Config.TASKS_SOURCE)
            clock: Clock used to default missing timestamps
            timeout: HTTP timeout in seconds
        """
        self.source = str(source or Config.TASKS_SOURCE)
        self.clock = clock or SystemClock()
        self.timeout = timeout

    def _is_url(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    def fetch_raw(self) -> Any:
        """Return the decoded JSON document from the source."""
        if self._is_url():
            return self._fetch_url()
        return self._read_file()

    def _fetch_url(self) -> Any:
        logger.info(f"Fetching tasks from {self.source}")
        try:
            response = requests.get(self.source, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.error(f"Request for {self.source} timed out")
            raise TaskLoadError(self.source, "request timed out")
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error fetching tasks: {e}", exc_info=True)
            raise TaskLoadError(self.source, str(e)) from e

        # A non-OK response means "no tasks", not a failure
        if not response.ok:
            logger.warning(f"Task feed answered HTTP {response.status_code}; starting with no tasks")
            return []

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Task feed returned invalid JSON: {e}")
            raise TaskLoadError(self.source, f"invalid JSON: {e}") from e

    def _read_file(self) -> Any:
        path = Path(self.source)
        logger.info(f"Reading tasks from {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError as e:
            logger.error(f"Task file not found: {path}")
            raise TaskLoadError(self.source, "file not found") from e
        except json.JSONDecodeError as e:
            logger.error(f"Task file {path} is not valid JSON: {e}")
            raise TaskLoadError(self.source, f"invalid JSON: {e}") from e
        except OSError as e:
            logger.error(f"Could not read task file {path}: {e}")
            raise TaskLoadError(self.source, str(e)) from e

    def load(self) -> List[Task]:
        """
        Load and normalize the task collection.

        Raises:
            TaskLoadError: If the source cannot be read or decoded
        """
        tasks = normalize_tasks(self.fetch_raw(), self.clock)
        logger.info(f"Loaded {len(tasks)} tasks from {self.source}")
        return tasks
