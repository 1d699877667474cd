# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable task data and a pinned clock for all tests.
"""

import os
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest
import pytz

# Keep test runs from writing log files
os.environ.setdefault("SALES_TRACKER_LOG_DIR", "")

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from sales_tracker.core.clock import FixedClock, SequentialIdGenerator
from sales_tracker.models import Task, Priority, Status


# ==================== Clock Fixtures ====================

@pytest.fixture
def now():
    """A fixed 'current' instant: Wednesday 2024-03-13 12:00 UTC (ISO week 2024-W11)."""
    return pytz.utc.localize(datetime(2024, 3, 13, 12, 0, 0))


@pytest.fixture
def fixed_clock(now):
    return FixedClock(now)


@pytest.fixture
def id_generator():
    return SequentialIdGenerator(prefix="t-", start=1)


# ==================== Task Fixtures ====================

@pytest.fixture
def make_task(now):
    """Factory for tasks with sensible defaults."""
    counter = {'n': 0}

    def _make(title=None, revenue=100.0, time_taken=1.0, priority=Priority.MEDIUM,
              status=Status.TODO, created_at=None, completed_at=None, notes=None, id=None):
        counter['n'] += 1
        return Task(
            id=id or f"task-{counter['n']}",
            title=title or f"Task {counter['n']}",
            revenue=revenue,
            time_taken=time_taken,
            priority=priority,
            status=status,
            created_at=created_at or now - timedelta(days=7),
            completed_at=completed_at,
            notes=notes,
        )

    return _make


@pytest.fixture
def sample_tasks(make_task, now):
    """A small mixed pipeline."""
    created = now - timedelta(days=10)
    return [
        make_task("Product demo", revenue=1200, time_taken=3, priority=Priority.HIGH,
                  status=Status.DONE, created_at=created, completed_at=created + timedelta(days=2)),
        make_task("Pricing review", revenue=600, time_taken=2, priority=Priority.MEDIUM,
                  status=Status.IN_PROGRESS, created_at=created),
        make_task("Cold calling block", revenue=150, time_taken=5, priority=Priority.LOW,
                  status=Status.TODO, created_at=created),
        make_task("Contract negotiation", revenue=2400, time_taken=4, priority=Priority.HIGH,
                  status=Status.DONE, created_at=created, completed_at=created + timedelta(days=4)),
    ]


@pytest.fixture
def raw_feed():
    """Raw task records in the dashboard's JSON shape."""
    return [
        {
            'id': 't-1',
            'title': 'Lead qualification',
            'revenue': '450',
            'timeTaken': 3,
            'priority': 'High',
            'status': 'Done',
            'createdAt': '2024-03-01T09:00:00Z',
            'completedAt': '2024-03-04T09:00:00Z',
        },
        {
            'id': 't-2',
            'title': 'Proposal drafting',
            'revenue': 800,
            'timeTaken': 0,
            'priority': 'Medium',
            'status': 'In Progress',
            'createdAt': '2024-03-05T09:00:00Z',
        },
        {
            'id': 't-3',
            'title': 'Follow-up emails',
            'revenue': 'n/a',
            'timeTaken': 2,
            'priority': 'Low',
            'status': 'Todo',
            'notes': 'Call back, "urgent"',
        },
    ]
