# File: sales_tracker/models/tasks.py

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Optional

from .enums import Priority, Status
from .common import parse_iso_datetime, parse_enum, to_iso


@dataclass
class Task:
    """A sales task as owned by the calling application."""
    id: str
    title: str
    revenue: float
    time_taken: float
    priority: Priority
    status: Status
    created_at: datetime
    notes: Optional[str] = None
    completed_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate task data and auto-convert types."""
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValueError(f"Task title cannot be empty (id={self.id})")

        # Auto-convert string enums, unknown values fall back to Low/Todo
        if not isinstance(self.priority, Priority):
            self.priority = parse_enum(Priority, self.priority, Priority.LOW)
        if not isinstance(self.status, Status):
            self.status = parse_enum(Status, self.status, Status.TODO)

        created = parse_iso_datetime(self.created_at)
        if created is None:
            raise ValueError(f"Task created_at is missing or invalid: {self.title}")
        self.created_at = created

        if self.completed_at:
            self.completed_at = parse_iso_datetime(self.completed_at)
        else:
            self.completed_at = None

    def is_done(self) -> bool:
        """Check if the task has reached the Done stage."""
        return self.status == Status.DONE

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'revenue': self.revenue,
            'time_taken': self.time_taken,
            'priority': self.priority.value,
            'status': self.status.value,
            'notes': self.notes,
            'created_at': to_iso(self.created_at),
            'completed_at': to_iso(self.completed_at),
        }


@dataclass
class DerivedTask(Task):
    """Task augmented with computed analytics fields."""
    roi: float = 0.0
    priority_weight: int = 1
    # False when the ROI guard fell back to 0 because the inputs were invalid
    roi_applicable: bool = True

    def to_task(self) -> Task:
        """Strip the derived fields again."""
        return Task(**{f.name: getattr(self, f.name) for f in fields(Task)})

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'roi': self.roi,
            'priority_weight': self.priority_weight,
            'roi_applicable': self.roi_applicable,
        })
        return data


def _first(data: dict, *keys, default=None):
    """Return the first non-None value among alternative key spellings."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


def task_from_dict(data: dict) -> Task:
    """
    Create Task from dictionary with type safety.

    Accepts both snake_case and the camelCase keys used by the dashboard's
    JSON feed (timeTaken, createdAt, completedAt). Numbers are taken as
    given; normalization belongs to the loader.
    """
    return Task(
        id=str(data.get('id', '')),
        title=str(data.get('title') or 'Untitled Task'),
        revenue=_first(data, 'revenue', default=0),
        time_taken=_first(data, 'time_taken', 'timeTaken', default=1),
        priority=parse_enum(Priority, data.get('priority'), Priority.LOW),
        status=parse_enum(Status, data.get('status'), Status.TODO),
        created_at=_first(data, 'created_at', 'createdAt'),
        notes=data.get('notes'),
        completed_at=_first(data, 'completed_at', 'completedAt'),
    )
