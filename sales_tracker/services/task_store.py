# File: sales_tracker/services/task_store.py
"""
In-memory owner of the authoritative task collection.

The store serializes add/update/delete, keeps a bounded history of deleted
tasks for undo, and records an activity log. Derived views and metrics are
recomputed from the current tasks on every call.
"""

import math
from collections import deque
from dataclasses import fields, replace
from typing import Any, Deque, Iterable, List, Optional

from sales_tracker.core.clock import SystemClock, UuidGenerator
from sales_tracker.core.config_manager import Config
from sales_tracker.models import (
    Task, DerivedTask, Metrics, ActivityItem, ActivityType,
    Priority, Status,
    TaskNotFoundError, TaskValidationError, DuplicateTitleError,
    coerce_number, parse_enum,
)
from sales_tracker.processors.metrics_processor import compute_metrics
from sales_tracker.processors.task_processor import TaskProcessor
from sales_tracker.utils.logger import LoggerMixin

TASK_FIELDS = {f.name for f in fields(Task)}


class UndoHistory:
    """Bounded LIFO of deleted tasks; the oldest entry is dropped when full."""

    def __init__(self, capacity: int = Config.UNDO_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Undo capacity must be positive: {capacity}")
        self.capacity = capacity
        self._items: Deque[Task] = deque(maxlen=capacity)

    def push(self, task: Task) -> None:
        self._items.append(task)

    def pop(self) -> Optional[Task]:
        return self._items.pop() if self._items else None

    def peek(self) -> Optional[Task]:
        return self._items[-1] if self._items else None

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class TaskStore(LoggerMixin):
    """CRUD over an in-memory task list with undo and an activity log."""

    def __init__(
        self,
        tasks: Optional[Iterable[Task]] = None,
        clock=None,
        id_generator=None,
        undo_capacity: int = Config.UNDO_CAPACITY,
        activity_limit: int = Config.ACTIVITY_LIMIT,
    ):
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or UuidGenerator()
        self._activity_ids = UuidGenerator()
        self.history = UndoHistory(undo_capacity)
        self.activity_limit = activity_limit
        self.processor = TaskProcessor()
        self._tasks: List[Task] = list(tasks or [])
        self._activity: List[ActivityItem] = []

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    @property
    def activity(self) -> List[ActivityItem]:
        """Activity entries, newest first."""
        return list(self._activity)

    @property
    def last_deleted(self) -> Optional[Task]:
        return self.history.peek()

    def get(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def derived_sorted(self) -> List[DerivedTask]:
        return self.processor.process_tasks(self._tasks)

    def metrics(self) -> Metrics:
        return compute_metrics(self._tasks)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(
        self,
        title: str,
        revenue: Any,
        time_taken: Any,
        priority: Any = Priority.MEDIUM,
        status: Any = Status.TODO,
        notes: Optional[str] = None,
        id: Optional[str] = None,
    ) -> Task:
        """
        Create a task stamped with the current time.

        Raises:
            TaskValidationError: Empty title or negative/non-numeric revenue
            DuplicateTitleError: Title already used (case-insensitive)
        """
        title = self._check_title(title)
        created_at = self.clock.now()
        status = parse_enum(Status, status, Status.TODO)

        task = Task(
            id=id or self.id_generator(),
            title=title,
            revenue=self._check_revenue(revenue),
            time_taken=self._safe_time(time_taken),
            priority=parse_enum(Priority, priority, Priority.MEDIUM),
            status=status,
            created_at=created_at,
            notes=(notes or "").strip() or None,
            completed_at=created_at if status == Status.DONE else None,
        )
        self._tasks.append(task)
        self.logger.info(f"Added task {task.id}: {task.title}")
        self._record(ActivityType.ADD, f"Added: {task.title}")
        return task

    def update(self, task_id: str, **patch) -> Task:
        """
        Merge patch into an existing task.

        Moving to Done stamps completed_at once; it is never cleared.

        Raises:
            TaskNotFoundError: Unknown id
            TaskValidationError: Unknown field, bad title or revenue
        """
        current = self.get(task_id)
        unknown = set(patch) - (TASK_FIELDS - {'id', 'created_at'})
        if unknown:
            raise TaskValidationError(", ".join(sorted(unknown)), "cannot be updated", task_id)

        changes = dict(patch)
        if 'title' in changes:
            changes['title'] = self._check_title(changes['title'], exclude_id=task_id)
        if 'revenue' in changes:
            changes['revenue'] = self._check_revenue(changes['revenue'], task_id)
        if 'priority' in changes:
            changes['priority'] = parse_enum(Priority, changes['priority'], current.priority)
        if 'status' in changes:
            changes['status'] = parse_enum(Status, changes['status'], current.status)
        if 'notes' in changes:
            changes['notes'] = (changes['notes'] or "").strip() or None

        merged = replace(current, **changes)
        if current.status != Status.DONE and merged.status == Status.DONE and not merged.completed_at:
            merged.completed_at = self.clock.now()
        if not merged.completed_at and current.completed_at:
            merged.completed_at = current.completed_at
        merged.time_taken = self._safe_time(merged.time_taken)

        self._tasks = [merged if t.id == task_id else t for t in self._tasks]
        self.logger.info(f"Updated task {task_id}: {', '.join(patch) or 'no fields'}")
        self._record(ActivityType.UPDATE, f"Updated: {', '.join(patch.keys())}")
        return merged

    def delete(self, task_id: str) -> Task:
        """Remove a task and remember it for undo."""
        target = self.get(task_id)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        self.history.push(target)
        self.logger.info(f"Deleted task {task_id}")
        self._record(ActivityType.DELETE, f"Deleted task {task_id}")
        return target

    def undo_delete(self) -> Optional[Task]:
        """
        Restore the most recently deleted task; None when nothing to undo.

        Raises:
            DuplicateTitleError: A task added since the delete took the title.
                The deleted task stays in the history.
        """
        restored = self.history.peek()
        if restored is None:
            self.logger.debug("Undo requested with empty history")
            return None

        try:
            self._check_title(restored.title, exclude_id=restored.id)
        except DuplicateTitleError:
            self.logger.warning(f"Cannot restore task {restored.id}: title '{restored.title}' is taken")
            raise

        self.history.pop()
        self._tasks.append(restored)
        self.logger.info(f"Restored task {restored.id}")
        self._record(ActivityType.UNDO, "Undo delete")
        return restored

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_title(self, title: Any, exclude_id: Optional[str] = None) -> str:
        clean = str(title or "").strip()
        if not clean:
            raise TaskValidationError("title", "cannot be empty", exclude_id)
        folded = clean.casefold()
        for t in self._tasks:
            if t.id != exclude_id and t.title.casefold() == folded:
                raise DuplicateTitleError(clean, exclude_id)
        return clean

    @staticmethod
    def _check_revenue(revenue: Any, task_id: Optional[str] = None) -> float:
        value = coerce_number(revenue)
        if not math.isfinite(value) or value < 0:
            raise TaskValidationError("revenue", f"must be a non-negative number, got {revenue!r}", task_id)
        return value

    @staticmethod
    def _safe_time(time_taken: Any) -> float:
        value = coerce_number(time_taken)
        return value if math.isfinite(value) and value > 0 else 1.0

    def _record(self, kind: ActivityType, summary: str) -> None:
        item = ActivityItem(id=self._activity_ids(), ts=self.clock.now(), type=kind, summary=summary)
        self._activity = [item] + self._activity[:self.activity_limit - 1]
