# File: sales_tracker/models/errors.py
"""
Exceptions raised at the boundary of the analytics core.

The analytics processors themselves never raise on malformed numeric input;
these are for loading tasks and mutating the in-memory task store.
"""

from typing import Optional


class SalesTrackerError(Exception):
    """Base class for all sales tracker errors."""


class TaskLoadError(SalesTrackerError):
    """The initial task collection could not be obtained. Reloading may fix it."""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"Failed to load tasks from {source}: {message}")


class TaskNotFoundError(SalesTrackerError, KeyError):
    """No task with the requested id exists in the store."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")

    def __str__(self) -> str:
        return self.args[0]


class TaskValidationError(SalesTrackerError, ValueError):
    """A task payload failed validation."""

    def __init__(self, field: str, message: str, task_id: Optional[str] = None):
        self.field = field
        self.message = message
        self.task_id = task_id
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.task_id is not None:
            return f"Task {self.task_id} - {self.field}: {self.message}"
        return f"{self.field}: {self.message}"


class DuplicateTitleError(TaskValidationError):
    """Another task already uses this title (case-insensitive)."""

    def __init__(self, title: str, task_id: Optional[str] = None):
        super().__init__("title", f"A task titled '{title}' already exists", task_id)
        self.title = title
