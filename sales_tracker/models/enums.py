# File: sales_tracker/models/enums.py

from enum import Enum


class Priority(Enum):
    """Sales task priority."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Status(Enum):
    """Pipeline stage of a task."""
    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class PerformanceGrade(Enum):
    """Grade derived from the average ROI."""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"


class ActivityType(Enum):
    """Kinds of mutations recorded in the activity log."""
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    UNDO = "undo"
