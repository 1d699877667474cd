# File: sales_tracker/models/activity.py

from dataclasses import dataclass
from datetime import datetime

from .enums import ActivityType
from .common import to_iso


@dataclass
class ActivityItem:
    """One entry of the task store's activity log."""
    id: str
    ts: datetime
    type: ActivityType
    summary: str

    def __post_init__(self):
        if isinstance(self.type, str):
            self.type = ActivityType(self.type)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'ts': to_iso(self.ts),
            'type': self.type.value,
            'summary': self.summary,
        }
