"""Sales task tracker: derived metrics and analytics for a sales task list."""

__version__ = "1.0.0"
