# File: sales_tracker/core/config_manager.py
"""
Centralized configuration management for the sales tracker.
Loads settings from environment variables (and a local .env file).
"""

import os
from typing import Dict, Tuple
from dotenv import load_dotenv

from sales_tracker.models.enums import Priority, Status
from sales_tracker.utils.logger import setup_logger

# Load environment variables
load_dotenv()

logger = setup_logger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}, using {default}")
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


class Config:
    """Application configuration singleton."""

    # Data sources and outputs
    TASKS_SOURCE = os.getenv("SALES_TRACKER_TASKS_SOURCE", "tasks.json")
    EXPORT_FILE = os.getenv("SALES_TRACKER_EXPORT_FILE", "tasks.csv")
    HTTP_TIMEOUT = _env_float("SALES_TRACKER_HTTP_TIMEOUT", 10.0)

    # Application Settings
    LOG_LEVEL = os.getenv("SALES_TRACKER_LOG_LEVEL", "INFO")
    FORECAST_HORIZON = _env_int("SALES_TRACKER_FORECAST_HORIZON", 4)
    UNDO_CAPACITY = _env_int("SALES_TRACKER_UNDO_CAPACITY", 1)
    ACTIVITY_LIMIT = _env_int("SALES_TRACKER_ACTIVITY_LIMIT", 50)

    # Priority ranks used by the ranking engine
    PRIORITY_WEIGHTS: Dict[Priority, int] = {
        Priority.HIGH: 3,
        Priority.MEDIUM: 2,
        Priority.LOW: 1,
    }
    DEFAULT_PRIORITY_WEIGHT = 1

    # Probability that revenue at each stage is realized
    STAGE_WEIGHTS: Dict[Status, float] = {
        Status.TODO: 0.1,
        Status.IN_PROGRESS: 0.5,
        Status.DONE: 1.0,
    }

    # Average ROI thresholds: > EXCELLENT is Excellent, >= GOOD is Good
    GRADE_EXCELLENT_ABOVE = 500
    GRADE_GOOD_FROM = 200

    # Tabular export schema
    CSV_SCHEMA_VERSION = 1
    CSV_COLUMNS: Tuple[str, ...] = (
        "id", "title", "revenue", "timeTaken", "priority", "status", "notes"
    )

    @classmethod
    def validate(cls) -> bool:
        """Validate that numeric settings are usable."""
        errors = []

        if cls.FORECAST_HORIZON < 1:
            errors.append(f"SALES_TRACKER_FORECAST_HORIZON must be positive, got {cls.FORECAST_HORIZON}")

        if cls.UNDO_CAPACITY < 1:
            errors.append(f"SALES_TRACKER_UNDO_CAPACITY must be positive, got {cls.UNDO_CAPACITY}")

        if cls.ACTIVITY_LIMIT < 1:
            errors.append(f"SALES_TRACKER_ACTIVITY_LIMIT must be positive, got {cls.ACTIVITY_LIMIT}")

        if cls.HTTP_TIMEOUT <= 0:
            errors.append(f"SALES_TRACKER_HTTP_TIMEOUT must be positive, got {cls.HTTP_TIMEOUT}")

        if errors:
            for error in errors:
                logger.error(f"Configuration Error: {error}")
            return False

        return True
