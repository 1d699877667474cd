# File: sales_tracker/utils/logger.py
"""
Centralized logging configuration for the sales tracker.
"""

import logging
import os
import sys
from pathlib import Path
from datetime import datetime

LOG_LEVEL_ENV = "SALES_TRACKER_LOG_LEVEL"
LOG_DIR_ENV = "SALES_TRACKER_LOG_DIR"


def _resolve_level(level) -> int:
    """Accept either a logging constant or a level name such as 'DEBUG'."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logger(name: str = "sales_tracker", level=None) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name
        level: Logging level (default: SALES_TRACKER_LOG_LEVEL or INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    level = _resolve_level(level if level is not None else os.getenv(LOG_LEVEL_ENV, "INFO"))
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_format = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # File handler for persistent logs; an empty SALES_TRACKER_LOG_DIR disables it
    log_dir_value = os.getenv(LOG_DIR_ENV, "logs")
    if log_dir_value:
        log_dir = Path(log_dir_value)
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f"sales_tracker_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


class LoggerMixin:
    """Mixin to add logging capability to any class."""

    @property
    def logger(self) -> logging.Logger:
        """Get logger for this class."""
        if not hasattr(self, '_logger'):
            self._logger = setup_logger(f"sales_tracker.{self.__class__.__name__}")
        return self._logger
