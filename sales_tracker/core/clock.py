# File: sales_tracker/core/clock.py
"""
Injectable time and identity capabilities.

The loader, the task store and the seed generator take these as arguments
instead of reading the wall clock or generating random ids themselves, so
tests can pin both.
"""

import uuid
from datetime import datetime, timedelta

import pytz

from sales_tracker.models.common import ensure_utc


class SystemClock:
    """Clock backed by the real UTC wall time."""

    def now(self) -> datetime:
        return datetime.now(pytz.utc)


class FixedClock:
    """Clock that returns a pinned instant until explicitly advanced."""

    def __init__(self, instant: datetime):
        self._instant = ensure_utc(instant)

    def now(self) -> datetime:
        return self._instant

    def advance(self, **kwargs) -> datetime:
        """Move the clock forward by timedelta(**kwargs) and return the new instant."""
        self._instant = self._instant + timedelta(**kwargs)
        return self._instant


class UuidGenerator:
    """Random uuid4 identifiers."""

    def __call__(self) -> str:
        return str(uuid.uuid4())


class SequentialIdGenerator:
    """Deterministic ids such as 't-1', 't-2', ..."""

    def __init__(self, prefix: str = "t-", start: int = 1):
        self.prefix = prefix
        self._next = start

    def __call__(self) -> str:
        value = f"{self.prefix}{self._next}"
        self._next += 1
        return value
