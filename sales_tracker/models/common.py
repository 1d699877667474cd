# File: sales_tracker/models/common.py

import math
from datetime import datetime
from typing import Any, Optional, Type, TypeVar
from enum import Enum

import pytz

E = TypeVar("E", bound=Enum)


def parse_iso_datetime(value: Any) -> Optional[datetime]:
    """Robustly parse ISO date strings with 'Z' or offsets into UTC-aware datetimes."""
    if not value:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    try:
        # fromisoformat on Python < 3.11 does not accept a trailing 'Z'
        clean_str = str(value).strip().replace('Z', '+00:00')
        return ensure_utc(datetime.fromisoformat(clean_str))
    except ValueError:
        # Fallback for simple date strings without time
        try:
            return ensure_utc(datetime.strptime(str(value).strip(), "%Y-%m-%d"))
        except ValueError:
            return None


def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if dt.tzinfo is None:
        return pytz.utc.localize(dt)
    return dt.astimezone(pytz.utc)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime as an ISO-8601 UTC string with a 'Z' suffix."""
    if dt is None:
        return None
    return ensure_utc(dt).isoformat().replace('+00:00', 'Z')


def coerce_number(value: Any) -> float:
    """
    Coerce loosely typed numeric input to a float.

    Anything that cannot be read as a number comes back as NaN so callers
    can apply their own finiteness guard.
    """
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return math.nan
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def parse_enum(enum_cls: Type[E], raw: Any, default: E) -> E:
    """
    Leniently map raw input onto an enum member.

    Matches member values and names case-insensitively, ignoring spaces and
    underscores, so "In Progress", "InProgress" and "IN_PROGRESS" agree.
    """
    if isinstance(raw, enum_cls):
        return raw
    if raw is None:
        return default

    # Strip "Status." style prefixes from stringified enums
    key = str(raw).split('.')[-1]
    key = key.replace(' ', '').replace('_', '').casefold()
    for member in enum_cls:
        candidates = (member.value, member.name)
        if any(str(c).replace(' ', '').replace('_', '').casefold() == key for c in candidates):
            return member
    return default
