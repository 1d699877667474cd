# File: sales_tracker/processors/ranking.py
import locale
import math
import unicodedata
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from sales_tracker.models import DerivedTask, Priority, Status, coerce_number, parse_enum
from sales_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)

ALL = "All"


def _roi_value(task: Any) -> float:
    """Numeric ROI for comparison; missing or non-numeric counts as 0."""
    value = coerce_number(getattr(task, 'roi', None))
    return value if math.isfinite(value) else 0.0


def _title_key(title: str) -> str:
    """Collation key that ignores case and accents, so 'Éclair' sorts with 'eclair'."""
    decomposed = unicodedata.normalize("NFKD", title.replace("\x00", ""))
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return locale.strxfrm(base.casefold())


def _rank_key(task: DerivedTask) -> Tuple[float, int, str, str]:
    title = str(getattr(task, 'title', '') or '')
    return (
        -_roi_value(task),
        -int(getattr(task, 'priority_weight', 0) or 0),
        _title_key(title),
        title,
    )


def sort_tasks(tasks: Sequence[DerivedTask]) -> List[DerivedTask]:
    """
    Return a new list ordered by ROI desc, priority weight desc, then title.

    Titles compare ignoring case and accents through the active locale's collation;
    the raw title is the last key so the order stays total even for titles
    that differ only in case. The input sequence is left untouched.
    """
    return sorted(tasks, key=_rank_key)


def filter_tasks(
    tasks: Iterable[DerivedTask],
    query: Optional[str] = None,
    status: Optional[Any] = None,
    priority: Optional[Any] = None,
) -> List[DerivedTask]:
    """
    Apply the dashboard's search box and status/priority filters.

    None, "" and "All" disable a criterion. Order is preserved, so filtering
    a sorted list keeps it sorted.
    """
    needle = query.strip().casefold() if query else ""
    wanted_status = None if status in (None, "", ALL) else parse_enum(Status, status, None)
    wanted_priority = None if priority in (None, "", ALL) else parse_enum(Priority, priority, None)

    if status not in (None, "", ALL) and wanted_status is None:
        logger.warning(f"Unknown status filter {status!r}; nothing will match")
    if priority not in (None, "", ALL) and wanted_priority is None:
        logger.warning(f"Unknown priority filter {priority!r}; nothing will match")

    result = []
    for task in tasks:
        if needle and needle not in task.title.casefold():
            continue
        if status not in (None, "", ALL) and task.status != wanted_status:
            continue
        if priority not in (None, "", ALL) and task.priority != wanted_priority:
            continue
        result.append(task)
    return result
