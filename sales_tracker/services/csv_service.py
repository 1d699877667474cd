# File: sales_tracker/services/csv_service.py
"""
Tabular (CSV) encoding of a task list.

The header is the fixed column schema from Config.CSV_COLUMNS, never
inferred from the records. Fields holding a comma, a quote or a line break
are quoted with inner quotes doubled, so from_csv(to_csv(tasks)) gives back
the same field values.
"""

import csv
import io
import math
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from sales_tracker.core.config_manager import Config
from sales_tracker.models import Task, TaskValidationError, coerce_number
from sales_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)

LINE_TERMINATOR = "\n"


def _format_number(value: Any) -> str:
    """Render 150.0 as '150' and 1.5 as '1.5'; pass non-numbers through as text."""
    number = coerce_number(value)
    if not math.isfinite(number):
        return "" if value is None else str(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _task_row(task: Task) -> List[str]:
    return [
        str(task.id),
        task.title,
        _format_number(task.revenue),
        _format_number(task.time_taken),
        task.priority.value,
        task.status.value,
        task.notes or "",
    ]


def to_csv(tasks: Iterable[Task]) -> str:
    """Encode tasks as CSV text: one header line plus one line per task."""
    buffer = io.StringIO(newline="")
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator=LINE_TERMINATOR)
    writer.writerow(Config.CSV_COLUMNS)
    count = 0
    for task in tasks:
        writer.writerow(_task_row(task))
        count += 1

    text = buffer.getvalue()
    logger.debug(f"Encoded {count} tasks as CSV (schema v{Config.CSV_SCHEMA_VERSION})")
    # No trailing newline after the last record
    return text[:-len(LINE_TERMINATOR)] if text.endswith(LINE_TERMINATOR) else text


def from_csv(text: str) -> List[Dict[str, Optional[str]]]:
    """
    Decode CSV text produced by to_csv into one dict of field values per row.

    An empty notes cell is how to_csv writes a task without notes, so it
    decodes back to None. Every other field stays text.

    Raises:
        TaskValidationError: If the header does not match the column schema
    """
    reader = csv.reader(io.StringIO(text, newline=""))
    try:
        header = next(reader)
    except StopIteration:
        return []

    if tuple(header) != Config.CSV_COLUMNS:
        raise TaskValidationError(
            "header",
            f"expected columns {list(Config.CSV_COLUMNS)}, got {header}"
        )

    records = []
    for line_no, row in enumerate(reader, start=2):
        if len(row) != len(header):
            raise TaskValidationError("row", f"line {line_no} has {len(row)} fields, expected {len(header)}")
        record = dict(zip(header, row))
        if record.get('notes') == "":
            record['notes'] = None
        records.append(record)
    return records


def export_csv(tasks: Iterable[Task], path: Optional[Union[str, Path]] = None) -> Path:
    """Write the CSV encoding of tasks to a UTF-8 file and return its path."""
    target = Path(path or Config.EXPORT_FILE)
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)

    content = to_csv(tasks)
    with open(target, 'w', encoding='utf-8', newline='') as f:
        f.write(content)
    logger.info(f"Exported tasks to {target}")
    return target
