# File: sales_tracker/processors/task_processor.py
from typing import Any, List, Optional, Sequence, Union

from sales_tracker.models import Task, DerivedTask, task_from_dict
from sales_tracker.processors.roi import derive_all
from sales_tracker.processors.ranking import sort_tasks, filter_tasks
from sales_tracker.utils.logger import setup_logger

logger = setup_logger(__name__)


class TaskProcessor:
    """Runs the derivation stage and the ranking engine over a task list."""

    def process_tasks(self, tasks: Sequence[Union[Task, dict]]) -> List[DerivedTask]:
        """Process tasks (Task objects or dicts) into ranked DerivedTasks."""
        processed_input: List[Task] = []
        for t in tasks:
            if isinstance(t, dict):
                processed_input.append(task_from_dict(t))
            else:
                processed_input.append(t)
        logger.debug(f"Ranking {len(processed_input)} tasks")

        return sort_tasks(derive_all(processed_input))

    def ranked_view(
        self,
        tasks: Sequence[Union[Task, dict]],
        query: Optional[str] = None,
        status: Optional[Any] = None,
        priority: Optional[Any] = None,
    ) -> List[DerivedTask]:
        """Ranked tasks narrowed down by the dashboard's search and filters."""
        ranked = self.process_tasks(tasks)
        visible = filter_tasks(ranked, query=query, status=status, priority=priority)
        if len(visible) != len(ranked):
            logger.debug(f"Filters kept {len(visible)} of {len(ranked)} tasks")
        return visible
