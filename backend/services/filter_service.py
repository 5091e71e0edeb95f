"""
filter_service.py — Filter & sort pipeline for the task list
Pure transformation: (tasks, FilterConfig) -> new ordered list.
Filters are AND-ed equality checks with "All" as the wildcard; sorting is stable.
"""

import logging
from datetime import date
from enum import Enum
from typing import Iterable, Literal, Union

from pydantic import BaseModel

from models.task import Category, Priority, Status, Task

logger = logging.getLogger(__name__)

ALL = "All"


class SortKey(str, Enum):
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    CREATED = "created"


class FilterConfig(BaseModel):
    category: Union[Literal["All"], Category] = ALL
    status: Union[Literal["All"], Status] = ALL
    priority: Union[Literal["All"], Priority] = ALL
    sort_by: SortKey = SortKey.DUE_DATE


def filter_tasks(tasks: Iterable[Task], config: FilterConfig) -> list[Task]:
    """Keep tasks matching every active predicate, in their original order."""
    filtered = list(tasks)
    if config.category != ALL:
        filtered = [t for t in filtered if t.category == config.category]
    if config.status != ALL:
        filtered = [t for t in filtered if t.status == config.status]
    if config.priority != ALL:
        filtered = [t for t in filtered if t.priority == config.priority]
    return filtered


def _due_key(task: Task):
    # missing due dates sort after every real date
    return (task.due_date is None, task.due_date or date.min)


def sort_tasks(tasks: Iterable[Task], sort_by) -> list[Task]:
    ordered = list(tasks)
    try:
        key = SortKey(sort_by)
    except ValueError:
        logger.warning(f"Unknown sort key {sort_by!r}; keeping current order")
        return ordered

    if key == SortKey.DUE_DATE:
        ordered.sort(key=_due_key)
    elif key == SortKey.PRIORITY:
        ordered.sort(key=lambda t: t.priority.ordinal)
    elif key == SortKey.CREATED:
        # reverse=True keeps ties in their original relative order
        ordered.sort(key=lambda t: t.created_at, reverse=True)
    return ordered


def apply_filters_and_sort(tasks: Iterable[Task], config: FilterConfig) -> list[Task]:
    return sort_tasks(filter_tasks(tasks, config), config.sort_by)
