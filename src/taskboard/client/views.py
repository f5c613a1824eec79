"""Derived, read-only projections over the in-memory task list.

Every function here is pure and recomputed on each call.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Literal

from ..models.enums import PRIORITY_RANK, TaskPriority, TaskStatus
from .models import TaskRecord

SortField = Literal["created_at", "due_date", "priority"]
SortDirection = Literal["asc", "desc"]

_STATUS_CYCLE: dict[TaskStatus, TaskStatus] = {
    TaskStatus.PENDING: TaskStatus.IN_PROGRESS,
    TaskStatus.IN_PROGRESS: TaskStatus.COMPLETED,
    TaskStatus.COMPLETED: TaskStatus.PENDING,
}


def percentage(count: int, total: int) -> int:
    """Return ``count`` as a rounded share of ``total``; 0 when ``total`` is 0."""
    if total <= 0:
        return 0
    # Half-up rounding; the builtin round() rounds halves to even.
    return math.floor(count / total * 100 + 0.5)


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int
    pending: int
    in_progress: int
    completed: int
    low: int
    medium: int
    high: int
    overdue: int

    @property
    def high_priority(self) -> int:
        return self.high

    @property
    def completion_rate(self) -> int:
        return percentage(self.completed, self.total)

    @property
    def high_priority_rate(self) -> int:
        return percentage(self.high, self.total)

    @property
    def in_progress_rate(self) -> int:
        return percentage(self.in_progress, self.total)


def is_overdue(task: TaskRecord, now: datetime | None = None) -> bool:
    """A task is overdue when its due date has passed and it is not completed."""
    if task.due_date is None or task.status is TaskStatus.COMPLETED:
        return False
    return task.due_date < (now or datetime.now(timezone.utc))


def compute_task_stats(tasks: Iterable[TaskRecord], now: datetime | None = None) -> TaskStats:
    """Aggregate status, priority and overdue counts for ``tasks``."""
    now = now or datetime.now(timezone.utc)
    counts: dict[Any, int] = {key: 0 for key in (*TaskStatus, *TaskPriority)}
    total = overdue = 0
    for task in tasks:
        total += 1
        counts[task.status] += 1
        counts[task.priority] += 1
        if is_overdue(task, now):
            overdue += 1
    return TaskStats(
        total=total,
        pending=counts[TaskStatus.PENDING],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        completed=counts[TaskStatus.COMPLETED],
        low=counts[TaskPriority.LOW],
        medium=counts[TaskPriority.MEDIUM],
        high=counts[TaskPriority.HIGH],
        overdue=overdue,
    )


def recent_tasks(tasks: Iterable[TaskRecord], limit: int = 5) -> list[TaskRecord]:
    """Return the ``limit`` most recently created tasks, newest first."""
    return sorted(tasks, key=lambda task: task.created_at, reverse=True)[:limit]


@dataclass(frozen=True, slots=True)
class TaskListQuery:
    """Filter and sort options for :func:`filter_and_sort_tasks`.

    ``status`` and ``priority`` accept ``"all"`` to disable the filter.
    """

    search: str = ""
    status: TaskStatus | Literal["all"] = "all"
    priority: TaskPriority | Literal["all"] = "all"
    sort_field: SortField = "created_at"
    sort_direction: SortDirection = "desc"

    def toggle_direction(self) -> "TaskListQuery":
        return replace(self, sort_direction="asc" if self.sort_direction == "desc" else "desc")

    def change_sort(self, field: SortField) -> "TaskListQuery":
        """Toggle direction on the active field, otherwise switch field descending."""
        if field == self.sort_field:
            return self.toggle_direction()
        return replace(self, sort_field=field, sort_direction="desc")

    def matches(self, task: TaskRecord) -> bool:
        needle = self.search.lower()
        if needle and needle not in task.title.lower() and needle not in task.description.lower():
            return False
        if self.status != "all" and task.status != self.status:
            return False
        if self.priority != "all" and task.priority != self.priority:
            return False
        return True


def _sort_key(field: SortField):
    if field == "priority":
        return lambda task: PRIORITY_RANK[task.priority]
    if field == "due_date":
        # Undated tasks compare greater than any date.
        return lambda task: (task.due_date is None, task.due_date.timestamp() if task.due_date else 0.0)
    return lambda task: task.created_at


def filter_and_sort_tasks(tasks: Sequence[TaskRecord], query: TaskListQuery) -> list[TaskRecord]:
    """Return the tasks matching ``query`` in the requested order.

    The sort is stable: tasks with equal keys keep their relative order in
    both directions.
    """
    selected = [task for task in tasks if query.matches(task)]
    return sorted(selected, key=_sort_key(query.sort_field), reverse=query.sort_direction == "desc")


def next_status(status: TaskStatus) -> TaskStatus:
    """Return the status that follows ``status`` in the pending/in-progress/completed cycle."""
    return _STATUS_CYCLE[status]


__all__ = [
    "TaskListQuery",
    "TaskStats",
    "compute_task_stats",
    "filter_and_sort_tasks",
    "is_overdue",
    "next_status",
    "percentage",
    "recent_tasks",
]
