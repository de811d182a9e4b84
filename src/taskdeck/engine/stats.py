# src/taskdeck/engine/stats.py

"""
Workload counters.

Stats are always computed over the whole collection, never over the
filtered view. Each counter is an independent predicate, so one task can
count towards several of them.
"""

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Iterable

from .due import is_due_today, is_overdue
from .model import Priority, Status, Task


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int = 0
    my_tasks: int = 0
    in_progress: int = 0
    completed: int = 0
    overdue: int = 0
    due_today: int = 0
    urgent: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def aggregate_stats(all_tasks: Iterable[Task], now: date | datetime) -> TaskStats:
    """
    Count the workload.

    overdue: due before today and not completed. Blocked and deferred
    tasks are not exempt.
    due_today: due today, whatever the status.
    """
    total = my_tasks = in_progress = completed = overdue = due_today = urgent = 0

    for t in all_tasks:
        total += 1
        if t.is_mine:
            my_tasks += 1
        if t.status is Status.IN_PROGRESS:
            in_progress += 1
        if t.status is Status.COMPLETED:
            completed += 1
        if is_overdue(t.due_date, now) and t.status is not Status.COMPLETED:
            overdue += 1
        if is_due_today(t.due_date, now):
            due_today += 1
        if t.priority is Priority.URGENT:
            urgent += 1

    return TaskStats(
        total=total,
        my_tasks=my_tasks,
        in_progress=in_progress,
        completed=completed,
        overdue=overdue,
        due_today=due_today,
        urgent=urgent,
    )
