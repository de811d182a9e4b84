# src/taskdeck/engine/filters.py

"""
Filter pipeline.

Text search plus status / priority / category predicates, combined with
logical AND, followed by a stable ascending sort on due date.

Everything here is pure: the input collection is never mutated.
"""

from dataclasses import dataclass
from typing import Final, Iterable

from .model import Category, Priority, Status, Task


# Sentinel meaning "no constraint" for the enum filters.
ALL: Final[str] = "all"


@dataclass(frozen=True, slots=True)
class TaskFilter:
    """
    The filter tuple.

    Frozen and hashable, so it can key a cache together with the store
    version. Enum fields hold either ALL or an enum value string.
    """

    query: str = ""
    status: str = ALL
    priority: str = ALL
    category: str = ALL

    def __post_init__(self) -> None:
        _check_choice("status", self.status, Status)
        _check_choice("priority", self.priority, Priority)
        _check_choice("category", self.category, Category)

    @property
    def is_active(self) -> bool:
        return bool(self.query) or any(
            v != ALL for v in (self.status, self.priority, self.category)
        )

    def matches(self, task: Task) -> bool:
        if self.query:
            q = self.query.lower()
            haystacks = (task.title, task.description, task.category.value)
            if not any(q in h.lower() for h in haystacks):
                return False

        if self.status != ALL and task.status.value != self.status:
            return False
        if self.priority != ALL and task.priority.value != self.priority:
            return False
        if self.category != ALL and task.category.value != self.category:
            return False

        return True


def _check_choice(name: str, value: str, enum_cls: type) -> None:
    if value == ALL:
        return
    allowed = [m.value for m in enum_cls]
    if value not in allowed:
        raise ValueError(
            f"Invalid {name} filter '{value}' (allowed: {ALL}, {', '.join(allowed)})"
        )


def filter_tasks(tasks: Iterable[Task], flt: TaskFilter) -> list[Task]:
    """
    Apply `flt` and sort by due date ascending.

    sorted() is stable, so tasks sharing a due date keep their original
    collection order.
    """
    return sorted(
        (t for t in tasks if flt.matches(t)),
        key=lambda t: t.due_date,
    )
