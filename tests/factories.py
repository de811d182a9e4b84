# tests/factories.py

from __future__ import annotations

from datetime import date

from taskdeck.engine.model import Category, Priority, Status, Subtask, Task


def make_task(task_id: int, **overrides) -> Task:
    """
    Build a valid Task with sensible defaults; override any field.
    """
    fields = dict(
        id=task_id,
        title=f"Task {task_id}",
        description="",
        priority=Priority.MEDIUM,
        status=Status.PENDING,
        assignee="Someone",
        category=Category.OPERATIONS,
        due_date=date(2026, 1, 10),
        created_date=date(2026, 1, 1),
    )
    fields.update(overrides)
    return Task(**fields)


def checklist(*flags: bool) -> tuple[Subtask, ...]:
    return tuple(Subtask(id=i, title=f"Step {i}", completed=f) for i, f in enumerate(flags, start=1))
