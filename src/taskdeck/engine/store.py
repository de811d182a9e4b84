# src/taskdeck/engine/store.py

"""
In-memory task store and task mutations.

This module contains *all* state-changing operations on tasks:
star toggles, subtask toggles (with progress recomputation), status
changes and direct progress updates.

Design principles:
- The store owns its collection; callers receive immutable snapshots.
- Every mutation replaces one Task with an updated copy and bumps
  `version`, so cached views can tell when they are stale.
- Mutations referencing unknown ids are silent no-ops.
"""

import logging
import threading
from dataclasses import replace
from typing import Callable, Iterable, Optional

from .model import Status, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Owned, mutable task collection.

    Thread-safety:
    - mutations are serialised by a single-writer lock;
    - readers get a tuple snapshot, never a partially updated list.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        items = tuple(tasks)

        seen: set[int] = set()
        for t in items:
            if t.id in seen:
                raise ValueError(f"Duplicate task id: {t.id}")
            seen.add(t.id)
            t.validate()

        self._tasks: tuple[Task, ...] = items
        self._version = 0
        self._lock = threading.Lock()
        logger.debug("TaskStore ready total=%d", len(items))

    # -----------------------------------------------------------------
    # Reads
    # -----------------------------------------------------------------

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._tasks

    @property
    def version(self) -> int:
        return self._version

    def get(self, task_id: int) -> Optional[Task]:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    # -----------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------

    def _update(self, task_id: int, change: Callable[[Task], Optional[Task]]) -> bool:
        """
        Replace task `task_id` with `change(task)`.

        `change` returns None to signal "nothing to do". Returns True if a
        task was replaced.
        """
        with self._lock:
            items = list(self._tasks)
            for i, t in enumerate(items):
                if t.id != task_id:
                    continue

                updated = change(t)
                if updated is None:
                    return False

                updated.validate()
                items[i] = updated
                self._tasks = tuple(items)
                self._version += 1
                return True

        logger.debug("Ignoring mutation for unknown task id=%s", task_id)
        return False

    # -----------------------------------------------------------------
    # Public mutations
    # -----------------------------------------------------------------

    def toggle_star(self, task_id: int) -> None:
        """Flip the starred flag of one task."""
        if self._update(task_id, lambda t: replace(t, starred=not t.starred)):
            logger.debug("Toggled star task=%s", task_id)

    def toggle_subtask(self, task_id: int, subtask_id: int) -> None:
        """
        Flip one subtask's completed flag and recompute the parent's progress.

        No-op when the task, or the subtask within it, does not exist.
        """

        def change(t: Task) -> Optional[Task]:
            if not any(st.id == subtask_id for st in t.subtasks):
                logger.debug("Ignoring toggle for unknown subtask task=%s subtask=%s", t.id, subtask_id)
                return None

            subtasks = tuple(st.toggled() if st.id == subtask_id else st for st in t.subtasks)
            draft = replace(t, subtasks=subtasks)
            return replace(draft, progress=draft.derived_progress())

        if self._update(task_id, change):
            logger.debug("Toggled subtask task=%s subtask=%s", task_id, subtask_id)

    def set_status(self, task_id: int, status: Status | str) -> None:
        """Move a task to another lifecycle status."""
        new_status = Status(status)
        if self._update(task_id, lambda t: replace(t, status=new_status)):
            logger.debug("Set status task=%s status=%s", task_id, new_status.value)

    def set_progress(self, task_id: int, progress: int) -> None:
        """
        Set progress directly.

        Only allowed for tasks without subtasks; with a checklist, progress
        is derived and a direct write raises ValueError.
        """
        if not 0 <= progress <= 100:
            raise ValueError(f"progress must be within 0..100, got {progress}")

        def change(t: Task) -> Task:
            if t.subtasks:
                raise ValueError(f"task {t.id}: progress is derived from its subtasks")
            return replace(t, progress=progress)

        if self._update(task_id, change):
            logger.debug("Set progress task=%s progress=%d", task_id, progress)
