# src/taskdeck/engine/view.py

"""
Task command view.

Binds a TaskStore to the two presentations of the dashboard (list and
Kanban board) and holds the presentation-only state: view mode, active
filter and the single expanded task.

No business computation happens here beyond routing tasks to rows and
columns; filtering and counting are delegated to engine.filters and
engine.stats.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Callable, Optional

from .due import DueDisplay, classify_due_date
from .filters import TaskFilter, filter_tasks
from .model import KANBAN_COLUMNS, Status, Task
from .stats import TaskStats, aggregate_stats
from .store import TaskStore


class ViewMode(str, Enum):
    LIST = "list"
    KANBAN = "kanban"


# ---------------------------------------------------------------------
# Render-only models
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ListRow:
    task: Task
    due: DueDisplay
    expanded: bool = False


@dataclass(frozen=True, slots=True)
class KanbanColumn:
    status: Status
    tasks: tuple[Task, ...]

    @property
    def label(self) -> str:
        return self.status.label

    def __len__(self) -> int:
        return len(self.tasks)


# ---------------------------------------------------------------------
# View
# ---------------------------------------------------------------------

class TaskCommandView:
    """
    Presentation state over a task store.

    `now` is either a fixed date/datetime or a zero-argument callable
    returning one; it is read on every call so due labels and stats never
    go stale across midnight.
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        now: date | datetime | Callable[[], date | datetime] = date.today,
        view_mode: ViewMode = ViewMode.LIST,
        task_filter: Optional[TaskFilter] = None,
    ) -> None:
        self.store = store
        self._now = now
        self.view_mode = ViewMode(view_mode)
        self.task_filter = task_filter or TaskFilter()
        self.expanded_task_id: Optional[int] = None

        self._cache_key: Optional[tuple[int, TaskFilter]] = None
        self._cache: tuple[Task, ...] = ()

    # -----------------------------------------------------------------
    # Clock
    # -----------------------------------------------------------------

    def now(self) -> date | datetime:
        return self._now() if callable(self._now) else self._now

    # -----------------------------------------------------------------
    # Derived data
    # -----------------------------------------------------------------

    def filtered(self) -> tuple[Task, ...]:
        """
        Filtered, due-date-sorted tasks.

        Memoised on (store version, filter); any mutation or filter change
        produces a new key, so the cache is never stale.
        """
        key = (self.store.version, self.task_filter)
        if key != self._cache_key:
            self._cache = tuple(filter_tasks(self.store.tasks, self.task_filter))
            self._cache_key = key
        return self._cache

    def stats(self) -> TaskStats:
        """Counters over the whole store, independent of the filter."""
        return aggregate_stats(self.store.tasks, self.now())

    def due_display(self, task: Task) -> DueDisplay:
        return classify_due_date(task.due_date, self.now())

    def list_rows(self) -> list[ListRow]:
        now = self.now()
        return [
            ListRow(
                task=t,
                due=classify_due_date(t.due_date, now),
                expanded=t.id == self.expanded_task_id,
            )
            for t in self.filtered()
        ]

    def kanban_columns(self) -> list[KanbanColumn]:
        """
        Partition the filtered tasks by status into the fixed board columns.

        Deferred tasks have no column and are left out.
        """
        buckets: dict[Status, list[Task]] = {s: [] for s in KANBAN_COLUMNS}
        for t in self.filtered():
            bucket = buckets.get(t.status)
            if bucket is not None:
                bucket.append(t)
        return [KanbanColumn(status=s, tasks=tuple(buckets[s])) for s in KANBAN_COLUMNS]

    # -----------------------------------------------------------------
    # Presentation state
    # -----------------------------------------------------------------

    def set_filter(self, task_filter: TaskFilter) -> None:
        self.task_filter = task_filter

    def set_view_mode(self, mode: ViewMode | str) -> None:
        self.view_mode = ViewMode(mode)

    def toggle_expanded(self, task_id: int) -> None:
        """
        Expand `task_id`, collapsing whichever task was expanded before.

        Toggling the expanded task collapses it.
        """
        if self.expanded_task_id == task_id:
            self.expanded_task_id = None
        else:
            self.expanded_task_id = task_id

    # -----------------------------------------------------------------
    # Dispatch to the store
    # -----------------------------------------------------------------

    def toggle_star(self, task_id: int) -> None:
        self.store.toggle_star(task_id)

    def toggle_subtask(self, task_id: int, subtask_id: int) -> None:
        self.store.toggle_subtask(task_id, subtask_id)
