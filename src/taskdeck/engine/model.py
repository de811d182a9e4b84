# src/taskdeck/engine/model.py

"""
Core domain models.

This module defines the in-memory representations of tasks and subtasks,
the enumerations they are built from, and the progress rule that ties a
task to its subtask checklist.

No I/O should happen here.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Final, Iterable, Optional


# ---------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------

class Priority(str, Enum):
    """
    Task severity.

    Display-only: priority drives labels and colours, never sort order.
    """

    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Status(str, Enum):
    """
    Task lifecycle status. Exactly one applies at a time.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    COMPLETED = "completed"
    BLOCKED = "blocked"
    DEFERRED = "deferred"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS: Final[dict[Status, str]] = {
    Status.PENDING: "Pending",
    Status.IN_PROGRESS: "In Progress",
    Status.REVIEW: "In Review",
    Status.COMPLETED: "Completed",
    Status.BLOCKED: "Blocked",
    Status.DEFERRED: "Deferred",
}


class Category(str, Enum):
    FINANCE = "Finance"
    LEADERSHIP = "Leadership"
    CONTRACTS = "Contracts"
    MARKETING = "Marketing"
    HR = "HR"
    COMPLIANCE = "Compliance"
    OPERATIONS = "Operations"
    STRATEGY = "Strategy"


# Kanban board columns, left to right. DEFERRED has no column.
KANBAN_COLUMNS: Final[tuple[Status, ...]] = (
    Status.PENDING,
    Status.IN_PROGRESS,
    Status.REVIEW,
    Status.COMPLETED,
    Status.BLOCKED,
)

# Assignee value that marks tasks owned by the current user.
CURRENT_ACTOR: Final[str] = "You"


# ---------------------------------------------------------------------
# Progress rule
# ---------------------------------------------------------------------

def subtask_progress(completed: int, total: int) -> int:
    """
    Return round(100 * completed / total), halves rounded up.

    Integer arithmetic only, so 12.5 -> 13 and 62.5 -> 63
    (the built-in round() would go to the even neighbour).
    """
    if total <= 0:
        raise ValueError("total must be positive")
    return (200 * completed + total) // (2 * total)


# ---------------------------------------------------------------------
# Subtask
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Subtask:
    id: int
    title: str
    completed: bool = False

    def toggled(self) -> "Subtask":
        return Subtask(id=self.id, title=self.title, completed=not self.completed)


# ---------------------------------------------------------------------
# Task
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Task:
    """
    In-memory task record.

    Tasks are value objects: the store swaps in an updated copy rather
    than editing a task in place.

    Notes:
    - due_date and created_date are calendar dates (no time of day).
    - when subtasks are present, progress is derived from them
      (see `subtask_progress`) and must agree with the checklist.
    """

    # Identity / core metadata
    id: int
    title: str
    description: str
    priority: Priority
    status: Status
    assignee: str
    category: Category

    # Temporal fields
    due_date: date
    created_date: date

    # Derived or independently settable
    progress: int = 0

    # Display counters / flags
    comments: int = 0
    attachments: int = 0
    starred: bool = False

    # Optional content
    subtasks: tuple[Subtask, ...] = ()
    tags: tuple[str, ...] = ()
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    assignee_avatar: Optional[str] = None

    # -----------------------------------------------------------------
    # Validation
    # -----------------------------------------------------------------

    def validate(self) -> None:
        """
        Validate core invariants of a single task.

        Uniqueness of task ids is a collection concern and is checked by
        the store and the validate layer, not here.
        """
        if not self.title or not self.title.strip():
            raise ValueError("title must be a non-empty string")

        if not 0 <= self.progress <= 100:
            raise ValueError(f"progress must be within 0..100, got {self.progress}")

        if self.comments < 0 or self.attachments < 0:
            raise ValueError("comments and attachments must be non-negative")

        for name in ("estimated_hours", "actual_hours"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative")

        ids = [st.id for st in self.subtasks]
        if len(ids) != len(set(ids)):
            raise ValueError(f"task {self.id}: subtask ids must be unique")

        if self.subtasks and self.progress != self.derived_progress():
            raise ValueError(
                f"task {self.id}: progress {self.progress} does not match "
                f"subtasks ({self.completed_subtasks}/{len(self.subtasks)})"
            )

    # -----------------------------------------------------------------
    # Convenience properties
    # -----------------------------------------------------------------

    @property
    def is_mine(self) -> bool:
        return self.assignee == CURRENT_ACTOR

    @property
    def is_completed(self) -> bool:
        return self.status is Status.COMPLETED

    @property
    def completed_subtasks(self) -> int:
        return sum(1 for st in self.subtasks if st.completed)

    def derived_progress(self) -> Optional[int]:
        """Progress implied by the subtask checklist, or None without one."""
        if not self.subtasks:
            return None
        return subtask_progress(self.completed_subtasks, len(self.subtasks))


def unique_tags(tags: Iterable[str]) -> tuple[str, ...]:
    """Drop blank and repeated tags, keeping first-seen order."""
    seen: dict[str, None] = {}
    for tag in tags:
        s = tag.strip()
        if s:
            seen.setdefault(s, None)
    return tuple(seen)
