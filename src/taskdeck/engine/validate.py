# src/taskdeck/engine/validate.py

"""
Collection validation rules.

This module validates a collection of Task objects against the rules
that span more than one field or more than one task.

Responsibilities:
- id uniqueness across the collection,
- per-task model invariants (collected, not raised),
- date sanity checks.

It does NOT perform parsing.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Sequence

from .model import Task


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class ValidationError(Exception):
    """
    Fatal validation error used for command flow control.

    Raised when a command must abort immediately (e.g. unknown task id,
    malformed user input).
    """


# ---------------------------------------------------------------------
# Result objects
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """
    A single validation problem.

    `code` is a stable identifier suitable for tests and future filtering.
    """

    code: str
    message: str
    task_id: int | None = None


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """
    Aggregated validation result for a task collection.
    """

    source: str
    issues: Sequence[ValidationIssue]

    @property
    def ok(self) -> bool:
        return not self.issues


# ---------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------

def validate_tasks(tasks: Iterable[Task], *, source: str = "<tasks>") -> ValidationResult:
    """
    Validate a task collection.

    Notes:
    - Seed syntax is a parse-layer responsibility.
    - Model invariants are re-checked here so that collections built in
      code (not via the parser) get the same guarantees.
    """
    items = list(tasks)
    issues: list[ValidationIssue] = []

    # -----------------------------------------------------------------
    # Identity checks
    # -----------------------------------------------------------------

    counts = Counter(t.id for t in items)
    for task_id, n in sorted(counts.items()):
        if n > 1:
            issues.append(
                ValidationIssue(
                    code="id_duplicate",
                    message=f"Task id {task_id} is used {n} times",
                    task_id=task_id,
                )
            )

    # -----------------------------------------------------------------
    # Per-task rules
    # -----------------------------------------------------------------

    for t in items:
        try:
            t.validate()
        except ValueError as e:
            issues.append(
                ValidationIssue(
                    code="model_invariant",
                    message=str(e),
                    task_id=t.id,
                )
            )

        if t.due_date < t.created_date:
            issues.append(
                ValidationIssue(
                    code="due_before_created",
                    message=(
                        f"Task {t.id}: due date {t.due_date.isoformat()} is before "
                        f"created date {t.created_date.isoformat()}"
                    ),
                    task_id=t.id,
                )
            )

        if t.is_completed and t.subtasks and t.completed_subtasks < len(t.subtasks):
            issues.append(
                ValidationIssue(
                    code="completed_open_subtasks",
                    message=(
                        f"Task {t.id} is completed but has "
                        f"{len(t.subtasks) - t.completed_subtasks} open subtask(s)"
                    ),
                    task_id=t.id,
                )
            )

    return ValidationResult(source=source, issues=tuple(issues))
