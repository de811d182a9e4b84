# src/taskdeck/engine/parse.py

"""
Seed parser.

Turns seed data into Task models. Seed data is either:
- a YAML file holding a list of task mappings (or a mapping with a
  `tasks:` list), or
- the same structure already loaded in memory (see engine.seed).

This module performs *structural* parsing only. Model-level invariants
are enforced via Task.validate().
"""

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from pathlib import Path
from typing import Any, Final, Optional

import yaml

from .model import Category, Priority, Status, Subtask, Task, unique_tags

logger = logging.getLogger(__name__)


# camelCase spellings accepted for compatibility with exported dashboard data.
KEY_ALIASES: Final[dict[str, str]] = {
    "dueDate": "due_date",
    "createdDate": "created_date",
    "estimatedHours": "estimated_hours",
    "actualHours": "actual_hours",
    "assigneeAvatar": "assignee_avatar",
}

# Source label used in error messages for in-memory data.
INLINE_SOURCE: Final[str] = "<seed>"


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParseError(Exception):
    """
    Raised when seed data is syntactically or structurally invalid.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def load_tasks_file(path: str | Path) -> list[Task]:
    """
    Parse a YAML seed file into Task models.
    """
    p = Path(path)

    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ParseError(str(p), f"Cannot read file: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParseError(str(p), f"Invalid YAML: {e}") from e

    tasks = parse_tasks(data, source=str(p))
    logger.debug("Loaded %d tasks from %s", len(tasks), p)
    return tasks


def parse_tasks(data: Any, *, source: str = INLINE_SOURCE) -> list[Task]:
    """
    Parse a list of task mappings (or {"tasks": [...]}) into Task models.

    Task ids must be unique across the collection.
    """
    if data is None:
        return []

    if isinstance(data, dict):
        if "tasks" not in data:
            raise ParseError(source, "YAML root mapping must contain a 'tasks' list")
        data = data["tasks"]

    if not isinstance(data, list):
        raise ParseError(source, "Seed data must be a list of task mappings")

    tasks: list[Task] = []
    seen: set[int] = set()

    for i, item in enumerate(data, start=1):
        where = f"{source}[{i}]"
        if not isinstance(item, dict):
            raise ParseError(where, "Task entry must be a mapping")

        task = parse_task(item, source=where)
        if task.id in seen:
            raise ParseError(where, f"Duplicate task id: {task.id}")
        seen.add(task.id)
        tasks.append(task)

    return tasks


def parse_task(raw: dict[str, Any], *, source: str = INLINE_SOURCE) -> Task:
    """
    Parse a single task mapping.

    When subtasks are present, the stored progress is replaced by the
    value derived from them.
    """
    meta = {KEY_ALIASES.get(k, k): v for k, v in raw.items()}

    task_id = _require_int_field(source, meta, "id")
    subtasks = _parse_subtasks(source, meta)

    task = Task(
        id=task_id,
        title=_require_str_field(source, meta, "title"),
        description=_require_str_field(source, meta, "description", allow_empty=True),
        priority=_parse_enum(source, meta, "priority", Priority),
        status=_parse_enum(source, meta, "status", Status),
        assignee=_require_str_field(source, meta, "assignee"),
        category=_parse_enum(source, meta, "category", Category),
        due_date=_parse_date(source, meta, "due_date"),
        created_date=_parse_date(source, meta, "created_date"),
        progress=_optional_int_field(source, meta, "progress", default=0),
        comments=_optional_int_field(source, meta, "comments", default=0),
        attachments=_optional_int_field(source, meta, "attachments", default=0),
        starred=_optional_bool_field(source, meta, "starred", default=False),
        subtasks=subtasks,
        tags=_parse_tags(source, meta),
        estimated_hours=_optional_number_field(source, meta, "estimated_hours"),
        actual_hours=_optional_number_field(source, meta, "actual_hours"),
        assignee_avatar=_optional_str_field(source, meta, "assignee_avatar"),
    )

    derived = task.derived_progress()
    if derived is not None and derived != task.progress:
        logger.debug(
            "Task %s: progress %s recomputed from subtasks as %s",
            task.id,
            task.progress,
            derived,
        )
        task = replace(task, progress=derived)

    try:
        task.validate()
    except ValueError as e:
        raise ParseError(source, str(e)) from e

    return task


# ---------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------

def _require_str_field(
    path: str,
    data: dict[str, Any],
    key: str,
    *,
    allow_empty: bool = False,
) -> str:
    if key not in data:
        raise ParseError(path, f"Missing required key: {key}")

    value = data[key]
    if value is None and allow_empty:
        return ""
    if not isinstance(value, str):
        raise ParseError(path, f"Key '{key}' must be a string")

    if not allow_empty and not value.strip():
        raise ParseError(path, f"Key '{key}' must be a non-empty string")

    return value


def _optional_str_field(path: str, data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ParseError(path, f"Key '{key}' must be a string")
    return value.strip() or None


def _require_int_field(path: str, data: dict[str, Any], key: str) -> int:
    if key not in data:
        raise ParseError(path, f"Missing required key: {key}")

    value = data[key]
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ParseError(path, f"Key '{key}' must be an integer")
    return value


def _optional_int_field(path: str, data: dict[str, Any], key: str, *, default: int) -> int:
    if data.get(key) is None:
        return default
    return _require_int_field(path, data, key)


def _optional_bool_field(path: str, data: dict[str, Any], key: str, *, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ParseError(path, f"Key '{key}' must be a boolean")
    return value


def _optional_number_field(path: str, data: dict[str, Any], key: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(path, f"Key '{key}' must be a number")
    return value


def _parse_enum(path: str, data: dict[str, Any], key: str, enum_cls: type) -> Any:
    raw = _require_str_field(path, data, key)
    try:
        return enum_cls(raw.strip())
    except ValueError:
        pass

    # Fall back to a case-insensitive match ("Urgent", "finance", ...).
    for member in enum_cls:
        if member.value.lower() == raw.strip().lower():
            return member

    allowed = ", ".join([m.value for m in enum_cls])
    raise ParseError(path, f"Invalid {key} '{raw}' (allowed: {allowed})")


def _parse_date(path: str, data: dict[str, Any], key: str) -> date:
    if key not in data:
        raise ParseError(path, f"Missing required key: {key}")

    value = data[key]

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as e:
            raise ParseError(path, f"Invalid ISO date for '{key}': '{value}'") from e

    raise ParseError(path, f"Key '{key}' must be an ISO date string")


def _parse_subtasks(path: str, data: dict[str, Any]) -> tuple[Subtask, ...]:
    raw = data.get("subtasks", [])
    if raw is None:
        return ()

    if not isinstance(raw, list):
        raise ParseError(path, "Key 'subtasks' must be a list")

    out: list[Subtask] = []
    for i, item in enumerate(raw, start=1):
        where = f"{path}.subtasks[{i}]"
        if not isinstance(item, dict):
            raise ParseError(where, "Subtask must be a mapping {id, title, completed}")

        out.append(
            Subtask(
                id=_require_int_field(where, item, "id"),
                title=_require_str_field(where, item, "title"),
                completed=_optional_bool_field(where, item, "completed", default=False),
            )
        )

    return tuple(out)


def _parse_tags(path: str, data: dict[str, Any]) -> tuple[str, ...]:
    raw = data.get("tags", [])
    if raw is None:
        return ()

    if not isinstance(raw, list) or not all(isinstance(t, str) for t in raw):
        raise ParseError(path, "Key 'tags' must be a list of strings")

    return unique_tags(raw)
