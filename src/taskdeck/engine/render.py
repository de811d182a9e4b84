# src/taskdeck/engine/render.py

"""
Rendering helpers for CLI output.

This module is responsible for:
- the dashboard header and stats strip,
- list view (with the single expanded row),
- Kanban board view,
- structured task detail view (show).

It is presentation-only: it reads from a TaskCommandView and never
mutates tasks.
"""

from __future__ import annotations

import re
import shutil
import sys
import textwrap
from datetime import datetime
from typing import Final, Optional

from .due import DueDisplay, Urgency
from .model import Priority, Status, Task
from .stats import TaskStats
from .view import KanbanColumn, ListRow, TaskCommandView, ViewMode


# ---------------------------------------------------------------------
# ANSI / terminal helpers
# ---------------------------------------------------------------------

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

_RESET = "\033[0m"
_DIM = "\033[90m"
_BOLD = "\033[1m"

_URGENCY_COLOR: Final[dict[Urgency, str]] = {
    Urgency.CRITICAL: "\033[31m",  # red
    Urgency.HIGH: "\033[38;5;208m",  # orange
    Urgency.MEDIUM: "\033[33m",  # yellow
    Urgency.INFO: "\033[34m",  # blue
    Urgency.NEUTRAL: "\033[90m",  # grey
}

_PRIORITY_COLOR: Final[dict[Priority, str]] = {
    Priority.URGENT: "\033[31m",
    Priority.HIGH: "\033[38;5;208m",
    Priority.MEDIUM: "\033[33m",
    Priority.LOW: "\033[34m",
}

_STATUS_COLOR: Final[dict[Status, str]] = {
    Status.PENDING: "\033[37m",
    Status.IN_PROGRESS: "\033[34m",
    Status.REVIEW: "\033[35m",
    Status.COMPLETED: "\033[32m",
    Status.BLOCKED: "\033[31m",
    Status.DEFERRED: "\033[90m",
}

_STAR_ON = "*"
_STAR_OFF = " "

_BAR_WIDTH = 20


def _supports_color() -> bool:
    """Return True if stdout is a TTY."""
    return sys.stdout.isatty()


def _visible_len(s: str) -> int:
    """Return string length without ANSI colour escapes."""
    return len(_ANSI_RE.sub("", s))


def _paint(s: str, code: str, color: bool) -> str:
    if not (color and code and _supports_color()):
        return s
    return f"{code}{s}{_RESET}"


def progress_bar(progress: int, width: int = _BAR_WIDTH) -> str:
    """
    Text progress bar, e.g. '[#####...............]  25%'.
    """
    filled = (progress * width) // 100
    return f"[{'#' * filled}{'.' * (width - filled)}] {progress:3d}%"


def greeting(hour: int) -> str:
    if hour < 12:
        return "Good morning"
    if hour < 17:
        return "Good afternoon"
    return "Good evening"


def _hours(value: float) -> str:
    return f"{value:g}h"


# ---------------------------------------------------------------------
# Header / stats
# ---------------------------------------------------------------------

_STAT_LABELS: Final[tuple[tuple[str, str], ...]] = (
    ("Total", "total"),
    ("My Tasks", "my_tasks"),
    ("In Progress", "in_progress"),
    ("Completed", "completed"),
    ("Overdue", "overdue"),
    ("Due Today", "due_today"),
    ("Urgent", "urgent"),
)


def render_header(stats: TaskStats, *, hour: Optional[int] = None, color: bool = True) -> None:
    """
    Print the page title and the greeting line.
    """
    if hour is None:
        hour = datetime.now().hour

    print(_paint("Executive Task Command", _BOLD, color))
    mine = _paint(f"{stats.my_tasks} tasks", _BOLD, color)
    overdue = _paint(f"{stats.overdue} overdue", _URGENCY_COLOR[Urgency.CRITICAL], color)
    print(f"{greeting(hour)}. You have {mine} assigned, {overdue}.")


def render_stats(stats: TaskStats) -> None:
    """
    Print the seven counters on one line.

    Format:
      Total: 8 | My Tasks: 5 | ...
    """
    values = stats.as_dict()
    print(" | ".join(f"{label}: {values[key]}" for label, key in _STAT_LABELS))


# ---------------------------------------------------------------------
# List view
# ---------------------------------------------------------------------

def _print_row(row: ListRow, *, color: bool) -> None:
    """
    Print one list row.

    Format:
      * [High] Title (In Progress) #1
          Finance | You | 2 days overdue | 3 comments | 2 files
          [##########..........]  50%
    """
    task = row.task
    star = _STAR_ON if task.starred else _STAR_OFF
    prio = _paint(f"[{task.priority.label}]", _PRIORITY_COLOR[task.priority], color)
    status = _paint(task.status.label, _STATUS_COLOR[task.status], color)
    marker = "v" if row.expanded else ">"

    print(f"{star} {marker} {prio} {task.title} ({status}) #{task.id}")

    meta = [
        task.category.value,
        task.assignee,
        _paint(row.due.text, _URGENCY_COLOR[row.due.urgency], color),
    ]
    if task.comments > 0:
        meta.append(f"{task.comments} comments")
    if task.attachments > 0:
        meta.append(f"{task.attachments} files")
    print(f"      {' | '.join(meta)}")

    if 0 < task.progress < 100:
        print(f"      {progress_bar(task.progress)}")

    if row.expanded:
        _print_expanded(task, indent="      ", color=color)


def _print_expanded(task: Task, *, indent: str, color: bool) -> None:
    width = min(80, shutil.get_terminal_size(fallback=(80, 24)).columns)
    body_w = max(20, width - len(indent))

    print(f"{indent}{'-' * (body_w - 2)}")
    for ln in textwrap.wrap(task.description, width=body_w) or [""]:
        print(f"{indent}{ln}")

    if task.subtasks:
        print(f"{indent}SUBTASKS")
        for st in task.subtasks:
            box = "[x]" if st.completed else "[ ]"
            title = _paint(st.title, _DIM, color) if st.completed else st.title
            print(f"{indent}  {box} {title} ({task.id}:{st.id})")

    if task.estimated_hours:
        hours = f"Est: {_hours(task.estimated_hours)}"
        if task.actual_hours:
            hours += f"  Actual: {_hours(task.actual_hours)}"
        print(f"{indent}{hours}")

    if task.tags:
        print(f"{indent}Tags: {', '.join(task.tags)}")


def render_list(rows: list[ListRow], *, color: bool = True) -> None:
    if not rows:
        print("No tasks match the current filters.")
        return

    for row in rows:
        _print_row(row, color=color)


# ---------------------------------------------------------------------
# Kanban view
# ---------------------------------------------------------------------

def render_kanban(columns: list[KanbanColumn], *, color: bool = True) -> None:
    """
    Print board columns top to bottom.

    Format:
      ====== Pending (2) ======
      - [Urgent] Title #3
          You
    """
    sep = "=" * 6
    for col in columns:
        title = _paint(col.label, _STATUS_COLOR[col.status], color)
        print(f"{sep} {title} ({len(col)}) {sep}")

        for task in col.tasks:
            prio = _paint(f"[{task.priority.label}]", _PRIORITY_COLOR[task.priority], color)
            print(f"- {prio} {task.title} #{task.id}")
            print(f"    {task.assignee}")
            if task.progress > 0:
                print(f"    {progress_bar(task.progress)}")

        print()


# ---------------------------------------------------------------------
# Whole dashboard
# ---------------------------------------------------------------------

def render_view(view: TaskCommandView, *, color: bool = True) -> None:
    """
    Render header, stats strip and the active presentation.
    """
    now = view.now()
    hour = now.hour if isinstance(now, datetime) else None
    stats = view.stats()

    render_header(stats, hour=hour, color=color)
    render_stats(stats)

    flt = view.task_filter
    if flt.is_active:
        parts = []
        if flt.query:
            parts.append(f"search '{flt.query}'")
        for name in ("status", "priority", "category"):
            value = getattr(flt, name)
            if value != "all":
                parts.append(f"{name}={value}")
        print(_paint(f"Filters: {', '.join(parts)}", _DIM, color))

    print()

    if view.view_mode is ViewMode.KANBAN:
        render_kanban(view.kanban_columns(), color=color)
    else:
        render_list(view.list_rows(), color=color)


# ---------------------------------------------------------------------
# Task detail view (show)
# ---------------------------------------------------------------------

def render_task_detail(task: Task, due: DueDisplay, *, color: bool = True) -> None:
    """
    Render a structured task detail view.

    Width is capped at 80 characters.
    """
    width = min(80, shutil.get_terminal_size(fallback=(80, 24)).columns)
    inner_w = max(20, width - 4)  # borders + padding

    def wrap_lines(s: str, *, indent: str = "") -> list[str]:
        if not s:
            return []

        out: list[str] = []
        for ln in s.rstrip().splitlines() or [""]:
            if not ln.strip():
                out.append(indent.rstrip())
                continue

            wrapped = textwrap.wrap(
                ln,
                width=inner_w - len(indent),
                break_long_words=False,
                break_on_hyphens=False,
            ) or [""]

            out.extend([indent + x for x in wrapped])

        return out

    def box_rule(ch: str = "-") -> None:
        print(f"+{ch * (width - 2)}+")

    def box_line(content: str = "") -> None:
        raw = content
        if _visible_len(raw) > inner_w:
            raw = _ANSI_RE.sub("", raw)[:inner_w]
        pad = inner_w - _visible_len(raw)
        if pad > 0:
            raw = raw + (" " * pad)
        print(f"| {raw} |")

    status_text = _paint(task.status.label, _STATUS_COLOR[task.status], color)
    star = f"{_STAR_ON} " if task.starred else ""

    print()
    box_rule("=")
    for ln in wrap_lines(f"{star}{task.title}"):
        box_line(ln)
    box_line(f"({status_text})")
    box_rule("=")

    box_line(f"id: {task.id}")
    box_line(f"priority: {_paint(task.priority.label, _PRIORITY_COLOR[task.priority], color)}")
    box_line(f"category: {task.category.value}")
    assignee = task.assignee
    if task.assignee_avatar:
        assignee = f"{assignee} ({task.assignee_avatar})"
    box_line(f"assignee: {assignee}")
    box_line(f"created: {task.created_date.isoformat()}")
    due_text = _paint(due.text, _URGENCY_COLOR[due.urgency], color)
    box_line(f"due: {task.due_date.isoformat()} ({due_text})")
    box_line(f"progress: {progress_bar(task.progress)}")

    if task.description.strip():
        box_rule()
        box_line("Description:")
        for ln in wrap_lines(task.description, indent="  "):
            box_line(ln)

    if task.subtasks:
        box_rule()
        box_line(f"Subtasks ({task.completed_subtasks}/{len(task.subtasks)}):")
        for st in task.subtasks:
            box = "[x]" if st.completed else "[ ]"
            for ln in wrap_lines(f"{box} {st.id}. {st.title}", indent="  "):
                box_line(ln)

    if task.estimated_hours or task.actual_hours or task.comments or task.attachments:
        box_rule()
        if task.estimated_hours:
            box_line(f"Est: {_hours(task.estimated_hours)}")
        if task.actual_hours:
            box_line(f"Actual: {_hours(task.actual_hours)}")
        if task.comments:
            box_line(f"Comments: {task.comments}")
        if task.attachments:
            box_line(f"Attachments: {task.attachments}")

    if task.tags:
        box_rule()
        box_line("Tags:")
        for ln in wrap_lines(", ".join(task.tags), indent="  "):
            box_line(ln)

    box_rule("=")
    print()
