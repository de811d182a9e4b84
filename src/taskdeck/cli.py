# src/taskdeck/cli.py

"""
Command-line interface for taskdeck.

This module:
- defines argument parsing and subcommands,
- delegates filtering, counting and rendering to engine modules,
- keeps user interaction (the interactive shell) here.

KISS rule: keep commands small and predictable.
"""

import argparse
import logging
import shlex
from datetime import date
from pathlib import Path
from typing import Optional

from taskdeck.config import Settings, load_settings
from taskdeck.engine.filters import ALL, TaskFilter
from taskdeck.engine.model import Category, Priority, Status
from taskdeck.engine.parse import ParseError, load_tasks_file
from taskdeck.engine.render import render_stats, render_task_detail, render_view
from taskdeck.engine.seed import seed_tasks
from taskdeck.engine.store import TaskStore
from taskdeck.engine.validate import ValidationError, validate_tasks
from taskdeck.engine.view import TaskCommandView, ViewMode
from taskdeck.logging_setup import setup_logging

logger = logging.getLogger(__name__)

_STATUS_CHOICES = [ALL] + [s.value for s in Status]
_PRIORITY_CHOICES = [ALL] + [p.value for p in Priority]
_CATEGORY_CHOICES = [ALL] + [c.value for c in Category]


# ---------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------

def _iso_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date '{raw}' (expected YYYY-MM-DD)") from e


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-f",
        "--file",
        type=str,
        default=None,
        help="YAML seed file (default: TASKDECK_SEED_FILE or the built-in seed)",
    )


def _add_display_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--today",
        type=_iso_date,
        default=None,
        help="Evaluate due dates as of this day (YYYY-MM-DD, default: today)",
    )
    p.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output",
    )


def _add_filter_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("-q", "--query", type=str, default="", help="Search title, description and category")
    p.add_argument("--status", type=str, default=ALL, choices=_STATUS_CHOICES, help="Status filter")
    p.add_argument("--priority", type=str, default=ALL, choices=_PRIORITY_CHOICES, help="Priority filter")
    p.add_argument("--category", type=str, default=ALL, choices=_CATEGORY_CHOICES, help="Category filter")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskdeck")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Console log level (default: TASKDECK_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # ------------------------------------------------------------------
    # Read-only commands
    # ------------------------------------------------------------------

    p_list = sub.add_parser(
        "list",
        help="Show the task dashboard (list or Kanban view)",
    )
    _add_source_args(p_list)
    _add_display_args(p_list)
    _add_filter_args(p_list)
    p_list.add_argument(
        "--view",
        type=str,
        default=None,
        choices=[m.value for m in ViewMode],
        help="Presentation (default: TASKDECK_VIEW or list)",
    )
    p_list.add_argument(
        "--expand",
        type=int,
        default=None,
        help="Expand this task id in list view",
    )
    p_list.add_argument(
        "--star",
        type=int,
        action="append",
        default=[],
        help="Toggle the star on a task id before rendering (repeatable)",
    )
    p_list.add_argument(
        "--toggle",
        type=str,
        action="append",
        default=[],
        help="Toggle a subtask before rendering, as TASK:SUBTASK (repeatable)",
    )
    p_list.set_defaults(func=cmd_list)

    p_stats = sub.add_parser(
        "stats",
        help="Print workload counters",
    )
    _add_source_args(p_stats)
    _add_display_args(p_stats)
    p_stats.set_defaults(func=cmd_stats)

    p_show = sub.add_parser(
        "show",
        help="Show a single task (structured view)",
    )
    p_show.add_argument("task_id", type=int, help="Task id")
    _add_source_args(p_show)
    _add_display_args(p_show)
    p_show.set_defaults(func=cmd_show)

    p_validate = sub.add_parser(
        "validate",
        help="Validate the seed collection",
    )
    _add_source_args(p_validate)
    p_validate.set_defaults(func=cmd_validate)

    # ------------------------------------------------------------------
    # Interactive
    # ------------------------------------------------------------------

    p_shell = sub.add_parser(
        "shell",
        help="Interactive dashboard session",
    )
    _add_source_args(p_shell)
    _add_display_args(p_shell)
    p_shell.add_argument(
        "--view",
        type=str,
        default=None,
        choices=[m.value for m in ViewMode],
        help="Initial presentation (default: TASKDECK_VIEW or list)",
    )
    p_shell.set_defaults(func=cmd_shell)

    return parser


# ---------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------

def _load_store(args: argparse.Namespace, settings: Settings) -> TaskStore:
    path: Optional[Path] = Path(args.file) if args.file else settings.seed_file
    if path is not None:
        tasks = load_tasks_file(path)
    else:
        tasks = seed_tasks()
    return TaskStore(tasks)


def _make_view(args: argparse.Namespace, settings: Settings, store: TaskStore) -> TaskCommandView:
    now = args.today if args.today is not None else date.today
    view_mode = getattr(args, "view", None) or settings.view
    return TaskCommandView(store, now=now, view_mode=ViewMode(view_mode))


def _color(args: argparse.Namespace, settings: Settings) -> bool:
    return settings.color and not bool(getattr(args, "no_color", False))


def _parse_toggle(raw: str) -> tuple[int, int]:
    """
    Parse 'TASK:SUBTASK' (or 'TASK SUBTASK') into a pair of ids.
    """
    s = raw.replace(":", " ").split()
    if len(s) != 2:
        raise ValidationError(f"Invalid subtask reference '{raw}' (expected TASK:SUBTASK)")
    try:
        return int(s[0]), int(s[1])
    except ValueError as e:
        raise ValidationError(f"Invalid subtask reference '{raw}' (ids must be integers)") from e


# ---------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------

def cmd_list(args: argparse.Namespace, settings: Settings) -> int:
    store = _load_store(args, settings)
    view = _make_view(args, settings, store)

    view.set_filter(
        TaskFilter(
            query=(args.query or "").strip(),
            status=args.status,
            priority=args.priority,
            category=args.category,
        )
    )

    for task_id in args.star:
        view.toggle_star(task_id)

    for raw in args.toggle:
        task_id, subtask_id = _parse_toggle(raw)
        view.toggle_subtask(task_id, subtask_id)

    if args.expand is not None:
        view.toggle_expanded(args.expand)

    render_view(view, color=_color(args, settings))
    return 0


def cmd_stats(args: argparse.Namespace, settings: Settings) -> int:
    store = _load_store(args, settings)
    view = _make_view(args, settings, store)
    render_stats(view.stats())
    return 0


def cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    store = _load_store(args, settings)
    view = _make_view(args, settings, store)

    task = store.get(args.task_id)
    if task is None:
        raise ValidationError(f"Task not found: {args.task_id}")

    render_task_detail(task, view.due_display(task), color=_color(args, settings))
    return 0


def cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    path: Optional[Path] = Path(args.file) if args.file else settings.seed_file

    try:
        tasks = load_tasks_file(path) if path is not None else seed_tasks()
    except ParseError as e:
        print(str(e))
        return 1

    res = validate_tasks(tasks, source=str(path) if path is not None else "<builtin seed>")
    if res.ok:
        print(f"{res.source}: {len(tasks)} tasks OK")
        return 0

    print(f"{res.source}")
    for issue in res.issues:
        print(f"  - {issue.code}: {issue.message}")
    return 1


# ---------------------------------------------------------------------
# Interactive shell
# ---------------------------------------------------------------------

_SHELL_HELP = """\
Commands:
  search [TEXT]        filter by text (no text clears the search)
  status VALUE         filter by status (or 'all')
  priority VALUE       filter by priority (or 'all')
  category VALUE       filter by category (or 'all')
  reset                clear all filters
  view list|kanban     switch presentation
  expand ID            expand/collapse a task in list view
  star ID              toggle star
  toggle TASK SUB      toggle a subtask (also TASK:SUB)
  show ID              structured task view
  help                 this text
  quit                 leave"""


def _with_filter(view: TaskCommandView, **changes: str) -> None:
    cur = view.task_filter
    fields = {
        "query": cur.query,
        "status": cur.status,
        "priority": cur.priority,
        "category": cur.category,
    }
    fields.update(changes)
    view.set_filter(TaskFilter(**fields))


def _shell_dispatch(view: TaskCommandView, line: str, *, color: bool) -> bool:
    """
    Run one shell command. Returns False when the session should end.

    Raises ValidationError / ValueError on bad input.
    """
    parts = shlex.split(line)
    if not parts:
        return True

    cmd, rest = parts[0].lower(), parts[1:]

    def one_int() -> int:
        if len(rest) != 1:
            raise ValidationError(f"'{cmd}' expects exactly one id")
        try:
            return int(rest[0])
        except ValueError as e:
            raise ValidationError(f"Invalid id '{rest[0]}'") from e

    def one_word() -> str:
        if len(rest) != 1:
            raise ValidationError(f"'{cmd}' expects exactly one value")
        return rest[0]

    if cmd in {"quit", "exit", "q"}:
        return False

    if cmd == "help":
        print(_SHELL_HELP)
        return True

    if cmd == "search":
        _with_filter(view, query=" ".join(rest))
    elif cmd in {"status", "priority", "category"}:
        _with_filter(view, **{cmd: one_word()})
    elif cmd == "reset":
        view.set_filter(TaskFilter())
    elif cmd == "view":
        view.set_view_mode(one_word().lower())
    elif cmd == "expand":
        view.toggle_expanded(one_int())
    elif cmd == "star":
        view.toggle_star(one_int())
    elif cmd == "toggle":
        task_id, subtask_id = _parse_toggle(" ".join(rest))
        view.toggle_subtask(task_id, subtask_id)
    elif cmd == "show":
        task_id = one_int()
        task = view.store.get(task_id)
        if task is None:
            raise ValidationError(f"Task not found: {task_id}")
        render_task_detail(task, view.due_display(task), color=color)
        return True
    else:
        raise ValidationError(f"Unknown command: {cmd} (try 'help')")

    render_view(view, color=color)
    return True


def cmd_shell(args: argparse.Namespace, settings: Settings) -> int:
    store = _load_store(args, settings)
    view = _make_view(args, settings, store)
    color = _color(args, settings)

    render_view(view, color=color)

    while True:
        try:
            line = input("taskdeck> ")
        except EOFError:
            print()
            return 0

        try:
            if not _shell_dispatch(view, line, color=color):
                return 0
        except (ValidationError, ValueError) as e:
            print(f"Error: {e}")


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    setup_logging(args.log_level or settings.log_level, log_file=settings.log_file)

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 2

    try:
        return func(args, settings)
    except (ParseError, ValidationError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
