"""
Tests for terminal rendering (captured stdout, so colour is off).
"""
from datetime import datetime

import pytest

from taskdeck.engine.filters import TaskFilter
from taskdeck.engine.render import greeting, progress_bar, render_task_detail, render_view
from taskdeck.engine.view import TaskCommandView, ViewMode


@pytest.fixture()
def view(store) -> TaskCommandView:
    return TaskCommandView(store, now=datetime(2026, 1, 7, 9, 0))


def test_greeting_by_hour():
    assert greeting(0) == "Good morning"
    assert greeting(11) == "Good morning"
    assert greeting(12) == "Good afternoon"
    assert greeting(16) == "Good afternoon"
    assert greeting(17) == "Good evening"


def test_progress_bar():
    assert progress_bar(0) == "[....................]   0%"
    assert progress_bar(50) == "[##########..........]  50%"
    assert progress_bar(100) == "[####################] 100%"


def test_header_and_stats(view, capsys):
    render_view(view)
    out = capsys.readouterr().out
    assert "\x1b[" not in out
    assert "Executive Task Command" in out
    assert "Good morning. You have 5 tasks assigned, 2 overdue." in out
    assert "Total: 8 | My Tasks: 5 | In Progress: 3 | Completed: 1 | Overdue: 2 | Due Today: 1 | Urgent: 1" in out


def test_list_view_rows(view, capsys):
    render_view(view)
    out = capsys.readouterr().out
    assert "* > [Urgent] Sign carrier renewal contract - Mutual of Omaha (Pending) #3" in out
    assert "Contracts | You | 2 days overdue | 12 comments | 3 files" in out
    # id 1 is half done, so it gets a bar; id 4 is complete, so it does not
    assert "[##########..........]  50%" in out
    assert "100%" not in out
    # collapsed rows do not show subtasks
    assert "SUBTASKS" not in out


def test_expanded_row_shows_details(view, capsys):
    view.toggle_expanded(1)
    render_view(view)
    out = capsys.readouterr().out
    assert "v [High] Review Q1 financial projections" in out
    assert "SUBTASKS" in out
    assert "[x] Gather Q4 actuals from accounting (1:1)" in out
    assert "[ ] Review with CFO (1:3)" in out
    assert "Est: 8h  Actual: 5.5h" in out
    assert "Tags: Q1, Budget, Priority" in out


def test_filters_line_and_empty_result(view, capsys):
    view.set_filter(TaskFilter(query="nothing like this", status="blocked"))
    render_view(view)
    out = capsys.readouterr().out
    assert "Filters: search 'nothing like this', status=blocked" in out
    assert "No tasks match the current filters." in out
    # stats still describe the whole workload
    assert "Total: 8" in out


def test_kanban_view(view, capsys):
    view.set_view_mode(ViewMode.KANBAN)
    render_view(view)
    out = capsys.readouterr().out
    assert "====== Pending (4) ======" in out
    assert "====== In Progress (3) ======" in out
    assert "====== In Review (0) ======" in out
    assert "====== Completed (1) ======" in out
    assert "====== Blocked (0) ======" in out
    assert "- [Urgent] Sign carrier renewal contract - Mutual of Omaha #3" in out
    assert out.index("In Progress (3)") < out.index("- [High] Review Q1 financial projections #1")


def test_task_detail(store, view, capsys):
    task = store.get(6)
    render_task_detail(task, view.due_display(task))
    out = capsys.readouterr().out
    assert "Finalize 2026 hiring plan" in out
    assert "assignee: Michael Chen (MC)" in out
    assert "due: 2026-01-08 (Tomorrow)" in out
    assert "Tags:" in out
    for line in out.splitlines():
        if line.startswith("|"):
            assert line.endswith("|")


def test_whitespace_query_is_reported_as_a_filter(view, capsys):
    view.set_filter(TaskFilter(query="   "))
    render_view(view)
    out = capsys.readouterr().out
    assert "Filters: search '   '" in out
    assert "No tasks match the current filters." in out
