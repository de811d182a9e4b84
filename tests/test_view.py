"""
Tests for the task command view: rows, Kanban columns, expansion and caching.
"""
from datetime import date, datetime

import pytest

from taskdeck.engine.filters import TaskFilter
from taskdeck.engine.model import KANBAN_COLUMNS, Status
from taskdeck.engine.store import TaskStore
from taskdeck.engine.view import TaskCommandView, ViewMode

from factories import make_task


@pytest.fixture()
def view(store, now) -> TaskCommandView:
    return TaskCommandView(store, now=now)


def test_list_rows_follow_filtered_order_with_due_labels(view):
    rows = view.list_rows()
    assert [r.task.id for r in rows] == [4, 3, 1, 2, 6, 7, 5, 8]
    labels = {r.task.id: r.due.text for r in rows}
    assert labels[3] == "2 days overdue"
    assert labels[2] == "Today"
    assert labels[6] == "Tomorrow"
    assert labels[5] == "3 days"
    assert labels[8] == "Jan 15"


def test_single_expansion(view):
    view.toggle_expanded(1)
    assert [r.task.id for r in view.list_rows() if r.expanded] == [1]

    view.toggle_expanded(5)
    assert [r.task.id for r in view.list_rows() if r.expanded] == [5]

    view.toggle_expanded(5)
    assert view.expanded_task_id is None
    assert not any(r.expanded for r in view.list_rows())


def test_kanban_columns_fixed_order(view):
    cols = view.kanban_columns()
    assert [c.status for c in cols] == list(KANBAN_COLUMNS)
    assert [c.label for c in cols] == ["Pending", "In Progress", "In Review", "Completed", "Blocked"]


def test_kanban_columns_keep_due_order(view):
    cols = {c.status: [t.id for t in c.tasks] for c in view.kanban_columns()}
    assert cols[Status.PENDING] == [3, 2, 6, 8]
    assert cols[Status.IN_PROGRESS] == [1, 7, 5]
    assert cols[Status.COMPLETED] == [4]
    assert cols[Status.REVIEW] == []
    assert cols[Status.BLOCKED] == []


def test_kanban_partition_is_complete_and_drops_deferred(now):
    statuses = [Status.PENDING, Status.DEFERRED, Status.REVIEW, Status.BLOCKED, Status.DEFERRED, Status.COMPLETED]
    tasks = [make_task(i, status=s) for i, s in enumerate(statuses, start=1)]
    view = TaskCommandView(TaskStore(tasks), now=now)

    placed = [t.id for col in view.kanban_columns() for t in col.tasks]
    expected = {t.id for t in view.filtered() if t.status is not Status.DEFERRED}

    assert len(placed) == len(set(placed))
    assert set(placed) == expected == {1, 3, 4, 6}


def test_kanban_respects_filter(view):
    view.set_filter(TaskFilter(priority="high"))
    placed = {t.id for col in view.kanban_columns() for t in col.tasks}
    assert placed == {1, 2, 5}


def test_cache_refreshes_after_mutation(view):
    view.set_filter(TaskFilter(query="board"))
    first = view.filtered()
    assert [t.progress for t in first] == [33]

    view.toggle_subtask(5, 2)

    second = view.filtered()
    assert [t.progress for t in second] == [67]


def test_cache_refreshes_after_filter_change(view):
    assert len(view.filtered()) == 8
    view.set_filter(TaskFilter(status="completed"))
    assert [t.id for t in view.filtered()] == [4]
    view.set_filter(TaskFilter())
    assert len(view.filtered()) == 8


def test_cache_reused_when_nothing_changed(view):
    assert view.filtered() is view.filtered()


def test_star_dispatch_reaches_store(view, store):
    view.toggle_star(8)
    assert store.get(8).starred is True
    assert [r.task.starred for r in view.list_rows() if r.task.id == 8] == [True]


def test_view_mode_switch(view):
    assert view.view_mode is ViewMode.LIST
    view.set_view_mode("kanban")
    assert view.view_mode is ViewMode.KANBAN
    with pytest.raises(ValueError):
        view.set_view_mode("calendar")


def test_now_callable_is_read_each_time(store):
    clock = iter([date(2026, 1, 7), date(2026, 1, 8)])
    view = TaskCommandView(store, now=lambda: next(clock))
    assert view.stats().due_today == 1  # id 2 on Jan 7
    assert view.stats().due_today == 1  # id 6 on Jan 8


def test_datetime_now_is_accepted(store):
    view = TaskCommandView(store, now=datetime(2026, 1, 7, 21, 30))
    assert view.due_display(store.get(2)).text == "Today"


def test_end_to_end_contract_search(store, now):
    view = TaskCommandView(store, now=now)
    view.set_filter(TaskFilter(query="contract", status="all"))

    ids = [t.id for t in view.filtered()]
    assert ids == [3]
    for t in view.filtered():
        hay = f"{t.title} {t.description} {t.category.value}".lower()
        assert "contract" in hay

    stats = view.stats()
    assert stats.overdue >= 1
    assert stats.urgent >= 1

    urgent = store.get(3)
    assert urgent.assignee == "You"
    assert view.due_display(urgent).text == "2 days overdue"
