"""
Tests for workload counters.
"""
from datetime import date, timedelta

from taskdeck.engine.filters import TaskFilter
from taskdeck.engine.model import Priority, Status
from taskdeck.engine.stats import TaskStats, aggregate_stats
from taskdeck.engine.store import TaskStore
from taskdeck.engine.view import TaskCommandView

from factories import make_task


def test_seed_counters(seeded, now):
    stats = aggregate_stats(seeded, now)
    assert stats == TaskStats(
        total=8,
        my_tasks=5,
        in_progress=3,
        completed=1,
        overdue=2,  # ids 1 and 3; id 4 is overdue but completed
        due_today=1,  # id 2
        urgent=1,
    )


def test_empty_collection():
    assert aggregate_stats([], date(2026, 1, 1)) == TaskStats()


def test_predicates_are_independent():
    today = date(2026, 5, 1)
    t = make_task(
        1,
        assignee="You",
        priority=Priority.URGENT,
        status=Status.IN_PROGRESS,
        due_date=today - timedelta(days=2),
    )
    stats = aggregate_stats([t], today)
    assert stats.my_tasks == stats.urgent == stats.in_progress == stats.overdue == 1


def test_overdue_excludes_completed_but_not_deferred_or_blocked():
    today = date(2026, 5, 1)
    past = today - timedelta(days=1)
    tasks = [
        make_task(1, status=Status.COMPLETED, due_date=past),
        make_task(2, status=Status.DEFERRED, due_date=past),
        make_task(3, status=Status.BLOCKED, due_date=past),
    ]
    assert aggregate_stats(tasks, today).overdue == 2


def test_due_today_counts_regardless_of_status():
    today = date(2026, 5, 1)
    tasks = [
        make_task(1, status=Status.COMPLETED, due_date=today),
        make_task(2, status=Status.PENDING, due_date=today),
    ]
    stats = aggregate_stats(tasks, today)
    assert stats.due_today == 2
    assert stats.overdue == 0


def test_mine_requires_exact_assignee():
    tasks = [make_task(1, assignee="You"), make_task(2, assignee="you"), make_task(3, assignee="Your team")]
    assert aggregate_stats(tasks, date(2026, 1, 1)).my_tasks == 1


def test_stats_ignore_active_filter(seeded, now):
    view = TaskCommandView(TaskStore(seeded), now=now)
    baseline = view.stats()

    for flt in (
        TaskFilter(query="contract"),
        TaskFilter(status="completed"),
        TaskFilter(priority="low", category="Finance"),
        TaskFilter(query="no such task"),
    ):
        view.set_filter(flt)
        assert view.stats() == baseline


def test_as_dict_keys():
    assert list(TaskStats().as_dict()) == [
        "total",
        "my_tasks",
        "in_progress",
        "completed",
        "overdue",
        "due_today",
        "urgent",
    ]
