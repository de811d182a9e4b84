"""
Tests for due-date classification.
"""
from datetime import date, datetime, timedelta

from taskdeck.engine.due import (
    DueDisplay,
    Urgency,
    classify_due_date,
    format_short_date,
    is_due_today,
    is_overdue,
)

TODAY = date(2026, 3, 10)


def test_same_day_is_today():
    assert classify_due_date(TODAY, TODAY) == DueDisplay("Today", Urgency.HIGH)


def test_next_day_is_tomorrow():
    assert classify_due_date(TODAY + timedelta(days=1), TODAY) == DueDisplay("Tomorrow", Urgency.MEDIUM)


def test_past_day_is_overdue_with_day_count():
    d = classify_due_date(TODAY - timedelta(days=3), TODAY)
    assert d.text == "3 days overdue"
    assert d.urgency is Urgency.CRITICAL


def test_yesterday_is_one_day_overdue():
    assert classify_due_date(TODAY - timedelta(days=1), TODAY).text == "1 days overdue"


def test_within_a_week_counts_days():
    d = classify_due_date(TODAY + timedelta(days=5), TODAY)
    assert d == DueDisplay("5 days", Urgency.INFO)


def test_week_boundary_is_inclusive():
    assert classify_due_date(TODAY + timedelta(days=7), TODAY).text == "7 days"
    assert classify_due_date(TODAY + timedelta(days=8), TODAY).urgency is Urgency.NEUTRAL


def test_far_future_uses_short_date():
    target = TODAY + timedelta(days=30)
    d = classify_due_date(target, TODAY)
    assert d.text == "Apr 9"
    assert d.text == format_short_date(target)
    assert d.urgency is Urgency.NEUTRAL


def test_short_date_has_no_zero_padding():
    assert format_short_date(date(2026, 1, 5)) == "Jan 5"


def test_time_of_day_is_ignored():
    late = datetime(2026, 3, 10, 23, 59)
    early = datetime(2026, 3, 10, 0, 1)
    assert classify_due_date(TODAY, late).text == "Today"
    assert classify_due_date(TODAY, early).text == "Today"
    assert classify_due_date(TODAY + timedelta(days=1), late).text == "Tomorrow"


def test_predicates_use_day_granularity():
    assert is_due_today(TODAY, datetime(2026, 3, 10, 18, 0))
    assert not is_overdue(TODAY, datetime(2026, 3, 10, 18, 0))
    assert is_overdue(TODAY - timedelta(days=1), TODAY)
    assert not is_overdue(TODAY + timedelta(days=1), TODAY)
