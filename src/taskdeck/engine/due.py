# src/taskdeck/engine/due.py

"""
Due-date classification.

Maps a due date to a human-relative label ("Today", "3 days overdue",
"Jan 15", ...) and an urgency tier used for colouring.

Pure functions of (target, now). Time of day is ignored: only the
calendar day of `now` matters.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Final


# Upper bound (inclusive) for the "N days" bucket.
DUE_SOON_DAYS: Final[int] = 7


class Urgency(str, Enum):
    """
    Urgency tier of a due-date bucket, most urgent first.
    """

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    INFO = "info"
    NEUTRAL = "neutral"


@dataclass(frozen=True, slots=True)
class DueDisplay:
    text: str
    urgency: Urgency


def _as_day(value: date | datetime) -> date:
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    return value


def format_short_date(d: date) -> str:
    """Format as 'MMM d', e.g. 'Jan 5'."""
    return f"{d.strftime('%b')} {d.day}"


def is_due_today(target: date, now: date | datetime) -> bool:
    return _as_day(target) == _as_day(now)


def is_overdue(target: date, now: date | datetime) -> bool:
    """True if `target` is a calendar day strictly before today."""
    return _as_day(target) < _as_day(now)


def classify_due_date(target: date, now: date | datetime) -> DueDisplay:
    """
    Classify `target` relative to `now`.

    Rules, first match wins:
    1. same day               -> "Today"            (HIGH)
    2. following day          -> "Tomorrow"         (MEDIUM)
    3. any earlier day        -> "N days overdue"   (CRITICAL)
    4. within DUE_SOON_DAYS   -> "N days"           (INFO)
    5. otherwise              -> "MMM d"            (NEUTRAL)
    """
    target_day = _as_day(target)
    delta = (target_day - _as_day(now)).days

    if delta == 0:
        return DueDisplay("Today", Urgency.HIGH)
    if delta == 1:
        return DueDisplay("Tomorrow", Urgency.MEDIUM)
    if delta < 0:
        return DueDisplay(f"{-delta} days overdue", Urgency.CRITICAL)
    if delta <= DUE_SOON_DAYS:
        return DueDisplay(f"{delta} days", Urgency.INFO)
    return DueDisplay(format_short_date(target_day), Urgency.NEUTRAL)
