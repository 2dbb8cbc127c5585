"""Week-window helpers anchored on a configurable first weekday.

Weekdays use Python numbering (0=Monday ... 6=Sunday). All helpers are pure:
callers pass "today" explicitly.
"""

import math
from datetime import date, datetime, timedelta

SUNDAY = 6


def as_date(value: date | datetime) -> date:
    """Return the calendar date of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def to_naive_local(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def week_start(d: date | datetime, first_weekday: int = SUNDAY) -> date:
    """Return the first day of the week containing d."""
    day = as_date(d)
    offset = (day.weekday() - first_weekday) % 7
    return day - timedelta(days=offset)


def week_end(d: date | datetime, first_weekday: int = SUNDAY) -> date:
    """Return the last day of the week containing d."""
    return week_start(d, first_weekday) + timedelta(days=6)


def weeks_between(start: date | datetime, end: date | datetime) -> int:
    """Whole weeks from start to end, floored at 0."""
    days = (as_date(end) - as_date(start)).days
    return max(days // 7, 0)


def days_until(today: date | datetime, target: date | datetime) -> int:
    """Whole days from today to target, floored at 0."""
    return max((as_date(target) - as_date(today)).days, 0)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
