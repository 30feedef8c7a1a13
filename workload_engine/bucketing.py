"""Day, week and month bucketing for dates and timestamps.

Every comparison happens at day granularity: values are normalized to their
calendar date (local midnight) first, so a task due later today is never in
the past. No time zone conversion is done here; callers pass localized values.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

from workload_engine.schema import DateLike

PAST = "past"
TODAY = "today"
FUTURE = "future"


def to_day(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def classify_day(value: DateLike, today: DateLike) -> str:
    """Return ``"past"``, ``"today"`` or ``"future"`` relative to ``today``."""

    day = to_day(value)
    reference = to_day(today)
    if day < reference:
        return PAST
    if day == reference:
        return TODAY
    return FUTURE


def is_overdue_date(value: DateLike, today: DateLike) -> bool:
    return classify_day(value, today) == PAST


def days_between(earlier: DateLike, later: DateLike) -> int:
    return (to_day(later) - to_day(earlier)).days


def in_month(value: DateLike, year: int, month: int) -> bool:
    """Check membership in a month; ``month`` is zero-based (0 = January)."""

    day = to_day(value)
    return day.year == year and day.month == month + 1


def in_window(value: DateLike, anchor: DateLike, days: int) -> bool:
    """True when ``anchor <= value < anchor + days`` at day granularity."""

    offset = days_between(anchor, value)
    return 0 <= offset < days


def month_length(year: int, month: int) -> int:
    return calendar.monthrange(year, month + 1)[1]


def day_range(start: DateLike, days: int) -> list[date]:
    first = to_day(start)
    return [first + timedelta(days=offset) for offset in range(days)]
