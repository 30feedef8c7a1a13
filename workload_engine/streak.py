"""Daily load and heavy-day streak detection."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from workload_engine.bucketing import day_range, to_day
from workload_engine.schema import DateLike, Event, Task

HEAVY_DAY_THRESHOLD = 5
MAX_STREAK_PRESSURE = 5


def calculate_daily_load(events_count: int, due_tasks_count: int) -> int:
    return events_count + due_tasks_count


def is_heavy_day(load: float) -> bool:
    return load >= HEAVY_DAY_THRESHOLD


def calculate_streak_pressure(daily_loads: Iterable[float]) -> int:
    """Count heavy days from the start of ``daily_loads``, capped at 5.

    The sequence is read as today, tomorrow, ... so only an uninterrupted run
    beginning at index 0 counts; heavy days after a light one are ignored.
    """

    streak = 0
    for load in daily_loads:
        if is_heavy_day(load):
            streak += 1
        else:
            break
    return min(MAX_STREAK_PRESSURE, streak)


def forward_load_series(
    tasks: Sequence[Task], events: Sequence[Event], today: DateLike, days: int = 7
) -> list[int]:
    """Return the load of each day from ``today`` over ``days`` days.

    A day's load is its event count plus the open tasks due on it.
    """

    events_by_day = Counter(to_day(event.date) for event in events)
    due_by_day = Counter(to_day(task.due_date) for task in tasks if task.due_date and task.is_open)
    return [calculate_daily_load(events_by_day[day], due_by_day[day]) for day in day_range(today, days)]
