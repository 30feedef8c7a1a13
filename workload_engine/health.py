"""Creator health score: a 0-100 workload score with a three-tier status."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Sequence

from workload_engine.bucketing import TODAY, classify_day, in_window, is_overdue_date
from workload_engine.metrics import round_half_up
from workload_engine.schema import DateLike, Event, Task
from workload_engine.streak import calculate_streak_pressure, forward_load_series

logger = logging.getLogger(__name__)

WEIGHTS = {
    "open_tasks": 0.8,
    "overdue_tasks": 5.0,
    "events_today": 3.0,
    "events_week": 0.5,
    "backlog_pressure": 3.0,
    "streak_pressure": 8.0,
}

CALM_MAX = 35
BUSY_MAX = 70
MAX_HINTS = 2
BACKLOG_WINDOW_DAYS = 4  # today plus the next three days
WEEK_DAYS = 7


class HealthStatus(str, Enum):
    CALM = "calm"
    BUSY = "busy"
    OVERLOADED = "overloaded"


@dataclass
class HealthInputs:
    """Workload signals for one creator. Counts are expected to be non-negative."""

    open_tasks_count: int = 0
    overdue_tasks_count: int = 0
    events_today_count: int = 0
    events_week_count: int = 0
    backlog_pressure: int = 0
    streak_pressure: int = 0


@dataclass
class HealthDetails:
    open_tasks: int
    overdue_tasks: int
    events_today: int
    events_week: int
    backlog_pressure: int
    streak_pressure: int
    insights: list[str] = field(default_factory=list)


@dataclass
class HealthResult:
    score: int
    status: HealthStatus
    details: HealthDetails

    def to_dict(self) -> dict:
        details = asdict(self.details)
        return {
            "score": self.score,
            "status": self.status.value,
            "details": {
                "openTasks": details["open_tasks"],
                "overdueTasks": details["overdue_tasks"],
                "eventsToday": details["events_today"],
                "eventsWeek": details["events_week"],
                "backlogPressure": details["backlog_pressure"],
                "streakPressure": details["streak_pressure"],
                "insights": details["insights"],
            },
        }


def status_for_score(score: int) -> HealthStatus:
    if score <= CALM_MAX:
        return HealthStatus.CALM
    if score <= BUSY_MAX:
        return HealthStatus.BUSY
    return HealthStatus.OVERLOADED


def _raw_score(inputs: HealthInputs) -> float:
    return (
        inputs.open_tasks_count * WEIGHTS["open_tasks"]
        + inputs.overdue_tasks_count * WEIGHTS["overdue_tasks"]
        + inputs.events_today_count * WEIGHTS["events_today"]
        + inputs.events_week_count * WEIGHTS["events_week"]
        + inputs.backlog_pressure * WEIGHTS["backlog_pressure"]
        + inputs.streak_pressure * WEIGHTS["streak_pressure"]
    )


def _hints(inputs: HealthInputs) -> list[str]:
    hints = []
    if inputs.overdue_tasks_count > 0:
        hints.append(f"{inputs.overdue_tasks_count} overdue tasks")
    if inputs.backlog_pressure > 3:
        hints.append(f"{inputs.backlog_pressure} tasks due in the next 3 days")
    if inputs.events_today_count > 4:
        hints.append(f"Busy day: {inputs.events_today_count} events today")
    if inputs.streak_pressure >= 3:
        hints.append(f"{inputs.streak_pressure} heavy days in a row")
    if inputs.open_tasks_count > 15:
        hints.append(f"{inputs.open_tasks_count} open tasks")

    if not hints:
        if inputs.open_tasks_count < 5 and inputs.overdue_tasks_count == 0:
            hints.append("Everything is under control!")
        elif inputs.events_today_count == 0:
            hints.append("Open day for deep work")

    return hints[:MAX_HINTS]


def compute_health_score(inputs: HealthInputs) -> HealthResult:
    """Score a creator's workload and classify it as calm, busy or overloaded."""

    score = min(100, max(0, round_half_up(_raw_score(inputs))))
    status = status_for_score(score)
    logger.debug("health score %s (%s)", score, status.value)

    return HealthResult(
        score=score,
        status=status,
        details=HealthDetails(
            open_tasks=inputs.open_tasks_count,
            overdue_tasks=inputs.overdue_tasks_count,
            events_today=inputs.events_today_count,
            events_week=inputs.events_week_count,
            backlog_pressure=inputs.backlog_pressure,
            streak_pressure=inputs.streak_pressure,
            insights=_hints(inputs),
        ),
    )


def build_health_inputs(tasks: Sequence[Task], events: Sequence[Event], today: DateLike) -> HealthInputs:
    """Derive the six health signals from a creator's raw tasks and events."""

    open_tasks = [task for task in tasks if task.is_open]
    due_open = [task for task in open_tasks if task.due_date is not None]

    return HealthInputs(
        open_tasks_count=len(open_tasks),
        overdue_tasks_count=sum(1 for task in due_open if is_overdue_date(task.due_date, today)),
        events_today_count=sum(1 for event in events if classify_day(event.date, today) == TODAY),
        events_week_count=sum(1 for event in events if in_window(event.date, today, WEEK_DAYS)),
        backlog_pressure=sum(1 for task in due_open if in_window(task.due_date, today, BACKLOG_WINDOW_DAYS)),
        streak_pressure=calculate_streak_pressure(forward_load_series(tasks, events, today, WEEK_DAYS)),
    )
