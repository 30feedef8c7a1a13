"""Monthly review: completion stats, day loads, weekly buckets and observations."""

from __future__ import annotations

import calendar
import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

import numpy as np

from workload_engine.bucketing import in_month, month_length, to_day
from workload_engine.labels import month_label
from workload_engine.metrics import completion_percentage, round_half_up, round_tenths
from workload_engine.schema import TASK_PRIORITIES, Event, Goal, Task

logger = logging.getLogger(__name__)

WEEK_BUCKETS = 5
DAYS_PER_BUCKET = 7
MID_MONTH_DAY = 15
MAX_MONTHLY_INSIGHTS = 5
MAX_TOP_CATEGORIES = 5
DEFAULT_CATEGORY = "other"


@dataclass
class DayLoad:
    date: str
    load: int

    def to_dict(self) -> dict:
        return {"date": self.date, "load": self.load}


@dataclass
class MonthlyStats:
    tasks_completed: int = 0
    tasks_created: int = 0
    task_completion_rate: int = 0
    events_attended: int = 0
    goals_achieved: int = 0
    goals_total: int = 0
    goal_completion_rate: int = 0
    busiest_day: Optional[DayLoad] = None
    calmest_day: Optional[DayLoad] = None
    average_daily_load: float = 0.0
    total_events_hours: float = 0.0

    def to_dict(self) -> dict:
        return {
            "tasksCompleted": self.tasks_completed,
            "tasksCreated": self.tasks_created,
            "taskCompletionRate": self.task_completion_rate,
            "eventsAttended": self.events_attended,
            "goalsAchieved": self.goals_achieved,
            "goalsTotal": self.goals_total,
            "goalCompletionRate": self.goal_completion_rate,
            "busiestDay": self.busiest_day.to_dict() if self.busiest_day else None,
            "calmestDay": self.calmest_day.to_dict() if self.calmest_day else None,
            "averageDailyLoad": self.average_daily_load,
            "totalEventsHours": self.total_events_hours,
        }


@dataclass
class WeekBucket:
    week: int
    tasks_completed: int
    events_count: int

    def to_dict(self) -> dict:
        return {"week": self.week, "tasksCompleted": self.tasks_completed, "eventsCount": self.events_count}


@dataclass
class PriorityCount:
    priority: str
    count: int

    def to_dict(self) -> dict:
        return {"priority": self.priority, "count": self.count}


@dataclass
class CategoryCount:
    category: str
    count: int

    def to_dict(self) -> dict:
        return {"category": self.category, "count": self.count}


_SEVERITY_BY_TYPE = {"positive": "info", "neutral": "info", "negative": "warning"}


@dataclass
class MonthlyInsight:
    """An observation about the month; ``type`` is positive, neutral or negative."""

    type: str
    icon: str
    title: str
    description: str

    @property
    def severity(self) -> str:
        return _SEVERITY_BY_TYPE[self.type]

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "severity": self.severity,
            "icon": self.icon,
            "title": self.title,
            "description": self.description,
        }


@dataclass
class MonthlyReview:
    stats: MonthlyStats
    insights: list[MonthlyInsight] = field(default_factory=list)
    weekly_breakdown: list[WeekBucket] = field(default_factory=list)
    priority_distribution: list[PriorityCount] = field(default_factory=list)
    top_categories: list[CategoryCount] = field(default_factory=list)
    month_label: str = ""

    def to_dict(self) -> dict:
        return {
            "stats": self.stats.to_dict(),
            "insights": [insight.to_dict() for insight in self.insights],
            "weeklyBreakdown": [bucket.to_dict() for bucket in self.weekly_breakdown],
            "priorityDistribution": [entry.to_dict() for entry in self.priority_distribution],
            "topCategories": [entry.to_dict() for entry in self.top_categories],
            "monthLabel": self.month_label,
        }


def _minutes(clock: str) -> int:
    hours, minutes = clock.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def event_hours(events: Sequence[Event]) -> float:
    """Sum the positive durations of events that have both start and end times."""

    total_minutes = 0
    for event in events:
        if event.start_time and event.end_time:
            duration = _minutes(event.end_time) - _minutes(event.start_time)
            if duration > 0:
                total_minutes += duration
    return round_tenths(total_minutes / 60.0)


def daily_loads(tasks: Sequence[Task], events: Sequence[Event], year: int, month: int) -> np.ndarray:
    """Return one load value per day of the month (index 0 is the 1st).

    ``tasks`` and ``events`` are the month's records; a task adds load on its
    due day only when that day is inside the month.
    """

    days = [to_day(event.date).day - 1 for event in events]
    days += [
        to_day(task.due_date).day - 1
        for task in tasks
        if task.due_date is not None and in_month(task.due_date, year, month)
    ]
    return np.bincount(np.asarray(days, dtype=int), minlength=month_length(year, month))


def _busiest_and_calmest(loads: np.ndarray, year: int, month: int) -> tuple[Optional[DayLoad], Optional[DayLoad]]:
    active = np.flatnonzero(loads)
    if active.size == 0:
        return None, None

    def day_load(index: int) -> DayLoad:
        return DayLoad(date(year, month + 1, index + 1).isoformat(), int(loads[index]))

    busiest = int(np.argmax(loads))
    calmest = int(active[np.argmin(loads[active])])
    return day_load(busiest), day_load(calmest)


def _completion_day(task: Task, year: int, month: int) -> Optional[int]:
    if task.updated_at is None or not in_month(task.updated_at, year, month):
        return None
    return to_day(task.updated_at).day


def weekly_breakdown(
    completed: Sequence[Task], events: Sequence[Event], year: int, month: int
) -> list[WeekBucket]:
    """Split the month into five fixed buckets: days 1-7, 8-14, 15-21, 22-28, 29+."""

    last_day = month_length(year, month)
    completion_days = [day for day in (_completion_day(task, year, month) for task in completed) if day]
    event_days = [to_day(event.date).day for event in events]

    buckets = []
    for week in range(1, WEEK_BUCKETS + 1):
        start = (week - 1) * DAYS_PER_BUCKET + 1
        end = min(week * DAYS_PER_BUCKET, last_day)
        buckets.append(
            WeekBucket(
                week=week,
                tasks_completed=sum(1 for day in completion_days if start <= day <= end),
                events_count=sum(1 for day in event_days if start <= day <= end),
            )
        )
    return buckets


def priority_distribution(tasks: Sequence[Task]) -> list[PriorityCount]:
    counts = Counter((task.priority or "").upper() for task in tasks)
    return [PriorityCount(priority, counts[priority]) for priority in TASK_PRIORITIES if counts[priority]]


def top_categories(events: Sequence[Event], limit: int = MAX_TOP_CATEGORIES) -> list[CategoryCount]:
    counts = Counter(event.category or DEFAULT_CATEGORY for event in events)
    return [CategoryCount(category, count) for category, count in counts.most_common(limit)]


def _completion_insight(stats: MonthlyStats) -> Optional[MonthlyInsight]:
    rate = stats.task_completion_rate
    if rate >= 80:
        return MonthlyInsight(
            "positive",
            "🎯",
            "Excellent task completion",
            f"You completed {rate}% of this month's tasks. Great work!",
        )
    if rate >= 50:
        return MonthlyInsight(
            "neutral",
            "📊",
            "Steady task progress",
            f"You completed {rate}% of your tasks. There is room to improve.",
        )
    if stats.tasks_created > 0:
        return MonthlyInsight(
            "negative",
            "⚠️",
            "Low completion rate",
            f"Only {rate}% of tasks were completed. Consider splitting large tasks.",
        )
    return None


def _goal_insight(stats: MonthlyStats) -> Optional[MonthlyInsight]:
    if stats.goals_total == 0:
        return None
    if stats.goal_completion_rate >= 75:
        return MonthlyInsight(
            "positive",
            "🏆",
            "Goals achieved!",
            f"You reached {stats.goals_achieved} of {stats.goals_total} goals. Impressive!",
        )
    if stats.goal_completion_rate >= 50:
        return MonthlyInsight(
            "neutral",
            "🎯",
            "Progress on goals",
            f"You reached {stats.goals_achieved} of {stats.goals_total} goals.",
        )
    return None


def _busiest_day_insight(stats: MonthlyStats) -> Optional[MonthlyInsight]:
    busiest = stats.busiest_day
    if busiest is None or busiest.load < 5:
        return None
    day = date.fromisoformat(busiest.date)
    return MonthlyInsight(
        "neutral",
        "🔥",
        "Busiest day",
        f"{day.day} ({calendar.day_name[day.weekday()]}) was your busiest day with {busiest.load} items.",
    )


def _event_hours_insight(stats: MonthlyStats) -> Optional[MonthlyInsight]:
    if stats.total_events_hours <= 20:
        return None
    return MonthlyInsight(
        "neutral",
        "⏰",
        "Event hours",
        f"You spent {stats.total_events_hours} hours in events this month.",
    )


def _load_insight(stats: MonthlyStats) -> Optional[MonthlyInsight]:
    if stats.average_daily_load > 5:
        return MonthlyInsight(
            "negative",
            "😓",
            "High daily load",
            f"An average of {stats.average_daily_load} items per day. Consider delegating or postponing.",
        )
    if stats.average_daily_load <= 3 and stats.tasks_created > 0:
        return MonthlyInsight(
            "positive",
            "😌",
            "Balanced load",
            f"An average of {stats.average_daily_load} items per day. A healthy pace!",
        )
    return None


def _high_priority_insight(tasks: Sequence[Task]) -> Optional[MonthlyInsight]:
    high = sum(1 for task in tasks if (task.priority or "").upper() == "HIGH")
    if len(tasks) <= 5 or high <= len(tasks) * 0.4:
        return None
    share = round_half_up(high / len(tasks) * 100)
    return MonthlyInsight(
        "negative",
        "🚨",
        "Too many urgent tasks",
        f"{share}% of tasks are high priority. Revisit your priorities.",
    )


def _trend_insight(completed: Sequence[Task]) -> Optional[MonthlyInsight]:
    if len(completed) <= 5:
        return None
    first_half = sum(
        1 for task in completed if task.updated_at is not None and to_day(task.updated_at).day <= MID_MONTH_DAY
    )
    second_half = len(completed) - first_half
    if second_half > first_half * 1.5:
        return MonthlyInsight(
            "positive",
            "📈",
            "Improving trend",
            "You completed more tasks in the second half of the month.",
        )
    if first_half > second_half * 1.5:
        return MonthlyInsight(
            "neutral",
            "📉",
            "Slowing pace",
            "You completed fewer tasks in the second half. Try to keep the momentum.",
        )
    return None


def monthly_insights(stats: MonthlyStats, tasks: Sequence[Task], completed: Sequence[Task]) -> list[MonthlyInsight]:
    candidates = (
        _completion_insight(stats),
        _goal_insight(stats),
        _busiest_day_insight(stats),
        _event_hours_insight(stats),
        _load_insight(stats),
        _high_priority_insight(tasks),
        _trend_insight(completed),
    )
    return [insight for insight in candidates if insight is not None][:MAX_MONTHLY_INSIGHTS]


def compute_monthly_review(
    tasks: Sequence[Task], events: Sequence[Event], goals: Sequence[Goal], month: int, year: int
) -> MonthlyReview:
    """Build the review for a zero-based ``month`` of ``year`` from raw records."""

    month_tasks = [task for task in tasks if task.created_at is not None and in_month(task.created_at, year, month)]
    completed = [task for task in month_tasks if task.is_done]
    month_events = [event for event in events if in_month(event.date, year, month)]
    month_goals = [goal for goal in goals if goal.date is not None and in_month(goal.date, year, month)]
    achieved_goals = sum(1 for goal in month_goals if goal.achieved)

    loads = daily_loads(month_tasks, month_events, year, month)
    busiest, calmest = _busiest_and_calmest(loads, year, month)

    stats = MonthlyStats(
        tasks_completed=len(completed),
        tasks_created=len(month_tasks),
        task_completion_rate=completion_percentage(len(completed), len(month_tasks)),
        events_attended=len(month_events),
        goals_achieved=achieved_goals,
        goals_total=len(month_goals),
        goal_completion_rate=completion_percentage(achieved_goals, len(month_goals)),
        busiest_day=busiest,
        calmest_day=calmest,
        average_daily_load=round_tenths(float(loads.mean())),
        total_events_hours=event_hours(month_events),
    )
    logger.debug("monthly review %s-%02d: %s tasks, %s events", year, month + 1, len(month_tasks), len(month_events))

    return MonthlyReview(
        stats=stats,
        insights=monthly_insights(stats, month_tasks, completed),
        weekly_breakdown=weekly_breakdown(completed, month_events, year, month),
        priority_distribution=priority_distribution(month_tasks),
        top_categories=top_categories(month_events),
        month_label=month_label(month, year),
    )
