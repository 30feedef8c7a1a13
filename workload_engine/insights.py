"""Ranked, capped insights for a single creator.

Each detector looks at the whole snapshot and proposes at most one candidate
with an internal priority. Candidates are ranked by priority (lower first,
detector order breaking ties) and only the top three are surfaced.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence

from workload_engine.bucketing import days_between, in_month, in_window, is_overdue_date, to_day
from workload_engine.metrics import completion_percentage
from workload_engine.schema import Company, DateLike, Event, Task
from workload_engine.streak import calculate_streak_pressure, forward_load_series

logger = logging.getLogger(__name__)

MAX_INSIGHTS = 3
LONG_OVERDUE_DAYS = 3
HEAVY_WEEK_MIN_STREAK = 3
CONCENTRATION_WARNING_PCT = 60
CONCENTRATION_INFO_PCT = 40
COMPLETION_MIN_TASKS = 5
COMPLETION_LOW_PCT = 50
LOOKAHEAD_DAYS = 7


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    RISK = "risk"


class InsightKey(str, Enum):
    """Closed set of insight kinds produced by the creator and agency engines."""

    OVERDUE_TASKS = "overdue-tasks"
    HEAVY_STREAK = "heavy-streak"
    COMPANY_CONCENTRATION = "company-concentration"
    COMPLETION_LOW = "completion-low"
    EMPTY_WEEK = "empty-week"
    CREATOR_AT_RISK = "creator-at-risk"
    PERFORMANCE_UP = "performance-up"


ICONS = {
    InsightKey.OVERDUE_TASKS: "⏰",
    InsightKey.HEAVY_STREAK: "🔥",
    InsightKey.COMPANY_CONCENTRATION: "📊",
    InsightKey.COMPLETION_LOW: "📉",
    InsightKey.EMPTY_WEEK: "📅",
    InsightKey.CREATOR_AT_RISK: "🚨",
    InsightKey.PERFORMANCE_UP: "⭐",
}


@dataclass
class Insight:
    key: InsightKey
    severity: Severity
    title: str
    message: str
    icon: str

    @property
    def id(self) -> str:
        return self.key.value

    def to_dict(self) -> dict:
        return {
            "id": self.key.value,
            "severity": self.severity.value,
            "title": self.title,
            "message": self.message,
            "icon": self.icon,
        }


@dataclass
class InsightCandidate:
    """An insight proposed by a detector, with its ranking priority."""

    insight: Insight
    priority: int


def make_candidate(key: InsightKey, severity: Severity, title: str, message: str, priority: int) -> InsightCandidate:
    return InsightCandidate(Insight(key, severity, title, message, ICONS[key]), priority)


def rank_insights(candidates: Iterable[Optional[InsightCandidate]], limit: int = MAX_INSIGHTS) -> list[Insight]:
    """Drop empty results, sort by priority (stable) and keep the first ``limit``."""

    fired = [candidate for candidate in candidates if candidate is not None]
    ranked = sorted(fired, key=lambda candidate: candidate.priority)
    logger.debug("insight candidates fired: %s", [c.insight.key.value for c in ranked])
    return [candidate.insight for candidate in ranked[:limit]]


@dataclass(frozen=True)
class InsightContext:
    tasks: Sequence[Task]
    events: Sequence[Event]
    companies: Sequence[Company]
    today: date
    scope: str = "creator"


Detector = Callable[[InsightContext], Optional[InsightCandidate]]


def detect_overdue(ctx: InsightContext) -> Optional[InsightCandidate]:
    overdue = [
        task
        for task in ctx.tasks
        if task.is_open and task.due_date is not None and is_overdue_date(task.due_date, ctx.today)
    ]
    long_overdue = [task for task in overdue if days_between(task.due_date, ctx.today) >= LONG_OVERDUE_DAYS]

    if long_overdue:
        return make_candidate(
            InsightKey.OVERDUE_TASKS,
            Severity.RISK,
            "Overdue tasks",
            f"{len(long_overdue)} tasks are {LONG_OVERDUE_DAYS}+ days overdue.",
            priority=1,
        )
    if overdue:
        return make_candidate(
            InsightKey.OVERDUE_TASKS,
            Severity.WARNING,
            "Overdue tasks",
            f"{len(overdue)} tasks are overdue.",
            priority=3,
        )
    return None


def detect_heavy_week(ctx: InsightContext) -> Optional[InsightCandidate]:
    streak = calculate_streak_pressure(forward_load_series(ctx.tasks, ctx.events, ctx.today, LOOKAHEAD_DAYS))
    if streak < HEAVY_WEEK_MIN_STREAK:
        return None
    return make_candidate(
        InsightKey.HEAVY_STREAK,
        Severity.WARNING,
        "Heavy week ahead",
        f"{streak} heavy days in a row this coming week.",
        priority=2,
    )


def company_shares(
    tasks: Sequence[Task], events: Sequence[Event], companies: Sequence[Company]
) -> list[tuple[Company, int, int]]:
    """Return ``(company, count, percent)`` rows, busiest first, ties by company id."""

    counts = Counter(event.company_id for event in events if event.company_id)
    counts.update(task.company_id for task in tasks if task.company_id)
    total = sum(counts.values())

    rows = [
        (company, counts[company.company_id], completion_percentage(counts[company.company_id], total))
        for company in companies
    ]
    return sorted(rows, key=lambda row: (-row[1], row[0].company_id))


def detect_company_concentration(ctx: InsightContext) -> Optional[InsightCandidate]:
    if not ctx.companies:
        return None

    company, _, percentage = company_shares(ctx.tasks, ctx.events, ctx.companies)[0]
    if percentage >= CONCENTRATION_WARNING_PCT:
        severity, priority = Severity.WARNING, 2
    elif percentage >= CONCENTRATION_INFO_PCT:
        severity, priority = Severity.INFO, 5
    else:
        return None

    return make_candidate(
        InsightKey.COMPANY_CONCENTRATION,
        severity,
        "Client concentration",
        f"{company.name} takes {percentage}% of your time this month.",
        priority=priority,
    )


def detect_low_completion(ctx: InsightContext) -> Optional[InsightCandidate]:
    month_tasks = [
        task
        for task in ctx.tasks
        if task.created_at is not None and in_month(task.created_at, ctx.today.year, ctx.today.month - 1)
    ]
    if len(month_tasks) < COMPLETION_MIN_TASKS:
        return None

    rate = completion_percentage(sum(1 for task in month_tasks if task.is_done), len(month_tasks))
    if rate >= COMPLETION_LOW_PCT:
        return None
    return make_candidate(
        InsightKey.COMPLETION_LOW,
        Severity.WARNING,
        "Low completion rate",
        f"Only {rate}% of this month's tasks are done.",
        priority=3,
    )


def detect_empty_week(ctx: InsightContext) -> Optional[InsightCandidate]:
    if any(in_window(event.date, ctx.today, LOOKAHEAD_DAYS) for event in ctx.events):
        return None
    return make_candidate(
        InsightKey.EMPTY_WEEK,
        Severity.INFO,
        "Free week",
        "No events are planned for the coming week.",
        priority=6,
    )


CREATOR_DETECTORS: tuple[Detector, ...] = (
    detect_overdue,
    detect_heavy_week,
    detect_company_concentration,
    detect_low_completion,
    detect_empty_week,
)


def compute_insights(
    tasks: Sequence[Task],
    events: Sequence[Event],
    companies: Optional[Sequence[Company]] = None,
    scope: str = "creator",
    today: Optional[DateLike] = None,
) -> list[Insight]:
    """Run every creator detector over the snapshot and return the top insights.

    ``scope`` is carried on the context for callers that tag results; the
    creator detectors do not read it.
    """

    ctx = InsightContext(
        tasks=tasks,
        events=events,
        companies=companies or (),
        today=to_day(today) if today is not None else date.today(),
        scope=scope,
    )
    return rank_insights(detector(ctx) for detector in CREATOR_DETECTORS)
