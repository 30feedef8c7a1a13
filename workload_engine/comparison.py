"""Month-over-month comparison of computed monthly stats."""

from __future__ import annotations

from dataclasses import dataclass

from workload_engine.monthly import MonthlyStats


@dataclass
class ComparisonEntry:
    label: str
    change: float
    is_positive: bool

    def to_dict(self) -> dict:
        return {"label": self.label, "change": self.change, "isPositive": self.is_positive}


def compute_month_comparison(current: MonthlyStats, previous: MonthlyStats) -> list[ComparisonEntry]:
    """Compare two months on completed tasks, events and completion rate."""

    def entry(label: str, new: float, old: float) -> ComparisonEntry:
        change = new - old
        return ComparisonEntry(label=label, change=change, is_positive=change >= 0)

    return [
        entry("Tasks completed", current.tasks_completed, previous.tasks_completed),
        entry("Events", current.events_attended, previous.events_attended),
        entry("Completion rate", current.task_completion_rate, previous.task_completion_rate),
    ]
