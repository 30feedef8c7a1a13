"""Downloadable monthly report payload."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from workload_engine.labels import HEBREW_MONTHS
from workload_engine.monthly import MonthlyReview

DEFAULT_OWNER_NAME = "Creator"


def export_filename(month: int, year: int) -> str:
    return f"monthly-review-{year}-{month + 1:02d}.json"


def build_monthly_export(
    review: MonthlyReview,
    month: int,
    year: int,
    owner_name: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> dict:
    """Flatten a monthly review into the shape handed to the download endpoint."""

    stats = review.stats
    return {
        "title": f"Monthly summary - {review.month_label}",
        "generatedAt": (generated_at or datetime.now()).isoformat(),
        "ownerName": owner_name or DEFAULT_OWNER_NAME,
        "month": HEBREW_MONTHS[month],
        "year": year,
        "stats": {
            "tasksCompleted": stats.tasks_completed,
            "tasksCreated": stats.tasks_created,
            "taskCompletionRate": stats.task_completion_rate,
            "eventsCount": stats.events_attended,
            "goalsAchieved": stats.goals_achieved,
            "goalsTotal": stats.goals_total,
            "averageDailyLoad": stats.average_daily_load,
            "totalEventsHours": stats.total_events_hours,
        },
        "insights": [
            {"icon": insight.icon, "title": insight.title, "description": insight.description or ""}
            for insight in review.insights
        ],
        "weeklyBreakdown": [bucket.to_dict() for bucket in review.weekly_breakdown],
        "priorityDistribution": [entry.to_dict() for entry in review.priority_distribution],
        "topCategories": [entry.to_dict() for entry in review.top_categories],
    }


def write_export(payload: dict, directory: Path, month: int, year: int) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    out_path = directory / export_filename(month, year)
    out_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return out_path
