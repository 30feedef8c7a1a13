"""Hebrew display labels for dates, months and statuses."""

from __future__ import annotations

from datetime import date

from workload_engine.bucketing import to_day
from workload_engine.schema import DateLike

HEBREW_MONTHS = (
    "ינואר",
    "פברואר",
    "מרץ",
    "אפריל",
    "מאי",
    "יוני",
    "יולי",
    "אוגוסט",
    "ספטמבר",
    "אוקטובר",
    "נובמבר",
    "דצמבר",
)

HEALTH_STATUS_LABELS = {
    "calm": "רגוע",
    "busy": "עמוס",
    "overloaded": "עומס יתר",
}

SEVERITY_LABELS = {
    "info": "מידע",
    "warning": "אזהרה",
    "risk": "סיכון",
}


def month_label(month: int, year: int) -> str:
    """Label a zero-based month, e.g. ``month_label(0, 2025) == "ינואר 2025"``."""

    return f"{HEBREW_MONTHS[month]} {year}"


def format_date_hebrew(value: str | DateLike) -> str:
    """Render an ISO date string (or date) as day and month name, e.g. "5 במרץ"."""

    day = date.fromisoformat(value[:10]) if isinstance(value, str) else to_day(value)
    return f"{day.day} ב{HEBREW_MONTHS[day.month - 1]}"
