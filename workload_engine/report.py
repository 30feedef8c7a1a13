"""End-to-end runs of the engine over a loaded snapshot."""

from __future__ import annotations

from datetime import date
from typing import Optional

from workload_engine.agency import compute_agency_insights, summarize_creator
from workload_engine.bucketing import to_day
from workload_engine.comparison import compute_month_comparison
from workload_engine.health import build_health_inputs, compute_health_score
from workload_engine.insights import compute_insights
from workload_engine.monthly import compute_monthly_review
from workload_engine.schema import DateLike, Snapshot


def previous_month(month: int, year: int) -> tuple[int, int]:
    if month == 0:
        return 11, year - 1
    return month - 1, year


def creator_report(
    snapshot: Snapshot, today: DateLike, month: Optional[int] = None, year: Optional[int] = None
) -> dict:
    """Health, ranked insights and the monthly review (with comparison) for one creator.

    ``month`` is zero-based and defaults, with ``year``, to the month of ``today``.
    """

    day = to_day(today)
    month = day.month - 1 if month is None else month
    year = day.year if year is None else year

    health = compute_health_score(build_health_inputs(snapshot.tasks, snapshot.events, day))
    insights = compute_insights(snapshot.tasks, snapshot.events, snapshot.companies, scope="creator", today=day)
    review = compute_monthly_review(snapshot.tasks, snapshot.events, snapshot.goals, month, year)

    prev_month, prev_year = previous_month(month, year)
    previous = compute_monthly_review(snapshot.tasks, snapshot.events, snapshot.goals, prev_month, prev_year)

    return {
        "health": health.to_dict(),
        "insights": [insight.to_dict() for insight in insights],
        "monthlyReview": review.to_dict(),
        "comparison": [entry.to_dict() for entry in compute_month_comparison(review.stats, previous.stats)],
    }


def agency_report(snapshot: Snapshot, today: Optional[DateLike] = None) -> dict:
    """Per-creator health statuses and agency-level insights for the roster."""

    day = to_day(today) if today is not None else date.today()
    roster = [
        summarize_creator(creator.creator_id, creator.name, creator.tasks, creator.events, day)
        for creator in snapshot.creators
    ]
    return {
        "creators": [
            {"id": entry.creator_id, "name": entry.name, "healthStatus": entry.health_status.value}
            for entry in roster
        ],
        "insights": [insight.to_dict() for insight in compute_agency_insights(roster)],
    }
