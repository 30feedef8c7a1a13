"""Insights across an agency's creator roster."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from workload_engine.health import HealthStatus, build_health_inputs, compute_health_score
from workload_engine.insights import (
    Insight,
    InsightCandidate,
    InsightKey,
    Severity,
    make_candidate,
    rank_insights,
)
from workload_engine.metrics import completion_percentage
from workload_engine.schema import DateLike, Event, Task

NAMED_AT_RISK = 2
PERFORMANCE_HIGH_PCT = 80
PERFORMANCE_LOW_PCT = 50


@dataclass
class CreatorSummary:
    """One roster entry: a creator's records already reduced to a health status."""

    creator_id: str
    name: str
    tasks: list[Task] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    health_status: Optional[HealthStatus] = None


AgencyDetector = Callable[[Sequence[CreatorSummary]], Optional[InsightCandidate]]


def summarize_creator(
    creator_id: str, name: str, tasks: Sequence[Task], events: Sequence[Event], today: DateLike
) -> CreatorSummary:
    """Build a roster entry whose status comes from the full health scorer."""

    health = compute_health_score(build_health_inputs(tasks, events, today))
    return CreatorSummary(creator_id, name, list(tasks), list(events), health.status)


def detect_creators_at_risk(creators: Sequence[CreatorSummary]) -> Optional[InsightCandidate]:
    at_risk = [creator for creator in creators if creator.health_status == HealthStatus.OVERLOADED]
    if not at_risk:
        return None

    names = ", ".join(creator.name for creator in at_risk[:NAMED_AT_RISK])
    extra = len(at_risk) - NAMED_AT_RISK
    more = f" and {extra} more" if extra > 0 else ""
    return make_candidate(
        InsightKey.CREATOR_AT_RISK,
        Severity.RISK,
        "Creators overloaded",
        f"{names}{more} {'is' if len(at_risk) == 1 else 'are'} overloaded.",
        priority=1,
    )


def detect_agency_performance(creators: Sequence[CreatorSummary]) -> Optional[InsightCandidate]:
    pooled = [task for creator in creators for task in creator.tasks]
    rate = completion_percentage(sum(1 for task in pooled if task.is_done), len(pooled))

    if rate >= PERFORMANCE_HIGH_PCT:
        return make_candidate(
            InsightKey.PERFORMANCE_UP,
            Severity.INFO,
            "Excellent performance",
            f"{rate}% task completion across the agency.",
            priority=4,
        )
    if rate < PERFORMANCE_LOW_PCT:
        return make_candidate(
            InsightKey.COMPLETION_LOW,
            Severity.WARNING,
            "Low completion rate",
            f"Only {rate}% of the agency's tasks are done.",
            priority=2,
        )
    return None


AGENCY_DETECTORS: tuple[AgencyDetector, ...] = (
    detect_creators_at_risk,
    detect_agency_performance,
)


def compute_agency_insights(creators: Sequence[CreatorSummary]) -> list[Insight]:
    """Run the agency detectors over a roster and return the top insights."""

    return rank_insights(detector(creators) for detector in AGENCY_DETECTORS)
