"""Core data schema for creator workload snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

DONE = "DONE"
TASK_STATUSES = {"NOT_STARTED", "TODO", "IN_PROGRESS", "DOING", DONE}
TASK_PRIORITIES = ("HIGH", "MEDIUM", "LOW")
GOAL_ITEM_STATUSES = {DONE, "NOT_DONE", "PARTIAL"}

DateLike = Union[date, datetime]


@dataclass
class Task:
    """Task record as returned by the task store."""

    task_id: str
    title: str
    status: str
    priority: str
    due_date: Optional[DateLike] = None
    company_id: Optional[str] = None
    archived: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_done(self) -> bool:
        return self.status == DONE

    @property
    def is_open(self) -> bool:
        return not self.archived and self.status != DONE


@dataclass
class Event:
    """Calendar event. Only the date matters for load; times feed hour totals."""

    event_id: str
    title: str
    date: date
    category: Optional[str] = None
    company_id: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None


@dataclass
class GoalItem:
    item_id: str
    text: str
    status: str = "NOT_DONE"


@dataclass
class Goal:
    """Daily goal record holding the items set for that day."""

    goal_id: str
    date: date
    items: list[GoalItem] = field(default_factory=list)

    @property
    def achieved(self) -> bool:
        return bool(self.items) and all(item.status == DONE for item in self.items)


@dataclass
class Company:
    company_id: str
    name: str


@dataclass
class CreatorRecords:
    """Raw records for one creator on an agency roster."""

    creator_id: str
    name: str
    tasks: list[Task] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)


@dataclass
class Snapshot:
    """Everything the engine reads for one invocation."""

    tasks: list[Task] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    goals: list[Goal] = field(default_factory=list)
    companies: list[Company] = field(default_factory=list)
    creators: list[CreatorRecords] = field(default_factory=list)
