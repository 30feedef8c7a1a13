"""Row-to-record conversion shared by the snapshot adapters.

Rows use the storage layer's snake_case column names. Empty strings are
treated as missing values so CSV exports and JSON payloads parse alike.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from workload_engine.schema import (
    GOAL_ITEM_STATUSES,
    TASK_PRIORITIES,
    TASK_STATUSES,
    Company,
    Event,
    Goal,
    GoalItem,
    Task,
)

_TRUE_VALUES = {"1", "true", "yes", "y"}


def require_object(row: Any, where: str) -> None:
    if not isinstance(row, dict):
        raise ValueError(f"{where}: must be an object")


def _missing(row: dict, fields: tuple[str, ...]) -> list[str]:
    return [name for name in fields if row.get(name) in (None, "")]


def _optional(row: dict, name: str) -> Optional[Any]:
    value = row.get(name)
    return None if value in (None, "") else value


def _parse_timestamp(row: dict, name: str, where: str) -> Optional[datetime]:
    raw = _optional(row, name)
    if raw is None:
        return None
    try:
        return datetime.fromisoformat(str(raw))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{where}: malformed {name}") from exc


def _parse_date(row: dict, name: str, where: str) -> date:
    try:
        return date.fromisoformat(str(row[name])[:10])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{where}: malformed {name}") from exc


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def parse_task(row: dict, where: str) -> Task:
    require_object(row, where)
    missing = _missing(row, ("id", "status"))
    if missing:
        raise ValueError(f"{where}: missing required fields {missing}")

    status = str(row["status"]).strip().upper()
    if status not in TASK_STATUSES:
        raise ValueError(f"{where}: invalid status '{status}'")

    priority = str(_optional(row, "priority") or "MEDIUM").strip().upper()
    if priority not in TASK_PRIORITIES:
        raise ValueError(f"{where}: invalid priority '{priority}'")

    company_id = _optional(row, "company_id")
    return Task(
        task_id=str(row["id"]).strip(),
        title=str(row.get("title") or ""),
        status=status,
        priority=priority,
        due_date=_parse_timestamp(row, "due_date", where),
        company_id=str(company_id) if company_id is not None else None,
        archived=_parse_bool(row.get("archived", False)),
        created_at=_parse_timestamp(row, "created_at", where),
        updated_at=_parse_timestamp(row, "updated_at", where),
    )


def parse_event(row: dict, where: str) -> Event:
    require_object(row, where)
    missing = _missing(row, ("id", "date"))
    if missing:
        raise ValueError(f"{where}: missing required fields {missing}")

    company_id = _optional(row, "company_id")
    return Event(
        event_id=str(row["id"]).strip(),
        title=str(row.get("title") or ""),
        date=_parse_date(row, "date", where),
        category=_optional(row, "category"),
        company_id=str(company_id) if company_id is not None else None,
        start_time=_optional(row, "start_time"),
        end_time=_optional(row, "end_time"),
    )


def _parse_goal_item(item: dict, where: str) -> GoalItem:
    require_object(item, where)
    status = _optional(item, "status")
    if status is None:
        status = "DONE" if _parse_bool(item.get("completed", False)) else "NOT_DONE"
    status = str(status).strip().upper()
    if status not in GOAL_ITEM_STATUSES:
        raise ValueError(f"{where}: invalid goal item status '{status}'")
    return GoalItem(
        item_id=str(item.get("id", "")),
        text=str(item.get("text") or item.get("title") or ""),
        status=status,
    )


def parse_goal(row: dict, where: str) -> Goal:
    require_object(row, where)
    missing = _missing(row, ("id", "date"))
    if missing:
        raise ValueError(f"{where}: missing required fields {missing}")

    items = row.get("items") or []
    if not isinstance(items, list):
        raise ValueError(f"{where}: items must be a list")
    return Goal(
        goal_id=str(row["id"]).strip(),
        date=_parse_date(row, "date", where),
        items=[_parse_goal_item(item, f"{where} item {i}") for i, item in enumerate(items, start=1)],
    )


def parse_company(row: dict, where: str) -> Company:
    require_object(row, where)
    missing = _missing(row, ("id", "name"))
    if missing:
        raise ValueError(f"{where}: missing required fields {missing}")
    return Company(company_id=str(row["id"]).strip(), name=str(row["name"]).strip())
