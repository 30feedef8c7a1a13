"""JSON adapter for workload snapshots."""

from __future__ import annotations

import json
import logging

from workload_engine.adapters.records import parse_company, parse_event, parse_goal, parse_task, require_object
from workload_engine.schema import CreatorRecords, Snapshot

logger = logging.getLogger(__name__)


def _rows(payload: dict, key: str) -> list:
    rows = payload.get(key) or []
    if not isinstance(rows, list):
        raise ValueError(f"'{key}' must be a list of objects")
    return rows


def _parse_creator(item: dict, index: int) -> CreatorRecords:
    where = f"Creator {index}"
    require_object(item, where)
    if not item.get("id"):
        raise ValueError(f"{where}: missing required fields ['id']")
    return CreatorRecords(
        creator_id=str(item["id"]).strip(),
        name=str(item.get("name") or item["id"]),
        tasks=[parse_task(row, f"{where} task {i}") for i, row in enumerate(_rows(item, "tasks"), start=1)],
        events=[parse_event(row, f"{where} event {i}") for i, row in enumerate(_rows(item, "events"), start=1)],
    )


def parse_payload(payload: dict) -> Snapshot:
    """Convert a decoded snapshot payload into records."""

    if not isinstance(payload, dict):
        raise ValueError("JSON payload must be an object")

    snapshot = Snapshot(
        tasks=[parse_task(row, f"Task {i}") for i, row in enumerate(_rows(payload, "tasks"), start=1)],
        events=[parse_event(row, f"Event {i}") for i, row in enumerate(_rows(payload, "events"), start=1)],
        goals=[parse_goal(row, f"Goal {i}") for i, row in enumerate(_rows(payload, "goals"), start=1)],
        companies=[parse_company(row, f"Company {i}") for i, row in enumerate(_rows(payload, "companies"), start=1)],
        creators=[_parse_creator(item, i) for i, item in enumerate(_rows(payload, "creators"), start=1)],
    )
    logger.info(
        "loaded snapshot: %s tasks, %s events, %s goals, %s companies, %s creators",
        len(snapshot.tasks),
        len(snapshot.events),
        len(snapshot.goals),
        len(snapshot.companies),
        len(snapshot.creators),
    )
    return snapshot


def parse(file_path: str) -> Snapshot:
    """Parse a JSON snapshot file."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)
    return parse_payload(payload)
