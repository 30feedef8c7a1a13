"""CSV adapter for task and event exports."""

from __future__ import annotations

import csv
import logging

from workload_engine.adapters.records import parse_event, parse_task
from workload_engine.schema import Event, Task

logger = logging.getLogger(__name__)


def _read_rows(file_path: str) -> list[dict]:
    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []
        return list(reader)


def parse_tasks(file_path: str) -> list[Task]:
    """Parse a tasks CSV export (one row per task, storage column names)."""

    tasks = [parse_task(row, f"Row {row_number}") for row_number, row in enumerate(_read_rows(file_path), start=2)]
    logger.info("loaded %s tasks from %s", len(tasks), file_path)
    return tasks


def parse_events(file_path: str) -> list[Event]:
    """Parse an events CSV export."""

    events = [parse_event(row, f"Row {row_number}") for row_number, row in enumerate(_read_rows(file_path), start=2)]
    logger.info("loaded %s events from %s", len(events), file_path)
    return events
