import json
from datetime import date, datetime

import pytest

from workload_engine.adapters.csv_adapter import parse_events, parse_tasks
from workload_engine.adapters.json_adapter import parse as parse_json
from workload_engine.adapters.json_adapter import parse_payload


def test_csv_parse_tasks(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text(
        "id,title,status,priority,due_date,company_id,archived,created_at,updated_at\n"
        "t1,Edit vlog,DONE,HIGH,2025-03-05,c1,false,2025-03-01T09:00:00,2025-03-04T10:00:00\n"
        "t2,Invoice,todo,,,,true,2025-03-02T09:00:00,\n",
        encoding="utf-8",
    )
    tasks = parse_tasks(str(path))
    assert len(tasks) == 2
    assert tasks[0].is_done
    assert tasks[0].due_date == datetime(2025, 3, 5)
    assert tasks[0].company_id == "c1"
    assert tasks[1].status == "TODO"
    assert tasks[1].priority == "MEDIUM"
    assert tasks[1].archived
    assert tasks[1].due_date is None
    assert tasks[1].updated_at is None


def test_csv_parse_invalid_row(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text("id,status,due_date\nt1,DONE,bad\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Row 2"):
        parse_tasks(str(path))


def test_csv_parse_events(tmp_path):
    path = tmp_path / "events.csv"
    path.write_text(
        "id,title,date,category,start_time,end_time\ne1,Shoot,2025-03-10,shoot,09:00,12:00\n",
        encoding="utf-8",
    )
    events = parse_events(str(path))
    assert events[0].date == date(2025, 3, 10)
    assert events[0].end_time == "12:00"


def test_csv_parse_empty_file(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text("", encoding="utf-8")
    assert parse_tasks(str(path)) == []


def test_json_parse_snapshot(tmp_path):
    path = tmp_path / "snapshot.json"
    payload = {
        "tasks": [{"id": "t1", "title": "Edit", "status": "DOING", "priority": "low", "company_id": None}],
        "events": [{"id": "e1", "title": "Shoot", "date": "2025-03-10T00:00:00", "company_id": "c1"}],
        "goals": [
            {
                "id": "g1",
                "date": "2025-03-10",
                "items": [
                    {"id": "i1", "text": "Post", "status": "DONE"},
                    {"id": "i2", "title": "Reply", "completed": True},
                ],
            }
        ],
        "companies": [{"id": "c1", "name": "Aurora"}],
        "creators": [{"id": "cr1", "name": "Dana", "tasks": [{"id": "d1", "status": "DONE"}]}],
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    snapshot = parse_json(str(path))
    assert snapshot.tasks[0].priority == "LOW"
    assert snapshot.tasks[0].company_id is None
    assert snapshot.events[0].date == date(2025, 3, 10)
    assert snapshot.goals[0].achieved
    assert snapshot.goals[0].items[1].text == "Reply"
    assert snapshot.companies[0].name == "Aurora"
    assert snapshot.creators[0].tasks[0].is_done


def test_json_parse_missing_sections_are_empty():
    snapshot = parse_payload({"tasks": []})
    assert snapshot.events == []
    assert snapshot.creators == []


def test_json_parse_invalid_status():
    with pytest.raises(ValueError, match="Task 1: invalid status"):
        parse_payload({"tasks": [{"id": "t1", "status": "WAITING"}]})


def test_json_parse_malformed_date():
    with pytest.raises(ValueError, match="Event 1: malformed date"):
        parse_payload({"events": [{"id": "e1", "date": "tomorrow"}]})


def test_json_parse_requires_object():
    with pytest.raises(ValueError):
        parse_payload([{"id": "t1"}])
    with pytest.raises(ValueError):
        parse_payload({"tasks": {"id": "t1"}})


def test_json_parse_rejects_non_object_rows():
    with pytest.raises(ValueError, match="Task 1: must be an object"):
        parse_payload({"tasks": ["not-an-object"]})
    with pytest.raises(ValueError, match="Goal 1 item 1: must be an object"):
        parse_payload({"goals": [{"id": "g1", "date": "2025-03-10", "items": ["Post"]}]})
    with pytest.raises(ValueError, match="Creator 1: must be an object"):
        parse_payload({"creators": ["Dana"]})
    with pytest.raises(ValueError, match="Creator 1 event 1: must be an object"):
        parse_payload({"creators": [{"id": "cr1", "events": [42]}]})
