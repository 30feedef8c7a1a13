from datetime import date
from pathlib import Path

from workload_engine.adapters.json_adapter import parse
from workload_engine.export import build_monthly_export, export_filename, write_export
from workload_engine.monthly import compute_monthly_review
from workload_engine.report import agency_report, creator_report, previous_month

SAMPLE = Path(__file__).resolve().parents[1] / "examples" / "sample_snapshot.json"
TODAY = date(2025, 3, 10)


def test_creator_report_on_sample():
    report = creator_report(parse(str(SAMPLE)), TODAY)
    assert 0 <= report["health"]["score"] <= 100
    assert report["health"]["status"] in {"calm", "busy", "overloaded"}
    assert len(report["insights"]) <= 3
    assert len(report["monthlyReview"]["weeklyBreakdown"]) == 5
    assert report["monthlyReview"]["stats"]["tasksCreated"] == 7
    assert len(report["comparison"]) == 3


def test_agency_report_on_sample():
    report = agency_report(parse(str(SAMPLE)), TODAY)
    statuses = {entry["name"]: entry["healthStatus"] for entry in report["creators"]}
    assert statuses == {"Dana": "calm", "Omer": "overloaded"}
    assert [insight["id"] for insight in report["insights"]] == ["creator-at-risk", "completion-low"]
    assert "Omer" in report["insights"][0]["message"]


def test_previous_month_wraps_year():
    assert previous_month(0, 2025) == (11, 2024)
    assert previous_month(5, 2025) == (4, 2025)


def test_monthly_export(tmp_path):
    snapshot = parse(str(SAMPLE))
    review = compute_monthly_review(snapshot.tasks, snapshot.events, snapshot.goals, 2, 2025)
    payload = build_monthly_export(review, 2, 2025, owner_name="Dana")
    assert payload["ownerName"] == "Dana"
    assert payload["month"] == "מרץ"
    assert payload["stats"]["eventsCount"] == review.stats.events_attended
    assert len(payload["weeklyBreakdown"]) == 5
    assert export_filename(2, 2025) == "monthly-review-2025-03.json"

    out_path = write_export(payload, tmp_path / "out", 2, 2025)
    assert out_path.name == "monthly-review-2025-03.json"
    assert "Dana" in out_path.read_text(encoding="utf-8")
