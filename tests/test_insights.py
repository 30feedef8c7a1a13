from datetime import date, datetime, timedelta

from workload_engine.insights import (
    InsightCandidate,
    InsightContext,
    InsightKey,
    Severity,
    compute_insights,
    detect_empty_week,
    make_candidate,
    rank_insights,
)
from workload_engine.schema import Company, Event, Task

TODAY = date(2025, 3, 10)
THIS_MONTH = datetime(2025, 3, 2, 9, 0)


def overdue_task(task_id, days_late, **overrides):
    fields = {"due_date": TODAY - timedelta(days=days_late)}
    fields.update(overrides)
    return Task(task_id, f"Task {task_id}", fields.pop("status", "TODO"), "MEDIUM", **fields)


def test_empty_snapshot_reports_empty_week():
    result = compute_insights([], [], [], today=TODAY)
    assert len(result) == 1
    assert "empty-week" in result[0].id
    assert result[0].severity == Severity.INFO


def test_never_more_than_three():
    tasks = [overdue_task(f"t{i}", 5, created_at=THIS_MONTH, company_id="c1") for i in range(10)]
    result = compute_insights(tasks, [], [Company("c1", "Main Client")], today=TODAY)
    assert len(result) == 3
    assert [insight.key for insight in result] == [
        InsightKey.OVERDUE_TASKS,
        InsightKey.COMPANY_CONCENTRATION,
        InsightKey.COMPLETION_LOW,
    ]


def test_done_task_is_never_overdue():
    tasks = [overdue_task("t1", 400, status="DONE")]
    result = compute_insights(tasks, [], [], today=TODAY)
    assert all(insight.key != InsightKey.OVERDUE_TASKS for insight in result)


def test_archived_and_undated_tasks_are_not_overdue():
    tasks = [
        overdue_task("t1", 10, archived=True),
        Task("t2", "No due date", "TODO", "LOW"),
    ]
    result = compute_insights(tasks, [], [], today=TODAY)
    assert all(insight.key != InsightKey.OVERDUE_TASKS for insight in result)


def test_recently_overdue_is_a_warning():
    result = compute_insights([overdue_task("t1", 1), overdue_task("t2", 2)], [], [], today=TODAY)
    overdue = result[0]
    assert overdue.key == InsightKey.OVERDUE_TASKS
    assert overdue.severity == Severity.WARNING
    assert overdue.message.startswith("2 ")


def test_long_overdue_is_a_risk_and_counts_only_long_ones():
    tasks = [overdue_task("t1", 3), overdue_task("t2", 1), overdue_task("t3", 9)]
    result = compute_insights(tasks, [], [], today=TODAY)
    overdue = [insight for insight in result if insight.key == InsightKey.OVERDUE_TASKS]
    assert len(overdue) == 1
    assert overdue[0].severity == Severity.RISK
    assert overdue[0].message.startswith("2 ")


def test_due_today_is_not_overdue():
    tasks = [Task("t1", "Tonight", "TODO", "HIGH", due_date=datetime(2025, 3, 10, 8, 0))]
    result = compute_insights(tasks, [], [], today=datetime(2025, 3, 10, 20, 0))
    assert all(insight.key != InsightKey.OVERDUE_TASKS for insight in result)


def test_heavy_week_ahead():
    events = [Event(f"e{day}-{i}", "Shoot", TODAY + timedelta(days=day)) for day in range(3) for i in range(5)]
    result = compute_insights([], events, [], today=TODAY)
    assert [insight.key for insight in result] == [InsightKey.HEAVY_STREAK]
    assert result[0].severity == Severity.WARNING
    assert result[0].message.startswith("3 ")


def test_two_heavy_days_are_not_a_heavy_week():
    events = [Event(f"e{day}-{i}", "Shoot", TODAY + timedelta(days=day)) for day in range(2) for i in range(5)]
    assert compute_insights([], events, [], today=TODAY) == []


def test_concentration_warning_names_the_company():
    companies = [Company("c1", "Main Client"), Company("c2", "Other")]
    events = [Event(f"e{i}", "Shoot", TODAY, company_id="c1") for i in range(3)]
    events += [Event(f"f{i}", "Call", TODAY, company_id="c2") for i in range(2)]
    result = compute_insights([], events, companies, today=TODAY)
    assert result[0].key == InsightKey.COMPANY_CONCENTRATION
    assert result[0].severity == Severity.WARNING
    assert "Main Client" in result[0].message
    assert "60%" in result[0].message


def test_concentration_tie_breaks_by_company_id():
    companies = [Company("c2", "Beta"), Company("c1", "Alpha")]
    events = [
        Event("e1", "A", TODAY, company_id="c1"),
        Event("e2", "A", TODAY, company_id="c1"),
        Event("e3", "B", TODAY, company_id="c2"),
        Event("e4", "B", TODAY, company_id="c2"),
        Event("e5", "C", TODAY, company_id="c3"),
    ]
    result = compute_insights([], events, companies, today=TODAY)
    assert len(result) == 1
    assert result[0].key == InsightKey.COMPANY_CONCENTRATION
    assert result[0].severity == Severity.INFO
    assert "Alpha" in result[0].message


def test_spread_out_companies_are_not_reported():
    companies = [Company("c1", "A"), Company("c2", "B"), Company("c3", "C")]
    events = [Event(f"e{i}", "Shoot", TODAY, company_id=f"c{i}") for i in (1, 2, 3)]
    assert compute_insights([], events, companies, today=TODAY) == []


def test_low_completion_rate_needs_five_tasks():
    def month_tasks(done, total):
        return [
            Task(f"t{i}", "Task", "DONE" if i < done else "TODO", "LOW", created_at=THIS_MONTH) for i in range(total)
        ]

    events = [Event("e1", "Call", TODAY)]
    low = compute_insights(month_tasks(2, 5), events, [], today=TODAY)
    assert [insight.key for insight in low] == [InsightKey.COMPLETION_LOW]
    assert "40%" in low[0].message

    assert compute_insights(month_tasks(3, 5), events, [], today=TODAY) == []
    assert compute_insights(month_tasks(0, 4), events, [], today=TODAY) == []


def test_tasks_from_other_months_do_not_affect_completion():
    tasks = [Task(f"t{i}", "Old", "TODO", "LOW", created_at=datetime(2025, 2, 20)) for i in range(6)]
    result = compute_insights(tasks, [Event("e1", "Call", TODAY)], [], today=TODAY)
    assert result == []


def test_empty_week_detector_in_isolation():
    next_week = (Event("e1", "Next week", TODAY + timedelta(days=7)),)
    ctx = InsightContext(tasks=(), events=next_week, companies=(), today=TODAY)
    candidate = detect_empty_week(ctx)
    assert candidate is not None
    assert candidate.priority == 6

    last_day = (Event("e1", "Sunday", TODAY + timedelta(days=6)),)
    busy = InsightContext(tasks=(), events=last_day, companies=(), today=TODAY)
    assert detect_empty_week(busy) is None


def test_rank_insights_is_stable_and_capped():
    first = make_candidate(InsightKey.HEAVY_STREAK, Severity.WARNING, "a", "a", priority=2)
    second = make_candidate(InsightKey.COMPANY_CONCENTRATION, Severity.WARNING, "b", "b", priority=2)
    low = make_candidate(InsightKey.EMPTY_WEEK, Severity.INFO, "c", "c", priority=6)
    top = make_candidate(InsightKey.OVERDUE_TASKS, Severity.RISK, "d", "d", priority=1)
    extra: InsightCandidate = make_candidate(InsightKey.COMPLETION_LOW, Severity.WARNING, "e", "e", priority=3)

    ranked = rank_insights([low, first, None, second, top, extra])
    assert [insight.key for insight in ranked] == [
        InsightKey.OVERDUE_TASKS,
        InsightKey.HEAVY_STREAK,
        InsightKey.COMPANY_CONCENTRATION,
    ]


def test_insight_payload_hides_priority():
    payload = compute_insights([], [], [], today=TODAY)[0].to_dict()
    assert set(payload) == {"id", "severity", "title", "message", "icon"}
    assert payload["id"] == "empty-week"
    assert payload["severity"] == "info"
