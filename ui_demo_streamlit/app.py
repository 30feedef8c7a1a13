"""Streamlit demo UI for workload-engine."""

from __future__ import annotations

import json
from datetime import date
from typing import Any

from workload_engine.adapters import json_adapter
from workload_engine.labels import HEALTH_STATUS_LABELS, SEVERITY_LABELS, format_date_hebrew
from workload_engine.report import agency_report, creator_report
from workload_engine.schema import Snapshot

DEMO_SNAPSHOT = "examples/sample_snapshot.json"


def _parse_uploaded(uploaded_file) -> Snapshot:
    try:
        payload = json.loads(uploaded_file.getvalue().decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("Uploaded file is not valid JSON") from exc
    return json_adapter.parse_payload(payload)


def _build_summary(snapshot: Snapshot) -> dict[str, Any]:
    return {
        "tasks": len(snapshot.tasks),
        "events": len(snapshot.events),
        "goals": len(snapshot.goals),
        "companies": len(snapshot.companies),
        "creators": len(snapshot.creators),
    }


def _fmt_day(day: dict | None) -> str:
    if not day:
        return "-"
    return f"{format_date_hebrew(day['date'])} ({day['load']})"


def run_engine(snapshot: Snapshot, today: date, month: int, year: int) -> dict[str, Any]:
    """Run all engine steps and return a UI-friendly result payload."""

    result = creator_report(snapshot, today, month=month, year=year)
    result["summary"] = _build_summary(snapshot)
    result["statusLabel"] = HEALTH_STATUS_LABELS[result["health"]["status"]]
    result["agency"] = agency_report(snapshot, today) if snapshot.creators else None
    return result


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Workload Engine Demo", layout="wide")
    st.title("Workload Engine: Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload snapshot", type=["json"])
        use_demo = st.checkbox("Load demo snapshot", value=True)
        today = st.date_input("Today", value=date(2025, 3, 10))
        month = st.number_input("Review month", min_value=1, max_value=12, value=today.month, step=1)
        year = st.number_input("Review year", min_value=2000, max_value=2100, value=today.year, step=1)
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run engine**.")
        return

    try:
        if use_demo:
            snapshot = json_adapter.parse(DEMO_SNAPSHOT)
            data_source = f"demo snapshot ({DEMO_SNAPSHOT})"
        elif uploaded is not None:
            snapshot = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a JSON snapshot or enable 'Load demo snapshot'.")
            return

        result = run_engine(snapshot, today, int(month) - 1, int(year))
        summary = result["summary"]
        st.success(f"Loaded {summary['tasks']} tasks and {summary['events']} events from {data_source}.")

        st.subheader("A) Health")
        health = result["health"]
        h1, h2 = st.columns(2)
        h1.metric("score", health["score"])
        h2.metric("status", f"{health['status']} ({result['statusLabel']})")
        for hint in health["details"]["insights"]:
            st.write(f"- {hint}")

        st.subheader("B) Insights")
        if not result["insights"]:
            st.write("No insights.")
        for insight in result["insights"]:
            severity = SEVERITY_LABELS[insight["severity"]]
            st.write(f"{insight['icon']} **{insight['title']}** [{severity}]: {insight['message']}")

        st.subheader("C) Monthly Review")
        review = result["monthlyReview"]
        stats = review["stats"]
        st.write(f"**{review['monthLabel']}**")
        m1, m2, m3, m4 = st.columns(4)
        m1.metric("Tasks completed", f"{stats['tasksCompleted']} / {stats['tasksCreated']}")
        m2.metric("Completion rate", f"{stats['taskCompletionRate']}%")
        m3.metric("Goals", f"{stats['goalsAchieved']} / {stats['goalsTotal']}")
        m4.metric("Event hours", stats["totalEventsHours"])
        st.write(f"Busiest day: {_fmt_day(stats['busiestDay'])}, calmest day: {_fmt_day(stats['calmestDay'])}")
        st.table(review["weeklyBreakdown"])
        st.table(review["priorityDistribution"])
        for insight in review["insights"]:
            st.write(f"{insight['icon']} **{insight['title']}**: {insight['description']}")

        st.subheader("D) Month over Month")
        st.table(result["comparison"])

        if result["agency"]:
            st.subheader("E) Agency")
            st.table(result["agency"]["creators"])
            for insight in result["agency"]["insights"]:
                st.write(f"{insight['icon']} **{insight['title']}**: {insight['message']}")

    except ValueError as exc:
        st.error(f"Input error: {exc}")


if __name__ == "__main__":
    main()
