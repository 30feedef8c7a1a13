"""Demo script for workload-engine."""

import json
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from workload_engine.adapters.json_adapter import parse
from workload_engine.report import agency_report, creator_report


def main() -> None:
    snapshot = parse("examples/sample_snapshot.json")
    today = date(2025, 3, 10)
    report = creator_report(snapshot, today)
    print("Health:", json.dumps(report["health"], ensure_ascii=False))
    print("Insights:", json.dumps(report["insights"], ensure_ascii=False))
    print("Monthly stats:", json.dumps(report["monthlyReview"]["stats"], ensure_ascii=False))
    print("Comparison:", json.dumps(report["comparison"], ensure_ascii=False))
    print("Agency:", json.dumps(agency_report(snapshot, today), ensure_ascii=False))


if __name__ == "__main__":
    main()
