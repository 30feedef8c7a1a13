"""Run the workload engine over a JSON snapshot and print the results."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from workload_engine.adapters import json_adapter
from workload_engine.export import build_monthly_export, write_export
from workload_engine.monthly import compute_monthly_review
from workload_engine.report import agency_report, creator_report

logger = logging.getLogger("run_report")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the creator workload engine")
    parser.add_argument("--data", required=True, help="Path to a JSON snapshot file")
    parser.add_argument("--today", default=None, help="Reference date (YYYY-MM-DD), defaults to today")
    parser.add_argument("--month", type=int, default=None, help="Review month, 1-12")
    parser.add_argument("--year", type=int, default=None, help="Review year")
    parser.add_argument("--agency", action="store_true", help="Report on the snapshot's creator roster")
    parser.add_argument("--export-dir", default=None, help="Also write the monthly export JSON here")
    parser.add_argument("--owner", default=None, help="Owner name for the monthly export")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    today = date.fromisoformat(args.today) if args.today else date.today()
    snapshot = json_adapter.parse(args.data)

    if args.agency:
        print(json.dumps(agency_report(snapshot, today), indent=2, ensure_ascii=False))
        return

    month = args.month - 1 if args.month else today.month - 1
    year = args.year or today.year
    report = creator_report(snapshot, today, month=month, year=year)
    print(json.dumps(report, indent=2, ensure_ascii=False))

    if args.export_dir:
        review = compute_monthly_review(snapshot.tasks, snapshot.events, snapshot.goals, month, year)
        payload = build_monthly_export(review, month, year, owner_name=args.owner)
        out_path = write_export(payload, Path(args.export_dir), month, year)
        logger.info("Saved monthly export to %s", out_path)


if __name__ == "__main__":
    main()
