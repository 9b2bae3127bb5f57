"""Run the task intelligence report over a task list and activity snapshot."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from task_intelligence.adapters import csv_adapter, json_adapter
from task_intelligence.report import build_report
from task_intelligence.schema import ActivitySnapshot

logger = logging.getLogger("run_report")


def _load_tasks(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse_tasks(str(path))
    if suffix == ".json":
        return json_adapter.parse_tasks(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def _parse_now(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"Invalid --now value '{value}', expected ISO-8601") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Run task-intelligence report")
    parser.add_argument("--tasks", required=True, help="Path to CSV/JSON task list")
    parser.add_argument("--activity", help="Path to JSON activity snapshot")
    parser.add_argument("--now", help="ISO timestamp to evaluate at (defaults to the current time)")
    parser.add_argument("--output", help="Optional path to write the JSON report to")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        tasks = _load_tasks(Path(args.tasks))
        activity = json_adapter.parse_activity(args.activity) if args.activity else ActivitySnapshot()
        now = _parse_now(args.now)
    except (OSError, ValueError) as exc:
        logger.error("Input error: %s", exc)
        sys.exit(2)

    report = build_report(tasks, activity, now=now)
    print(json.dumps(report, indent=2))

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
        logger.info("Saved report to %s", out_path)


if __name__ == "__main__":
    main()
