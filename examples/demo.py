"""Demo script for task-intelligence."""

import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from task_intelligence.adapters.json_adapter import parse_activity, parse_tasks
from task_intelligence.duplicates import check_capture_for_duplicate
from task_intelligence.report import build_report


def main() -> None:
    tasks = parse_tasks("examples/sample_tasks.json")
    activity = parse_activity("examples/sample_activity.json")
    report = build_report(tasks, activity, now=datetime(2025, 3, 4, 19, 30))
    print("Load:", report["cognitive_load"], report["load_level"])
    print("Buckets:", report["buckets"])
    for suggestion in report["suggestions"]:
        print("Suggestion:", suggestion["type"], suggestion["task_title"], "->", suggestion["to_bucket"])
    print("Duplicates:", report["duplicates"])
    print("Capture check:", check_capture_for_duplicate("call the dentist!", tasks))


if __name__ == "__main__":
    main()
