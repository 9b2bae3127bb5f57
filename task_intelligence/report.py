"""One-call task intelligence report."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Iterable, Optional

from task_intelligence.cognitive_load import calculate_cognitive_load, load_level, load_recommendations
from task_intelligence.duplicates import deduplicate_tasks
from task_intelligence.schema import ActivitySnapshot, TaskRecord
from task_intelligence.workload import analyze_task_distribution, suggest_workload_moves


def build_report(
    tasks: list[TaskRecord],
    activity: ActivitySnapshot,
    now: Optional[datetime] = None,
    preference_order: Optional[Iterable[str]] = None,
) -> dict:
    """Run load, workload and duplicate analysis against one clock reading."""

    if now is None:
        now = datetime.now()

    load = calculate_cognitive_load(tasks, activity, now=now)
    level = load_level(load.overall)
    buckets = analyze_task_distribution(tasks, now=now)
    suggestions = suggest_workload_moves(tasks, level, now=now)

    survivors = deduplicate_tasks(tasks, preference_order)
    survivor_ids = {task.id for task in survivors}

    return {
        "generated_at": now.isoformat(),
        "cognitive_load": asdict(load),
        "load_level": level,
        "recommendations": load_recommendations(level, activity),
        "buckets": buckets.counts(),
        "suggestions": [asdict(suggestion) for suggestion in suggestions],
        "duplicates": {
            "total_tasks": len(tasks),
            "unique_tasks": len(survivors),
            "removed_task_ids": [task.id for task in tasks if task.id not in survivor_ids],
        },
    }
