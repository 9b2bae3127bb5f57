"""CSV adapter for task lists."""

from __future__ import annotations

import csv
import logging

from task_intelligence.adapters.json_adapter import task_from_mapping
from task_intelligence.schema import TaskRecord

logger = logging.getLogger(__name__)


def _parse_row(row: dict, row_number: int) -> TaskRecord:
    # blank cells are absent fields, except category which keeps its default
    item = {key.strip(): value for key, value in row.items() if key and value not in (None, "")}
    return task_from_mapping(item, f"Row {row_number}")


def parse_tasks(file_path: str) -> list[TaskRecord]:
    """Parse CSV file into a list of tasks, one per row."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        tasks: list[TaskRecord] = []
        for row_number, row in enumerate(reader, start=2):
            tasks.append(_parse_row(row, row_number))

    logger.info("Loaded %d tasks from %s", len(tasks), file_path)
    return tasks
