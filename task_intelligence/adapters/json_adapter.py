"""JSON adapter for task lists and activity snapshots."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime

from task_intelligence.schema import ActivitySnapshot, TaskRecord

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("id", "title")
_BOOL_FIELDS = ("completed", "is_focus", "is_time_based", "has_reminder", "goal_aligned", "has_person_name")
_COUNT_FIELDS = ("tasks_completed_today", "tasks_created_today", "tasks_overdue", "streak_count")
_VALID_SENTIMENTS = {"positive", "neutral", "negative"}
_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no", ""}


def _parse_bool(value, label: str, field: str) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValueError(f"{label}: invalid boolean for {field} '{value}'")


def _parse_datetime(value, label: str, field: str) -> datetime | None:
    if value in (None, ""):
        return None
    try:
        return datetime.fromisoformat(str(value))
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"{label}: malformed {field}") from exc


def _parse_date(value, label: str, field: str) -> date | None:
    if value in (None, ""):
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"{label}: malformed {field}") from exc


def _optional_text(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def task_from_mapping(item: dict, label: str) -> TaskRecord:
    """Build a task from a mapping with snake_case keys."""

    if not isinstance(item, dict):
        raise ValueError(f"{label}: expected an object")

    missing = [field for field in _REQUIRED_FIELDS if not item.get(field)]
    if missing:
        raise ValueError(f"{label}: missing required fields {missing}")

    flags = {field: _parse_bool(item.get(field), label, field) for field in _BOOL_FIELDS}
    category = _optional_text(item.get("category")) if "category" in item else "inbox"

    return TaskRecord(
        id=str(item["id"]).strip(),
        title=str(item["title"]),
        ai_summary=_optional_text(item.get("ai_summary")),
        created_at=_parse_datetime(item.get("created_at"), label, "created_at"),
        completed_at=_parse_datetime(item.get("completed_at"), label, "completed_at"),
        focus_date=_parse_date(item.get("focus_date"), label, "focus_date"),
        category=category,
        scheduled_bucket=_optional_text(item.get("scheduled_bucket")),
        **flags,
    )


def activity_from_mapping(item: dict, label: str = "Activity") -> ActivitySnapshot:
    """Build an activity snapshot; absent counters default to zero."""

    if not isinstance(item, dict):
        raise ValueError(f"{label}: expected an object")

    counts = {}
    for field in _COUNT_FIELDS:
        raw = item.get(field)
        if raw in (None, ""):
            counts[field] = 0
            continue
        try:
            counts[field] = int(raw)
        except Exception as exc:  # noqa: BLE001
            raise ValueError(f"{label}: invalid {field}") from exc

    sentiment = _optional_text(item.get("voice_sentiment"))
    if sentiment is not None and sentiment not in _VALID_SENTIMENTS:
        raise ValueError(f"{label}: invalid voice_sentiment '{sentiment}'")

    return ActivitySnapshot(
        one_thing_completed=_parse_bool(item.get("one_thing_completed"), label, "one_thing_completed"),
        voice_sentiment=sentiment,
        **counts,
    )


def parse_tasks(file_path: str) -> list[TaskRecord]:
    """Parse a JSON list of task objects."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    tasks = [task_from_mapping(item, f"Item {i}") for i, item in enumerate(payload, start=1)]
    logger.info("Loaded %d tasks from %s", len(tasks), file_path)
    return tasks


def parse_activity(file_path: str) -> ActivitySnapshot:
    """Parse a single JSON activity object."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    return activity_from_mapping(payload)
