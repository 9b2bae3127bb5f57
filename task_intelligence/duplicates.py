"""Exact and fuzzy duplicate detection for task text."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

import numpy as np

from task_intelligence.schema import DuplicateInfo, TaskRecord

logger = logging.getLogger(__name__)

FUZZY_THRESHOLD = 0.85
DEFAULT_PREFERENCE_ORDER = ("today", "work", "home", "inbox", "someday")

_WHITESPACE_RE = re.compile(r"\s+")
_PUNCTUATION_RE = re.compile(r"[.,!?;:'\"]")
_LEADING_ARTICLE_RE = re.compile(r"^(the|a|an)\s+", re.IGNORECASE)
_UNRANKED = 99


def normalize_text(text: str) -> str:
    """Shallow normalization: case, whitespace, punctuation and one leading article."""

    normalized = _WHITESPACE_RE.sub(" ", text.lower().strip())
    normalized = _PUNCTUATION_RE.sub("", normalized)
    return _LEADING_ARTICLE_RE.sub("", normalized, count=1)


def levenshtein_distance(s1: str, s2: str) -> int:
    """Edit distance, computing the dynamic-programming matrix one row at a time."""

    if not s1 or not s2:
        return max(len(s1), len(s2))

    target = np.fromiter(map(ord, s2), dtype=np.int64, count=len(s2))
    offsets = np.arange(len(s2) + 1)
    previous = offsets.copy()

    for i, char in enumerate(s1, start=1):
        cost = (target != ord(char)).astype(np.int64)
        # deletion and substitution per column, then insertion as a running minimum
        row = np.empty_like(previous)
        row[0] = i
        row[1:] = np.minimum(previous[1:] + 1, previous[:-1] + cost)
        previous = np.minimum.accumulate(row - offsets) + offsets

    return int(previous[-1])


def calculate_similarity(text_a: str, text_b: str) -> float:
    """Similarity in [0, 1] between two task texts."""

    s1 = normalize_text(text_a)
    s2 = normalize_text(text_b)

    if s1 == s2:
        return 1.0
    if not s1 or not s2:
        return 0.0

    # containment wins over edit distance
    if s1 in s2 or s2 in s1:
        return min(len(s1), len(s2)) / max(len(s1), len(s2))

    distance = levenshtein_distance(s1, s2)
    return max(0.0, min(1.0, 1.0 - distance / max(len(s1), len(s2))))


def get_task_location(task: TaskRecord) -> str:
    """Human-readable location of a task."""

    if task.scheduled_bucket == "today":
        return "Today"
    if task.scheduled_bucket == "upcoming":
        return "Upcoming"
    if task.scheduled_bucket == "someday":
        return "Someday"
    if task.category == "work":
        return "Work"
    if task.category == "home":
        return "Home"
    if task.category == "inbox" or not task.scheduled_bucket:
        return "Inbox"
    return task.category or "Inbox"


def find_duplicate(
    task: TaskRecord,
    candidates: Iterable[TaskRecord],
    exclude_ids: Optional[Iterable[str]] = None,
) -> DuplicateInfo:
    """Return the first exact, else the first fuzzy, duplicate of ``task``.

    Candidates are scanned in input order and the first hit is reported, so
    a later candidate that is more similar never replaces an earlier one.
    """

    excluded = set(exclude_ids or ())
    task_text = task.text
    normalized_task = normalize_text(task_text)

    for existing in candidates:
        if existing.id == task.id or existing.id in excluded:
            continue

        existing_text = existing.text
        if normalize_text(existing_text) == normalized_task:
            logger.debug("Exact duplicate of %s found for %s", existing.id, task.id)
            return DuplicateInfo(
                is_duplicate=True,
                duplicate_of=existing.id,
                duplicate_text=existing_text,
                similarity=1.0,
                match_type="exact",
                location=get_task_location(existing),
            )

        similarity = calculate_similarity(task_text, existing_text)
        if similarity >= FUZZY_THRESHOLD:
            logger.debug("Fuzzy duplicate of %s found for %s (%.3f)", existing.id, task.id, similarity)
            return DuplicateInfo(
                is_duplicate=True,
                duplicate_of=existing.id,
                duplicate_text=existing_text,
                similarity=similarity,
                match_type="fuzzy",
                location=get_task_location(existing),
            )

    return DuplicateInfo(is_duplicate=False, similarity=0.0, match_type="none")


def _preference_rank(task: TaskRecord, preference_order: tuple[str, ...]) -> int:
    location = task.scheduled_bucket or task.category or "inbox"
    for index, token in enumerate(preference_order):
        if token in location:
            return index
    return _UNRANKED


def deduplicate_tasks(
    tasks: Iterable[TaskRecord],
    preference_order: Optional[Iterable[str]] = None,
) -> list[TaskRecord]:
    """Keep one survivor per duplicate cluster, preferring earlier locations."""

    order = tuple(preference_order) if preference_order is not None else DEFAULT_PREFERENCE_ORDER
    ranked = sorted(tasks, key=lambda task: _preference_rank(task, order))

    seen: dict[str, TaskRecord] = {}
    survivors: list[TaskRecord] = []
    for task in ranked:
        normalized = normalize_text(task.text)
        if normalized in seen:
            continue
        if any(calculate_similarity(task.text, kept.text) >= FUZZY_THRESHOLD for kept in seen.values()):
            continue
        seen[normalized] = task
        survivors.append(task)

    logger.debug("Deduplicated %d tasks down to %d", len(ranked), len(survivors))
    return survivors


def check_capture_for_duplicate(text: str, existing: Iterable[TaskRecord]) -> DuplicateInfo:
    """Check freshly captured text against existing tasks."""

    return find_duplicate(TaskRecord(id="new", title=text, category=None), existing)
