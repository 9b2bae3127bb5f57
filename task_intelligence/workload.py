"""Workload balancing between today, this week and soon."""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timedelta
from typing import Iterable, Optional

from task_intelligence.schema import TaskBuckets, TaskRecord, WorkloadSuggestion

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3
OVERLOAD_TODAY_COUNT = 7
UNDERUSED_TODAY_COUNT = 3
MOVE_OUT_SHARE = 0.3
MAX_PULL_IN = 2
SOON_PRIORITY_BELOW = 40
WEEK_HORIZON = timedelta(days=7)

HIGH_LOAD_REASON = "Cognitive load is high — this can wait"
PACKED_REASON = "Today is packed — consider moving this"
CAPACITY_REASON = "You have capacity — want to tackle this today?"

_WORD_SPLIT_RE = re.compile(r"\s+")


def analyze_task_distribution(tasks: Iterable[TaskRecord], now: Optional[datetime] = None) -> TaskBuckets:
    """Partition incomplete tasks into today, this week and soon.

    The partition is only valid for ``now``; a task bucketed as today can
    fall into soon once the date rolls over.
    """

    if now is None:
        now = datetime.now()
    today = now.date()
    week_from_now = (now + WEEK_HORIZON).date()

    buckets = TaskBuckets()
    for task in tasks:
        if task.completed:
            continue

        focus_date = task.focus_date
        if isinstance(focus_date, datetime):
            focus_date = focus_date.date()
        if focus_date == today or (task.is_focus and not focus_date):
            buckets.today.append(task)
        elif focus_date and focus_date <= week_from_now:
            buckets.this_week.append(task)
        else:
            buckets.soon.append(task)

    return buckets


def calculate_task_priority(task: TaskRecord) -> int:
    """Unbounded ranking score; lower means easier to move out of today."""

    score = 50

    if task.is_time_based or task.has_reminder:
        score += 30
    if task.focus_date:
        score += 20
    if task.goal_aligned:
        score += 15
    if task.has_person_name:
        score += 10
    if task.category and task.category != "inbox":
        score += 5

    word_count = len(_WORD_SPLIT_RE.split(task.title))
    if word_count > 10:
        score -= 10
    if word_count < 4:
        score += 5

    return score


def generate_workload_suggestions(
    tasks: Iterable[TaskRecord],
    cognitive_load_level: str,
    now: Optional[datetime] = None,
) -> list[WorkloadSuggestion]:
    """Suggest up to three moves out of an overloaded today, or pulls into an idle one."""

    buckets = analyze_task_distribution(tasks, now=now)
    suggestions: list[WorkloadSuggestion] = []

    today_count = len(buckets.today)
    high_load = cognitive_load_level == "HIGH"
    is_overloaded = today_count > OVERLOAD_TODAY_COUNT or high_load

    if is_overloaded and today_count > 0:
        lowest_first = sorted(buckets.today, key=calculate_task_priority)
        move_count = min(MAX_SUGGESTIONS, math.ceil(today_count * MOVE_OUT_SHARE))

        for task in lowest_first[:move_count]:
            priority = calculate_task_priority(task)
            suggestions.append(
                WorkloadSuggestion(
                    id=f"move-out-{task.id}",
                    type="move_out",
                    task_id=task.id,
                    task_title=task.title,
                    from_bucket="today",
                    to_bucket="soon" if priority < SOON_PRIORITY_BELOW else "thisWeek",
                    reason=HIGH_LOAD_REASON if high_load else PACKED_REASON,
                    priority=100 - priority,
                )
            )

    if today_count < UNDERUSED_TODAY_COUNT and not is_overloaded and buckets.this_week:
        highest_first = sorted(buckets.this_week, key=calculate_task_priority, reverse=True)
        pull_count = min(MAX_PULL_IN, UNDERUSED_TODAY_COUNT - today_count)

        for task in highest_first[:pull_count]:
            suggestions.append(
                WorkloadSuggestion(
                    id=f"pull-in-{task.id}",
                    type="pull_in",
                    task_id=task.id,
                    task_title=task.title,
                    from_bucket="thisWeek",
                    to_bucket="today",
                    reason=CAPACITY_REASON,
                    priority=calculate_task_priority(task),
                )
            )

    suggestions.sort(key=lambda suggestion: suggestion.priority, reverse=True)
    logger.debug(
        "Workload at level %s: %s, %d suggestions",
        cognitive_load_level,
        buckets.counts(),
        len(suggestions),
    )
    return suggestions[:MAX_SUGGESTIONS]


def suggest_workload_moves(
    tasks: Optional[list[TaskRecord]],
    cognitive_load_level: str,
    now: Optional[datetime] = None,
) -> list[WorkloadSuggestion]:
    """Workload suggestions for a possibly missing task list."""

    if not tasks:
        return []
    return generate_workload_suggestions(tasks, cognitive_load_level, now=now)
