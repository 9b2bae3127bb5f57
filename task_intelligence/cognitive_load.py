"""Composite cognitive load model: stress, momentum and fatigue signals."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Iterable, Optional

from task_intelligence.schema import ActivitySnapshot, CognitiveLoad, TaskRecord

logger = logging.getLogger(__name__)

STRESS_WEIGHT = 0.4
FATIGUE_WEIGHT = 0.3
MOMENTUM_WEIGHT = 0.3

HIGH_LOAD_ABOVE = 70
MEDIUM_LOAD_FROM = 40

STRESSED_WORDS = (
    "overwhelmed",
    "stressed",
    "too much",
    "cant",
    "can't",
    "exhausted",
    "burned out",
    "burnout",
    "swamped",
    "drowning",
    "struggling",
    "impossible",
    "never gonna",
    "give up",
    "quit",
    "anxious",
    "panic",
)


def _clamp(value: float, low: int = 0, high: int = 100) -> int:
    return int(max(low, min(high, value)))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_stress_signals(
    incomplete_tasks: int,
    tasks_overdue: int,
    tasks_created_today: int,
    tasks_completed_today: int,
    hour: int,
) -> int:
    """Stress from backlog size, overdue work, intake imbalance and evening backlog."""

    stress = 0

    if incomplete_tasks > 20:
        stress += 40
    elif incomplete_tasks > 10:
        stress += 30
    elif incomplete_tasks > 5:
        stress += 20
    else:
        stress += 10

    if tasks_overdue > 5:
        stress += 30
    elif tasks_overdue > 2:
        stress += 20
    elif tasks_overdue > 0:
        stress += 10

    imbalance = tasks_created_today - tasks_completed_today
    if imbalance > 10:
        stress += 20
    elif imbalance > 5:
        stress += 15
    elif imbalance > 2:
        stress += 10

    if hour >= 18 and incomplete_tasks > 5:
        stress += 10

    return _clamp(stress)


def calculate_momentum_signals(
    streak_count: int,
    tasks_completed_today: int,
    one_thing_completed: bool,
    incomplete_tasks: int,
) -> int:
    """Momentum from streaks, completions and the day's progress ratio."""

    momentum = 0

    if streak_count >= 7:
        momentum += 40
    elif streak_count >= 5:
        momentum += 35
    elif streak_count >= 3:
        momentum += 25
    elif streak_count >= 1:
        momentum += 15

    if tasks_completed_today >= 10:
        momentum += 30
    elif tasks_completed_today >= 5:
        momentum += 25
    elif tasks_completed_today >= 3:
        momentum += 20
    elif tasks_completed_today >= 1:
        momentum += 10

    if one_thing_completed:
        momentum += 20

    total = incomplete_tasks + tasks_completed_today
    if total > 0:
        momentum += _round_half_up(tasks_completed_today / total * 10)

    return _clamp(momentum)


def calculate_fatigue_signals(
    hour: int,
    tasks_completed_today: int,
    incomplete_tasks: int,
    voice_sentiment: Optional[str] = None,
) -> int:
    """Fatigue from time of day, work already done, remaining pressure and mood."""

    fatigue = 0

    if hour >= 22 or hour < 6:
        fatigue += 30
    elif hour >= 20:
        fatigue += 20
    elif hour >= 18:
        fatigue += 10
    elif 14 <= hour < 16:
        fatigue += 15

    if tasks_completed_today > 15:
        fatigue += 30
    elif tasks_completed_today > 10:
        fatigue += 20
    elif tasks_completed_today > 7:
        fatigue += 10

    if incomplete_tasks > 15:
        fatigue += 20
    elif incomplete_tasks > 10:
        fatigue += 15
    elif incomplete_tasks > 5:
        fatigue += 10

    if voice_sentiment == "negative":
        fatigue += 20
    elif voice_sentiment == "neutral":
        fatigue += 10

    return _clamp(fatigue)


def calculate_cognitive_load(
    tasks: Iterable[TaskRecord],
    activity: ActivitySnapshot,
    now: Optional[datetime] = None,
) -> CognitiveLoad:
    """Compose the overall load; stress and fatigue raise it, momentum lowers it."""

    if now is None:
        now = datetime.now()
    hour = now.hour

    incomplete_tasks = sum(1 for task in tasks if not task.completed)
    completed_today = activity.tasks_completed_today or 0

    stress = calculate_stress_signals(
        incomplete_tasks=incomplete_tasks,
        tasks_overdue=activity.tasks_overdue or 0,
        tasks_created_today=activity.tasks_created_today or 0,
        tasks_completed_today=completed_today,
        hour=hour,
    )
    momentum = calculate_momentum_signals(
        streak_count=activity.streak_count or 0,
        tasks_completed_today=completed_today,
        one_thing_completed=bool(activity.one_thing_completed),
        incomplete_tasks=incomplete_tasks,
    )
    fatigue = calculate_fatigue_signals(
        hour=hour,
        tasks_completed_today=completed_today,
        incomplete_tasks=incomplete_tasks,
        voice_sentiment=activity.voice_sentiment,
    )

    overall = _round_half_up(stress * STRESS_WEIGHT + fatigue * FATIGUE_WEIGHT + (100 - momentum) * MOMENTUM_WEIGHT)
    load = CognitiveLoad(
        overall=_clamp(overall),
        stress_signals=stress,
        momentum_signals=momentum,
        fatigue_signals=fatigue,
    )
    logger.debug("Cognitive load at hour %d for %d open tasks: %s", hour, incomplete_tasks, load)
    return load


def load_level(score: int) -> str:
    """Band a 0-100 load score into LOW, MEDIUM or HIGH."""

    if score > HIGH_LOAD_ABOVE:
        return "HIGH"
    if score >= MEDIUM_LOAD_FROM:
        return "MEDIUM"
    return "LOW"


def load_recommendations(level: str, activity: ActivitySnapshot) -> list[str]:
    recommendations: list[str] = []

    if level == "HIGH":
        recommendations.append("Let's pick ONE thing together.")
        recommendations.append("Try Focus Mode to concentrate on your top priority.")
        recommendations.append("Consider taking a 5-minute break.")
        if (activity.tasks_overdue or 0) > 5:
            recommendations.append("Let's reschedule some overdue tasks.")
    elif level == "MEDIUM":
        recommendations.append("Start a Tiny Task Fiesta session to build momentum.")
        recommendations.append("Break down larger tasks into smaller steps.")
        if (activity.tasks_created_today or 0) > (activity.tasks_completed_today or 0):
            recommendations.append("Focus on completing existing tasks before adding new ones.")
    else:
        recommendations.append("You're doing great! Keep up the momentum.")
        if (activity.tasks_completed_today or 0) > 3:
            recommendations.append("Celebrate your progress!")

    return recommendations


def count_stressed_words(text: str) -> int:
    """Count stressed-language phrases contained in ``text``."""

    lowered = text.lower()
    return sum(1 for phrase in STRESSED_WORDS if phrase in lowered)
