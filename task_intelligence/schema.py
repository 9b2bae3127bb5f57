"""Core data schema for task intelligence."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass
class TaskRecord:
    """Task snapshot as supplied by the caller's task store."""

    id: str
    title: str
    ai_summary: Optional[str] = None
    completed: bool = False
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    focus_date: Optional[date] = None
    is_focus: bool = False
    is_time_based: bool = False
    has_reminder: bool = False
    goal_aligned: bool = False
    has_person_name: bool = False
    category: Optional[str] = "inbox"
    scheduled_bucket: Optional[str] = None

    @property
    def text(self) -> str:
        """Text used for matching and display."""
        return self.ai_summary or self.title


@dataclass
class ActivitySnapshot:
    """Point-in-time activity counters."""

    tasks_completed_today: int = 0
    tasks_created_today: int = 0
    tasks_overdue: int = 0
    streak_count: int = 0
    one_thing_completed: bool = False
    voice_sentiment: Optional[str] = None


@dataclass
class DuplicateInfo:
    is_duplicate: bool
    similarity: float
    match_type: str
    duplicate_of: Optional[str] = None
    duplicate_text: Optional[str] = None
    location: Optional[str] = None


@dataclass
class CognitiveLoad:
    overall: int
    stress_signals: int
    momentum_signals: int
    fatigue_signals: int


@dataclass
class WorkloadSuggestion:
    id: str
    type: str
    task_id: str
    task_title: str
    from_bucket: str
    to_bucket: str
    reason: str
    priority: int


@dataclass
class TaskBuckets:
    """Mutually exclusive time-horizon partition of incomplete tasks."""

    today: list[TaskRecord] = field(default_factory=list)
    this_week: list[TaskRecord] = field(default_factory=list)
    soon: list[TaskRecord] = field(default_factory=list)

    def counts(self) -> dict:
        return {"today": len(self.today), "thisWeek": len(self.this_week), "soon": len(self.soon)}
