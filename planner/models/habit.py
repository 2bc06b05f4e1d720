"""Habit model definitions."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class HabitFrequency(str, Enum):
    """How often a habit is expected."""

    DAILY = "daily"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class HabitType(str, Enum):
    """Habit category."""

    HEALTH = "health"
    FINANCE = "finance"
    PRODUCTIVITY = "productivity"
    EDUCATION = "education"
    PERSONAL = "personal"
    CUSTOM = "custom"


class HabitStatus(str, Enum):
    """Habit lifecycle status."""

    ACTIVE = "active"
    PAUSED = "paused"
    ARCHIVED = "archived"


class CompletionMode(str, Enum):
    """How a habit check-in is recorded."""

    BOOLEAN = "boolean"
    NUMERIC = "numeric"


class HabitCreate(BaseModel):
    """Habit creation model."""

    user_id: Optional[str] = None
    goal_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    frequency: HabitFrequency = HabitFrequency.DAILY
    completion_mode: CompletionMode = CompletionMode.BOOLEAN
    status: HabitStatus = HabitStatus.ACTIVE
    habit_type: HabitType = HabitType.PERSONAL
    completion_history: list[dict] = Field(default_factory=list)


class Habit(HabitCreate):
    """Full habit model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    streak_current: int = 0
    streak_best: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
