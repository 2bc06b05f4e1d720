"""Task model definitions."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TaskPriority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    """Task states."""

    INBOX = "inbox"
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELED = "canceled"


class TaskCreate(BaseModel):
    """Task creation model."""

    user_id: Optional[str] = None
    goal_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    context: str = "personal"
    due: Optional[date] = None


class Task(TaskCreate):
    """Full task model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    status: TaskStatus = TaskStatus.INBOX
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
