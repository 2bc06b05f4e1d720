"""Static catalog entry models."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from planner.models.goal import FinanceMode, GoalType, MetricKind
from planner.models.habit import HabitFrequency
from planner.models.task import TaskPriority


class UnitCategory(str, Enum):
    """Grouping used when listing units."""

    TIME = "time"
    DISTANCE = "distance"
    WEIGHT = "weight"
    VOLUME = "volume"
    COUNT = "count"
    OTHER = "other"


class Scenario(str, Enum):
    """Onboarding archetypes offered at the top of the goal wizard."""

    FINANCIAL_SAVE = "financial_save"
    FINANCIAL_SPEND = "financial_spend"
    HABIT_SUPPORT = "habit_support"
    SKILL_GROWTH = "skill_growth"
    CUSTOM = "custom"


class UnitDefinition(BaseModel):
    """A measurement unit offered for non-money goals."""

    id: str
    label: str
    icon: str
    category: UnitCategory
    metric_types: frozenset[MetricKind]
    goal_types: Optional[frozenset[GoalType]] = None

    model_config = {"frozen": True}

    def is_eligible(self, metric_type: MetricKind, goal_type: GoalType) -> bool:
        """Check whether the unit fits a metric kind and goal type."""
        if metric_type not in self.metric_types:
            return False
        if self.goal_types:
            return goal_type in self.goal_types
        return True


class GoalTemplate(BaseModel):
    """Predefined goal archetype."""

    id: str
    title: str
    emoji: str = ""
    goal_type: GoalType
    metric_kind: MetricKind
    finance_mode: Optional[FinanceMode] = None
    default_unit: Optional[str] = None
    target_value: Optional[float] = None
    recommended_percents: tuple[int, ...] = ()
    description: Optional[str] = None

    model_config = {"frozen": True}


class HabitSuggestion(BaseModel):
    """Habit offered by the auto-plan step."""

    id: str
    title: str
    description: str
    frequency: HabitFrequency
    icon: str = ""

    model_config = {"frozen": True}


class TaskSuggestion(BaseModel):
    """Task offered by the auto-plan step."""

    id: str
    title: str
    description: str
    priority: TaskPriority
    icon: str = ""

    model_config = {"frozen": True}
