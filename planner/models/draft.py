"""Editable goal draft owned by the goal wizard."""
from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from planner.models.catalog import Scenario
from planner.models.goal import FinanceMode, GoalType, MetricKind
from planner.utils.progress import format_milestone_percent


class ErrorKey(str, Enum):
    """Validation failure shown after a rejected submit."""

    MISSING_TITLE = "missing_title"
    INVALID_TARGET = "invalid_target"
    SAVE_FAILED = "save_failed"


class MilestoneDraft(BaseModel):
    """Milestone as edited in the wizard, percent on a 1-100 scale."""

    id: str
    title: str = ""
    percent: int
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    model_config = {"validate_assignment": True}

    @field_validator("percent", mode="before")
    @classmethod
    def clamp_percent(cls, value) -> int:
        return format_milestone_percent(float(value))


class DatePickerTarget(BaseModel):
    """Which date field a picker writes to."""

    type: Literal["start", "due", "milestone"]
    milestone_id: Optional[str] = None

    @model_validator(mode="after")
    def milestone_needs_id(self) -> "DatePickerTarget":
        if self.type == "milestone" and not self.milestone_id:
            raise ValueError("milestone picker needs milestone_id")
        return self


class PickerState(BaseModel):
    """Open date picker: its target and the value it starts from."""

    target: DatePickerTarget
    value: datetime


class GoalDraft(BaseModel):
    """
    In-progress goal form.

    Numeric fields stay raw text until submit. unit holds a catalog unit id,
    "custom" when show_custom_unit is on, or "" when nothing is picked.
    """

    title: str = ""
    description: str = ""
    goal_type: GoalType = GoalType.FINANCIAL
    metric_type: MetricKind = MetricKind.AMOUNT
    current_value_text: str = ""
    target_value_text: str = ""
    unit: str = ""
    custom_unit: str = ""
    show_custom_unit: bool = False
    currency: Optional[str] = None
    finance_mode: FinanceMode = FinanceMode.SAVE
    start_date: Optional[datetime] = None
    target_date: Optional[datetime] = None
    milestones: list[MilestoneDraft] = Field(default_factory=list)
    linked_budget_id: Optional[str] = None
    linked_debt_id: Optional[str] = None
    picker: Optional[PickerState] = None
    error_key: Optional[ErrorKey] = None
    editing_goal_id: Optional[str] = None
    selected_scenario: Scenario = Scenario.CUSTOM

    model_config = {"validate_assignment": True}

    @classmethod
    def empty(cls, base_currency: str) -> "GoalDraft":
        """Wizard defaults for a new goal."""
        return cls(currency=base_currency)
