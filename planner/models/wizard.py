"""Goal wizard state, events and results."""
from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from planner.models.catalog import HabitSuggestion, Scenario, TaskSuggestion, UnitDefinition
from planner.models.draft import DatePickerTarget, ErrorKey, GoalDraft
from planner.models.goal import FinanceMode, Goal, GoalType, MetricKind


class WizardPhase(str, Enum):
    """Where the goal wizard is in its lifecycle."""

    CLOSED = "closed"
    EMPTY = "empty"
    EDITING = "editing"
    AUTO_PLAN = "auto_plan"
    SUBMITTING = "submitting"


class WizardMode(str, Enum):
    """Whether the wizard creates a goal or edits one."""

    CREATE = "create"
    EDIT = "edit"


class PostCommitAction(str, Enum):
    """What the wizard does after a successful save."""

    CLOSE = "close"
    KEEP_OPEN = "keep_open"
    SHOW_AUTO_PLAN = "show_auto_plan"


# Field events. Each one maps to a single draft edit.


class SetTitle(BaseModel):
    type: Literal["set_title"] = "set_title"
    value: str


class SetDescription(BaseModel):
    type: Literal["set_description"] = "set_description"
    value: str


class SetGoalType(BaseModel):
    type: Literal["set_goal_type"] = "set_goal_type"
    value: GoalType


class SetMetric(BaseModel):
    type: Literal["set_metric"] = "set_metric"
    value: MetricKind


class SetFinanceMode(BaseModel):
    type: Literal["set_finance_mode"] = "set_finance_mode"
    value: FinanceMode


class SetCurrency(BaseModel):
    type: Literal["set_currency"] = "set_currency"
    value: str


class SelectUnit(BaseModel):
    type: Literal["select_unit"] = "select_unit"
    unit_id: str


class SetCustomUnit(BaseModel):
    type: Literal["set_custom_unit"] = "set_custom_unit"
    value: str


class SetCurrentValue(BaseModel):
    type: Literal["set_current_value"] = "set_current_value"
    text: str


class SetTargetValue(BaseModel):
    type: Literal["set_target_value"] = "set_target_value"
    text: str


class SelectScenario(BaseModel):
    type: Literal["select_scenario"] = "select_scenario"
    scenario: Scenario


class ApplyTemplate(BaseModel):
    type: Literal["apply_template"] = "apply_template"
    template_id: str


class AddMilestone(BaseModel):
    type: Literal["add_milestone"] = "add_milestone"


class UpdateMilestone(BaseModel):
    type: Literal["update_milestone"] = "update_milestone"
    milestone_id: str
    title: Optional[str] = None
    percent: Optional[float] = None
    due_date: Optional[datetime] = None


class RemoveMilestone(BaseModel):
    type: Literal["remove_milestone"] = "remove_milestone"
    milestone_id: str


class OpenDatePicker(BaseModel):
    type: Literal["open_date_picker"] = "open_date_picker"
    target: DatePickerTarget


class ApplyDate(BaseModel):
    type: Literal["apply_date"] = "apply_date"
    target: DatePickerTarget
    value: datetime


class DismissDatePicker(BaseModel):
    type: Literal["dismiss_date_picker"] = "dismiss_date_picker"


class LinkBudget(BaseModel):
    type: Literal["link_budget"] = "link_budget"
    budget_id: Optional[str] = None


class LinkDebt(BaseModel):
    type: Literal["link_debt"] = "link_debt"
    debt_id: Optional[str] = None


WizardEvent = Annotated[
    Union[
        SetTitle,
        SetDescription,
        SetGoalType,
        SetMetric,
        SetFinanceMode,
        SetCurrency,
        SelectUnit,
        SetCustomUnit,
        SetCurrentValue,
        SetTargetValue,
        SelectScenario,
        ApplyTemplate,
        AddMilestone,
        UpdateMilestone,
        RemoveMilestone,
        OpenDatePicker,
        ApplyDate,
        DismissDatePicker,
        LinkBudget,
        LinkDebt,
    ],
    Field(discriminator="type"),
]


class OpenRequest(BaseModel):
    """Request to open the wizard."""

    mode: WizardMode = WizardMode.CREATE
    goal_id: Optional[str] = None


class SubmitRequest(BaseModel):
    """Request to submit the draft."""

    action: PostCommitAction = PostCommitAction.CLOSE


class ToggleRequest(BaseModel):
    """Toggle one auto-plan suggestion."""

    kind: Literal["habit", "task"]
    suggestion_id: str


class SubmitResult(BaseModel):
    """Outcome of a submit attempt."""

    accepted: bool
    error_key: Optional[ErrorKey] = None
    goal: Optional[Goal] = None
    phase: WizardPhase


class AutoPlanView(BaseModel):
    """Suggestions on offer and the current selection."""

    created_goal_id: str
    habit_suggestions: list[HabitSuggestion]
    task_suggestions: list[TaskSuggestion]
    selected_habit_ids: list[str]
    selected_task_ids: list[str]


class AutoPlanResult(BaseModel):
    """What an auto-plan commit created."""

    habits_created: int = 0
    tasks_created: int = 0
    failed: int = 0


class WizardView(BaseModel):
    """Read-only snapshot of the wizard."""

    phase: WizardPhase
    mode: WizardMode
    draft: GoalDraft
    can_submit: bool
    available_units: list[UnitDefinition]
    currency_options: list[str]
    auto_plan: Optional[AutoPlanView] = None
