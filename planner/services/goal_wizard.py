"""Goal wizard - open/close lifecycle, event dispatch, submit and auto-plan."""
from datetime import datetime
from typing import Callable, Optional

import structlog

from planner.catalogs.catalog import Catalog, default_catalog
from planner.models.draft import ErrorKey
from planner.models.wizard import (
    AddMilestone,
    ApplyDate,
    ApplyTemplate,
    AutoPlanResult,
    DismissDatePicker,
    LinkBudget,
    LinkDebt,
    OpenDatePicker,
    PostCommitAction,
    RemoveMilestone,
    SelectScenario,
    SelectUnit,
    SetCurrency,
    SetCurrentValue,
    SetCustomUnit,
    SetDescription,
    SetFinanceMode,
    SetGoalType,
    SetMetric,
    SetTargetValue,
    SetTitle,
    SubmitResult,
    UpdateMilestone,
    WizardEvent,
    WizardMode,
    WizardPhase,
    WizardView,
)
from planner.services.auto_plan import AutoPlanSession
from planner.services.goal_draft import GoalDraftEditor, generate_milestone_id
from planner.services.stores import GoalStore, HabitStore, TaskStore

logger = structlog.get_logger(__name__)


class WizardStateError(ValueError):
    """Operation not allowed in the wizard's current phase."""


class GoalWizard:
    """
    One user's goal wizard.

    Phases: closed -> empty (create) or editing (edit) -> editing on any
    field edit -> closed, editing (keep open) or auto_plan after submit.
    Saves run in submitting, which rejects every other call. Closing from
    any other phase resets the draft.
    """

    def __init__(
        self,
        user_id: str,
        base_currency: str,
        goal_store: GoalStore,
        habit_store: HabitStore,
        task_store: TaskStore,
        catalog: Optional[Catalog] = None,
        suggestion_limit: int = 3,
        id_factory: Callable[[], str] = generate_milestone_id,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        """Initialize a closed wizard."""
        self.user_id = user_id
        self.goal_store = goal_store
        self.habit_store = habit_store
        self.task_store = task_store
        self.catalog = catalog or default_catalog()
        self.suggestion_limit = suggestion_limit
        self.editor = GoalDraftEditor(
            base_currency,
            catalog=self.catalog,
            id_factory=id_factory,
            clock=clock,
        )
        self.phase = WizardPhase.CLOSED
        self.mode = WizardMode.CREATE
        self.auto_plan: Optional[AutoPlanSession] = None

    @property
    def draft(self):
        return self.editor.draft

    @property
    def is_editing(self) -> bool:
        """True when the wizard edits an existing goal."""
        return self.mode == WizardMode.EDIT and bool(self.draft.editing_goal_id)

    def _require(self, *phases: WizardPhase) -> None:
        if self.phase not in phases:
            raise WizardStateError(f"Not allowed while wizard is {self.phase.value}")

    # Lifecycle

    async def open(self, mode: WizardMode = WizardMode.CREATE, goal_id: Optional[str] = None) -> None:
        """
        Open the wizard on an empty draft or on an existing goal.

        Raises:
            WizardStateError: If the wizard is already open
            ValueError: If edit mode names a goal that does not exist
        """
        self._require(WizardPhase.CLOSED)

        if mode == WizardMode.EDIT:
            if not goal_id:
                raise ValueError("Edit mode needs a goal_id")
            goals = await self.goal_store.list_goals(self.user_id)
            existing = next((goal for goal in goals if goal.id == goal_id), None)
            if not existing:
                raise ValueError("Goal not found")
            self.editor.hydrate(existing)
            self.mode = WizardMode.EDIT
            self.phase = WizardPhase.EDITING
            return

        self.editor.reset()
        self.mode = WizardMode.CREATE
        self.phase = WizardPhase.EMPTY

    def close(self) -> None:
        """
        Close the wizard and discard the draft.

        Raises:
            WizardStateError: If a save is still in flight
        """
        if self.phase == WizardPhase.SUBMITTING:
            raise WizardStateError("Not allowed while wizard is submitting")
        self._reset()

    def _reset(self) -> None:
        self.editor.reset()
        self.auto_plan = None
        self.mode = WizardMode.CREATE
        self.phase = WizardPhase.CLOSED

    # Draft edits

    def apply(self, event: WizardEvent) -> None:
        """
        Apply one field event to the draft.

        Raises:
            WizardStateError: If the wizard is not open on a draft
            ValueError: If the event references an unknown unit, template or milestone
        """
        self._require(WizardPhase.EMPTY, WizardPhase.EDITING)
        editor = self.editor

        if isinstance(event, SetTitle):
            editor.set_title(event.value)
        elif isinstance(event, SetDescription):
            editor.set_description(event.value)
        elif isinstance(event, SetGoalType):
            editor.handle_goal_type_change(event.value)
        elif isinstance(event, SetMetric):
            editor.handle_metric_change(event.value)
        elif isinstance(event, SetFinanceMode):
            editor.set_finance_mode(event.value)
        elif isinstance(event, SetCurrency):
            editor.set_currency(event.value)
        elif isinstance(event, SelectUnit):
            editor.select_unit(event.unit_id)
        elif isinstance(event, SetCustomUnit):
            editor.set_custom_unit(event.value)
        elif isinstance(event, SetCurrentValue):
            editor.set_current_value_text(event.text)
        elif isinstance(event, SetTargetValue):
            editor.set_target_value_text(event.text)
        elif isinstance(event, SelectScenario):
            editor.handle_scenario_select(event.scenario)
        elif isinstance(event, ApplyTemplate):
            editor.apply_template_by_id(event.template_id)
        elif isinstance(event, AddMilestone):
            editor.add_milestone()
        elif isinstance(event, UpdateMilestone):
            editor.update_milestone(
                event.milestone_id,
                title=event.title,
                percent=event.percent,
                due_date=event.due_date,
            )
        elif isinstance(event, RemoveMilestone):
            editor.remove_milestone(event.milestone_id)
        elif isinstance(event, OpenDatePicker):
            editor.open_date_picker(event.target)
        elif isinstance(event, ApplyDate):
            editor.apply_date_value(event.target, event.value)
        elif isinstance(event, DismissDatePicker):
            editor.dismiss_date_picker()
        elif isinstance(event, LinkBudget):
            editor.link_budget(event.budget_id)
        elif isinstance(event, LinkDebt):
            editor.link_debt(event.debt_id)
        else:
            raise ValueError(f"Unsupported wizard event: {type(event).__name__}")

        self.phase = WizardPhase.EDITING

    # Submit

    async def submit(self, action: PostCommitAction = PostCommitAction.CLOSE) -> SubmitResult:
        """
        Validate the draft and save it through the goal store.

        Validation failures and store failures leave the wizard in editing
        with an error key set. Edits always close after saving; keep-open
        and auto-plan only apply to new goals. The wizard is in submitting
        while the store call runs, so overlapping calls are rejected.

        Raises:
            WizardStateError: If the wizard is not open on a draft
        """
        self._require(WizardPhase.EMPTY, WizardPhase.EDITING)

        payload = self.editor.build_payload(self.user_id)
        if payload is None:
            self.phase = WizardPhase.EDITING
            return SubmitResult(accepted=False, error_key=self.draft.error_key, phase=self.phase)

        editing = self.is_editing
        self.phase = WizardPhase.SUBMITTING
        try:
            if editing:
                goal = await self.goal_store.update_goal(self.draft.editing_goal_id, payload)
            else:
                goal = await self.goal_store.create_goal(payload)
        except Exception:
            logger.exception("goal_submit_failed", user_id=self.user_id, editing=editing)
            self.draft.error_key = ErrorKey.SAVE_FAILED
            self.phase = WizardPhase.EDITING
            return SubmitResult(accepted=False, error_key=ErrorKey.SAVE_FAILED, phase=self.phase)

        if not editing and action == PostCommitAction.SHOW_AUTO_PLAN:
            self.auto_plan = AutoPlanSession(
                self.user_id,
                goal.id,
                goal.goal_type,
                catalog=self.catalog,
                limit=self.suggestion_limit,
            )
            self.editor.clear_content()
            self.phase = WizardPhase.AUTO_PLAN
        elif not editing and action == PostCommitAction.KEEP_OPEN:
            self.editor.clear_content()
            self.phase = WizardPhase.EDITING
        else:
            self._reset()

        return SubmitResult(accepted=True, goal=goal, phase=self.phase)

    # Auto-plan

    def toggle_habit(self, habit_id: str) -> None:
        self._require(WizardPhase.AUTO_PLAN)
        self.auto_plan.toggle_habit(habit_id)

    def toggle_task(self, task_id: str) -> None:
        self._require(WizardPhase.AUTO_PLAN)
        self.auto_plan.toggle_task(task_id)

    async def commit_auto_plan(self) -> AutoPlanResult:
        """Create the selected habits and tasks, then close the wizard."""
        self._require(WizardPhase.AUTO_PLAN)
        self.phase = WizardPhase.SUBMITTING
        try:
            return await self.auto_plan.commit(self.habit_store, self.task_store)
        finally:
            self._reset()

    def skip_auto_plan(self) -> None:
        """Close the wizard without creating anything."""
        self._require(WizardPhase.AUTO_PLAN)
        self.close()

    def view(self) -> WizardView:
        """Snapshot of the wizard for API responses."""
        return WizardView(
            phase=self.phase,
            mode=self.mode,
            draft=self.draft,
            can_submit=self.editor.can_submit,
            available_units=self.editor.available_units(),
            currency_options=self.catalog.currency_options(self.editor.base_currency),
            auto_plan=self.auto_plan.view() if self.auto_plan else None,
        )
