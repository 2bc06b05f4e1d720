"""Auto-plan: habits and tasks suggested right after a goal is created."""
from typing import Optional

import structlog

from planner.catalogs.catalog import Catalog, default_catalog
from planner.models.catalog import HabitSuggestion, TaskSuggestion
from planner.models.goal import GoalType
from planner.models.habit import CompletionMode, HabitCreate, HabitStatus, HabitType
from planner.models.task import TaskCreate
from planner.models.wizard import AutoPlanResult, AutoPlanView
from planner.services.stores import HabitStore, TaskStore

logger = structlog.get_logger(__name__)


def _toggle(selection: set[str], item_id: str) -> None:
    if item_id in selection:
        selection.discard(item_id)
    else:
        selection.add(item_id)


class AutoPlanSession:
    """
    Suggestion selection for one freshly created goal.

    Selection is a free multi-select over the offered suggestions.
    """

    def __init__(
        self,
        user_id: str,
        goal_id: str,
        goal_type: GoalType,
        catalog: Optional[Catalog] = None,
        limit: int = 3,
    ):
        """
        Initialize session for a created goal.

        Args:
            user_id: Owner of the goal and of anything created here
            goal_id: Goal every created habit/task is tagged with
            goal_type: Picks which suggestion lists are offered
            catalog: Static catalogs (built-in by default)
            limit: How many suggestions of each kind to offer
        """
        catalog = catalog or default_catalog()
        self.user_id = user_id
        self.goal_id = goal_id
        self.goal_type = goal_type
        self.habit_suggestions: list[HabitSuggestion] = list(
            catalog.habit_suggestions.get(goal_type, ())[:limit]
        )
        self.task_suggestions: list[TaskSuggestion] = list(
            catalog.task_suggestions.get(goal_type, ())[:limit]
        )
        self.selected_habit_ids: set[str] = set()
        self.selected_task_ids: set[str] = set()

    def toggle_habit(self, habit_id: str) -> None:
        _toggle(self.selected_habit_ids, habit_id)

    def toggle_task(self, task_id: str) -> None:
        _toggle(self.selected_task_ids, task_id)

    def view(self) -> AutoPlanView:
        """Snapshot for API responses."""
        return AutoPlanView(
            created_goal_id=self.goal_id,
            habit_suggestions=self.habit_suggestions,
            task_suggestions=self.task_suggestions,
            selected_habit_ids=sorted(self.selected_habit_ids),
            selected_task_ids=sorted(self.selected_task_ids),
        )

    def _habit_payload(self, suggestion: HabitSuggestion) -> HabitCreate:
        return HabitCreate(
            user_id=self.user_id,
            goal_id=self.goal_id,
            title=suggestion.title,
            description=suggestion.description,
            frequency=suggestion.frequency,
            completion_mode=CompletionMode.BOOLEAN,
            status=HabitStatus.ACTIVE,
            habit_type=HabitType.HEALTH if self.goal_type == GoalType.HEALTH else HabitType.PRODUCTIVITY,
            completion_history=[],
        )

    def _task_payload(self, suggestion: TaskSuggestion) -> TaskCreate:
        return TaskCreate(
            user_id=self.user_id,
            goal_id=self.goal_id,
            title=suggestion.title,
            description=suggestion.description,
            priority=suggestion.priority,
            context="personal",
        )

    async def commit(self, habit_store: HabitStore, task_store: TaskStore) -> AutoPlanResult:
        """
        Create a habit or task for every selected suggestion.

        Each creation stands alone: a failure is logged and counted, and
        the remaining selections are still created.

        Returns:
            Counts of created and failed items
        """
        result = AutoPlanResult()

        for suggestion in self.habit_suggestions:
            if suggestion.id not in self.selected_habit_ids:
                continue
            try:
                await habit_store.create_habit(self._habit_payload(suggestion))
                result.habits_created += 1
            except Exception:
                logger.exception(
                    "auto_plan_item_failed",
                    goal_id=self.goal_id,
                    kind="habit",
                    suggestion_id=suggestion.id,
                )
                result.failed += 1

        for suggestion in self.task_suggestions:
            if suggestion.id not in self.selected_task_ids:
                continue
            try:
                await task_store.create_task(self._task_payload(suggestion))
                result.tasks_created += 1
            except Exception:
                logger.exception(
                    "auto_plan_item_failed",
                    goal_id=self.goal_id,
                    kind="task",
                    suggestion_id=suggestion.id,
                )
                result.failed += 1

        logger.info(
            "auto_plan_committed",
            goal_id=self.goal_id,
            habits_created=result.habits_created,
            tasks_created=result.tasks_created,
            failed=result.failed,
        )
        return result
