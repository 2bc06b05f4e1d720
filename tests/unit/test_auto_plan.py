"""Tests for AutoPlanSession."""
import pytest


class TestAutoPlanSelection:
    """Tests for suggestions and toggling."""

    def test_offers_first_three(self):
        from planner.models.goal import GoalType
        from planner.services.auto_plan import AutoPlanSession

        session = AutoPlanSession("user123", "goal-1", GoalType.HEALTH)

        assert [h.id for h in session.habit_suggestions] == ["h4", "h5", "h6"]
        assert [t.id for t in session.task_suggestions] == ["t4", "t5", "t6"]

    def test_limit(self):
        from planner.models.goal import GoalType
        from planner.services.auto_plan import AutoPlanSession

        session = AutoPlanSession("user123", "goal-1", GoalType.HEALTH, limit=1)

        assert len(session.habit_suggestions) == 1
        assert len(session.task_suggestions) == 1

    def test_toggle_adds_and_removes(self):
        from planner.models.goal import GoalType
        from planner.services.auto_plan import AutoPlanSession

        session = AutoPlanSession("user123", "goal-1", GoalType.PERSONAL)
        session.toggle_habit("h13")
        session.toggle_habit("h14")
        session.toggle_habit("h13")

        assert session.selected_habit_ids == {"h14"}


@pytest.mark.asyncio
class TestAutoPlanCommit:
    """Tests for committing selections."""

    async def test_health_habits_and_tasks(self, habit_store, task_store):
        from planner.models.goal import GoalType
        from planner.models.habit import HabitFrequency, HabitStatus, HabitType
        from planner.models.task import TaskPriority
        from planner.services.auto_plan import AutoPlanSession

        session = AutoPlanSession("user123", "goal-1", GoalType.HEALTH)
        session.toggle_habit("h6")
        session.toggle_task("t4")

        result = await session.commit(habit_store, task_store)

        assert (result.habits_created, result.tasks_created, result.failed) == (1, 1, 0)
        habit = habit_store.habits[0]
        assert habit.title == "Meal Prep"
        assert habit.frequency == HabitFrequency.WEEKLY
        assert habit.habit_type == HabitType.HEALTH
        assert habit.status == HabitStatus.ACTIVE
        task = task_store.tasks[0]
        assert task.title == "Create workout plan"
        assert task.priority == TaskPriority.HIGH
        assert task.context == "personal"
        assert task.goal_id == "goal-1"

    async def test_ignores_unknown_ids(self, habit_store, task_store):
        from planner.models.goal import GoalType
        from planner.services.auto_plan import AutoPlanSession

        session = AutoPlanSession("user123", "goal-1", GoalType.HEALTH)
        session.toggle_habit("h1")

        result = await session.commit(habit_store, task_store)

        assert result.habits_created == 0
        assert habit_store.habits == []

    async def test_failure_does_not_stop_the_rest(self, habit_store, task_store):
        from planner.models.goal import GoalType
        from planner.services.auto_plan import AutoPlanSession

        habit_store.fail_titles.add("Daily Budget Check")
        session = AutoPlanSession("user123", "goal-1", GoalType.FINANCIAL)
        session.toggle_habit("h1")
        session.toggle_habit("h2")
        session.toggle_task("t3")

        result = await session.commit(habit_store, task_store)

        assert (result.habits_created, result.tasks_created, result.failed) == (1, 1, 1)
        assert [h.title for h in habit_store.habits] == ["No Impulse Buying"]

    async def test_view(self):
        from planner.models.goal import GoalType
        from planner.services.auto_plan import AutoPlanSession

        session = AutoPlanSession("user123", "goal-1", GoalType.EDUCATION)
        session.toggle_habit("h8")

        view = session.view()

        assert view.created_goal_id == "goal-1"
        assert view.selected_habit_ids == ["h8"]
        assert view.selected_task_ids == []
