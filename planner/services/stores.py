"""
Store interfaces the goal wizard depends on.

The wizard only needs these operations; the motor-backed services
implement them and tests swap in in-memory doubles.
"""
from abc import ABC, abstractmethod

from planner.models.goal import Goal, GoalPayload
from planner.models.habit import Habit, HabitCreate
from planner.models.task import Task, TaskCreate


class GoalStore(ABC):
    """Persistence for goals."""

    @abstractmethod
    async def create_goal(self, payload: GoalPayload) -> Goal:
        """
        Persist a new goal.

        Returns:
            The stored goal with its assigned id
        """

    @abstractmethod
    async def update_goal(self, goal_id: str, payload: GoalPayload) -> Goal:
        """
        Replace the editable fields of an existing goal.

        Raises:
            ValueError: If the goal does not exist
        """

    @abstractmethod
    async def list_goals(self, user_id: str) -> list[Goal]:
        """List the user's goals."""


class HabitStore(ABC):
    """Persistence for habits."""

    @abstractmethod
    async def create_habit(self, payload: HabitCreate) -> Habit:
        """Persist a new habit."""


class TaskStore(ABC):
    """Persistence for tasks."""

    @abstractmethod
    async def create_task(self, payload: TaskCreate) -> Task:
        """Persist a new task."""
