"""Pytest configuration and fixtures."""
import asyncio
import itertools
import os
from datetime import datetime
from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET", "test-secret-key")

from planner.models.goal import Goal, GoalDirection, GoalPayload, GoalStatus, GoalType  # noqa: E402
from planner.models.habit import Habit, HabitCreate  # noqa: E402
from planner.models.task import Task, TaskCreate  # noqa: E402
from planner.services.stores import GoalStore, HabitStore, TaskStore  # noqa: E402

USER_ID = "user123"
FIXED_NOW = datetime(2025, 3, 1, 9, 30)


class InMemoryGoalStore(GoalStore):
    """
    Goal store double keeping goals in a dict.

    Set fail=True to make writes raise, or hold_writes() to park writes
    until release_writes() is called.
    """

    def __init__(self):
        self.goals: dict[str, Goal] = {}
        self.fail = False
        self._gate: Optional[asyncio.Event] = None
        self.created: list[GoalPayload] = []
        self.updated: list[tuple[str, GoalPayload]] = []
        self._ids = itertools.count(1)

    def _build(self, goal_id: str, payload: GoalPayload, created_at: datetime) -> Goal:
        data = payload.model_dump(exclude={"direction"})
        return Goal(
            _id=goal_id,
            direction=payload.direction or GoalDirection.NEUTRAL,
            created_at=created_at,
            updated_at=FIXED_NOW,
            **data,
        )

    def add(self, payload: GoalPayload) -> Goal:
        goal_id = f"goal-{next(self._ids)}"
        goal = self._build(goal_id, payload, FIXED_NOW)
        self.goals[goal_id] = goal
        return goal

    def hold_writes(self) -> None:
        self._gate = asyncio.Event()

    def release_writes(self) -> None:
        self._gate.set()

    async def _wait_for_gate(self) -> None:
        if self._gate is not None:
            await self._gate.wait()

    async def create_goal(self, payload: GoalPayload) -> Goal:
        await self._wait_for_gate()
        if self.fail:
            raise RuntimeError("goal store unavailable")
        self.created.append(payload)
        return self.add(payload)

    async def update_goal(self, goal_id: str, payload: GoalPayload) -> Goal:
        await self._wait_for_gate()
        if self.fail:
            raise RuntimeError("goal store unavailable")
        existing = self.goals.get(goal_id)
        if not existing:
            raise ValueError("Goal not found")
        self.updated.append((goal_id, payload))
        goal = self._build(goal_id, payload, existing.created_at)
        self.goals[goal_id] = goal
        return goal

    async def list_goals(
        self,
        user_id: str,
        status: Optional[GoalStatus] = None,
        goal_type: Optional[GoalType] = None,
    ) -> list[Goal]:
        return [
            goal
            for goal in self.goals.values()
            if goal.user_id == user_id
            and (status is None or goal.status == status)
            and (goal_type is None or goal.goal_type == goal_type)
        ]

    async def get_goal(self, user_id: str, goal_id: str) -> Goal:
        goal = self.goals.get(goal_id)
        if not goal or goal.user_id != user_id:
            raise ValueError("Goal not found")
        return goal

    async def delete_goal(self, user_id: str, goal_id: str) -> dict:
        await self.get_goal(user_id, goal_id)
        del self.goals[goal_id]
        return {"deleted_count": 1}


class InMemoryHabitStore(HabitStore):
    """Habit store double. Titles in fail_titles raise on create."""

    def __init__(self):
        self.habits: list[Habit] = []
        self.fail_titles: set[str] = set()

    async def create_habit(self, payload: HabitCreate) -> Habit:
        if payload.title in self.fail_titles:
            raise RuntimeError("habit store unavailable")
        habit = Habit(
            _id=f"habit-{len(self.habits) + 1}",
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
            **payload.model_dump(),
        )
        self.habits.append(habit)
        return habit


class InMemoryTaskStore(TaskStore):
    """Task store double. Titles in fail_titles raise on create."""

    def __init__(self):
        self.tasks: list[Task] = []
        self.fail_titles: set[str] = set()

    async def create_task(self, payload: TaskCreate) -> Task:
        if payload.title in self.fail_titles:
            raise RuntimeError("task store unavailable")
        task = Task(
            _id=f"task-{len(self.tasks) + 1}",
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
            **payload.model_dump(),
        )
        self.tasks.append(task)
        return task


@pytest.fixture
def goal_store():
    return InMemoryGoalStore()


@pytest.fixture
def habit_store():
    return InMemoryHabitStore()


@pytest.fixture
def task_store():
    return InMemoryTaskStore()


@pytest.fixture
def wizard(goal_store, habit_store, task_store):
    """Closed goal wizard for USER_ID backed by in-memory stores."""
    from planner.services.goal_wizard import GoalWizard

    ids = (f"ms-{n}" for n in itertools.count(1))
    return GoalWizard(
        USER_ID,
        "USD",
        goal_store,
        habit_store,
        task_store,
        id_factory=lambda: next(ids),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def make_payload():
    """Build a valid goal payload, overriding any field."""

    def _make(**overrides) -> GoalPayload:
        fields = {
            "user_id": USER_ID,
            "title": "Emergency Fund",
            "goal_type": "financial",
            "metric_type": "amount",
            "currency": "USD",
            "finance_mode": "save",
            "initial_value": 0,
            "target_value": 10000,
            "start_date": FIXED_NOW,
            "stats": {"financial_progress_percent": 0},
        }
        fields.update(overrides)
        return GoalPayload(**fields)

    return _make


@pytest.fixture
def wizard_registry():
    """Empty wizard registry for one test."""
    from planner.services.wizard_registry import WizardRegistry

    return WizardRegistry()


@pytest_asyncio.fixture
async def app_client(goal_store, habit_store, task_store, wizard_registry):
    """
    HTTP client against the app with every store swapped for an in-memory one.

    The caller is authenticated as USER_ID with base currency USD, and the
    wizard registry starts empty for each test.
    """
    from planner import dependencies
    from planner.main import app
    from planner.routers.auth import get_current_user_id

    app.dependency_overrides.update({
        get_current_user_id: lambda: USER_ID,
        dependencies.get_base_currency: lambda: "USD",
        dependencies.get_goal_service: lambda: goal_store,
        dependencies.get_goal_store: lambda: goal_store,
        dependencies.get_habit_store: lambda: habit_store,
        dependencies.get_task_store: lambda: task_store,
        dependencies.get_wizard_registry: lambda: wizard_registry,
    })

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
