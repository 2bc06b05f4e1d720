"""FastAPI dependencies shared by the routers."""
from fastapi import Depends, HTTPException, status

from planner.catalogs.catalog import Catalog, default_catalog
from planner.config import settings
from planner.database import get_database
from planner.routers.auth import get_current_user_id
from planner.services.auth_service import AuthService
from planner.services.finance_service import FinanceService
from planner.services.goal_service import GoalService
from planner.services.goal_wizard import GoalWizard
from planner.services.habit_service import HabitService
from planner.services.stores import GoalStore, HabitStore, TaskStore
from planner.services.task_service import TaskService
from planner.services.wizard_registry import WizardRegistry, wizard_registry


def get_catalog() -> Catalog:
    return default_catalog()


async def get_goal_service(db=Depends(get_database)) -> GoalService:
    return GoalService(db)


async def get_goal_store(db=Depends(get_database)) -> GoalStore:
    return GoalService(db)


async def get_habit_store(db=Depends(get_database)) -> HabitStore:
    return HabitService(db)


async def get_task_store(db=Depends(get_database)) -> TaskStore:
    return TaskService(db)


async def get_finance_service(db=Depends(get_database)) -> FinanceService:
    return FinanceService(db)


async def get_base_currency(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
) -> str:
    """The user's base currency, or the configured default."""
    try:
        user = await AuthService(db).get_user_by_id(user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return user.base_currency or settings.default_base_currency


def get_wizard_registry() -> WizardRegistry:
    return wizard_registry


async def get_wizard(
    user_id: str = Depends(get_current_user_id),
    base_currency: str = Depends(get_base_currency),
    goal_store: GoalStore = Depends(get_goal_store),
    habit_store: HabitStore = Depends(get_habit_store),
    task_store: TaskStore = Depends(get_task_store),
    catalog: Catalog = Depends(get_catalog),
    registry: WizardRegistry = Depends(get_wizard_registry),
) -> GoalWizard:
    """The current user's wizard, created closed on first use."""
    return registry.get_or_create(
        user_id,
        lambda: GoalWizard(
            user_id,
            base_currency,
            goal_store,
            habit_store,
            task_store,
            catalog=catalog,
            suggestion_limit=settings.auto_plan_suggestion_limit,
        ),
    )
