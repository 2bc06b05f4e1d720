"""Finance router - budgets and debts linked to goals."""
from fastapi import APIRouter, Depends, HTTPException, status

from planner.dependencies import get_base_currency, get_finance_service, get_goal_service
from planner.models.finance import Budget, BudgetCreate, Debt
from planner.models.goal import Goal
from planner.routers.auth import get_current_user_id
from planner.services.finance_service import FinanceService
from planner.services.goal_service import GoalService

router = APIRouter(prefix="/finance", tags=["finance"])


async def _load_goal(goal_service: GoalService, user_id: str, goal_id: str) -> Goal:
    try:
        return await goal_service.get_goal(user_id=user_id, goal_id=goal_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/budgets", response_model=list[Budget])
async def list_budgets(
    user_id: str = Depends(get_current_user_id),
    service: FinanceService = Depends(get_finance_service),
):
    """Budgets that are not archived."""
    return await service.available_budgets(user_id)


@router.get("/debts", response_model=list[Debt])
async def list_debts(
    user_id: str = Depends(get_current_user_id),
    service: FinanceService = Depends(get_finance_service),
):
    return await service.list_debts(user_id)


@router.get("/goals/{goal_id}/budget", response_model=Budget | None)
async def get_linked_budget(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    goal_service: GoalService = Depends(get_goal_service),
    service: FinanceService = Depends(get_finance_service),
):
    """Budget linked to a goal, or null."""
    goal = await _load_goal(goal_service, user_id, goal_id)
    return await service.linked_budget(goal)


@router.post("/goals/{goal_id}/budget", response_model=Budget, status_code=status.HTTP_201_CREATED)
async def create_goal_budget(
    goal_id: str,
    budget_create: BudgetCreate,
    user_id: str = Depends(get_current_user_id),
    base_currency: str = Depends(get_base_currency),
    goal_service: GoalService = Depends(get_goal_service),
    service: FinanceService = Depends(get_finance_service),
):
    """
    Create a project budget for a goal and link it.

    - Empty fields fall back to the goal's title, target and currency
    """
    goal = await _load_goal(goal_service, user_id, goal_id)
    return await service.create_and_link_budget(goal, budget_create, base_currency)


@router.put("/goals/{goal_id}/budget/{budget_id}", response_model=Goal)
async def link_budget(
    goal_id: str,
    budget_id: str,
    user_id: str = Depends(get_current_user_id),
    base_currency: str = Depends(get_base_currency),
    goal_service: GoalService = Depends(get_goal_service),
    service: FinanceService = Depends(get_finance_service),
):
    """Link an existing budget. Returns 404 if the budget does not exist."""
    goal = await _load_goal(goal_service, user_id, goal_id)
    try:
        return await service.link_existing_budget(goal, budget_id, base_currency)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/goals/{goal_id}/debt/{debt_id}", response_model=Goal)
async def link_debt(
    goal_id: str,
    debt_id: str,
    user_id: str = Depends(get_current_user_id),
    goal_service: GoalService = Depends(get_goal_service),
    service: FinanceService = Depends(get_finance_service),
):
    """Link a debt. Returns 404 if the debt does not exist."""
    goal = await _load_goal(goal_service, user_id, goal_id)
    try:
        return await service.link_debt(goal, debt_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
