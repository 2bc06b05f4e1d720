"""Goal router - API endpoints for stored goals."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from planner.dependencies import get_goal_service
from planner.models.goal import Goal, GoalPayload, GoalStatus, GoalType
from planner.routers.auth import get_current_user_id
from planner.services.goal_service import GoalService

router = APIRouter(prefix="/goals", tags=["goals"])


@router.post("", response_model=Goal, status_code=status.HTTP_201_CREATED)
async def create_goal(
    payload: GoalPayload,
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """
    Create a goal from a complete payload.

    - Requires authentication
    - Owner is always the authenticated user
    - Direction is derived from the values when not supplied
    """
    return await service.create_goal(payload.model_copy(update={"user_id": user_id}))


@router.get("", response_model=list[Goal])
async def list_goals(
    status_filter: Optional[GoalStatus] = Query(None, alias="status", description="Filter by status"),
    goal_type: Optional[GoalType] = Query(None, description="Filter by goal type"),
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """
    List goals for the authenticated user.

    - Optional filters: status, goal_type
    - Excludes deleted goals
    """
    return await service.list_goals(user_id=user_id, status=status_filter, goal_type=goal_type)


@router.get("/{goal_id}", response_model=Goal)
async def get_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """Get a single goal. Returns 404 if not found or deleted."""
    try:
        return await service.get_goal(user_id=user_id, goal_id=goal_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{goal_id}", response_model=Goal)
async def update_goal(
    goal_id: str,
    payload: GoalPayload,
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """
    Replace a goal's fields with a complete payload.

    - Returns 404 if goal not found
    """
    try:
        return await service.update_goal(goal_id, payload.model_copy(update={"user_id": user_id}))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """Soft delete a goal. Returns 404 if goal not found."""
    try:
        return await service.delete_goal(user_id=user_id, goal_id=goal_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
