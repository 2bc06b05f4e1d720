"""Wizard router - drives the per-user goal wizard."""
from fastapi import APIRouter, Body, Depends, HTTPException, status

from planner.dependencies import get_wizard, get_wizard_registry
from planner.models.wizard import (
    AutoPlanResult,
    OpenRequest,
    SubmitRequest,
    SubmitResult,
    ToggleRequest,
    WizardEvent,
    WizardPhase,
    WizardView,
)
from planner.services.goal_wizard import GoalWizard, WizardStateError
from planner.services.wizard_registry import WizardRegistry

router = APIRouter(prefix="/wizard", tags=["wizard"])


def _conflict(e: WizardStateError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


def _release_if_closed(wizard: GoalWizard, registry: WizardRegistry) -> None:
    if wizard.phase == WizardPhase.CLOSED:
        registry.discard(wizard.user_id)


@router.get("", response_model=WizardView)
async def get_wizard_view(wizard: GoalWizard = Depends(get_wizard)):
    """Current phase, draft and any auto-plan selection."""
    return wizard.view()


@router.post("/open", response_model=WizardView)
async def open_wizard(request: OpenRequest, wizard: GoalWizard = Depends(get_wizard)):
    """
    Open the wizard for a new goal or for editing an existing one.

    - Returns 409 if the wizard is already open
    - Returns 404 if the goal to edit does not exist
    """
    try:
        await wizard.open(request.mode, request.goal_id)
    except WizardStateError as e:
        raise _conflict(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return wizard.view()


@router.post("/events", response_model=WizardView)
async def apply_event(
    event: WizardEvent = Body(...),
    wizard: GoalWizard = Depends(get_wizard),
):
    """
    Apply one field edit to the draft.

    - Returns 409 if the wizard is not open on a draft
    - Returns 400 for unknown units, templates or milestones
    """
    try:
        wizard.apply(event)
    except WizardStateError as e:
        raise _conflict(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return wizard.view()


@router.post("/submit", response_model=SubmitResult)
async def submit(
    request: SubmitRequest,
    wizard: GoalWizard = Depends(get_wizard),
    registry: WizardRegistry = Depends(get_wizard_registry),
):
    """
    Validate and save the draft.

    A rejected submit is still a 200; check accepted and error_key.
    Returns 409 while another save for the same wizard is in flight.
    """
    try:
        result = await wizard.submit(request.action)
    except WizardStateError as e:
        raise _conflict(e)
    _release_if_closed(wizard, registry)
    return result


@router.post("/auto-plan/toggle", response_model=WizardView)
async def toggle_suggestion(request: ToggleRequest, wizard: GoalWizard = Depends(get_wizard)):
    try:
        if request.kind == "habit":
            wizard.toggle_habit(request.suggestion_id)
        else:
            wizard.toggle_task(request.suggestion_id)
    except WizardStateError as e:
        raise _conflict(e)
    return wizard.view()


@router.post("/auto-plan/commit", response_model=AutoPlanResult)
async def commit_auto_plan(
    wizard: GoalWizard = Depends(get_wizard),
    registry: WizardRegistry = Depends(get_wizard_registry),
):
    """Create the selected habits and tasks and close the wizard."""
    try:
        result = await wizard.commit_auto_plan()
    except WizardStateError as e:
        raise _conflict(e)
    _release_if_closed(wizard, registry)
    return result


@router.post("/auto-plan/skip", response_model=WizardView)
async def skip_auto_plan(
    wizard: GoalWizard = Depends(get_wizard),
    registry: WizardRegistry = Depends(get_wizard_registry),
):
    try:
        wizard.skip_auto_plan()
    except WizardStateError as e:
        raise _conflict(e)
    _release_if_closed(wizard, registry)
    return wizard.view()


@router.post("/close", response_model=WizardView)
async def close_wizard(
    wizard: GoalWizard = Depends(get_wizard),
    registry: WizardRegistry = Depends(get_wizard_registry),
):
    """
    Close the wizard and discard the draft.

    - Returns 409 while a save is in flight
    """
    try:
        wizard.close()
    except WizardStateError as e:
        raise _conflict(e)
    _release_if_closed(wizard, registry)
    return wizard.view()
