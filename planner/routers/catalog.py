"""Catalog router - read-only units, templates, scenarios and suggestions."""
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from planner.catalogs.catalog import Catalog
from planner.catalogs.units import available_units, smart_default_unit
from planner.dependencies import get_base_currency, get_catalog
from planner.models.catalog import GoalTemplate, HabitSuggestion, Scenario, TaskSuggestion, UnitDefinition
from planner.models.goal import GoalType, MetricKind

router = APIRouter(prefix="/catalog", tags=["catalog"])


class ScenarioOption(BaseModel):
    """Scenario offered by the wizard, with the template it applies."""

    scenario: Scenario
    template: GoalTemplate | None = None


class DefaultUnit(BaseModel):
    unit: str


class SuggestionList(BaseModel):
    goal_type: GoalType
    habits: list[HabitSuggestion]
    tasks: list[TaskSuggestion]


@router.get("/units", response_model=list[UnitDefinition])
async def list_units(
    metric_type: MetricKind = Query(..., description="Draft metric kind"),
    goal_type: GoalType = Query(..., description="Draft goal type"),
    catalog: Catalog = Depends(get_catalog),
):
    """Units eligible for a metric kind and goal type, in catalog order."""
    return available_units(metric_type, goal_type, catalog.units)


@router.get("/units/default", response_model=DefaultUnit)
async def default_unit(
    metric_type: MetricKind = Query(...),
    goal_type: GoalType = Query(...),
):
    """Unit a draft starts with; empty for money goals."""
    return DefaultUnit(unit=smart_default_unit(metric_type, goal_type))


@router.get("/templates", response_model=list[GoalTemplate])
async def list_templates(catalog: Catalog = Depends(get_catalog)):
    return list(catalog.templates)


@router.get("/scenarios", response_model=list[ScenarioOption])
async def list_scenarios(catalog: Catalog = Depends(get_catalog)):
    """Scenarios in display order."""
    options = []
    for scenario in catalog.scenario_order:
        template_id = catalog.scenario_templates.get(scenario)
        options.append(
            ScenarioOption(
                scenario=scenario,
                template=catalog.template(template_id) if template_id else None,
            )
        )
    return options


@router.get("/suggestions/{goal_type}", response_model=SuggestionList)
async def list_suggestions(goal_type: GoalType, catalog: Catalog = Depends(get_catalog)):
    """Every habit and task suggestion for a goal type."""
    return SuggestionList(
        goal_type=goal_type,
        habits=list(catalog.habit_suggestions.get(goal_type, ())),
        tasks=list(catalog.task_suggestions.get(goal_type, ())),
    )


@router.get("/currencies", response_model=list[str])
async def list_currencies(
    base_currency: str = Depends(get_base_currency),
    catalog: Catalog = Depends(get_catalog),
):
    """Currencies for money goals, the user's base currency first."""
    return catalog.currency_options(base_currency)
