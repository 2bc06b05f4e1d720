"""Immutable bundle of every static catalog the goal engine reads."""
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel

from planner.catalogs.suggestions import HABIT_SUGGESTIONS, TASK_SUGGESTIONS
from planner.catalogs.templates import (
    GOAL_TEMPLATES,
    SCENARIO_ORDER,
    SCENARIO_TEMPLATE_MAP,
)
from planner.catalogs.units import UNIT_CATEGORY_LABELS, UNIT_DEFINITIONS
from planner.models.catalog import (
    GoalTemplate,
    HabitSuggestion,
    Scenario,
    TaskSuggestion,
    UnitCategory,
    UnitDefinition,
)
from planner.models.goal import GoalType

AVAILABLE_CURRENCIES: tuple[str, ...] = ("UZS", "USD", "EUR", "GBP", "TRY", "SAR")


class Catalog(BaseModel):
    """
    Static lookup tables injected into the goal engine.

    Built once at startup by default_catalog(); tests may build their own.
    """

    units: tuple[UnitDefinition, ...]
    unit_category_labels: dict[UnitCategory, str]
    templates: tuple[GoalTemplate, ...]
    scenario_order: tuple[Scenario, ...]
    scenario_templates: dict[Scenario, Optional[str]]
    habit_suggestions: dict[GoalType, tuple[HabitSuggestion, ...]]
    task_suggestions: dict[GoalType, tuple[TaskSuggestion, ...]]
    currencies: tuple[str, ...] = AVAILABLE_CURRENCIES

    model_config = {"frozen": True}

    def template(self, template_id: str) -> Optional[GoalTemplate]:
        """Look up a template by id."""
        return next((t for t in self.templates if t.id == template_id), None)

    def unit(self, unit_id: str) -> Optional[UnitDefinition]:
        """Look up a unit by id."""
        return next((u for u in self.units if u.id == unit_id), None)

    def currency_options(self, base_currency: str) -> list[str]:
        """Currencies offered for money goals, base currency first."""
        ordered = [base_currency]
        ordered.extend(code for code in self.currencies if code != base_currency)
        return ordered


@lru_cache
def default_catalog() -> Catalog:
    """Build the built-in catalog."""
    return Catalog(
        units=UNIT_DEFINITIONS,
        unit_category_labels=UNIT_CATEGORY_LABELS,
        templates=GOAL_TEMPLATES,
        scenario_order=SCENARIO_ORDER,
        scenario_templates=SCENARIO_TEMPLATE_MAP,
        habit_suggestions=HABIT_SUGGESTIONS,
        task_suggestions=TASK_SUGGESTIONS,
    )
