"""Mapping between onboarding scenarios, templates and goals."""
from typing import NamedTuple, Optional

from planner.catalogs.catalog import Catalog, default_catalog
from planner.models.catalog import GoalTemplate, Scenario
from planner.models.goal import FinanceMode, GoalType, MetricKind


class ScenarioMatch(NamedTuple):
    """Goal attributes that identify a scenario. finance_mode None matches any."""

    scenario: Scenario
    goal_type: GoalType
    metric_type: MetricKind
    finance_mode: Optional[FinanceMode] = None


# Checked in order, first match wins
SCENARIO_CANDIDATES: tuple[ScenarioMatch, ...] = (
    ScenarioMatch(Scenario.FINANCIAL_SAVE, GoalType.FINANCIAL, MetricKind.AMOUNT, FinanceMode.SAVE),
    ScenarioMatch(Scenario.FINANCIAL_SPEND, GoalType.FINANCIAL, MetricKind.AMOUNT, FinanceMode.SPEND),
    ScenarioMatch(Scenario.HABIT_SUPPORT, GoalType.HEALTH, MetricKind.COUNT),
    ScenarioMatch(Scenario.SKILL_GROWTH, GoalType.EDUCATION, MetricKind.DURATION),
    ScenarioMatch(Scenario.CUSTOM, GoalType.PERSONAL, MetricKind.CUSTOM),
)


class ScenarioResolver:
    """Resolve scenarios to templates and goals back to scenarios."""

    def __init__(self, catalog: Optional[Catalog] = None):
        """Initialize resolver with a catalog (built-in one by default)."""
        self.catalog = catalog or default_catalog()
        self._template_scenarios = {
            template_id: scenario
            for scenario, template_id in self.catalog.scenario_templates.items()
            if template_id
        }

    def template_for_scenario(self, scenario: Scenario) -> Optional[GoalTemplate]:
        """Template a scenario pre-fills the draft with, or None for custom."""
        template_id = self.catalog.scenario_templates.get(scenario)
        if not template_id:
            return None
        return self.catalog.template(template_id)

    def scenario_for_template(self, template: GoalTemplate) -> Scenario:
        """Scenario a template belongs to, custom if none."""
        return self._template_scenarios.get(template.id, Scenario.CUSTOM)

    def scenario_for_goal(
        self,
        goal_type: GoalType,
        metric_type: MetricKind,
        finance_mode: Optional[FinanceMode] = None,
    ) -> Scenario:
        """
        Resolve the scenario that best describes existing goal attributes.

        Examples:
            >>> ScenarioResolver().scenario_for_goal(
            ...     GoalType.FINANCIAL, MetricKind.AMOUNT, FinanceMode.SAVE
            ... )
            <Scenario.FINANCIAL_SAVE: 'financial_save'>
        """
        for candidate in SCENARIO_CANDIDATES:
            if candidate.goal_type != goal_type or candidate.metric_type != metric_type:
                continue
            if candidate.finance_mode is None or candidate.finance_mode == finance_mode:
                return candidate.scenario
        return Scenario.CUSTOM
