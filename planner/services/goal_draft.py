"""Goal draft editing - every field mutation the goal wizard performs."""
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Union
from uuid import uuid4

import structlog

from planner.catalogs.catalog import Catalog, default_catalog
from planner.catalogs.units import available_units, smart_default_unit, units_by_category
from planner.models.catalog import GoalTemplate, Scenario, UnitCategory, UnitDefinition
from planner.models.draft import (
    DatePickerTarget,
    ErrorKey,
    GoalDraft,
    MilestoneDraft,
    PickerState,
)
from planner.models.goal import (
    SELECTABLE_METRICS,
    AmountSettings,
    FinanceMode,
    Goal,
    GoalPayload,
    GoalStatus,
    GoalType,
    MetricKind,
    UnitSettings,
    metric_fields,
)
from planner.services.scenario_resolver import ScenarioResolver
from planner.utils.progress import (
    build_milestone_payload,
    compute_progress,
    derive_stats_bucket,
    format_milestone_percent,
    parse_numeric_input,
    percent_from_fraction,
)

logger = structlog.get_logger(__name__)

CUSTOM_UNIT = "custom"


def generate_milestone_id() -> str:
    """Generate an id for a new draft milestone."""
    return f"goal-ms-{uuid4().hex[:12]}"


def format_number(value: Optional[float]) -> str:
    """Render a stored number back into form text."""
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    # positional digits only; exponent text would not parse back
    text = format(Decimal(repr(float(value))), "f")
    return text.rstrip("0").rstrip(".")


class GoalDraftEditor:
    """
    Owns a GoalDraft and applies wizard edits to it.

    The editor keeps the amount/unit exclusivity of the draft intact: money
    goals carry currency and finance mode, everything else carries a unit.
    """

    def __init__(
        self,
        base_currency: str,
        catalog: Optional[Catalog] = None,
        resolver: Optional[ScenarioResolver] = None,
        id_factory: Callable[[], str] = generate_milestone_id,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        """
        Initialize editor with an empty draft.

        Args:
            base_currency: Default currency for money goals
            catalog: Static catalogs (built-in by default)
            resolver: Scenario resolver sharing the same catalog
            id_factory: Milestone id generator
            clock: Source of "now" for date defaults
        """
        self.base_currency = base_currency
        self.catalog = catalog or default_catalog()
        self.resolver = resolver or ScenarioResolver(self.catalog)
        self.id_factory = id_factory
        self.clock = clock
        self.draft = GoalDraft.empty(base_currency)

    # Lifecycle

    def reset(self) -> None:
        """Restore every field to wizard defaults."""
        self.draft = GoalDraft.empty(self.base_currency)

    def hydrate(self, goal: Goal) -> None:
        """
        Load an existing goal into the draft for editing.

        A unit that matches the catalog is selected as-is; any other
        non-empty unit becomes a custom unit.
        """
        existing_unit = goal.unit or ""
        if self.catalog.unit(existing_unit):
            unit, custom_unit, show_custom = existing_unit, "", False
        elif existing_unit:
            unit, custom_unit, show_custom = CUSTOM_UNIT, existing_unit, True
        else:
            unit, custom_unit, show_custom = "", "", False

        self.draft = GoalDraft(
            title=goal.title,
            description=goal.description or "",
            goal_type=goal.goal_type,
            metric_type=goal.metric_type,
            current_value_text=format_number(goal.initial_value),
            target_value_text=format_number(goal.target_value),
            unit=unit,
            custom_unit=custom_unit,
            show_custom_unit=show_custom,
            currency=goal.currency or self.base_currency,
            finance_mode=goal.finance_mode or FinanceMode.SAVE,
            start_date=goal.start_date,
            target_date=goal.target_date,
            milestones=[
                MilestoneDraft(
                    id=milestone.id,
                    title=milestone.title,
                    percent=percent_from_fraction(milestone.target_percent),
                    due_date=milestone.due_date,
                    completed_at=milestone.completed_at,
                )
                for milestone in goal.milestones
            ],
            linked_budget_id=goal.linked_budget_id,
            linked_debt_id=goal.linked_debt_id,
            editing_goal_id=goal.id,
            selected_scenario=self.resolver.scenario_for_goal(
                goal.goal_type, goal.metric_type, goal.finance_mode
            ),
        )

    def clear_content(self) -> None:
        """Clear content fields after a quick-create, keeping type and metric choices."""
        self.draft.title = ""
        self.draft.description = ""
        self.draft.current_value_text = ""
        self.draft.target_value_text = ""
        self.draft.milestones = []
        self.draft.error_key = None

    # Text fields

    def set_title(self, value: str) -> None:
        self.draft.title = value
        self.draft.error_key = None

    def set_description(self, value: str) -> None:
        self.draft.description = value

    def set_target_value_text(self, value: str) -> None:
        self.draft.target_value_text = value
        self.draft.error_key = None

    def set_current_value_text(self, value: str) -> None:
        self.draft.current_value_text = value
        self.draft.error_key = None

    # Type, metric and scenario

    def handle_metric_change(self, metric: MetricKind) -> None:
        """
        Switch the metric kind.

        Leaving money resets the finance mode and picks a smart default
        unit; entering money drops the unit and makes sure a currency is set.

        Raises:
            ValueError: If the metric kind is not offered by the wizard
        """
        if metric not in SELECTABLE_METRICS:
            raise ValueError(f"Metric type '{metric.value}' is not selectable")

        self.draft.metric_type = metric
        if metric != MetricKind.AMOUNT:
            self.draft.finance_mode = FinanceMode.SAVE
            self._set_catalog_unit(smart_default_unit(metric, self.draft.goal_type))
        else:
            self.draft.currency = self.draft.currency or self.base_currency
            self.draft.unit = ""

    def handle_goal_type_change(self, goal_type: GoalType) -> None:
        """Switch the goal type, refreshing the default unit for non-money goals."""
        self.draft.goal_type = goal_type
        if self.draft.metric_type != MetricKind.AMOUNT:
            self._set_catalog_unit(smart_default_unit(self.draft.metric_type, goal_type))

    def handle_scenario_select(self, scenario: Scenario) -> None:
        """Select a scenario and apply its template, if it has one."""
        self.draft.selected_scenario = scenario
        template = self.resolver.template_for_scenario(scenario)
        if template:
            self.apply_template(template, scenario_override=scenario)

    def apply_template(
        self,
        template: GoalTemplate,
        scenario_override: Optional[Scenario] = None,
    ) -> None:
        """
        Pre-fill the draft from a template.

        Title, description, goal type and metric are always overwritten.
        Finance mode, unit, target and milestones only when the template
        defines them.
        """
        self.draft.selected_scenario = (
            scenario_override or self.resolver.scenario_for_template(template)
        )
        self.draft.error_key = None
        self.draft.title = template.title
        self.draft.description = template.description or ""
        self.draft.goal_type = template.goal_type
        self.draft.metric_type = template.metric_kind

        if template.finance_mode:
            self.draft.finance_mode = template.finance_mode

        if template.default_unit:
            self._set_catalog_unit(template.default_unit)

        if template.target_value:
            self.draft.target_value_text = format_number(template.target_value)

        if template.recommended_percents:
            self.draft.milestones = [
                MilestoneDraft(
                    id=self.id_factory(),
                    title=f"{percent}% Complete",
                    percent=percent,
                )
                for percent in template.recommended_percents
            ]

    def apply_template_by_id(self, template_id: str) -> None:
        """
        Apply a catalog template by id.

        Raises:
            ValueError: If the template does not exist
        """
        template = self.catalog.template(template_id)
        if not template:
            raise ValueError("Template not found")
        self.apply_template(template)

    # Money and units

    def set_finance_mode(self, mode: FinanceMode) -> None:
        self.draft.finance_mode = mode

    def set_currency(self, currency: str) -> None:
        self.draft.currency = currency.upper()

    def select_unit(self, unit_id: str) -> None:
        """
        Pick a catalog unit, or "custom" to type a free-text unit.

        Raises:
            ValueError: If the unit is not in the catalog
        """
        if unit_id == CUSTOM_UNIT:
            self.draft.unit = CUSTOM_UNIT
            self.draft.show_custom_unit = True
            return
        if not self.catalog.unit(unit_id):
            raise ValueError("Unit not found")
        self._set_catalog_unit(unit_id)

    def set_custom_unit(self, value: str) -> None:
        self.draft.unit = CUSTOM_UNIT
        self.draft.show_custom_unit = True
        self.draft.custom_unit = value

    def available_units(self) -> list[UnitDefinition]:
        """Catalog units eligible for the current metric and goal type."""
        return available_units(self.draft.metric_type, self.draft.goal_type, self.catalog.units)

    def units_by_category(self) -> dict[UnitCategory, list[UnitDefinition]]:
        return units_by_category(self.available_units())

    def _set_catalog_unit(self, unit_id: str) -> None:
        self.draft.unit = unit_id
        self.draft.show_custom_unit = False
        self.draft.custom_unit = ""

    # Finance links

    def link_budget(self, budget_id: Optional[str]) -> None:
        self.draft.linked_budget_id = budget_id

    def link_debt(self, debt_id: Optional[str]) -> None:
        self.draft.linked_debt_id = debt_id

    # Milestones

    def add_milestone(self) -> MilestoneDraft:
        """Append a milestone 25 points after the last one (capped at 100)."""
        last_percent = self.draft.milestones[-1].percent if self.draft.milestones else 0
        percent = format_milestone_percent(last_percent + 25)
        milestone = MilestoneDraft(
            id=self.id_factory(),
            title=f"{percent}% Complete",
            percent=percent,
        )
        self.draft.milestones = [*self.draft.milestones, milestone]
        return milestone

    def update_milestone(
        self,
        milestone_id: str,
        title: Optional[str] = None,
        percent: Optional[float] = None,
        due_date: Optional[datetime] = None,
    ) -> None:
        """
        Merge changes into one milestone; percent is re-clamped into [1, 100].

        Raises:
            ValueError: If no milestone has the given id
        """
        milestone = self._find_milestone(milestone_id)
        updates = {}
        if title is not None:
            updates["title"] = title
        if percent is not None:
            updates["percent"] = format_milestone_percent(percent)
        if due_date is not None:
            updates["due_date"] = due_date
        updated = milestone.model_copy(update=updates)
        self.draft.milestones = [
            updated if item.id == milestone_id else item for item in self.draft.milestones
        ]

    def remove_milestone(self, milestone_id: str) -> None:
        self.draft.milestones = [
            item for item in self.draft.milestones if item.id != milestone_id
        ]

    def _find_milestone(self, milestone_id: str) -> MilestoneDraft:
        for milestone in self.draft.milestones:
            if milestone.id == milestone_id:
                return milestone
        raise ValueError("Milestone not found")

    # Dates

    def open_date_picker(self, target: DatePickerTarget) -> PickerState:
        """Open a picker on the target's current date, or now if unset."""
        if target.type == "start":
            current = self.draft.start_date
        elif target.type == "due":
            current = self.draft.target_date
        else:
            current = self._find_milestone(target.milestone_id).due_date
        self.draft.picker = PickerState(target=target, value=current or self.clock())
        return self.draft.picker

    def apply_date_value(self, target: DatePickerTarget, value: datetime) -> None:
        """Write a picked date into its field and close the picker."""
        if target.type == "start":
            self.draft.start_date = value
        elif target.type == "due":
            self.draft.target_date = value
        else:
            self.update_milestone(target.milestone_id, due_date=value)
        self.draft.picker = None

    def dismiss_date_picker(self) -> None:
        self.draft.picker = None

    # Submission

    @property
    def can_submit(self) -> bool:
        """Whether the primary action would pass validation."""
        target = parse_numeric_input(self.draft.target_value_text)
        return bool(self.draft.title.strip()) and target is not None and target > 0

    def metric_settings(self) -> Union[AmountSettings, UnitSettings]:
        """Tagged metric settings for the payload."""
        if self.draft.metric_type == MetricKind.AMOUNT:
            return AmountSettings(
                currency=self.draft.currency or self.base_currency,
                finance_mode=self.draft.finance_mode,
            )
        return UnitSettings(metric_type=self.draft.metric_type, unit=self._final_unit())

    def _final_unit(self) -> Optional[str]:
        if self.draft.show_custom_unit:
            return self.draft.custom_unit.strip() or None
        if self.draft.unit and self.draft.unit != CUSTOM_UNIT:
            return self.draft.unit
        return None

    def build_payload(self, user_id: Optional[str]) -> Optional[GoalPayload]:
        """
        Validate the draft and shape the goal payload.

        On failure the error key is stored on the draft and None is returned.

        Args:
            user_id: Owner written into the payload

        Returns:
            Goal payload ready for the goal store, or None if validation failed
        """
        title = self.draft.title.strip()
        if not title:
            return self._reject(ErrorKey.MISSING_TITLE)

        target = parse_numeric_input(self.draft.target_value_text)
        if target is None or target <= 0:
            return self._reject(ErrorKey.INVALID_TARGET)

        current = parse_numeric_input(self.draft.current_value_text)
        if current is None:
            current = 0.0

        progress = compute_progress(current, target)

        return GoalPayload(
            user_id=user_id,
            title=title,
            description=self.draft.description.strip() or None,
            goal_type=self.draft.goal_type,
            status=GoalStatus.ACTIVE,
            initial_value=current,
            target_value=target,
            start_date=self.draft.start_date or self.clock(),
            target_date=self.draft.target_date,
            milestones=build_milestone_payload(self.draft.milestones),
            progress_percent=progress,
            stats=derive_stats_bucket(self.draft.metric_type, progress),
            linked_budget_id=self.draft.linked_budget_id,
            linked_debt_id=self.draft.linked_debt_id,
            **metric_fields(self.metric_settings()),
        )

    def _reject(self, error_key: ErrorKey) -> None:
        self.draft.error_key = error_key
        logger.info("goal_submit_rejected", error_key=error_key.value)
        return None
