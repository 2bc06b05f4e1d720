"""Tests for Pydantic models."""
from datetime import datetime

import pytest
from pydantic import TypeAdapter, ValidationError


class TestGoalEnums:
    """Tests for goal enums."""

    def test_goal_type_values(self):
        from planner.models.goal import GoalType

        assert [t.value for t in GoalType] == [
            "financial",
            "health",
            "education",
            "productivity",
            "personal",
        ]

    def test_selectable_metrics_exclude_legacy_kinds(self):
        from planner.models.goal import SELECTABLE_METRICS, MetricKind

        assert MetricKind.WEIGHT not in SELECTABLE_METRICS
        assert MetricKind.NONE not in SELECTABLE_METRICS
        assert len(SELECTABLE_METRICS) == 4

    def test_finance_mode_values(self):
        from planner.models.goal import FinanceMode

        assert FinanceMode.SAVE.value == "save"
        assert FinanceMode.SPEND.value == "spend"
        assert FinanceMode.DEBT_CLOSE.value == "debt_close"


class TestMetricSettings:
    """Tests for the tagged metric settings union."""

    def test_discriminates_on_kind(self):
        from planner.models.goal import AmountSettings, MetricSettings, UnitSettings

        adapter = TypeAdapter(MetricSettings)

        amount = adapter.validate_python({"kind": "amount", "currency": "EUR"})
        unit = adapter.validate_python({"kind": "unit", "metric_type": "count", "unit": "books"})

        assert isinstance(amount, AmountSettings)
        assert amount.finance_mode.value == "save"
        assert isinstance(unit, UnitSettings)
        assert unit.unit == "books"

    def test_unit_settings_reject_amount(self):
        from planner.models.goal import MetricKind, UnitSettings

        with pytest.raises(ValidationError):
            UnitSettings(metric_type=MetricKind.AMOUNT, unit="kg")

    def test_metric_fields_flatten_amount(self):
        from planner.models.goal import AmountSettings, FinanceMode, MetricKind, metric_fields

        fields = metric_fields(AmountSettings(currency="USD", finance_mode=FinanceMode.SPEND))

        assert fields == {
            "metric_type": MetricKind.AMOUNT,
            "unit": None,
            "currency": "USD",
            "finance_mode": FinanceMode.SPEND,
        }

    def test_metric_fields_flatten_unit(self):
        from planner.models.goal import MetricKind, UnitSettings, metric_fields

        fields = metric_fields(UnitSettings(metric_type=MetricKind.DURATION, unit="hours"))

        assert fields["unit"] == "hours"
        assert fields["currency"] is None
        assert fields["finance_mode"] is None


class TestGoalStats:
    """Tests for the exactly-one-bucket rule."""

    def test_single_bucket_ok(self):
        from planner.models.goal import GoalStats

        stats = GoalStats(tasks_progress_percent=0.5)

        assert stats.model_dump() == {"tasks_progress_percent": 0.5}

    def test_zero_buckets_rejected(self):
        from planner.models.goal import GoalStats

        with pytest.raises(ValidationError):
            GoalStats()

    def test_two_buckets_rejected(self):
        from planner.models.goal import GoalStats

        with pytest.raises(ValidationError):
            GoalStats(financial_progress_percent=0.1, habits_progress_percent=0.1)


class TestGoalPayload:
    """Tests for GoalPayload validation."""

    def test_amount_payload(self, make_payload):
        payload = make_payload()

        assert payload.unit is None
        assert payload.metric_settings.kind == "amount"
        assert payload.metric_settings.currency == "USD"

    def test_title_is_trimmed(self, make_payload):
        assert make_payload(title="  Buy a bike  ").title == "Buy a bike"

    def test_blank_title_rejected(self, make_payload):
        with pytest.raises(ValidationError):
            make_payload(title="   ")

    def test_target_must_be_positive(self, make_payload):
        with pytest.raises(ValidationError):
            make_payload(target_value=0)

    def test_tiny_positive_target_accepted(self, make_payload):
        assert make_payload(target_value=0.0001).target_value == 0.0001

    def test_amount_with_unit_rejected(self, make_payload):
        with pytest.raises(ValidationError, match="cannot have a unit"):
            make_payload(unit="kg")

    def test_amount_without_currency_rejected(self, make_payload):
        with pytest.raises(ValidationError):
            make_payload(currency=None)

    def test_unit_goal_with_currency_rejected(self, make_payload):
        with pytest.raises(ValidationError, match="only amount goals"):
            make_payload(
                goal_type="health",
                metric_type="count",
                unit="workouts",
                stats={"tasks_progress_percent": 0},
            )

    def test_unit_goal(self, make_payload):
        payload = make_payload(
            goal_type="health",
            metric_type="count",
            unit="workouts",
            currency=None,
            finance_mode=None,
            stats={"tasks_progress_percent": 0},
        )

        assert payload.metric_settings.kind == "unit"
        assert payload.metric_settings.unit == "workouts"

    def test_milestone_fraction_bounds(self):
        from planner.models.goal import Milestone

        assert Milestone(id="m1", title="Half", target_percent=0.5).target_percent == 0.5
        with pytest.raises(ValidationError):
            Milestone(id="m1", title="None", target_percent=0)
        with pytest.raises(ValidationError):
            Milestone(id="m1", title="Over", target_percent=1.5)


class TestGoalModel:
    """Tests for the stored Goal model."""

    def test_goal_serializes_id(self, make_payload):
        from planner.models.goal import Goal

        now = datetime(2025, 1, 1)
        goal = Goal(
            _id="abc",
            created_at=now,
            updated_at=now,
            **make_payload().model_dump(exclude={"direction"}),
        )

        data = goal.model_dump(by_alias=True)
        assert data["id"] == "abc"
        assert goal.direction.value == "neutral"


class TestDraftModels:
    """Tests for draft-side models."""

    def test_empty_draft_defaults(self):
        from planner.models.catalog import Scenario
        from planner.models.draft import GoalDraft
        from planner.models.goal import FinanceMode, GoalType, MetricKind

        draft = GoalDraft.empty("EUR")

        assert draft.title == ""
        assert draft.goal_type == GoalType.FINANCIAL
        assert draft.metric_type == MetricKind.AMOUNT
        assert draft.currency == "EUR"
        assert draft.finance_mode == FinanceMode.SAVE
        assert draft.milestones == []
        assert draft.error_key is None
        assert draft.editing_goal_id is None
        assert draft.selected_scenario == Scenario.CUSTOM

    def test_milestone_draft_percent_clamped(self):
        from planner.models.draft import MilestoneDraft

        assert MilestoneDraft(id="m", percent=0).percent == 1
        assert MilestoneDraft(id="m", percent=250).percent == 100
        assert MilestoneDraft(id="m", percent=32.5).percent == 33

    def test_milestone_draft_clamps_on_assignment(self):
        from planner.models.draft import MilestoneDraft

        milestone = MilestoneDraft(id="m", percent=50)
        milestone.percent = 140

        assert milestone.percent == 100

    def test_date_picker_milestone_needs_id(self):
        from planner.models.draft import DatePickerTarget

        with pytest.raises(ValidationError):
            DatePickerTarget(type="milestone")
        assert DatePickerTarget(type="milestone", milestone_id="m1").milestone_id == "m1"

    def test_wizard_event_union(self):
        from planner.models.wizard import SelectUnit, SetTargetValue, WizardEvent

        adapter = TypeAdapter(WizardEvent)

        assert isinstance(adapter.validate_python({"type": "select_unit", "unit_id": "km"}), SelectUnit)
        assert isinstance(
            adapter.validate_python({"type": "set_target_value", "text": "500"}),
            SetTargetValue,
        )
        with pytest.raises(ValidationError):
            adapter.validate_python({"type": "launch_rocket"})


class TestUserModel:
    """Tests for user models."""

    def test_user_create_with_base_currency(self):
        from planner.models.user import UserCreate

        user = UserCreate(email="a@example.com", name="A", password="pw", base_currency="UZS")

        assert user.base_currency == "UZS"

    def test_user_create_invalid_email(self):
        from planner.models.user import UserCreate

        with pytest.raises(ValidationError):
            UserCreate(email="not-an-email", name="A", password="pw")
