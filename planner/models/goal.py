"""Goal model definitions."""
from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_serializer, model_validator


class GoalType(str, Enum):
    """Life area a goal belongs to."""

    FINANCIAL = "financial"
    HEALTH = "health"
    EDUCATION = "education"
    PRODUCTIVITY = "productivity"
    PERSONAL = "personal"


class MetricKind(str, Enum):
    """How progress towards a goal is measured."""

    AMOUNT = "amount"
    COUNT = "count"
    DURATION = "duration"
    CUSTOM = "custom"
    # Legacy kinds, still readable but not offered in the wizard
    WEIGHT = "weight"
    NONE = "none"


SELECTABLE_METRICS = (
    MetricKind.AMOUNT,
    MetricKind.COUNT,
    MetricKind.DURATION,
    MetricKind.CUSTOM,
)


class FinanceMode(str, Enum):
    """What an amount goal does with money."""

    SAVE = "save"
    SPEND = "spend"
    DEBT_CLOSE = "debt_close"


class GoalStatus(str, Enum):
    """Goal lifecycle status."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class GoalDirection(str, Enum):
    """Whether the measured value should grow or shrink."""

    INCREASE = "increase"
    DECREASE = "decrease"
    NEUTRAL = "neutral"


class AmountSettings(BaseModel):
    """Metric settings for money goals."""

    kind: Literal["amount"] = "amount"
    currency: str
    finance_mode: FinanceMode = FinanceMode.SAVE


class UnitSettings(BaseModel):
    """Metric settings for every non-money goal."""

    kind: Literal["unit"] = "unit"
    metric_type: MetricKind
    unit: Optional[str] = None

    @field_validator("metric_type")
    @classmethod
    def metric_is_not_amount(cls, value: MetricKind) -> MetricKind:
        if value == MetricKind.AMOUNT:
            raise ValueError("amount goals use AmountSettings")
        return value


MetricSettings = Annotated[
    Union[AmountSettings, UnitSettings],
    Field(discriminator="kind"),
]


class GoalStats(BaseModel):
    """
    Progress bucket for a goal.

    Exactly one key is populated; which one depends on the metric type.
    """

    financial_progress_percent: Optional[float] = None
    tasks_progress_percent: Optional[float] = None
    habits_progress_percent: Optional[float] = None

    @model_validator(mode="after")
    def exactly_one_bucket(self) -> "GoalStats":
        populated = [
            value
            for value in (
                self.financial_progress_percent,
                self.tasks_progress_percent,
                self.habits_progress_percent,
            )
            if value is not None
        ]
        if len(populated) != 1:
            raise ValueError("exactly one progress bucket must be set")
        return self

    @model_serializer(mode="wrap")
    def drop_empty_buckets(self, handler):
        return {key: value for key, value in handler(self).items() if value is not None}


class Milestone(BaseModel):
    """Persisted milestone: a fraction of the goal target."""

    id: str
    title: str
    target_percent: float = Field(gt=0, le=1)
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class GoalPayload(BaseModel):
    """Goal data handed to the goal store on create or update."""

    user_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    goal_type: GoalType
    status: GoalStatus = GoalStatus.ACTIVE
    metric_type: MetricKind
    unit: Optional[str] = None
    initial_value: float = 0
    target_value: float = Field(gt=0)
    finance_mode: Optional[FinanceMode] = None
    currency: Optional[str] = None
    direction: Optional[GoalDirection] = None
    start_date: datetime
    target_date: Optional[datetime] = None
    milestones: list[Milestone] = Field(default_factory=list)
    progress_percent: float = Field(default=0, ge=0, le=1)
    stats: GoalStats
    linked_budget_id: Optional[str] = None
    linked_debt_id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value

    @model_validator(mode="after")
    def metric_fields_are_exclusive(self) -> "GoalPayload":
        if self.metric_type == MetricKind.AMOUNT:
            if self.unit is not None:
                raise ValueError("amount goals cannot have a unit")
            if self.currency is None or self.finance_mode is None:
                raise ValueError("amount goals need currency and finance_mode")
        elif self.currency is not None or self.finance_mode is not None:
            raise ValueError("only amount goals carry currency and finance_mode")
        return self

    @property
    def metric_settings(self) -> Union[AmountSettings, UnitSettings]:
        """Tagged view of the metric fields."""
        if self.metric_type == MetricKind.AMOUNT:
            return AmountSettings(currency=self.currency, finance_mode=self.finance_mode)
        return UnitSettings(metric_type=self.metric_type, unit=self.unit)


def metric_fields(settings: Union[AmountSettings, UnitSettings]) -> dict:
    """Flatten metric settings into GoalPayload keyword arguments."""
    if isinstance(settings, AmountSettings):
        return {
            "metric_type": MetricKind.AMOUNT,
            "unit": None,
            "currency": settings.currency,
            "finance_mode": settings.finance_mode,
        }
    return {
        "metric_type": settings.metric_type,
        "unit": settings.unit,
        "currency": None,
        "finance_mode": None,
    }


class Goal(GoalPayload):
    """Full goal model with database fields."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    direction: GoalDirection = GoalDirection.NEUTRAL
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
