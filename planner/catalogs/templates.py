"""Goal template catalog and scenario links."""
from typing import Optional

from planner.models.catalog import GoalTemplate, Scenario
from planner.models.goal import FinanceMode, GoalType, MetricKind

GOAL_TEMPLATES: tuple[GoalTemplate, ...] = (
    GoalTemplate(
        id="emergency-fund",
        title="Emergency Fund",
        emoji="\U0001F6E1",
        goal_type=GoalType.FINANCIAL,
        metric_kind=MetricKind.AMOUNT,
        finance_mode=FinanceMode.SAVE,
        target_value=10000,
        description="6 months of expenses",
        recommended_percents=(25, 50, 75),
    ),
    GoalTemplate(
        id="debt-free",
        title="Debt Free",
        emoji="\U0001F4B3",
        goal_type=GoalType.FINANCIAL,
        metric_kind=MetricKind.AMOUNT,
        finance_mode=FinanceMode.DEBT_CLOSE,
        recommended_percents=(25, 50, 75, 90),
    ),
    GoalTemplate(
        id="save-vacation",
        title="Save for Vacation",
        emoji="✈",
        goal_type=GoalType.FINANCIAL,
        metric_kind=MetricKind.AMOUNT,
        finance_mode=FinanceMode.SAVE,
        target_value=3000,
        recommended_percents=(50, 100),
    ),
    GoalTemplate(
        id="spend-guardrails",
        title="Spending guardrails",
        emoji="\U0001F9FE",
        goal_type=GoalType.FINANCIAL,
        metric_kind=MetricKind.AMOUNT,
        finance_mode=FinanceMode.SPEND,
        target_value=1200,
        description="Control discretionary categories",
        recommended_percents=(50, 75, 100),
    ),
    GoalTemplate(
        id="fitness-target",
        title="Fitness Goal",
        emoji="\U0001F4AA",
        goal_type=GoalType.HEALTH,
        metric_kind=MetricKind.COUNT,
        default_unit="workouts",
        target_value=100,
        recommended_percents=(25, 50, 75),
    ),
    GoalTemplate(
        id="weight-loss",
        title="Weight Loss",
        emoji="⚖",
        goal_type=GoalType.HEALTH,
        metric_kind=MetricKind.COUNT,
        default_unit="kg",
        target_value=10,
        recommended_percents=(30, 60, 90),
    ),
    GoalTemplate(
        id="learn-skill",
        title="Learn New Skill",
        emoji="\U0001F4DA",
        goal_type=GoalType.EDUCATION,
        metric_kind=MetricKind.DURATION,
        default_unit="hours",
        target_value=100,
        description="Master a new skill",
        recommended_percents=(25, 50, 100),
    ),
    GoalTemplate(
        id="read-books",
        title="Read Books",
        emoji="\U0001F4D6",
        goal_type=GoalType.EDUCATION,
        metric_kind=MetricKind.COUNT,
        default_unit="books",
        target_value=24,
        recommended_percents=(25, 50, 75),
    ),
    GoalTemplate(
        id="career-promotion",
        title="Career Goal",
        emoji="\U0001F3AF",
        goal_type=GoalType.PRODUCTIVITY,
        metric_kind=MetricKind.CUSTOM,
        description="Achieve next level",
    ),
    GoalTemplate(
        id="side-project",
        title="Side Project",
        emoji="\U0001F680",
        goal_type=GoalType.PRODUCTIVITY,
        metric_kind=MetricKind.COUNT,
        default_unit="tasks",
        target_value=50,
        recommended_percents=(25, 50, 75, 100),
    ),
    GoalTemplate(
        id="meditation-practice",
        title="Meditation Practice",
        emoji="\U0001F9D8",
        goal_type=GoalType.PERSONAL,
        metric_kind=MetricKind.DURATION,
        default_unit="hours",
        target_value=50,
        recommended_percents=(30, 60, 90),
    ),
)

SCENARIO_ORDER: tuple[Scenario, ...] = (
    Scenario.FINANCIAL_SAVE,
    Scenario.FINANCIAL_SPEND,
    Scenario.HABIT_SUPPORT,
    Scenario.SKILL_GROWTH,
    Scenario.CUSTOM,
)

SCENARIO_TEMPLATE_MAP: dict[Scenario, Optional[str]] = {
    Scenario.FINANCIAL_SAVE: "emergency-fund",
    Scenario.FINANCIAL_SPEND: "spend-guardrails",
    Scenario.HABIT_SUPPORT: "fitness-target",
    Scenario.SKILL_GROWTH: "learn-skill",
    Scenario.CUSTOM: None,
}
