"""Measurement unit catalog."""
from planner.models.catalog import UnitCategory, UnitDefinition
from planner.models.goal import GoalType, MetricKind

COUNT = MetricKind.COUNT
DURATION = MetricKind.DURATION
CUSTOM = MetricKind.CUSTOM
HEALTH = GoalType.HEALTH
EDUCATION = GoalType.EDUCATION
PRODUCTIVITY = GoalType.PRODUCTIVITY


def _unit(id, label, icon, category, metric_types, goal_types=None) -> UnitDefinition:
    return UnitDefinition(
        id=id,
        label=label,
        icon=icon,
        category=category,
        metric_types=frozenset(metric_types),
        goal_types=frozenset(goal_types) if goal_types else None,
    )


UNIT_CATEGORY_LABELS: dict[UnitCategory, str] = {
    UnitCategory.TIME: "Time",
    UnitCategory.DISTANCE: "Distance",
    UnitCategory.WEIGHT: "Weight",
    UnitCategory.VOLUME: "Volume",
    UnitCategory.COUNT: "General",
    UnitCategory.OTHER: "Other",
}

UNIT_DEFINITIONS: tuple[UnitDefinition, ...] = (
    # Time
    _unit("minutes", "Minutes", "time-outline", UnitCategory.TIME, [DURATION]),
    _unit("hours", "Hours", "hourglass-outline", UnitCategory.TIME, [DURATION]),
    _unit("days", "Days", "calendar-outline", UnitCategory.TIME, [DURATION]),
    _unit("weeks", "Weeks", "calendar-number-outline", UnitCategory.TIME, [DURATION]),
    _unit("months", "Months", "calendar-clear-outline", UnitCategory.TIME, [DURATION]),
    # Distance
    _unit("km", "Kilometers", "map-outline", UnitCategory.DISTANCE, [COUNT], [HEALTH]),
    _unit("miles", "Miles", "navigate-outline", UnitCategory.DISTANCE, [COUNT], [HEALTH]),
    _unit("meters", "Meters", "trending-up-outline", UnitCategory.DISTANCE, [COUNT], [HEALTH]),
    _unit("steps", "Steps", "footsteps-outline", UnitCategory.DISTANCE, [COUNT], [HEALTH]),
    # Weight
    _unit("kg", "Kilograms", "barbell-outline", UnitCategory.WEIGHT, [COUNT], [HEALTH]),
    _unit("lbs", "Pounds", "scale-outline", UnitCategory.WEIGHT, [COUNT], [HEALTH]),
    _unit("grams", "Grams", "nutrition-outline", UnitCategory.WEIGHT, [COUNT]),
    # Volume
    _unit("liters", "Liters", "water-outline", UnitCategory.VOLUME, [COUNT], [HEALTH]),
    _unit("ml", "Milliliters", "flask-outline", UnitCategory.VOLUME, [COUNT], [HEALTH]),
    _unit("cups", "Cups", "cafe-outline", UnitCategory.VOLUME, [COUNT], [HEALTH]),
    _unit("glasses", "Glasses", "beaker-outline", UnitCategory.VOLUME, [COUNT], [HEALTH]),
    # Count
    _unit("times", "Times", "repeat-outline", UnitCategory.COUNT, [COUNT]),
    _unit("reps", "Reps", "fitness-outline", UnitCategory.COUNT, [COUNT], [HEALTH]),
    _unit("sets", "Sets", "list-outline", UnitCategory.COUNT, [COUNT], [HEALTH]),
    _unit("sessions", "Sessions", "timer-outline", UnitCategory.COUNT, [COUNT, DURATION]),
    _unit("workouts", "Workouts", "barbell-outline", UnitCategory.COUNT, [COUNT], [HEALTH]),
    _unit("calories", "Calories", "flame-outline", UnitCategory.COUNT, [COUNT], [HEALTH]),
    # Education / work
    _unit("pages", "Pages", "document-text-outline", UnitCategory.COUNT, [COUNT], [EDUCATION]),
    _unit("books", "Books", "book-outline", UnitCategory.COUNT, [COUNT], [EDUCATION]),
    _unit("chapters", "Chapters", "reader-outline", UnitCategory.COUNT, [COUNT], [EDUCATION]),
    _unit("lessons", "Lessons", "school-outline", UnitCategory.COUNT, [COUNT], [EDUCATION]),
    _unit("courses", "Courses", "library-outline", UnitCategory.COUNT, [COUNT], [EDUCATION]),
    _unit("tasks", "Tasks", "checkmark-done-outline", UnitCategory.COUNT, [COUNT], [PRODUCTIVITY]),
    _unit("projects", "Projects", "briefcase-outline", UnitCategory.COUNT, [COUNT], [PRODUCTIVITY]),
    # Abstract
    _unit("points", "Points", "star-outline", UnitCategory.OTHER, [COUNT, CUSTOM]),
    _unit("score", "Score", "trophy-outline", UnitCategory.OTHER, [COUNT, CUSTOM]),
    _unit("level", "Level", "stats-chart-outline", UnitCategory.OTHER, [COUNT, CUSTOM]),
    _unit("percent", "Percent", "pie-chart-outline", UnitCategory.OTHER, [COUNT, CUSTOM]),
)


def available_units(
    metric_type: MetricKind,
    goal_type: GoalType,
    units: tuple[UnitDefinition, ...] = UNIT_DEFINITIONS,
) -> list[UnitDefinition]:
    """
    List the units a draft may pick, in catalog order.

    Args:
        metric_type: Draft metric kind
        goal_type: Draft goal type
        units: Unit catalog to filter

    Returns:
        Units whose metric kinds include metric_type and whose goal type
        restriction (if any) includes goal_type
    """
    return [unit for unit in units if unit.is_eligible(metric_type, goal_type)]


def units_by_category(
    units: list[UnitDefinition],
) -> dict[UnitCategory, list[UnitDefinition]]:
    """Group units by category, keeping the first-seen category order."""
    grouped: dict[UnitCategory, list[UnitDefinition]] = {}
    for unit in units:
        grouped.setdefault(unit.category, []).append(unit)
    return grouped


def smart_default_unit(metric_type: MetricKind, goal_type: GoalType) -> str:
    """
    Pick the unit a draft starts with after a metric or goal type change.

    Examples:
        >>> smart_default_unit(MetricKind.COUNT, GoalType.HEALTH)
        'workouts'
        >>> smart_default_unit(MetricKind.AMOUNT, GoalType.FINANCIAL)
        ''
    """
    if metric_type == MetricKind.DURATION:
        return "hours"
    if metric_type == MetricKind.AMOUNT:
        return ""
    if metric_type == MetricKind.COUNT:
        if goal_type == GoalType.HEALTH:
            return "workouts"
        if goal_type == GoalType.EDUCATION:
            return "books"
        if goal_type == GoalType.PRODUCTIVITY:
            return "tasks"
        return "times"
    return "times"
