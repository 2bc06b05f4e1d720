"""Progress and milestone calculations for goals.

Everything here is pure: no store access, no clock reads unless a
timestamp is passed in.
"""
import math
import re
from datetime import datetime
from typing import TYPE_CHECKING, Iterable, Optional

from planner.models.goal import GoalDirection, GoalStats, MetricKind, Milestone

if TYPE_CHECKING:
    from planner.models.draft import MilestoneDraft

_NON_NUMERIC = re.compile(r"[^0-9.,-]")


def parse_numeric_input(text: Optional[str]) -> Optional[float]:
    """
    Parse a number typed into a form field.

    Everything except digits, '.', ',' and '-' is dropped and ',' is read
    as a decimal point.

    Args:
        text: Raw field text

    Returns:
        Parsed number, or None if the text is blank or not a finite number

    Examples:
        >>> parse_numeric_input("$1 500")
        1500.0
        >>> parse_numeric_input("12,5")
        12.5
        >>> parse_numeric_input("   ") is None
        True
    """
    if text is None or not text.strip():
        return None
    normalized = _NON_NUMERIC.sub("", text).replace(",", ".")
    if not normalized:
        return 0.0
    try:
        value = float(normalized)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def clamp_percent(value: float) -> float:
    """Clamp a fraction into [0, 1]; non-finite values become 0."""
    if value is None or not math.isfinite(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


def compute_progress(current: float, target: float) -> float:
    """
    Fraction of the target reached by the current value.

    Raises:
        ValueError: If target is missing or not positive
    """
    if not target or not math.isfinite(target) or target <= 0:
        raise ValueError("Target must be a positive number")
    return clamp_percent(current / target)


def format_milestone_percent(value: float) -> int:
    """Round a 1-100 milestone percent half up and clamp it into [1, 100]."""
    if value is None or not math.isfinite(value):
        return 1
    return max(1, min(100, math.floor(value + 0.5)))


def percent_from_fraction(fraction: Optional[float]) -> int:
    """Convert a stored 0-1 milestone fraction to the 1-100 draft scale."""
    return format_milestone_percent((fraction or 0) * 100)


def build_milestone_payload(drafts: Iterable["MilestoneDraft"]) -> list[Milestone]:
    """
    Convert draft milestones into persisted milestones.

    Titles left blank fall back to "{percent}%". Entries that end up with a
    non-positive fraction are dropped. Completion timestamps carry over.
    """
    milestones = []
    for draft in drafts:
        target_percent = clamp_percent(draft.percent / 100)
        if target_percent <= 0:
            continue
        milestones.append(
            Milestone(
                id=draft.id,
                title=draft.title.strip() or f"{format_milestone_percent(draft.percent)}%",
                target_percent=target_percent,
                due_date=draft.due_date,
                completed_at=draft.completed_at,
            )
        )
    return milestones


def derive_stats_bucket(metric_type: MetricKind, progress: float) -> GoalStats:
    """Put progress into the stats key that matches the metric type."""
    if metric_type == MetricKind.AMOUNT:
        return GoalStats(financial_progress_percent=progress)
    if metric_type == MetricKind.COUNT:
        return GoalStats(tasks_progress_percent=progress)
    return GoalStats(habits_progress_percent=progress)


def resolve_direction(initial_value: float, target_value: float) -> GoalDirection:
    """Infer whether a goal counts up or down from its start and target."""
    if target_value > initial_value:
        return GoalDirection.INCREASE
    if target_value < initial_value:
        return GoalDirection.DECREASE
    return GoalDirection.NEUTRAL


def sync_milestones(
    milestones: list[Milestone],
    progress_percent: float,
    now: datetime,
) -> list[Milestone]:
    """
    Stamp completed_at on milestones the current progress has reached.

    Milestones that are already complete keep their original timestamp.
    """
    progress = clamp_percent(progress_percent)
    synced = []
    for milestone in milestones:
        if milestone.completed_at is None and progress >= milestone.target_percent:
            milestone = milestone.model_copy(update={"completed_at": now})
        synced.append(milestone)
    return synced
