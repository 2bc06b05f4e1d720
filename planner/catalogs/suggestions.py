"""Habit and task suggestions offered after a goal is created."""
from planner.models.catalog import HabitSuggestion, TaskSuggestion
from planner.models.goal import GoalType
from planner.models.habit import HabitFrequency
from planner.models.task import TaskPriority

DAILY = HabitFrequency.DAILY
WEEKLY = HabitFrequency.WEEKLY
HIGH = TaskPriority.HIGH
MEDIUM = TaskPriority.MEDIUM
LOW = TaskPriority.LOW

HABIT_SUGGESTIONS: dict[GoalType, tuple[HabitSuggestion, ...]] = {
    GoalType.FINANCIAL: (
        HabitSuggestion(id="h1", title="Daily Budget Check", description="Review spending every morning", frequency=DAILY),
        HabitSuggestion(id="h2", title="No Impulse Buying", description="24h rule before purchases", frequency=DAILY),
        HabitSuggestion(id="h3", title="Save Receipt", description="Track all transactions", frequency=DAILY),
    ),
    GoalType.HEALTH: (
        HabitSuggestion(id="h4", title="Morning Exercise", description="30 min workout", frequency=DAILY),
        HabitSuggestion(id="h5", title="Water Intake", description="Drink 8 glasses", frequency=DAILY),
        HabitSuggestion(id="h6", title="Meal Prep", description="Prepare healthy meals", frequency=WEEKLY),
    ),
    GoalType.EDUCATION: (
        HabitSuggestion(id="h7", title="Daily Reading", description="Read 30 minutes", frequency=DAILY),
        HabitSuggestion(id="h8", title="Practice Skills", description="Apply what you learned", frequency=DAILY),
        HabitSuggestion(id="h9", title="Take Notes", description="Document key insights", frequency=DAILY),
    ),
    GoalType.PRODUCTIVITY: (
        HabitSuggestion(id="h10", title="Deep Work Block", description="2h focused work", frequency=DAILY),
        HabitSuggestion(id="h11", title="Weekly Review", description="Plan next week", frequency=WEEKLY),
        HabitSuggestion(id="h12", title="Daily Planning", description="Set 3 key tasks", frequency=DAILY),
    ),
    GoalType.PERSONAL: (
        HabitSuggestion(id="h13", title="Meditation", description="10 min mindfulness", frequency=DAILY),
        HabitSuggestion(id="h14", title="Journaling", description="Reflect on your day", frequency=DAILY),
        HabitSuggestion(id="h15", title="Gratitude Practice", description="List 3 things", frequency=DAILY),
    ),
}

TASK_SUGGESTIONS: dict[GoalType, tuple[TaskSuggestion, ...]] = {
    GoalType.FINANCIAL: (
        TaskSuggestion(id="t1", title="Set up budget", description="Create monthly budget plan", priority=HIGH),
        TaskSuggestion(id="t2", title="Review expenses", description="Analyze last month spending", priority=MEDIUM),
        TaskSuggestion(id="t3", title="Automate savings", description="Set up auto-transfer", priority=HIGH),
    ),
    GoalType.HEALTH: (
        TaskSuggestion(id="t4", title="Create workout plan", description="Design weekly routine", priority=HIGH),
        TaskSuggestion(id="t5", title="Schedule check-up", description="Book health appointment", priority=MEDIUM),
        TaskSuggestion(id="t6", title="Buy equipment", description="Get necessary gear", priority=LOW),
    ),
    GoalType.EDUCATION: (
        TaskSuggestion(id="t7", title="Enroll in course", description="Sign up for learning", priority=HIGH),
        TaskSuggestion(id="t8", title="Get materials", description="Buy books/resources", priority=MEDIUM),
        TaskSuggestion(id="t9", title="Set study schedule", description="Plan learning time", priority=HIGH),
    ),
    GoalType.PRODUCTIVITY: (
        TaskSuggestion(id="t10", title="Break down project", description="Create task list", priority=HIGH),
        TaskSuggestion(id="t11", title="Setup workspace", description="Organize environment", priority=MEDIUM),
        TaskSuggestion(id="t12", title="Define milestones", description="Set checkpoints", priority=HIGH),
    ),
    GoalType.PERSONAL: (
        TaskSuggestion(id="t13", title="Define vision", description="Clarify your goal", priority=HIGH),
        TaskSuggestion(id="t14", title="Find accountability", description="Get support buddy", priority=MEDIUM),
        TaskSuggestion(id="t15", title="Track progress", description="Set up measurement", priority=MEDIUM),
    ),
}
