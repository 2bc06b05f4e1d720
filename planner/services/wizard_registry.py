"""In-memory registry of open goal wizards, one per user."""
from typing import Callable, Optional

from planner.services.goal_wizard import GoalWizard


class WizardRegistry:
    """Keeps each user's wizard alive between requests."""

    def __init__(self):
        self._wizards: dict[str, GoalWizard] = {}

    def get(self, user_id: str) -> Optional[GoalWizard]:
        return self._wizards.get(user_id)

    def get_or_create(self, user_id: str, factory: Callable[[], GoalWizard]) -> GoalWizard:
        """Return the user's wizard, creating a closed one on first use."""
        wizard = self._wizards.get(user_id)
        if wizard is None:
            wizard = factory()
            self._wizards[user_id] = wizard
        return wizard

    def discard(self, user_id: str) -> None:
        """Forget the user's wizard; the next request gets a fresh one."""
        self._wizards.pop(user_id, None)


# Global registry instance
wizard_registry = WizardRegistry()
