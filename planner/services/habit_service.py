"""Habit service - MongoDB persistence for habits."""
from datetime import datetime
from typing import Optional

import structlog

from planner.models.habit import Habit, HabitCreate
from planner.services.stores import HabitStore

logger = structlog.get_logger(__name__)


class HabitService(HabitStore):
    """Service for handling habit operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.habits = db["habits"]

    def _doc_to_habit(self, doc: dict) -> Habit:
        """Convert database document to Habit model."""
        return Habit(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            goal_id=doc.get("goal_id"),
            title=doc["title"],
            description=doc.get("description"),
            frequency=doc["frequency"],
            completion_mode=doc["completion_mode"],
            status=doc["status"],
            habit_type=doc["habit_type"],
            completion_history=doc.get("completion_history", []),
            streak_current=doc.get("streak_current", 0),
            streak_best=doc.get("streak_best", 0),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def create_habit(self, payload: HabitCreate) -> Habit:
        """
        Create a new habit.

        Args:
            payload: Habit creation data; user_id must be set

        Returns:
            Created habit object

        Raises:
            ValueError: If the payload has no owner
        """
        if not payload.user_id:
            raise ValueError("Habit payload is missing user_id")

        now = datetime.utcnow()
        habit_doc = {
            "user_id": payload.user_id,
            "goal_id": payload.goal_id,
            "title": payload.title,
            "description": payload.description,
            "frequency": payload.frequency.value,
            "completion_mode": payload.completion_mode.value,
            "status": payload.status.value,
            "habit_type": payload.habit_type.value,
            "completion_history": list(payload.completion_history),
            "streak_current": 0,
            "streak_best": 0,
            "deleted": False,
            "created_at": now,
            "updated_at": now,
        }

        result = await self.habits.insert_one(habit_doc)
        habit_doc["_id"] = result.inserted_id

        logger.info("habit_created", habit_id=str(result.inserted_id), goal_id=payload.goal_id)
        return self._doc_to_habit(habit_doc)

    async def list_habits(self, user_id: str, goal_id: Optional[str] = None) -> list[Habit]:
        """
        List habits for a user, optionally only those supporting one goal.

        Returns:
            List of habits
        """
        query = {"user_id": user_id, "deleted": False}
        if goal_id:
            query["goal_id"] = goal_id

        cursor = self.habits.find(query)
        habit_docs = await cursor.to_list(length=None)

        return [self._doc_to_habit(doc) for doc in habit_docs]
