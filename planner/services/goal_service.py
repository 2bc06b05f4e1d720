"""Goal service - MongoDB persistence for goals."""
from datetime import datetime
from typing import Optional

import structlog
from bson import ObjectId

from planner.models.goal import Goal, GoalPayload, GoalStats, GoalStatus, GoalType, Milestone
from planner.services.stores import GoalStore
from planner.utils.progress import resolve_direction, sync_milestones

logger = structlog.get_logger(__name__)


class GoalService(GoalStore):
    """Service for handling goal operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.goals = db["goals"]

    def _doc_to_goal(self, doc: dict) -> Goal:
        """Convert database document to Goal model."""
        return Goal(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            title=doc["title"],
            description=doc.get("description"),
            goal_type=doc["goal_type"],
            status=doc.get("status", GoalStatus.ACTIVE.value),
            metric_type=doc["metric_type"],
            unit=doc.get("unit"),
            initial_value=doc.get("initial_value", 0),
            target_value=doc["target_value"],
            finance_mode=doc.get("finance_mode"),
            currency=doc.get("currency"),
            direction=doc.get("direction", "neutral"),
            start_date=doc["start_date"],
            target_date=doc.get("target_date"),
            milestones=[Milestone(**item) for item in doc.get("milestones", [])],
            progress_percent=doc.get("progress_percent", 0),
            stats=GoalStats(**doc["stats"]),
            linked_budget_id=doc.get("linked_budget_id"),
            linked_debt_id=doc.get("linked_debt_id"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    def _payload_to_doc(self, payload: GoalPayload, now: datetime) -> dict:
        """
        Convert a goal payload to its stored fields.

        Direction is derived from the values unless the payload carries one,
        and milestones already reached are stamped complete.
        """
        direction = payload.direction or resolve_direction(
            payload.initial_value, payload.target_value
        )
        milestones = sync_milestones(payload.milestones, payload.progress_percent, now)

        return {
            "title": payload.title,
            "description": payload.description,
            "goal_type": payload.goal_type.value,
            "status": payload.status.value,
            "metric_type": payload.metric_type.value,
            "unit": payload.unit,
            "initial_value": payload.initial_value,
            "target_value": payload.target_value,
            "finance_mode": payload.finance_mode.value if payload.finance_mode else None,
            "currency": payload.currency,
            "direction": direction.value,
            "start_date": payload.start_date,
            "target_date": payload.target_date,
            "milestones": [milestone.model_dump() for milestone in milestones],
            "progress_percent": payload.progress_percent,
            "stats": payload.stats.model_dump(exclude_none=True),
            "linked_budget_id": payload.linked_budget_id,
            "linked_debt_id": payload.linked_debt_id,
            "updated_at": now,
        }

    @staticmethod
    def _object_id(goal_id: str) -> ObjectId:
        try:
            return ObjectId(goal_id)
        except Exception:
            raise ValueError("Invalid goal ID format")

    async def create_goal(self, payload: GoalPayload) -> Goal:
        """
        Create a new goal.

        Args:
            payload: Validated goal payload; user_id must be set

        Returns:
            Created goal object

        Raises:
            ValueError: If the payload has no owner
        """
        if not payload.user_id:
            raise ValueError("Goal payload is missing user_id")

        now = datetime.utcnow()
        goal_doc = self._payload_to_doc(payload, now)
        goal_doc.update({
            "user_id": payload.user_id,
            "deleted": False,
            "created_at": now,
        })

        # Insert into database
        result = await self.goals.insert_one(goal_doc)
        goal_doc["_id"] = result.inserted_id

        logger.info(
            "goal_created",
            goal_id=str(result.inserted_id),
            user_id=payload.user_id,
            goal_type=payload.goal_type.value,
            metric_type=payload.metric_type.value,
        )
        return self._doc_to_goal(goal_doc)

    async def list_goals(
        self,
        user_id: str,
        status: Optional[GoalStatus] = None,
        goal_type: Optional[GoalType] = None,
    ) -> list[Goal]:
        """
        List goals for a user with optional filtering.

        Args:
            user_id: User ID
            status: Optional status filter
            goal_type: Optional goal type filter

        Returns:
            List of goals
        """
        query = {
            "user_id": user_id,
            "deleted": False,
        }

        if status:
            query["status"] = status.value
        if goal_type:
            query["goal_type"] = goal_type.value

        cursor = self.goals.find(query)
        goal_docs = await cursor.to_list(length=None)

        return [self._doc_to_goal(doc) for doc in goal_docs]

    async def get_goal(self, user_id: str, goal_id: str) -> Goal:
        """
        Get a single goal by ID.

        Raises:
            ValueError: If goal not found or invalid ID format
        """
        goal_doc = await self.goals.find_one({
            "_id": self._object_id(goal_id),
            "user_id": user_id,
            "deleted": False,
        })

        if not goal_doc:
            raise ValueError("Goal not found")

        return self._doc_to_goal(goal_doc)

    async def update_goal(self, goal_id: str, payload: GoalPayload) -> Goal:
        """
        Update a goal with a full payload.

        Args:
            goal_id: Goal ID
            payload: Validated goal payload; user_id scopes the lookup

        Returns:
            Updated goal

        Raises:
            ValueError: If goal not found or invalid ID format
        """
        object_id = self._object_id(goal_id)
        query = {"_id": object_id, "user_id": payload.user_id, "deleted": False}

        existing = await self.goals.find_one(query)
        if not existing:
            raise ValueError("Goal not found")

        update_doc = self._payload_to_doc(payload, datetime.utcnow())

        updated_doc = await self.goals.find_one_and_update(
            query,
            {"$set": update_doc},
            return_document=True,
        )

        logger.info("goal_updated", goal_id=goal_id, user_id=payload.user_id)
        return self._doc_to_goal(updated_doc)

    async def set_finance_link(
        self,
        user_id: str,
        goal_id: str,
        fields: dict,
    ) -> Goal:
        """
        Set finance link fields (linked budget/debt, currency) on a goal.

        Raises:
            ValueError: If goal not found
        """
        query = {"_id": self._object_id(goal_id), "user_id": user_id, "deleted": False}
        update_doc = {**fields, "updated_at": datetime.utcnow()}

        updated_doc = await self.goals.find_one_and_update(
            query,
            {"$set": update_doc},
            return_document=True,
        )
        if not updated_doc:
            raise ValueError("Goal not found")

        return self._doc_to_goal(updated_doc)

    async def delete_goal(self, user_id: str, goal_id: str) -> dict:
        """
        Soft delete a goal.

        Returns:
            Dictionary with deleted_count

        Raises:
            ValueError: If goal not found
        """
        object_id = self._object_id(goal_id)

        existing = await self.goals.find_one({
            "_id": object_id,
            "user_id": user_id,
            "deleted": False,
        })

        if not existing:
            raise ValueError("Goal not found")

        result = await self.goals.update_one(
            {"_id": object_id, "user_id": user_id},
            {
                "$set": {
                    "deleted": True,
                    "deleted_at": datetime.utcnow(),
                }
            },
        )

        return {"deleted_count": result.modified_count}
