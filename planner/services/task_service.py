"""Task service - MongoDB persistence for tasks."""
from datetime import datetime
from typing import Optional

import structlog

from planner.models.task import Task, TaskCreate, TaskStatus
from planner.services.stores import TaskStore

logger = structlog.get_logger(__name__)


class TaskService(TaskStore):
    """Service for handling task operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.tasks = db["tasks"]

    def _doc_to_task(self, doc: dict) -> Task:
        """
        Convert database document to Task model.

        Handles datetime to date conversion for the due field.
        """
        return Task(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            goal_id=doc.get("goal_id"),
            title=doc["title"],
            description=doc.get("description"),
            priority=doc["priority"],
            context=doc.get("context", "personal"),
            status=doc["status"],
            due=doc["due"].date() if doc.get("due") and isinstance(doc["due"], datetime) else doc.get("due"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def create_task(self, payload: TaskCreate) -> Task:
        """
        Create a new task.

        Args:
            payload: Task creation data; user_id must be set

        Returns:
            Created task object

        Raises:
            ValueError: If the payload has no owner
        """
        if not payload.user_id:
            raise ValueError("Task payload is missing user_id")

        now = datetime.utcnow()
        task_doc = {
            "user_id": payload.user_id,
            "goal_id": payload.goal_id,
            "title": payload.title,
            "description": payload.description,
            "priority": payload.priority.value,
            "context": payload.context,
            "status": TaskStatus.INBOX.value,
            "deleted": False,
            "created_at": now,
            "updated_at": now,
        }

        # Dates are stored as datetimes
        if payload.due:
            task_doc["due"] = datetime.combine(payload.due, datetime.min.time())

        result = await self.tasks.insert_one(task_doc)
        task_doc["_id"] = result.inserted_id

        logger.info("task_created", task_id=str(result.inserted_id), goal_id=payload.goal_id)
        return self._doc_to_task(task_doc)

    async def list_tasks(
        self,
        user_id: str,
        goal_id: Optional[str] = None,
        status: Optional[TaskStatus] = None,
    ) -> list[Task]:
        """
        List tasks for a user with optional filtering.

        Returns:
            List of tasks
        """
        query = {"user_id": user_id, "deleted": False}
        if goal_id:
            query["goal_id"] = goal_id
        if status:
            query["status"] = status.value

        cursor = self.tasks.find(query)
        task_docs = await cursor.to_list(length=None)

        return [self._doc_to_task(doc) for doc in task_docs]
