"""Finance link service - budgets and debts a goal can be tied to.

Only lookups and link bookkeeping live here. Goal progress is never
derived from budget spending.
"""
from datetime import datetime
from typing import Optional

import structlog
from bson import ObjectId

from planner.models.finance import Budget, BudgetCreate, BudgetFlowType, Debt
from planner.models.goal import FinanceMode, Goal, MetricKind
from planner.services.goal_service import GoalService

logger = structlog.get_logger(__name__)


def default_budget_name(goal: Goal) -> str:
    """Name given to a budget created for a goal."""
    return f"Budget · {goal.title}" if goal.title else "Goal budget"


class FinanceService:
    """Service for reading budgets/debts and linking them to goals."""

    def __init__(self, db, goal_service: Optional[GoalService] = None):
        """Initialize service with database connection."""
        self.db = db
        self.budgets = db["budgets"]
        self.debts = db["debts"]
        self.goal_service = goal_service or GoalService(db)

    def _doc_to_budget(self, doc: dict) -> Budget:
        """Convert database document to Budget model."""
        return Budget(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            name=doc["name"],
            budget_type=doc.get("budget_type", "project"),
            linked_goal_id=doc.get("linked_goal_id"),
            account_id=doc.get("account_id"),
            transaction_type=doc.get("transaction_type", BudgetFlowType.EXPENSE.value),
            currency=doc["currency"],
            limit_amount=doc.get("limit_amount", 0),
            period_type=doc.get("period_type", "none"),
            spent_amount=doc.get("spent_amount", 0),
            is_archived=doc.get("is_archived", False),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    def _doc_to_debt(self, doc: dict) -> Debt:
        """Convert database document to Debt model."""
        return Debt(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            counterparty_name=doc["counterparty_name"],
            description=doc.get("description"),
            principal_amount=doc["principal_amount"],
            principal_currency=doc["principal_currency"],
            due_date=doc.get("due_date"),
            linked_goal_id=doc.get("linked_goal_id"),
            status=doc.get("status", "active"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    @staticmethod
    def _object_id(value: str, label: str) -> ObjectId:
        try:
            return ObjectId(value)
        except Exception:
            raise ValueError(f"Invalid {label} ID format")

    def _goal_link_fields(self, goal: Goal, currency: Optional[str], **links) -> dict:
        # Only money goals carry a currency
        fields = dict(links)
        if goal.metric_type == MetricKind.AMOUNT and currency:
            fields["currency"] = currency
        return fields

    async def available_budgets(self, user_id: str) -> list[Budget]:
        """List budgets that are not archived."""
        cursor = self.budgets.find({"user_id": user_id, "is_archived": False})
        docs = await cursor.to_list(length=None)
        return [self._doc_to_budget(doc) for doc in docs]

    async def linked_budget(self, goal: Goal) -> Optional[Budget]:
        """
        Budget tied to a goal, by the goal's link or the budget's back-link.

        Returns:
            The budget, or None if the goal has none
        """
        doc = None
        if goal.linked_budget_id:
            doc = await self.budgets.find_one({
                "_id": self._object_id(goal.linked_budget_id, "budget"),
                "user_id": goal.user_id,
            })
        if not doc:
            doc = await self.budgets.find_one({"user_id": goal.user_id, "linked_goal_id": goal.id})
        return self._doc_to_budget(doc) if doc else None

    async def create_and_link_budget(
        self,
        goal: Goal,
        budget_create: BudgetCreate,
        base_currency: str,
    ) -> Budget:
        """
        Create a project budget for a goal and link both ways.

        Args:
            goal: Goal to link
            budget_create: Optional overrides (name, amount, currency, ...)
            base_currency: Fallback currency

        Returns:
            Created budget
        """
        currency = budget_create.currency or goal.currency or base_currency
        transaction_type = budget_create.transaction_type or (
            BudgetFlowType.INCOME if goal.finance_mode == FinanceMode.SAVE else BudgetFlowType.EXPENSE
        )
        limit_amount = (
            budget_create.amount
            if budget_create.amount and budget_create.amount > 0
            else goal.target_value
        )

        now = datetime.utcnow()
        budget_doc = {
            "user_id": goal.user_id,
            "name": budget_create.name or default_budget_name(goal),
            "budget_type": "project",
            "linked_goal_id": goal.id,
            "account_id": budget_create.account_id,
            "transaction_type": transaction_type.value,
            "currency": currency,
            "limit_amount": limit_amount,
            "period_type": budget_create.period_type.value,
            "spent_amount": 0,
            "is_archived": False,
            "created_at": now,
            "updated_at": now,
        }

        result = await self.budgets.insert_one(budget_doc)
        budget_doc["_id"] = result.inserted_id
        budget = self._doc_to_budget(budget_doc)

        await self.goal_service.set_finance_link(
            goal.user_id,
            goal.id,
            self._goal_link_fields(goal, budget.currency, linked_budget_id=budget.id),
        )

        logger.info("budget_linked", goal_id=goal.id, budget_id=budget.id, created=True)
        return budget

    async def link_existing_budget(
        self,
        goal: Goal,
        budget_id: str,
        base_currency: str,
    ) -> Goal:
        """
        Link an existing budget to a goal.

        Raises:
            ValueError: If the budget does not exist
        """
        budget_doc = await self.budgets.find_one_and_update(
            {"_id": self._object_id(budget_id, "budget"), "user_id": goal.user_id},
            {"$set": {"linked_goal_id": goal.id, "updated_at": datetime.utcnow()}},
            return_document=True,
        )
        if not budget_doc:
            raise ValueError("Budget not found")

        currency = budget_doc.get("currency") or goal.currency or base_currency
        updated = await self.goal_service.set_finance_link(
            goal.user_id,
            goal.id,
            self._goal_link_fields(goal, currency, linked_budget_id=budget_id),
        )

        logger.info("budget_linked", goal_id=goal.id, budget_id=budget_id, created=False)
        return updated

    async def list_debts(self, user_id: str) -> list[Debt]:
        """List the user's debts."""
        cursor = self.debts.find({"user_id": user_id})
        docs = await cursor.to_list(length=None)
        return [self._doc_to_debt(doc) for doc in docs]

    async def link_debt(self, goal: Goal, debt_id: str) -> Goal:
        """
        Link a debt to a goal.

        Raises:
            ValueError: If the debt does not exist
        """
        debt_doc = await self.debts.find_one_and_update(
            {"_id": self._object_id(debt_id, "debt"), "user_id": goal.user_id},
            {"$set": {"linked_goal_id": goal.id, "updated_at": datetime.utcnow()}},
            return_document=True,
        )
        if not debt_doc:
            raise ValueError("Debt not found")

        updated = await self.goal_service.set_finance_link(
            goal.user_id,
            goal.id,
            {"linked_debt_id": debt_id},
        )

        logger.info("debt_linked", goal_id=goal.id, debt_id=debt_id)
        return updated
