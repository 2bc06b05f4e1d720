"""Budget and debt models read by the goal finance link."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class BudgetFlowType(str, Enum):
    """Direction of money tracked by a budget."""

    INCOME = "income"
    EXPENSE = "expense"


class BudgetPeriodType(str, Enum):
    """Budget reset period."""

    NONE = "none"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class BudgetCreate(BaseModel):
    """Input for creating a budget from a goal."""

    name: Optional[str] = None
    amount: Optional[float] = None
    currency: Optional[str] = None
    transaction_type: Optional[BudgetFlowType] = None
    account_id: Optional[str] = None
    period_type: BudgetPeriodType = BudgetPeriodType.NONE


class Budget(BaseModel):
    """Budget record."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    name: str
    budget_type: str = "project"
    linked_goal_id: Optional[str] = None
    account_id: Optional[str] = None
    transaction_type: BudgetFlowType = BudgetFlowType.EXPENSE
    currency: str
    limit_amount: float = 0
    period_type: BudgetPeriodType = BudgetPeriodType.NONE
    spent_amount: float = 0
    is_archived: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}


class DebtStatus(str, Enum):
    """Debt lifecycle status."""

    ACTIVE = "active"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELED = "canceled"


class Debt(BaseModel):
    """Debt record."""

    id: str = Field(alias="_id", serialization_alias="id")
    user_id: str
    counterparty_name: str
    description: Optional[str] = None
    principal_amount: float
    principal_currency: str
    due_date: Optional[datetime] = None
    linked_goal_id: Optional[str] = None
    status: DebtStatus = DebtStatus.ACTIVE
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
