"""Integration tests for finance link endpoints."""
from datetime import datetime
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

NOW = datetime(2025, 3, 1)


def make_budget(**overrides):
    from planner.models.finance import Budget

    fields = {
        "_id": "budget-1",
        "user_id": "user123",
        "name": "Budget · Emergency Fund",
        "currency": "USD",
        "limit_amount": 10000,
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(overrides)
    return Budget(**fields)


@pytest.fixture
def finance_service():
    return AsyncMock()


@pytest_asyncio.fixture
async def client(app_client, finance_service):
    from planner import dependencies
    from planner.main import app

    app.dependency_overrides[dependencies.get_finance_service] = lambda: finance_service
    yield app_client


@pytest.mark.asyncio
class TestFinanceEndpoints:
    """Tests for /finance."""

    async def test_list_budgets(self, client, finance_service):
        finance_service.available_budgets.return_value = [make_budget()]

        response = await client.get("/finance/budgets")

        assert response.status_code == 200
        assert response.json()[0]["id"] == "budget-1"
        finance_service.available_budgets.assert_awaited_once_with("user123")

    async def test_list_debts(self, client, finance_service):
        finance_service.list_debts.return_value = []

        response = await client.get("/finance/debts")

        assert response.json() == []

    async def test_linked_budget_none(self, client, finance_service, goal_store, make_payload):
        goal = goal_store.add(make_payload())
        finance_service.linked_budget.return_value = None

        response = await client.get(f"/finance/goals/{goal.id}/budget")

        assert response.status_code == 200
        assert response.json() is None

    async def test_create_budget(self, client, finance_service, goal_store, make_payload):
        goal = goal_store.add(make_payload())
        finance_service.create_and_link_budget.return_value = make_budget(linked_goal_id=goal.id)

        response = await client.post(f"/finance/goals/{goal.id}/budget", json={"amount": 5000})

        assert response.status_code == 201
        assert response.json()["linked_goal_id"] == goal.id
        linked_goal, budget_create, base_currency = finance_service.create_and_link_budget.call_args[0]
        assert linked_goal.id == goal.id
        assert budget_create.amount == 5000
        assert base_currency == "USD"

    async def test_create_budget_for_missing_goal(self, client):
        response = await client.post("/finance/goals/goal-404/budget", json={})

        assert response.status_code == 404

    async def test_link_missing_budget(self, client, finance_service, goal_store, make_payload):
        goal = goal_store.add(make_payload())
        finance_service.link_existing_budget.side_effect = ValueError("Budget not found")

        response = await client.put(f"/finance/goals/{goal.id}/budget/budget-9")

        assert response.status_code == 404
        assert response.json()["detail"] == "Budget not found"

    async def test_link_debt(self, client, finance_service, goal_store, make_payload):
        goal = goal_store.add(make_payload())
        finance_service.link_debt.return_value = goal.model_copy(update={"linked_debt_id": "debt-1"})

        response = await client.put(f"/finance/goals/{goal.id}/debt/debt-1")

        assert response.status_code == 200
        assert response.json()["linked_debt_id"] == "debt-1"
