"""
E2E tests walking user personas through a month of tracking.

User personas:
- user_saver: Spends well under budget, no alerts expected
- user_overspender: Blows through the dining budget, alert escalates
- user_planner: Reviews loan and investment projections
"""

import pytest
from fastapi.testclient import TestClient


def as_user(user_id: str) -> dict:
    return {"X-User-ID": user_id}


def record(client: TestClient, user_id: str, amount, category: str, day: str, description: str = "Purchase"):
    response = client.post(
        "/v1/expenses",
        json={"amount": amount, "category": category, "description": description, "date": day},
        headers=as_user(user_id),
    )
    assert response.status_code == 201, response.text
    return response.json()


def alerts_on(client: TestClient, user_id: str, as_of: str) -> list:
    response = client.get("/v1/budgets/alerts", params={"as_of": as_of}, headers=as_user(user_id))
    assert response.status_code == 200
    return response.json()["alerts"]


@pytest.mark.integration
def test_user_saver_stays_on_track(client: TestClient):
    """
    user_saver: Modest spending across categories
    Expected: No alerts, budgets well under their caps
    """
    user = "user_saver"
    for budget in [("Food & Dining", 400), ("Transportation", 150)]:
        response = client.post(
            "/v1/budgets",
            json={"category": budget[0], "amount": budget[1], "start_date": "2024-04-01", "end_date": "2024-04-30"},
            headers=as_user(user),
        )
        assert response.status_code == 201

    record(client, user, 45.20, "Food & Dining", "2024-04-03", "Groceries")
    record(client, user, 12.80, "Food & Dining", "2024-04-09", "Lunch")
    record(client, user, 30, "Transportation", "2024-04-10", "Transit pass top-up")

    assert alerts_on(client, user, "2024-04-15") == []

    overview = client.get(
        "/v1/budgets/analytics/overview", params={"as_of": "2024-04-15"}, headers=as_user(user)
    ).json()
    assert overview["summary"]["total_budgeted"] == 550.0
    assert overview["summary"]["total_spent"] == 88.0
    assert overview["summary"]["over_budget_count"] == 0

    summary = client.get(
        "/v1/expenses/analytics/summary",
        params={"period": "month", "as_of": "2024-04-15"},
        headers=as_user(user),
    ).json()
    assert summary["transaction_count"] == 3
    assert summary["category_breakdown"]["Food & Dining"] == 58.0


@pytest.mark.integration
def test_user_overspender_alert_escalates(client: TestClient):
    """
    user_overspender: Dining out through the month
    Expected: No alert, then approaching_limit, then over_budget
    """
    user = "user_overspender"
    response = client.post(
        "/v1/budgets",
        json={
            "category": "Food & Dining",
            "amount": 200,
            "start_date": "2024-05-01",
            "end_date": "2024-05-31",
            "alert_threshold": 75,
        },
        headers=as_user(user),
    )
    assert response.status_code == 201
    budget_id = response.json()["id"]

    record(client, user, 100, "Food & Dining", "2024-05-05", "Dinner out")
    assert alerts_on(client, user, "2024-05-06") == []

    record(client, user, 60, "Food & Dining", "2024-05-12", "Brunch")
    alerts = alerts_on(client, user, "2024-05-13")
    assert [a["type"] for a in alerts] == ["approaching_limit"]
    assert alerts[0]["message"] == "You've used 80.0% of your Food & Dining budget"

    record(client, user, 65.5, "Food & Dining", "2024-05-20", "Birthday dinner")
    alerts = alerts_on(client, user, "2024-05-21")
    assert [a["type"] for a in alerts] == ["over_budget"]
    assert alerts[0]["overage"] == 25.5
    assert alerts[0]["message"] == "You've exceeded your Food & Dining budget by $25.50"

    detail = client.get(f"/v1/budgets/{budget_id}", headers=as_user(user)).json()
    assert detail["percentage_used"] == 100.0
    assert detail["is_over_budget"] is True
    assert detail["remaining_amount"] == -25.5
    assert len(detail["expenses"]) == 3

    # Pausing the budget silences its alerts
    client.put(f"/v1/budgets/{budget_id}", json={"is_active": False}, headers=as_user(user))
    assert alerts_on(client, user, "2024-05-21") == []


@pytest.mark.integration
def test_users_do_not_see_each_other(client: TestClient):
    """Expenses and budgets are scoped to the calling user"""
    record(client, "user_saver", 500, "Shopping", "2024-04-10", "Laptop bag")
    client.post(
        "/v1/budgets",
        json={"category": "Shopping", "amount": 100, "start_date": "2024-04-01", "end_date": "2024-04-30"},
        headers=as_user("user_overspender"),
    )

    assert alerts_on(client, "user_overspender", "2024-04-15") == []
    assert client.get("/v1/expenses", headers=as_user("user_overspender")).json()["expenses"] == []
    assert client.get("/v1/budgets", headers=as_user("user_saver")).json()["budgets"] == []


@pytest.mark.integration
def test_user_planner_projections(client: TestClient):
    """
    user_planner: Compares a home loan against investing the same money
    Expected: Consistent totals across the calculators
    """
    loan = client.post(
        "/v1/calculators/emi",
        json={"principal": 2500000, "annual_rate": 9, "years": 15},
        headers=as_user("user_planner"),
    ).json()["result"]
    assert loan["total_payment"] > loan["principal"]
    assert len(loan["yearly_breakdown"]) == 10
    assert loan["yearly_breakdown"][-1]["closing_balance"] < loan["principal"]

    plan = client.post(
        "/v1/calculators/sip",
        json={"monthly_investment": loan["monthly_payment"], "annual_rate": 12, "years": 15},
        headers=as_user("user_planner"),
    ).json()["result"]
    assert plan["total_invested"] == loan["monthly_payment"] * 180
    assert plan["future_value"] > plan["total_invested"]

    drawdown = client.post(
        "/v1/calculators/swp",
        json={"initial_corpus": plan["future_value"], "monthly_withdrawal": 50000, "annual_rate": 8, "years": 10},
        headers=as_user("user_planner"),
    ).json()["result"]
    assert drawdown["periodic_series"][0]["month"] == 6
    assert drawdown["periodic_series"][-1]["month"] <= 120
