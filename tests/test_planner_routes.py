"""JSON endpoint tests for the planner blueprint."""

from __future__ import annotations

import pytest

from payoffsage import create_app
from tests.conftest import assert_float_equal

DEBTS = [
    {"id": "a", "name": "Card A", "balance": 5000, "apr": 18, "minimum_payment": 100},
    {"id": "b", "name": "Car Loan", "balance": 1000, "apr": 12, "minimum_payment": 50},
    {"id": "c", "name": "Store Card", "balance": "3000", "apr": "24", "minimum_payment": "90"},
]


def test_health(client):
    response = client.get("/planner/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


class TestDebtPlan:
    def test_returns_avalanche_entries_and_summary(self, client):
        response = client.post("/planner/debts/plan", json={"debts": DEBTS, "extra_payment": 200})

        assert response.status_code == 200
        body = response.get_json()
        assert [e["debt_id"] for e in body["entries"]] == ["c", "a", "b"]
        assert body["entries"][0]["monthly_payment"] == 290.0
        assert body["entries"][0]["months_to_payoff"] == 12
        summary = body["summary"]
        assert summary["total_balance"] == 9000.0
        assert summary["total_minimum_payments"] == 240.0
        assert summary["extra_payment"] == 200.0
        assert_float_equal(summary["total_monthly_payment"], 440.0)

    def test_ids_default_to_position(self, client):
        debts = [{k: v for k, v in d.items() if k != "id"} for d in DEBTS]

        body = client.post("/planner/debts/plan", json={"debts": debts}).get_json()

        assert [e["debt_id"] for e in body["entries"]] == [3, 1, 2]

    def test_empty_list_is_unprocessable(self, client):
        response = client.post("/planner/debts/plan", json={"debts": []})

        assert response.status_code == 422
        assert response.get_json()["error"] == "empty_input"

    def test_missing_body_is_empty_input(self, client):
        response = client.post("/planner/debts/plan", data="not json", content_type="text/plain")

        assert response.status_code == 422

    def test_non_amortizing_debt_names_subject(self, client):
        debts = [{"name": "Payday", "balance": 10000, "apr": 24, "minimum_payment": 150}]
        debts.append({"name": "Card", "balance": 1000, "apr": 30, "minimum_payment": 40})

        response = client.post("/planner/debts/plan", json={"debts": debts, "extra_payment": 0})

        assert response.status_code == 422
        body = response.get_json()
        assert body["error"] == "invalid_payment"
        assert body["subject"] == "Payday"

    def test_field_errors_are_bad_request(self, client):
        debts = [{"name": "", "balance": "x", "apr": 5, "minimum_payment": 0}]

        response = client.post(
            "/planner/debts/plan", json={"debts": debts, "extra_payment": -3}
        )

        assert response.status_code == 400
        body = response.get_json()
        assert body["error"] == "validation_failed"
        assert set(body["fields"]["debts[0]"]) == {"name", "balance", "minimum_payment"}
        assert "extra_payment" in body["fields"]

    def test_duplicate_ids_are_field_errors(self, client):
        debts = [dict(d, id="a") for d in DEBTS[:2]]

        response = client.post("/planner/debts/plan", json={"debts": debts})

        assert response.status_code == 400
        fields = response.get_json()["fields"]
        assert list(fields) == ["debts[1]"]
        assert "Duplicate debt id 'a'" in fields["debts[1]"]["id"][0]

    def test_explicit_id_colliding_with_position_is_rejected(self, client):
        debts = [{k: v for k, v in d.items() if k != "id"} for d in DEBTS[:2]]
        debts[1]["id"] = 1

        response = client.post("/planner/debts/plan", json={"debts": debts})

        assert response.status_code == 400
        assert "id" in response.get_json()["fields"]["debts[1]"]

    @pytest.mark.parametrize("bad_id", [None, True, "  ", [1]])
    def test_unusable_ids_are_field_errors(self, client, bad_id):
        debts = [dict(DEBTS[0], id=bad_id)]

        response = client.post("/planner/debts/plan", json={"debts": debts})

        assert response.status_code == 400
        assert "id" in response.get_json()["fields"]["debts[0]"]

    def test_debts_must_be_a_list(self, client):
        response = client.post("/planner/debts/plan", json={"debts": {"name": "x"}})

        assert response.status_code == 400

    def test_configured_default_extra_payment(self, monkeypatch):
        monkeypatch.setenv("PAYOFFSAGE_DEFAULT_EXTRA_PAYMENT", "75")
        app = create_app("testing")

        with app.test_client() as client:
            body = client.post("/planner/debts/plan", json={"debts": DEBTS}).get_json()

        assert body["summary"]["extra_payment"] == 75.0
        assert body["entries"][0]["monthly_payment"] == 165.0


class TestGoalProjection:
    def test_projects_each_goal(self, client):
        payload = {
            "today": "2026-10-19",
            "monthly_budget": 3000,
            "goals": [
                {"title": "Trip", "target_amount": 5000, "current_amount": 1000, "target_date": "2027-10-19"},
                {"title": "Late", "target_amount": 800, "current_amount": 200, "target_date": "2026-01-01"},
            ],
        }

        response = client.post("/planner/goals/projection", json=payload)

        assert response.status_code == 200
        trip, late = response.get_json()["projections"]
        assert trip["months_remaining"] == 12
        assert_float_equal(trip["monthly_savings_needed"], 333.33)
        assert late["months_remaining"] == 0
        assert late["monthly_savings_needed"] == 600.0
        assert late["monthly_spending_ceiling"] == 2400.0

    def test_invalid_goal_is_unprocessable(self, client):
        payload = {
            "monthly_budget": 100,
            "goals": [{"title": "Zero", "target_amount": 0, "target_date": "2027-01-01"}],
        }

        response = client.post("/planner/goals/projection", json=payload)

        assert response.status_code == 422
        assert response.get_json() == {
            "error": "invalid_goal",
            "message": "Target amount for 'Zero' must be greater than zero.",
            "subject": "Zero",
        }

    def test_budget_is_required(self, client):
        payload = {"goals": [{"title": "Car", "target_amount": 10, "target_date": "2027-01-01"}]}

        response = client.post("/planner/goals/projection", json=payload)

        assert response.status_code == 400
        assert response.get_json()["fields"]["monthly_budget"] == ["This field is required."]


class TestBudgetOverview:
    def test_overview(self, client):
        payload = {
            "budget": 2000,
            "total_spent": 500,
            "transaction_count": 12,
            "today": "2026-10-10",
            "categories": {"Food": 400, "Transport": 100},
        }

        response = client.post("/planner/budget/overview", json=payload)

        assert response.status_code == 200
        body = response.get_json()
        assert body["budget_left"] == 1500.0
        assert body["average_per_day"] == 50.0
        assert [c["category"] for c in body["categories"]] == ["Food", "Transport"]

    @pytest.mark.parametrize("categories", [["Food"], {"Food": "lots"}])
    def test_bad_categories(self, client, categories):
        payload = {"budget": 10, "total_spent": 5, "categories": categories}

        response = client.post("/planner/budget/overview", json=payload)

        assert response.status_code == 400


class TestAmortize:
    def test_result_only(self, client):
        response = client.post(
            "/planner/amortize", json={"balance": 1000, "apr": 18, "monthly_payment": 150}
        )

        assert response.status_code == 200
        body = response.get_json()
        assert body["months"] == 8
        assert_float_equal(body["total_paid"], 1200.0)
        assert "schedule" not in body

    def test_with_schedule(self, client):
        response = client.post(
            "/planner/amortize",
            json={
                "balance": 300,
                "apr": 0,
                "monthly_payment": 100,
                "schedule": True,
                "start": "2026-11-15",
            },
        )

        rows = response.get_json()["schedule"]
        assert [r["due_date"] for r in rows] == ["2026-11-01", "2026-12-01", "2027-01-01"]
        assert rows[-1]["remaining_balance"] == 0.0

    def test_non_amortizing(self, client):
        response = client.post(
            "/planner/amortize", json={"balance": 10000, "apr": 24, "monthly_payment": 150}
        )

        assert response.status_code == 422
        assert response.get_json()["error"] == "invalid_payment"

    def test_schedule_beyond_limit_is_unprocessable(self, client):
        response = client.post(
            "/planner/amortize",
            json={"balance": 200000, "apr": 0, "monthly_payment": 0.5, "schedule": True},
        )

        assert response.status_code == 422
        body = response.get_json()
        assert body["error"] == "invalid_payment"
        assert "limited to" in body["message"]

    def test_slow_payoff_without_schedule_still_reports_months(self, client):
        response = client.post(
            "/planner/amortize", json={"balance": 200000, "apr": 0, "monthly_payment": 0.5}
        )

        assert response.status_code == 200
        assert response.get_json()["months"] == 400000

    def test_months_previews_the_schedule(self, client):
        response = client.post(
            "/planner/amortize",
            json={
                "balance": 200000,
                "apr": 0,
                "monthly_payment": 0.5,
                "schedule": True,
                "months": 2,
                "start": "2026-01-01",
            },
        )

        assert response.status_code == 200
        rows = response.get_json()["schedule"]
        assert [r["due_date"] for r in rows] == ["2026-01-01", "2026-02-01"]

    @pytest.mark.parametrize("months", [0, "soon"])
    def test_invalid_months_is_bad_request(self, client, months):
        response = client.post(
            "/planner/amortize",
            json={
                "balance": 1000,
                "apr": 12,
                "monthly_payment": 100,
                "schedule": True,
                "months": months,
            },
        )

        assert response.status_code == 400
        assert "months" in response.get_json()["fields"]
