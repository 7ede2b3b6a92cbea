"""
Integration tests for the plan endpoints.

Tests the full stack: API -> Service -> Repository -> Database, with the
clock pinned to 2024-03-15.
"""

import uuid

import pytest
from httpx import AsyncClient


class TestCreatePlan:
    """Tests for POST /v1/plans."""

    @pytest.mark.asyncio
    async def test_interest_plan_schedule(self, client: AsyncClient, interest_plan_request):
        response = await client.post("/v1/plans", json=interest_plan_request)

        assert response.status_code == 201
        data = response.json()

        assert data["status"] == "active"
        assert data["remaining_balance"] == 9000.0
        assert data["paid_amount"] == 0.0
        assert data["end_date"] == "2024-07-15"

        amounts = [p["amount"] for p in data["payments"]]
        assert amounts == [1552.94] * 5 + [1235.30]

        due_dates = [p["due_date"] for p in data["payments"]]
        assert due_dates == [
            "2024-02-15",
            "2024-03-15",
            "2024-04-15",
            "2024-05-15",
            "2024-06-15",
            "2024-07-15",
        ]

    @pytest.mark.asyncio
    async def test_past_due_payment_reported_overdue(
        self, client: AsyncClient, create_plan, interest_plan_request
    ):
        data = await create_plan(client, interest_plan_request)
        first, second = data["payments"][0], data["payments"][1]

        assert first["status"] == "overdue"
        assert first["stored_status"] == "pending"
        # Due today is not yet overdue
        assert second["status"] == "pending"

    @pytest.mark.asyncio
    async def test_interest_free_plan(self, client: AsyncClient, create_plan, interest_free_plan_request):
        data = await create_plan(client, interest_free_plan_request)

        assert [p["amount"] for p in data["payments"]] == [1000.0] * 12
        assert data["payments"][-1]["due_date"] == "2025-01-10"

    @pytest.mark.asyncio
    async def test_month_end_start_date_clamps(self, client: AsyncClient, create_plan):
        data = await create_plan(client, {
            "customer_id": "cust_3",
            "total_amount": 300,
            "term_months": 3,
            "start_date": "2024-01-31",
        })

        assert [p["due_date"] for p in data["payments"]] == [
            "2024-02-29",
            "2024-03-31",
            "2024-04-30",
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"total_amount": 0}, "total_amount must be positive"),
            ({"down_payment": -1}, "down_payment cannot be negative"),
            ({"down_payment": 10000}, "down_payment must be less than total_amount"),
            ({"term_months": 0}, "term_months must be at least 1"),
            ({"interest_rate": -5}, "interest_rate cannot be negative"),
        ],
    )
    async def test_invalid_request_returns_400(
        self, client: AsyncClient, interest_plan_request, overrides, message
    ):
        response = await client.post("/v1/plans", json={**interest_plan_request, **overrides})

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "INVALID_PLAN_REQUEST"
        assert message in data["message"]

    @pytest.mark.asyncio
    async def test_whitespace_customer_id_returns_422(
        self, client: AsyncClient, interest_plan_request
    ):
        response = await client.post(
            "/v1/plans", json={**interest_plan_request, "customer_id": "   "}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_start_date_returns_422(
        self, client: AsyncClient, interest_plan_request
    ):
        body = dict(interest_plan_request)
        del body["start_date"]

        response = await client.post("/v1/plans", json=body)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_term_above_cap_returns_422(self, client: AsyncClient, interest_plan_request):
        response = await client.post(
            "/v1/plans", json={**interest_plan_request, "term_months": 601}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_sub_cent_amounts_keep_schedule_and_balance_in_step(
        self, client: AsyncClient, create_plan
    ):
        plan = await create_plan(client, {
            "customer_id": "cust_4004",
            "total_amount": "100.004",
            "down_payment": "0.005",
            "term_months": 1,
            "start_date": "2024-03-20",
        })

        assert plan["total_amount"] == 100.0
        assert plan["down_payment"] == 0.01
        assert plan["remaining_balance"] == 99.99
        assert [p["amount"] for p in plan["payments"]] == [99.99]

        response = await client.post(
            f"/v1/payments/{plan['payments'][0]['payment_id']}/record",
            json={"payment_date": "2024-03-15"},
        )

        data = response.json()
        assert data["status"] == "completed"
        assert data["remaining_balance"] == 0.0

    @pytest.mark.asyncio
    async def test_down_payment_rounding_up_to_total_returns_400(
        self, client: AsyncClient, interest_plan_request
    ):
        response = await client.post(
            "/v1/plans",
            json={**interest_plan_request, "total_amount": "100", "down_payment": "99.996"},
        )

        assert response.status_code == 400
        assert "down_payment must be less than total_amount" in response.json()["message"]


class TestPreviewSchedule:
    """Tests for POST /v1/plans/schedule/preview."""

    @pytest.mark.asyncio
    async def test_preview(self, client: AsyncClient, interest_plan_request):
        response = await client.post("/v1/plans/schedule/preview", json=interest_plan_request)

        assert response.status_code == 200
        data = response.json()
        assert data["financed_amount"] == 9000.0
        assert data["monthly_payment"] == 1552.94
        assert data["total_payable"] == 9000.0
        assert "total_interest" not in data
        assert data["end_date"] == "2024-07-15"
        assert len(data["payments"]) == 6

    @pytest.mark.asyncio
    async def test_preview_does_not_persist(self, client: AsyncClient, interest_plan_request):
        await client.post("/v1/plans/schedule/preview", json=interest_plan_request)

        response = await client.get("/v1/plans")

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_preview_validates(self, client: AsyncClient, interest_plan_request):
        response = await client.post(
            "/v1/plans/schedule/preview",
            json={**interest_plan_request, "term_months": 0},
        )

        assert response.status_code == 400


class TestGetAndListPlans:
    """Tests for GET /v1/plans and GET /v1/plans/{plan_id}."""

    @pytest.mark.asyncio
    async def test_get_plan(self, client: AsyncClient, create_plan, interest_plan_request):
        created = await create_plan(client, interest_plan_request)

        response = await client.get(f"/v1/plans/{created['plan_id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["plan_id"] == created["plan_id"]
        assert data["customer_name"] == "Maria Santos"
        assert len(data["payments"]) == 6

    @pytest.mark.asyncio
    async def test_get_unknown_plan_returns_404(self, client: AsyncClient):
        response = await client.get(f"/v1/plans/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "PLAN_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_invalid_uuid_returns_422(self, client: AsyncClient):
        response = await client.get("/v1/plans/not-a-uuid")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_filters(
        self, client: AsyncClient, create_plan, interest_plan_request, interest_free_plan_request
    ):
        first = await create_plan(client, interest_plan_request)
        await create_plan(client, interest_free_plan_request)
        await client.post(f"/v1/plans/{first['plan_id']}/cancel")

        all_plans = (await client.get("/v1/plans")).json()
        by_customer = (await client.get("/v1/plans", params={"customer_id": "cust_2002"})).json()
        cancelled = (await client.get("/v1/plans", params={"status": "cancelled"})).json()

        assert len(all_plans) == 2
        assert [p["customer_id"] for p in by_customer] == ["cust_2002"]
        assert [p["plan_id"] for p in cancelled] == [first["plan_id"]]


class TestUpdatePlan:
    """Tests for PATCH, cancel and DELETE on /v1/plans/{plan_id}."""

    @pytest.mark.asyncio
    async def test_update_notes(self, client: AsyncClient, create_plan, interest_plan_request):
        created = await create_plan(client, interest_plan_request)

        response = await client.patch(
            f"/v1/plans/{created['plan_id']}", json={"notes": "Called customer"}
        )

        assert response.status_code == 200
        assert response.json()["notes"] == "Called customer"

    @pytest.mark.asyncio
    async def test_cancel_cancels_open_payments(self, client: AsyncClient, create_plan, interest_plan_request):
        created = await create_plan(client, interest_plan_request)

        response = await client.post(f"/v1/plans/{created['plan_id']}/cancel")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "cancelled"
        assert {p["status"] for p in data["payments"]} == {"cancelled"}

    @pytest.mark.asyncio
    async def test_cancel_twice_returns_409(self, client: AsyncClient, create_plan, interest_plan_request):
        created = await create_plan(client, interest_plan_request)
        await client.post(f"/v1/plans/{created['plan_id']}/cancel")

        response = await client.post(f"/v1/plans/{created['plan_id']}/cancel")

        assert response.status_code == 409
        assert response.json()["error"] == "INVALID_STATUS_TRANSITION"

    @pytest.mark.asyncio
    async def test_reactivating_cancelled_plan_returns_409(
        self, client: AsyncClient, create_plan, interest_plan_request
    ):
        created = await create_plan(client, interest_plan_request)
        await client.post(f"/v1/plans/{created['plan_id']}/cancel")

        response = await client.patch(
            f"/v1/plans/{created['plan_id']}", json={"status": "active"}
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_delete_plan(self, client: AsyncClient, create_plan, interest_plan_request):
        created = await create_plan(client, interest_plan_request)

        response = await client.delete(f"/v1/plans/{created['plan_id']}")
        assert response.status_code == 204

        response = await client.get(f"/v1/plans/{created['plan_id']}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_plan_returns_404(self, client: AsyncClient):
        response = await client.delete(f"/v1/plans/{uuid.uuid4()}")

        assert response.status_code == 404
