"""Integration tests for reminder generation and delivery."""

import uuid

import pytest
from httpx import AsyncClient


class TestGenerateReminders:
    """Tests for POST /v1/payments/{payment_id}/reminders."""

    @pytest.mark.asyncio
    async def test_future_payment_gets_all_types(
        self, client: AsyncClient, create_plan, interest_plan_request
    ):
        plan = await create_plan(client, interest_plan_request)
        # Due 2024-04-15
        payment_id = plan["payments"][2]["payment_id"]

        response = await client.post(f"/v1/payments/{payment_id}/reminders", json={})

        assert response.status_code == 201
        reminders = response.json()
        assert [(r["reminder_type"], r["reminder_date"]) for r in reminders] == [
            ("upcoming", "2024-04-12"),
            ("due", "2024-04-15"),
            ("overdue", "2024-04-18"),
        ]
        assert not any(r["sent"] for r in reminders)
        assert "due in 3 days" in reminders[0]["message"]

    @pytest.mark.asyncio
    async def test_past_payment_only_gets_overdue(
        self, client: AsyncClient, create_plan, interest_plan_request
    ):
        plan = await create_plan(client, interest_plan_request)
        payment_id = plan["payments"][0]["payment_id"]

        response = await client.post(f"/v1/payments/{payment_id}/reminders", json={})

        reminders = response.json()
        assert [r["reminder_type"] for r in reminders] == ["overdue"]
        assert reminders[0]["reminder_date"] == "2024-02-18"

    @pytest.mark.asyncio
    async def test_requested_types_only(
        self, client: AsyncClient, create_plan, interest_plan_request
    ):
        plan = await create_plan(client, interest_plan_request)
        payment_id = plan["payments"][2]["payment_id"]

        response = await client.post(
            f"/v1/payments/{payment_id}/reminders", json={"types": ["due"]}
        )

        assert [r["reminder_type"] for r in response.json()] == ["due"]

    @pytest.mark.asyncio
    async def test_empty_types_returns_400(
        self, client: AsyncClient, create_plan, interest_plan_request
    ):
        plan = await create_plan(client, interest_plan_request)
        payment_id = plan["payments"][2]["payment_id"]

        response = await client.post(
            f"/v1/payments/{payment_id}/reminders", json={"types": []}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_payment_returns_404(self, client: AsyncClient):
        response = await client.post(f"/v1/payments/{uuid.uuid4()}/reminders", json={})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_reminders(
        self, client: AsyncClient, create_plan, interest_plan_request
    ):
        plan = await create_plan(client, interest_plan_request)
        payment_id = plan["payments"][2]["payment_id"]
        await client.post(f"/v1/payments/{payment_id}/reminders", json={})

        response = await client.get(f"/v1/payments/{payment_id}/reminders")

        assert response.status_code == 200
        dates = [r["reminder_date"] for r in response.json()]
        assert dates == ["2024-04-12", "2024-04-15", "2024-04-18"]


class TestSendReminders:
    """Tests for POST /v1/reminders/send."""

    @pytest.mark.asyncio
    async def test_sends_only_due_reminders(
        self, client: AsyncClient, create_plan, mock_notifier, interest_plan_request
    ):
        plan = await create_plan(client, interest_plan_request)
        past_id = plan["payments"][0]["payment_id"]
        future_id = plan["payments"][2]["payment_id"]
        await client.post(f"/v1/payments/{past_id}/reminders", json={})
        await client.post(f"/v1/payments/{future_id}/reminders", json={})

        response = await client.post("/v1/reminders/send")

        assert response.status_code == 200
        assert response.json() == {"attempted": 1, "sent": 1, "failed": 0}
        assert mock_notifier.delivered[0]["payment_id"] == past_id
        assert mock_notifier.delivered[0]["amount"] == "1552.94"

        reminders = (await client.get(f"/v1/payments/{past_id}/reminders")).json()
        assert reminders[0]["sent"] is True

    @pytest.mark.asyncio
    async def test_sent_reminders_are_not_resent(
        self, client: AsyncClient, create_plan, mock_notifier, interest_plan_request
    ):
        plan = await create_plan(client, interest_plan_request)
        past_id = plan["payments"][0]["payment_id"]
        await client.post(f"/v1/payments/{past_id}/reminders", json={})
        await client.post("/v1/reminders/send")

        response = await client.post("/v1/reminders/send")

        assert response.json()["attempted"] == 0
        assert mock_notifier.call_count == 1

    @pytest.mark.asyncio
    async def test_failed_delivery_stays_unsent(
        self, client_with_failing_ports: AsyncClient, create_plan, interest_plan_request
    ):
        client = client_with_failing_ports
        plan = await create_plan(client, interest_plan_request)
        past_id = plan["payments"][0]["payment_id"]
        await client.post(f"/v1/payments/{past_id}/reminders", json={})

        response = await client.post("/v1/reminders/send")

        assert response.json() == {"attempted": 1, "sent": 0, "failed": 1}
        reminders = (await client.get(f"/v1/payments/{past_id}/reminders")).json()
        assert reminders[0]["sent"] is False


class TestDeleteReminder:
    """Tests for DELETE /v1/reminders/{reminder_id}."""

    @pytest.mark.asyncio
    async def test_delete_reminder(
        self, client: AsyncClient, create_plan, interest_plan_request
    ):
        plan = await create_plan(client, interest_plan_request)
        payment_id = plan["payments"][2]["payment_id"]
        created = (await client.post(f"/v1/payments/{payment_id}/reminders", json={})).json()

        response = await client.delete(f"/v1/reminders/{created[0]['reminder_id']}")

        assert response.status_code == 204
        remaining = (await client.get(f"/v1/payments/{payment_id}/reminders")).json()
        assert [r["reminder_type"] for r in remaining] == ["due", "overdue"]

    @pytest.mark.asyncio
    async def test_deleted_reminder_is_not_sent(
        self, client: AsyncClient, create_plan, mock_notifier, interest_plan_request
    ):
        plan = await create_plan(client, interest_plan_request)
        past_id = plan["payments"][0]["payment_id"]
        created = (await client.post(f"/v1/payments/{past_id}/reminders", json={})).json()
        await client.delete(f"/v1/reminders/{created[0]['reminder_id']}")

        response = await client.post("/v1/reminders/send")

        assert response.json()["attempted"] == 0
        assert mock_notifier.call_count == 0

    @pytest.mark.asyncio
    async def test_delete_unknown_reminder_returns_404(self, client: AsyncClient):
        response = await client.delete(f"/v1/reminders/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "REMINDER_NOT_FOUND"
