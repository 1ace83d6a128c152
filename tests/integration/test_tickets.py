"""
Support ticket endpoints.
"""

import pytest

from database.models.users import UserRole

API = "/api/v1"


class TestTicketEndpoints:
    @pytest.mark.asyncio
    async def test_open_and_triage(self, client, make_user, headers_for):
        admin = await make_user(UserRole.ADMIN)
        talent = await make_user(UserRole.TALENT)

        response = await client.post(
            f"{API}/tickets",
            headers=headers_for(talent),
            json={
                "subject": "  Payment missing  ",
                "description": "Contract 12 shows paid but I have nothing.",
                "priority": "HIGH",
            },
        )
        assert response.status_code == 201, response.text
        ticket = response.json()
        assert ticket["subject"] == "Payment missing"
        assert ticket["status"] == "OPEN"
        assert ticket["user_id"] == talent.id

        response = await client.get(f"{API}/tickets/me", headers=headers_for(talent))
        assert [t["id"] for t in response.json()] == [ticket["id"]]

        response = await client.get(f"{API}/tickets", headers=headers_for(admin), params={"priority": "HIGH"})
        assert [t["id"] for t in response.json()] == [ticket["id"]]

        response = await client.patch(
            f"{API}/tickets/{ticket['id']}", headers=headers_for(admin), json={"status": "RESOLVED"}
        )
        assert response.json()["status"] == "RESOLVED"
        assert response.json()["priority"] == "HIGH"

        response = await client.get(f"{API}/tickets", headers=headers_for(admin), params={"status": "OPEN"})
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_queue_is_admin_only(self, client, make_user, headers_for):
        talent = await make_user(UserRole.TALENT)
        response = await client.get(f"{API}/tickets", headers=headers_for(talent))
        assert response.status_code == 403

        response = await client.patch(
            f"{API}/tickets/1", headers=headers_for(talent), json={"status": "CLOSED"}
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_short_subject_rejected(self, client, make_user, headers_for):
        talent = await make_user(UserRole.TALENT)
        response = await client.post(
            f"{API}/tickets",
            headers=headers_for(talent),
            json={"subject": "Hi", "description": "Something is wrong with my account."},
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_ticket(self, client, make_user, headers_for):
        admin = await make_user(UserRole.ADMIN)
        response = await client.patch(
            f"{API}/tickets/404", headers=headers_for(admin), json={"status": "CLOSED"}
        )
        assert response.status_code == 404
