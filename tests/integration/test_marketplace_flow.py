"""
End-to-end marketplace flow through the HTTP API.

Register -> post job -> apply -> hire -> contract -> pay -> complete -> review.
"""

import pytest

API = "/api/v1"

COMPANY = {
    "email": "Hiring@Shutterbox.in",
    "password": "Company@123",
    "name": "Shutterbox Studios",
    "role": "COMPANY",
    "city": "Jaipur",
    "state": "Rajasthan",
    "gst_number": "08abcde1234f1z5",
}

TALENT = {
    "email": "asha@example.com",
    "password": "Talent@123",
    "name": "Asha Verma",
    "role": "TALENT",
    "city": "Jaipur",
    "state": "Rajasthan",
    "skills": ["Photography", "Videography"],
    "hourly_rate": 800,
}


async def register(client, payload):
    response = await client.post(f"{API}/auth/register", json=payload)
    assert response.status_code == 201, response.text
    body = response.json()
    return {"Authorization": f"Bearer {body['access_token']}"}, body["user"]


class TestMarketplaceFlow:
    @pytest.mark.asyncio
    async def test_full_engagement(self, client):
        company_headers, company = await register(client, COMPANY)
        talent_headers, talent = await register(client, TALENT)
        assert company["email"] == "hiring@shutterbox.in"
        assert company["gst_number"] == "08ABCDE1234F1Z5"
        assert talent["skills"] == ["Photography", "Videography"]

        # Post a job
        response = await client.post(
            f"{API}/jobs",
            headers=company_headers,
            json={
                "title": "Wedding Photographer",
                "description": "Two day wedding shoot at a heritage hotel.",
                "category": "Photography",
                "location": "Jaipur, Rajasthan",
                "pay_type": "DAILY",
                "pay_amount": 6000,
                "start_date": "2026-12-01T08:00:00Z",
                "end_date": "2026-12-02T20:00:00Z",
            },
        )
        assert response.status_code == 201, response.text
        job = response.json()
        assert job["status"] == "OPEN"
        assert job["company_id"] == company["id"]

        # Public search finds it
        response = await client.get(f"{API}/jobs", params={"location": "jaipur", "min_pay": 5000})
        page = response.json()
        assert page["total"] == 1
        assert page["items"][0]["id"] == job["id"]

        # Apply
        response = await client.post(
            f"{API}/jobs/{job['id']}/applications",
            headers=talent_headers,
            json={"cover_letter": "Ten years of wedding work.", "proposed_rate": 5500, "estimated_days": 2},
        )
        assert response.status_code == 201, response.text
        application = response.json()
        assert application["status"] == "PENDING"

        response = await client.post(
            f"{API}/jobs/{job['id']}/applications", headers=talent_headers, json={}
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

        response = await client.get(f"{API}/jobs/{job['id']}", headers=talent_headers)
        assert response.json()["application_count"] == 1
        assert response.json()["company"]["name"] == "Shutterbox Studios"

        # Company reviews applicants and hires
        response = await client.get(f"{API}/jobs/{job['id']}/applications", headers=company_headers)
        assert [a["talent"]["name"] for a in response.json()] == ["Asha Verma"]

        response = await client.patch(
            f"{API}/applications/{application['id']}/status",
            headers=company_headers,
            json={"status": "HIRED"},
        )
        assert response.json()["status"] == "HIRED"

        # Contract
        response = await client.post(
            f"{API}/contracts",
            headers=company_headers,
            json={
                "job_id": job["id"],
                "talent_id": talent["id"],
                "total_amount": 12000,
                "terms": "50% advance, rest on delivery",
                "start_date": "2026-12-01T08:00:00Z",
                "end_date": "2026-12-02T20:00:00Z",
            },
        )
        assert response.status_code == 201, response.text
        contract = response.json()
        assert contract["status"] == "ACTIVE"
        assert contract["payment_status"] == "PENDING"
        assert contract["company_id"] == company["id"]

        # Payments
        response = await client.post(
            f"{API}/contracts/{contract['id']}/payments", headers=company_headers, json={"amount": 6000}
        )
        assert response.json()["payment_status"] == "PARTIALLY_PAID"

        response = await client.post(
            f"{API}/contracts/{contract['id']}/payments", headers=company_headers, json={"amount": 7000}
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Amount paid cannot exceed total amount"

        response = await client.post(
            f"{API}/contracts/{contract['id']}/payments", headers=company_headers, json={"amount": 6000}
        )
        assert response.json()["payment_status"] == "PAID"
        assert response.json()["amount_paid"] == 12000

        # Reviews are only allowed once completed
        response = await client.post(
            f"{API}/contracts/{contract['id']}/reviews", headers=talent_headers, json={"rating": 5}
        )
        assert response.status_code == 400

        response = await client.patch(
            f"{API}/contracts/{contract['id']}/status",
            headers=company_headers,
            json={"status": "COMPLETED"},
        )
        assert response.json()["status"] == "COMPLETED"

        response = await client.post(
            f"{API}/contracts/{contract['id']}/reviews",
            headers=company_headers,
            json={"rating": 4, "comment": "Great shots, a little late on delivery."},
        )
        assert response.status_code == 201, response.text
        assert response.json()["reviewee_id"] == talent["id"]

        response = await client.post(
            f"{API}/contracts/{contract['id']}/reviews", headers=talent_headers, json={"rating": 5}
        )
        assert response.status_code == 201

        # Reputation shows up on the profile, the reviews list and talent search
        response = await client.get(f"{API}/users/{talent['id']}", headers=company_headers)
        assert response.json()["rating"] == 4.0
        assert response.json()["jobs_completed"] == 1

        response = await client.get(f"{API}/users/{talent['id']}/reviews")
        reviews = response.json()
        assert len(reviews) == 1
        assert reviews[0]["reviewer"]["id"] == company["id"]

        response = await client.get(f"{API}/talents", params={"skills": "photography", "min_rating": 4})
        results = response.json()
        assert [t["id"] for t in results] == [talent["id"]]
        assert results[0]["jobs_completed"] == 1

        # Dashboards
        response = await client.get(f"{API}/dashboard", headers=talent_headers)
        stats = response.json()
        assert stats["applications"]["HIRED"] == 1
        assert stats["contracts"]["COMPLETED"] == 1
        assert stats["total_earned"] == 12000

        response = await client.get(f"{API}/dashboard", headers=company_headers)
        assert response.json()["total_spent"] == 12000


class TestAuth:
    @pytest.mark.asyncio
    async def test_login_and_me(self, client):
        await register(client, TALENT)
        response = await client.post(
            f"{API}/auth/login", json={"email": "ASHA@example.com", "password": "Talent@123"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "Bearer"
        assert body["expires_in"] == 30 * 86400

        response = await client.get(
            f"{API}/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"}
        )
        assert response.json()["email"] == "asha@example.com"
        assert "password_hash" not in response.json()

    @pytest.mark.asyncio
    async def test_bad_credentials_share_message(self, client):
        await register(client, TALENT)
        wrong_password = await client.post(
            f"{API}/auth/login", json={"email": "asha@example.com", "password": "Wrong@1234"}
        )
        unknown_email = await client.post(
            f"{API}/auth/login", json={"email": "nobody@example.com", "password": "Talent@123"}
        )
        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json()["error"]["message"] == unknown_email.json()["error"]["message"]

    @pytest.mark.asyncio
    async def test_duplicate_email(self, client):
        await register(client, TALENT)
        response = await client.post(f"{API}/auth/register", json={**TALENT, "email": "Asha@Example.com"})
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_weak_password_rejected(self, client):
        response = await client.post(f"{API}/auth/register", json={**TALENT, "password": "short"})
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_profile_update(self, client):
        headers, _ = await register(client, TALENT)
        response = await client.patch(
            f"{API}/users/me", headers=headers, json={"bio": "Candid photographer", "skills": "Photography, Drone"}
        )
        assert response.status_code == 200
        assert response.json()["bio"] == "Candid photographer"
        assert response.json()["skills"] == ["Photography", "Drone"]
        assert response.json()["city"] == "Jaipur"
