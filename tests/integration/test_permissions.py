"""
Authentication and role checks at the HTTP boundary.
"""

import pytest
from sqlalchemy.exc import OperationalError

from api.main import app
from database.engine import get_db
from database.models.users import UserRole

API = "/api/v1"

JOB = {
    "title": "Banquet Staff",
    "description": "Serving staff for a 300 guest reception.",
    "category": "Catering",
    "location": "Pune, Maharashtra",
    "pay_type": "DAILY",
    "pay_amount": 1500,
}


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_missing_token(self, client):
        response = await client.get(f"{API}/auth/me")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["error"]["code"] == "HTTP_EXCEPTION"

    @pytest.mark.asyncio
    async def test_garbage_token(self, client):
        response = await client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_banned_user_locked_out(self, client, make_user, headers_for):
        admin = await make_user(UserRole.ADMIN)
        talent = await make_user(UserRole.TALENT)

        response = await client.post(f"{API}/users/{talent.id}/ban", headers=headers_for(admin))
        assert response.json()["is_banned"] is True

        response = await client.get(f"{API}/auth/me", headers=headers_for(talent))
        assert response.status_code == 403

        response = await client.post(
            f"{API}/auth/login", json={"email": talent.email, "password": "Secure@123"}
        )
        assert response.status_code == 403

        response = await client.post(f"{API}/users/{talent.id}/unban", headers=headers_for(admin))
        assert response.json()["is_banned"] is False
        response = await client.get(f"{API}/auth/me", headers=headers_for(talent))
        assert response.status_code == 200


class TestRoles:
    @pytest.mark.asyncio
    async def test_admin_cannot_self_register(self, client):
        response = await client.post(
            f"{API}/auth/register",
            json={"email": "root@example.com", "password": "Admin@1234", "name": "Root", "role": "ADMIN"},
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_talent_cannot_post_jobs(self, client, make_user, headers_for):
        talent = await make_user(UserRole.TALENT)
        response = await client.post(f"{API}/jobs", headers=headers_for(talent), json=JOB)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_company_cannot_apply(self, client, make_user, make_job, headers_for):
        company = await make_user(UserRole.COMPANY)
        job = await make_job(company)
        response = await client.post(
            f"{API}/jobs/{job.id}/applications", headers=headers_for(company), json={}
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_company_cannot_touch_other_jobs(self, client, make_user, make_job, headers_for):
        owner = await make_user(UserRole.COMPANY)
        rival = await make_user(UserRole.COMPANY)
        job = await make_job(owner)

        response = await client.patch(
            f"{API}/jobs/{job.id}", headers=headers_for(rival), json={"status": "CANCELLED"}
        )
        assert response.status_code == 403

        response = await client.get(f"{API}/jobs/{job.id}/applications", headers=headers_for(rival))
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_contract_for_foreign_job_forbidden(self, client, make_user, make_job, headers_for):
        owner = await make_user(UserRole.COMPANY)
        rival = await make_user(UserRole.COMPANY)
        talent = await make_user(UserRole.TALENT)
        job = await make_job(owner)

        response = await client.post(
            f"{API}/contracts",
            headers=headers_for(rival),
            json={
                "job_id": job.id,
                "talent_id": talent.id,
                "total_amount": 3000,
                "start_date": "2026-11-01T00:00:00Z",
            },
        )
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "PERMISSION_DENIED"

    @pytest.mark.asyncio
    async def test_outsider_cannot_view_contract(self, client, make_user, make_job, make_contract, headers_for):
        company = await make_user(UserRole.COMPANY)
        talent = await make_user(UserRole.TALENT)
        outsider = await make_user(UserRole.TALENT)
        contract = await make_contract(await make_job(company), talent)

        response = await client.get(f"{API}/contracts/{contract.id}", headers=headers_for(outsider))
        assert response.status_code == 403

        response = await client.get(f"{API}/contracts/{contract.id}", headers=headers_for(talent))
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_only_admin_overrides_payment_status(self, client, make_user, make_job, make_contract, headers_for):
        admin = await make_user(UserRole.ADMIN)
        company = await make_user(UserRole.COMPANY)
        talent = await make_user(UserRole.TALENT)
        contract = await make_contract(await make_job(company), talent)

        response = await client.patch(
            f"{API}/contracts/{contract.id}/status",
            headers=headers_for(company),
            json={"payment_status": "REFUNDED"},
        )
        assert response.status_code == 403

        response = await client.patch(
            f"{API}/contracts/{contract.id}/status",
            headers=headers_for(admin),
            json={"payment_status": "REFUNDED"},
        )
        assert response.json()["payment_status"] == "REFUNDED"

    @pytest.mark.asyncio
    async def test_admin_posts_for_company(self, client, make_user, headers_for):
        admin = await make_user(UserRole.ADMIN)
        company = await make_user(UserRole.COMPANY)

        response = await client.post(f"{API}/jobs", headers=headers_for(admin), json=JOB)
        assert response.status_code == 400

        response = await client.post(
            f"{API}/jobs", headers=headers_for(admin), json={**JOB, "company_id": company.id}
        )
        assert response.status_code == 201
        assert response.json()["company_id"] == company.id

    @pytest.mark.asyncio
    async def test_admin_cannot_be_banned(self, client, make_user, headers_for):
        admin = await make_user(UserRole.ADMIN)
        other_admin = await make_user(UserRole.ADMIN)
        response = await client.post(f"{API}/users/{other_admin.id}/ban", headers=headers_for(admin))
        assert response.status_code == 400


class TestPublicEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get(f"{API}/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["environment"] == "test"
        assert "x-request-id" in response.headers

    @pytest.mark.asyncio
    async def test_health_reports_database_outage(self, client):
        class UnreachableSession:
            async def execute(self, *args, **kwargs):
                raise OperationalError("SELECT 1", {}, Exception("unable to open database file"))

        async def unreachable_db():
            yield UnreachableSession()

        app.dependency_overrides[get_db] = unreachable_db
        response = await client.get(f"{API}/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Health check failed"
        assert "unable to open database file" in body["error"]

    @pytest.mark.asyncio
    async def test_talent_search_hides_email(self, client, make_user):
        await make_user(UserRole.TALENT, email="private.person@example.com", skills="Security")

        response = await client.get(f"{API}/talents", params={"skills": "security"})

        assert response.status_code == 200
        results = response.json()
        assert len(results) == 1
        assert "email" not in results[0]
        assert "private.person@example.com" not in response.text

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client):
        response = await client.get(f"{API}/jobs", headers={"x-request-id": "req-123"})
        assert response.headers["x-request-id"] == "req-123"

    @pytest.mark.asyncio
    async def test_unknown_job(self, client):
        response = await client.get(f"{API}/jobs/999")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Job not found"

    @pytest.mark.asyncio
    async def test_openapi_documents_error_envelope(self, client):
        response = await client.get("/openapi.json")
        schema = response.json()
        assert "ErrorResponse" in schema["components"]["schemas"]
        login = schema["paths"][f"{API}/auth/login"]["post"]["responses"]
        assert login["401"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
