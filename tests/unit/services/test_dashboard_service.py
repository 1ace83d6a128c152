"""
Tests for per-role dashboard statistics.
"""

import pytest

from api.schemas.applications import ApplicationCreate
from api.schemas.tickets import TicketCreate
from api.services import (
    create_application,
    create_ticket,
    get_dashboard,
    record_payment,
)
from database.models.users import UserRole


@pytest.fixture
async def marketplace(db_session, make_user, make_job, make_contract):
    admin = await make_user(UserRole.ADMIN)
    company = await make_user(UserRole.COMPANY)
    talent = await make_user(UserRole.TALENT)
    job = await make_job(company)
    await make_job(company)
    await create_application(db_session, ApplicationCreate(job_id=job.id, talent_id=talent.id))
    contract = await make_contract(job, talent, total_amount=5000)
    await record_payment(db_session, contract.id, 1500)
    await create_ticket(
        db_session,
        TicketCreate(user_id=talent.id, subject="Need help", description="Cannot upload my photo."),
    )
    return admin, company, talent


class TestDashboard:
    @pytest.mark.asyncio
    async def test_talent(self, db_session, marketplace):
        _, _, talent = marketplace
        stats = await get_dashboard(db_session, talent)
        assert stats["role"] == "TALENT"
        assert stats["applications"] == {"PENDING": 1, "SHORTLISTED": 0, "REJECTED": 0, "HIRED": 0}
        assert stats["contracts"]["ACTIVE"] == 1
        assert stats["total_earned"] == 1500.0

    @pytest.mark.asyncio
    async def test_company(self, db_session, marketplace):
        _, company, _ = marketplace
        stats = await get_dashboard(db_session, company)
        assert stats["jobs"]["OPEN"] == 2
        assert stats["applications"]["PENDING"] == 1
        assert stats["total_spent"] == 1500.0

    @pytest.mark.asyncio
    async def test_admin(self, db_session, marketplace):
        admin, _, _ = marketplace
        stats = await get_dashboard(db_session, admin)
        assert stats["users"] == {"ADMIN": 1, "COMPANY": 1, "TALENT": 1}
        assert stats["tickets"]["OPEN"] == 1
        assert stats["contracts"]["ACTIVE"] == 1
        assert stats["total_paid"] == 1500.0
