"""
Tests for application service functions.
"""

import pytest

from api.schemas.applications import ApplicationCreate
from api.services import (
    create_application,
    get_applications_by_job,
    get_contracts_by_talent,
    get_applications_by_talent,
    update_application_status,
)
from core.exceptions import ConflictError, NotFoundError
from database.models.applications import ApplicationStatus
from database.models.jobs import JobStatus
from database.models.users import UserRole


@pytest.fixture
async def setup(make_user, make_job):
    company = await make_user(UserRole.COMPANY)
    talent = await make_user(UserRole.TALENT)
    job = await make_job(company)
    return company, talent, job


class TestCreateApplication:
    @pytest.mark.asyncio
    async def test_talent_applies(self, db_session, setup):
        _, talent, job = setup
        application = await create_application(
            db_session,
            ApplicationCreate(job_id=job.id, talent_id=talent.id, cover_letter="Hire me", estimated_days=3),
        )
        assert application.status == ApplicationStatus.PENDING
        assert application.cover_letter == "Hire me"

    @pytest.mark.asyncio
    async def test_duplicate_application_conflicts(self, db_session, setup):
        _, talent, job = setup
        data = ApplicationCreate(job_id=job.id, talent_id=talent.id)
        await create_application(db_session, data)
        with pytest.raises(ConflictError, match="already applied"):
            await create_application(db_session, data)

    @pytest.mark.asyncio
    async def test_company_cannot_apply(self, db_session, setup):
        company, _, job = setup
        with pytest.raises(PermissionError, match="Only talents can apply"):
            await create_application(db_session, ApplicationCreate(job_id=job.id, talent_id=company.id))

    @pytest.mark.asyncio
    async def test_job_must_be_open(self, db_session, setup, make_job):
        company, talent, _ = setup
        closed = await make_job(company, status=JobStatus.IN_PROGRESS)
        with pytest.raises(ValueError, match="not accepting applications"):
            await create_application(db_session, ApplicationCreate(job_id=closed.id, talent_id=talent.id))

    @pytest.mark.asyncio
    async def test_missing_job(self, db_session, setup):
        _, talent, _ = setup
        with pytest.raises(NotFoundError):
            await create_application(db_session, ApplicationCreate(job_id=999, talent_id=talent.id))


class TestApplicationQueries:
    @pytest.mark.asyncio
    async def test_by_job_loads_talent(self, db_session, setup, make_user):
        _, talent, job = setup
        second = await make_user(UserRole.TALENT, name="Second Talent")
        await create_application(db_session, ApplicationCreate(job_id=job.id, talent_id=talent.id))
        await create_application(db_session, ApplicationCreate(job_id=job.id, talent_id=second.id))

        applications = await get_applications_by_job(db_session, job.id)
        assert [a.talent.name for a in applications] == [talent.name, "Second Talent"]

    @pytest.mark.asyncio
    async def test_by_talent_newest_first(self, db_session, setup, make_job):
        company, talent, job = setup
        other_job = await make_job(company)
        first = await create_application(db_session, ApplicationCreate(job_id=job.id, talent_id=talent.id))
        second = await create_application(db_session, ApplicationCreate(job_id=other_job.id, talent_id=talent.id))

        applications = await get_applications_by_talent(db_session, talent.id)
        assert [a.id for a in applications] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_hiring_does_not_create_contract(self, db_session, setup):
        _, talent, job = setup
        application = await create_application(db_session, ApplicationCreate(job_id=job.id, talent_id=talent.id))
        hired = await update_application_status(db_session, application.id, ApplicationStatus.HIRED)
        assert hired.status == ApplicationStatus.HIRED

        assert await get_contracts_by_talent(db_session, talent.id) == []

    @pytest.mark.asyncio
    async def test_update_missing(self, db_session):
        assert await update_application_status(db_session, 999, ApplicationStatus.REJECTED) is None
