"""
Tests for job service functions and job search.
"""

from datetime import datetime, timedelta, timezone

import pytest

from api.schemas.applications import ApplicationCreate
from api.schemas.jobs import JobUpdate
from api.services import (
    count_open_jobs,
    create_application,
    get_job_with_company,
    get_jobs_by_company,
    search_jobs,
    update_job,
)
from database.models.jobs import JobCategory, JobStatus, PayType
from database.models.users import UserRole


class TestJobQueries:
    @pytest.mark.asyncio
    async def test_jobs_by_company_newest_first(self, db_session, make_user, make_job):
        company = await make_user(UserRole.COMPANY)
        other = await make_user(UserRole.COMPANY)
        first = await make_job(company)
        second = await make_job(company)
        await make_job(other)

        jobs = await get_jobs_by_company(db_session, company.id)
        assert [j.id for j in jobs] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_job_with_company(self, db_session, make_user, make_job):
        company = await make_user(UserRole.COMPANY, name="Lotus Events", profile_photo="https://cdn/lotus.png")
        talent = await make_user(UserRole.TALENT)
        job = await make_job(company)
        await create_application(db_session, ApplicationCreate(job_id=job.id, talent_id=talent.id))

        detail = await get_job_with_company(db_session, job.id)
        assert detail["id"] == job.id
        assert detail["company"] == {
            "id": company.id,
            "name": "Lotus Events",
            "profile_photo": "https://cdn/lotus.png",
        }
        assert detail["application_count"] == 1

    @pytest.mark.asyncio
    async def test_job_with_company_missing(self, db_session):
        assert await get_job_with_company(db_session, 404) is None


class TestUpdateJob:
    @pytest.mark.asyncio
    async def test_partial_update(self, db_session, make_user, make_job):
        job = await make_job(await make_user(UserRole.COMPANY))
        updated = await update_job(db_session, job.id, JobUpdate(status=JobStatus.CANCELLED))
        assert updated.status == JobStatus.CANCELLED
        assert updated.title == job.title

    @pytest.mark.asyncio
    async def test_end_date_checked_against_stored_start(self, db_session, make_user, make_job):
        start = datetime(2026, 12, 1, tzinfo=timezone.utc)
        job = await make_job(await make_user(UserRole.COMPANY), start_date=start)
        with pytest.raises(ValueError, match="End date cannot be before start date"):
            await update_job(db_session, job.id, JobUpdate(end_date=start - timedelta(days=2)))

    @pytest.mark.asyncio
    async def test_missing_job(self, db_session):
        assert await update_job(db_session, 404, JobUpdate(title="Nothing here")) is None


class TestSearchJobs:
    @pytest.fixture
    async def catalogue(self, make_user, make_job):
        company = await make_user(UserRole.COMPANY)
        return {
            "photo_jaipur": await make_job(company, location="Jaipur, Rajasthan", pay_amount=4000),
            "catering_pune": await make_job(
                company,
                title="Banquet Caterer",
                category=JobCategory.CATERING,
                location="Pune, Maharashtra",
                pay_type=PayType.HOURLY,
                pay_amount=500,
            ),
            "photo_pune": await make_job(company, location="Pune, Maharashtra", pay_amount=8000),
            "closed": await make_job(company, status=JobStatus.COMPLETED),
        }

    @pytest.mark.asyncio
    async def test_only_open_jobs_oldest_first(self, db_session, catalogue):
        jobs = await search_jobs(db_session)
        assert [j.id for j in jobs] == [
            catalogue["photo_jaipur"].id,
            catalogue["catering_pune"].id,
            catalogue["photo_pune"].id,
        ]

    @pytest.mark.asyncio
    async def test_filters_are_combined(self, db_session, catalogue):
        jobs = await search_jobs(
            db_session, category=JobCategory.PHOTOGRAPHY, location="pune", min_pay=5000
        )
        assert [j.id for j in jobs] == [catalogue["photo_pune"].id]

    @pytest.mark.asyncio
    async def test_location_case_insensitive_substring(self, db_session, catalogue):
        jobs = await search_jobs(db_session, location="MAHARASH")
        assert {j.id for j in jobs} == {catalogue["catering_pune"].id, catalogue["photo_pune"].id}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("location", ["%", "_", "Pu_e", "%Rajasthan"])
    async def test_location_wildcards_are_literal(self, db_session, catalogue, location):
        assert await search_jobs(db_session, location=location) == []
        assert await count_open_jobs(db_session, location=location) == 0

    @pytest.mark.asyncio
    async def test_pay_type_and_min_pay_inclusive(self, db_session, catalogue):
        assert [j.id for j in await search_jobs(db_session, pay_type=PayType.HOURLY)] == [
            catalogue["catering_pune"].id
        ]
        assert len(await search_jobs(db_session, min_pay=4000)) == 2

    @pytest.mark.asyncio
    async def test_pagination_and_count(self, db_session, catalogue):
        page = await search_jobs(db_session, limit=1, offset=1)
        assert [j.id for j in page] == [catalogue["catering_pune"].id]
        assert await count_open_jobs(db_session) == 3
        assert await count_open_jobs(db_session, category=JobCategory.CATERING) == 1
