"""Job service functions."""

from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import Select, select, func
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.common import as_utc
from api.schemas.jobs import JobCreate, JobUpdate
from database.models.applications import Application
from database.models.jobs import Job, JobCategory, JobStatus, PayType
from database.models.users import User

logger = logging.getLogger(__name__)


async def create_job(session: AsyncSession, data: JobCreate) -> Job:
    job = Job(**data.model_dump())
    session.add(job)
    await session.commit()
    await session.refresh(job)

    logger.info(f"Company {job.company_id} posted job {job.id}")
    return job


async def get_job_by_id(session: AsyncSession, job_id: int) -> Optional[Job]:
    return await session.get(Job, job_id)


async def get_jobs_by_company(session: AsyncSession, company_id: int) -> List[Job]:
    """All jobs posted by a company, newest first."""
    result = await session.execute(
        select(Job)
        .where(Job.company_id == company_id)
        .order_by(Job.created_at.desc(), Job.id.desc())
    )
    return list(result.scalars().all())


async def get_job_with_company(session: AsyncSession, job_id: int) -> Optional[Dict[str, Any]]:
    """
    Get a job together with a summary of the company that posted it.

    Args:
        session: Database session
        job_id: Job ID

    Returns:
        Dict with the job's columns, a ``company`` summary
        ({id, name, profile_photo}) and ``application_count``, or None
    """
    result = await session.execute(
        select(Job, User.id, User.name, User.profile_photo)
        .join(User, User.id == Job.company_id)
        .where(Job.id == job_id)
    )
    row = result.first()
    if not row:
        return None
    job, company_id, company_name, company_photo = row

    count_result = await session.execute(
        select(func.count())
        .select_from(Application)
        .where(Application.job_id == job_id)
    )
    application_count = count_result.scalar() or 0

    return {
        "id": job.id,
        "company_id": job.company_id,
        "title": job.title,
        "description": job.description,
        "category": job.category,
        "location": job.location,
        "pay_type": job.pay_type,
        "pay_amount": job.pay_amount,
        "start_date": job.start_date,
        "end_date": job.end_date,
        "status": job.status,
        "created_at": job.created_at,
        "updated_at": job.updated_at,
        "company": {"id": company_id, "name": company_name, "profile_photo": company_photo},
        "application_count": application_count,
    }


async def update_job(session: AsyncSession, job_id: int, data: JobUpdate) -> Optional[Job]:
    """
    Apply a partial job update.

    Raises:
        ValueError: If the resulting end date falls before the start date
    """
    job = await session.get(Job, job_id)
    if not job:
        return None

    changes = data.model_dump(exclude_unset=True)
    start = changes.get("start_date", job.start_date)
    end = changes.get("end_date", job.end_date)
    if start is not None and end is not None and as_utc(end) < as_utc(start):
        raise ValueError("End date cannot be before start date")

    for field, value in changes.items():
        setattr(job, field, value)

    await session.commit()
    await session.refresh(job)
    return job


def _open_jobs_query(
    category: Optional[JobCategory] = None,
    location: Optional[str] = None,
    min_pay: Optional[float] = None,
    pay_type: Optional[PayType] = None,
) -> Select:
    query = select(Job).where(Job.status == JobStatus.OPEN)

    if category:
        query = query.where(Job.category == category)
    if location:
        query = query.where(
            func.lower(Job.location).contains(location.strip().lower(), autoescape=True)
        )
    if min_pay is not None:
        query = query.where(Job.pay_amount >= min_pay)
    if pay_type:
        query = query.where(Job.pay_type == pay_type)
    return query


async def search_jobs(
    session: AsyncSession,
    category: Optional[JobCategory] = None,
    location: Optional[str] = None,
    min_pay: Optional[float] = None,
    pay_type: Optional[PayType] = None,
    limit: int = 20,
    offset: int = 0,
) -> List[Job]:
    """
    Search open jobs. All given filters must match.

    Args:
        session: Database session
        category: Exact category
        location: Case-insensitive substring of the job location
        min_pay: Minimum pay_amount (inclusive)
        pay_type: Exact pay type
        limit: Max results
        offset: Pagination offset

    Returns:
        Jobs ordered by creation time, oldest first
    """
    query = _open_jobs_query(category, location, min_pay, pay_type)
    query = query.order_by(Job.created_at.asc(), Job.id.asc()).limit(limit).offset(offset)

    result = await session.execute(query)
    return list(result.scalars().all())


async def count_open_jobs(
    session: AsyncSession,
    category: Optional[JobCategory] = None,
    location: Optional[str] = None,
    min_pay: Optional[float] = None,
    pay_type: Optional[PayType] = None,
) -> int:
    """Total matches for ``search_jobs`` ignoring pagination."""
    query = _open_jobs_query(category, location, min_pay, pay_type)
    result = await session.execute(select(func.count()).select_from(query.subquery()))
    return result.scalar() or 0
