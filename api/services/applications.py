"""Application service functions."""

from typing import List, Optional
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from api.schemas.applications import ApplicationCreate
from core.exceptions import ConflictError, NotFoundError
from database.models.applications import Application, ApplicationStatus
from database.models.jobs import Job, JobStatus
from database.models.users import User, UserRole

logger = logging.getLogger(__name__)


async def create_application(session: AsyncSession, data: ApplicationCreate) -> Application:
    """
    Submit a talent's application to a job.

    Args:
        session: Database session
        data: Validated application payload

    Returns:
        The persisted application

    Raises:
        NotFoundError: If the job or talent does not exist
        PermissionError: If the applicant is not a talent
        ValueError: If the job is not open for applications
        ConflictError: If the talent already applied to this job
    """
    job = await session.get(Job, data.job_id)
    if not job:
        raise NotFoundError(f"Job {data.job_id} not found")
    talent = await session.get(User, data.talent_id)
    if not talent:
        raise NotFoundError(f"User {data.talent_id} not found")
    if talent.role != UserRole.TALENT:
        raise PermissionError("Only talents can apply to jobs")
    if job.status != JobStatus.OPEN:
        raise ValueError("This job is not accepting applications")

    existing = await session.execute(
        select(Application.id).where(
            Application.job_id == data.job_id,
            Application.talent_id == data.talent_id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise ConflictError("You have already applied to this job")

    application = Application(**data.model_dump())
    session.add(application)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise ConflictError("You have already applied to this job")
    await session.refresh(application)

    logger.info(f"Talent {application.talent_id} applied to job {application.job_id}")
    return application


async def get_application_by_id(session: AsyncSession, application_id: int) -> Optional[Application]:
    return await session.get(Application, application_id)


async def get_applications_by_job(session: AsyncSession, job_id: int) -> List[Application]:
    """Applications for a job with the applicant loaded, oldest first."""
    result = await session.execute(
        select(Application)
        .options(selectinload(Application.talent))
        .where(Application.job_id == job_id)
        .order_by(Application.created_at.asc(), Application.id.asc())
    )
    return list(result.scalars().all())


async def get_applications_by_talent(session: AsyncSession, talent_id: int) -> List[Application]:
    result = await session.execute(
        select(Application)
        .where(Application.talent_id == talent_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
    )
    return list(result.scalars().all())


async def update_application_status(
    session: AsyncSession,
    application_id: int,
    status: ApplicationStatus,
) -> Optional[Application]:
    """Set an application's status. Hiring does not create a contract."""
    application = await session.get(Application, application_id)
    if not application:
        return None

    previous = application.status
    application.status = status
    await session.commit()
    await session.refresh(application)

    logger.info(
        f"Application {application_id} moved from {previous.value} to {status.value}"
    )
    return application
