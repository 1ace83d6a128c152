"""
Job posting endpoints.

Public job search and detail; companies post and edit their own jobs and
review the applications they receive. Talents apply through
``POST /jobs/{job_id}/applications``.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_pagination_params, require_company, require_talent
from api.schemas.applications import (
    ApplicationCreate,
    ApplicationCreateRequest,
    ApplicationResponse,
    ApplicationWithTalentResponse,
)
from api.schemas.common import PaginatedResponse, PaginationParams
from api.schemas.jobs import (
    JobCreate,
    JobCreateRequest,
    JobDetailResponse,
    JobResponse,
    JobUpdate,
)
from api.services import applications as application_service
from api.services import jobs as job_service
from api.services import users as user_service
from database.engine import get_db
from database.models.jobs import Job, JobCategory, PayType
from database.models.users import User, UserRole

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


async def _get_owned_job(db: AsyncSession, job_id: int, user: User) -> Job:
    job = await job_service.get_job_by_id(db, job_id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    if user.role != UserRole.ADMIN and job.company_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only manage your own jobs",
        )
    return job


@router.get("", response_model=PaginatedResponse[JobResponse])
async def list_jobs(
    category: Optional[JobCategory] = Query(None, description="Filter by category"),
    location: Optional[str] = Query(None, description="Substring of the job location"),
    min_pay: Optional[float] = Query(None, ge=0, description="Minimum pay amount"),
    pay_type: Optional[PayType] = Query(None, description="Filter by pay type"),
    pagination: PaginationParams = Depends(get_pagination_params),
    db: AsyncSession = Depends(get_db),
):
    """Search open jobs."""
    jobs = await job_service.search_jobs(
        db,
        category=category,
        location=location,
        min_pay=min_pay,
        pay_type=pay_type,
        limit=pagination.limit,
        offset=pagination.offset,
    )
    total = await job_service.count_open_jobs(
        db, category=category, location=location, min_pay=min_pay, pay_type=pay_type
    )
    items = [JobResponse.model_validate(job) for job in jobs]
    return PaginatedResponse.create(items, total, pagination)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    job_data: JobCreateRequest,
    current_user: User = Depends(require_company),
    db: AsyncSession = Depends(get_db),
):
    """
    Post a job.

    Companies always post as themselves; admins must name the company.
    """
    company_id = current_user.id
    if current_user.role == UserRole.ADMIN:
        if job_data.company_id is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="company_id is required when posting as an admin",
            )
        company = await user_service.get_user_by_id(db, job_data.company_id)
        if not company or company.role != UserRole.COMPANY:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="company_id must reference a company account",
            )
        company_id = job_data.company_id

    job = await job_service.create_job(
        db, JobCreate(**job_data.model_dump(exclude={"company_id"}), company_id=company_id)
    )
    return JobResponse.model_validate(job)


@router.get("/{job_id}", response_model=JobDetailResponse)
async def get_job(
    job_id: int = Path(..., description="Job ID"),
    db: AsyncSession = Depends(get_db),
):
    """Job details with a summary of the posting company."""
    job = await job_service.get_job_with_company(db, job_id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return JobDetailResponse.model_validate(job)


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
    update_data: JobUpdate,
    job_id: int = Path(..., description="Job ID"),
    current_user: User = Depends(require_company),
    db: AsyncSession = Depends(get_db),
):
    await _get_owned_job(db, job_id, current_user)
    job = await job_service.update_job(db, job_id, update_data)
    logger.info(f"User {current_user.id} updated job {job_id}")
    return JobResponse.model_validate(job)


@router.get("/{job_id}/applications", response_model=list[ApplicationWithTalentResponse])
async def list_job_applications(
    job_id: int = Path(..., description="Job ID"),
    current_user: User = Depends(require_company),
    db: AsyncSession = Depends(get_db),
):
    """Applications received for a job. Owner or admin only."""
    await _get_owned_job(db, job_id, current_user)
    applications = await application_service.get_applications_by_job(db, job_id)
    return [ApplicationWithTalentResponse.model_validate(a) for a in applications]


@router.post(
    "/{job_id}/applications",
    response_model=ApplicationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def apply_to_job(
    application_data: ApplicationCreateRequest,
    job_id: int = Path(..., description="Job ID"),
    current_user: User = Depends(require_talent),
    db: AsyncSession = Depends(get_db),
):
    """Apply to an open job as the signed-in talent."""
    application = await application_service.create_application(
        db,
        ApplicationCreate(
            **application_data.model_dump(), job_id=job_id, talent_id=current_user.id
        ),
    )
    return ApplicationResponse.model_validate(application)
