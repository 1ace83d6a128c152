"""
Application workflow endpoints.

Talents list their own applications; the company that owns the job moves
applications through PENDING, SHORTLISTED, REJECTED and HIRED.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_active_user, require_company, require_talent
from api.schemas.applications import ApplicationResponse, ApplicationStatusUpdate
from api.services import applications as application_service
from api.services import jobs as job_service
from database.engine import get_db
from database.models.applications import Application
from database.models.users import User, UserRole

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])


async def _get_application(db: AsyncSession, application_id: int) -> Application:
    application = await application_service.get_application_by_id(db, application_id)
    if not application:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Application not found")
    return application


@router.get("/me", response_model=list[ApplicationResponse])
async def list_my_applications(
    current_user: User = Depends(require_talent),
    db: AsyncSession = Depends(get_db),
):
    """Applications submitted by the signed-in talent, newest first."""
    applications = await application_service.get_applications_by_talent(db, current_user.id)
    return [ApplicationResponse.model_validate(a) for a in applications]


@router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: int = Path(..., description="Application ID"),
    current_user: User = Depends(require_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Visible to the applicant, the job's company and admins."""
    application = await _get_application(db, application_id)

    if current_user.role != UserRole.ADMIN and current_user.id != application.talent_id:
        job = await job_service.get_job_by_id(db, application.job_id)
        if not job or job.company_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You don't have access to this application",
            )

    return ApplicationResponse.model_validate(application)


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    status_data: ApplicationStatusUpdate,
    application_id: int = Path(..., description="Application ID"),
    current_user: User = Depends(require_company),
    db: AsyncSession = Depends(get_db),
):
    """
    Shortlist, reject or hire an applicant.

    Hiring does not create a contract; the company does that with
    ``POST /contracts``.
    """
    application = await _get_application(db, application_id)

    if current_user.role != UserRole.ADMIN:
        job = await job_service.get_job_by_id(db, application.job_id)
        if not job or job.company_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only manage applications to your own jobs",
            )

    application = await application_service.update_application_status(
        db, application_id, status_data.status
    )
    logger.info(f"User {current_user.id} set application {application_id} to {status_data.status.value}")
    return ApplicationResponse.model_validate(application)
