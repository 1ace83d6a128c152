"""Job application API schemas."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from api.schemas.common import TimestampMixin, check_length, check_range, strip_if_str
from api.schemas.users import UserSummary
from database.models.applications import ApplicationStatus


class ApplicationCreateRequest(BaseModel):
    """Body for ``POST /jobs/{job_id}/applications``. The job and talent come from the route."""

    cover_letter: Optional[str] = Field(None, description="Pitch to the company")
    proposed_rate: Optional[float] = Field(None, description="Talent's asking rate")
    estimated_days: Optional[int] = Field(None, description="Estimated duration in days")

    @field_validator("cover_letter", mode="before")
    @classmethod
    def strip_cover_letter(cls, v):
        return strip_if_str(v)

    @field_validator("cover_letter")
    @classmethod
    def validate_cover_letter(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return check_length(v, "Cover letter", 0, 10000)

    @field_validator("proposed_rate")
    @classmethod
    def validate_proposed_rate(cls, v: Optional[float]) -> Optional[float]:
        if v is None:
            return None
        return check_range(
            v, 0, 1_000_000, "Proposed rate cannot be negative", "Proposed rate is too high"
        )

    @field_validator("estimated_days")
    @classmethod
    def validate_estimated_days(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return None
        return check_range(
            v, 1, 365, "Estimated days must be at least 1", "Estimated days cannot exceed 365"
        )


class ApplicationCreate(ApplicationCreateRequest):
    """Schema for inserting an application row."""

    job_id: int
    talent_id: int
    status: ApplicationStatus = Field(default=ApplicationStatus.PENDING)


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus = Field(..., description="New application status")


class ApplicationResponse(TimestampMixin):
    """Schema for application response."""

    id: int
    job_id: int
    talent_id: int
    status: ApplicationStatus
    cover_letter: Optional[str] = None
    proposed_rate: Optional[float] = None
    estimated_days: Optional[int] = None

    class Config:
        from_attributes = True


class ApplicationWithTalentResponse(ApplicationResponse):
    """Application as seen by the job owner, with the applicant summary."""

    talent: Optional[UserSummary] = None
