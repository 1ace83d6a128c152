"""Job posting API schemas."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from api.schemas.common import (
    TimestampMixin,
    as_utc,
    check_length,
    check_range,
    strip_if_str,
)
from api.schemas.users import UserSummary
from database.models.jobs import JobCategory, JobStatus, PayType

MAX_PAY_AMOUNT = 1_000_000


def _validate_title(v: str) -> str:
    return check_length(v, "Title", 5, 200)


def _validate_description(v: str) -> str:
    return check_length(v, "Description", 10, 10000)


def _validate_location(v: str) -> str:
    return check_length(v, "Location", 1, 200, min_message="Location is required")


def _validate_pay_amount(v: float) -> float:
    return check_range(
        v, 0, MAX_PAY_AMOUNT, "Pay amount must be positive", "Pay amount is too high"
    )


def _validate_end_date(v: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
    start = info.data.get("start_date")
    if v is not None and start is not None and as_utc(v) < as_utc(start):
        raise ValueError("End date cannot be before start date")
    return v


class JobCreateRequest(BaseModel):
    """
    Job posting body accepted by ``POST /jobs``.

    ``company_id`` is filled from the caller unless an admin posts on behalf
    of a company.
    """

    title: str = Field(..., description="Job title")
    description: str = Field(..., description="Full job description")
    category: JobCategory
    location: str = Field(..., description="Where the work happens")
    pay_type: PayType = Field(default=PayType.FIXED)
    pay_amount: float = Field(..., description="Pay per pay_type unit")
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: JobStatus = Field(default=JobStatus.OPEN)
    company_id: Optional[int] = Field(None, description="Owning company (admin only)")

    @field_validator("title", "description", "location", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return strip_if_str(v)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _validate_title(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _validate_description(v)

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str) -> str:
        return _validate_location(v)

    @field_validator("pay_amount")
    @classmethod
    def validate_pay_amount(cls, v: float) -> float:
        return _validate_pay_amount(v)

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, v: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
        return _validate_end_date(v, info)

    @field_validator("company_id")
    @classmethod
    def validate_company_id(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Company ID is required")
        return v


class JobCreate(JobCreateRequest):
    """Schema for inserting a job row."""

    company_id: int = Field(..., description="Owning company user id")

    @field_validator("company_id")
    @classmethod
    def validate_company_id(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Company ID is required")
        return v


class JobUpdate(BaseModel):
    """Partial job update. Every field is optional."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[JobCategory] = None
    location: Optional[str] = None
    pay_type: Optional[PayType] = None
    pay_amount: Optional[float] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[JobStatus] = None

    @field_validator("title", "description", "location", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return strip_if_str(v)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _validate_title(v)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _validate_description(v)

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _validate_location(v)

    @field_validator("pay_amount")
    @classmethod
    def validate_pay_amount(cls, v: Optional[float]) -> Optional[float]:
        return None if v is None else _validate_pay_amount(v)

    @field_validator("end_date")
    @classmethod
    def validate_end_date(cls, v: Optional[datetime], info: ValidationInfo) -> Optional[datetime]:
        return _validate_end_date(v, info)


class JobResponse(TimestampMixin):
    """Schema for job response."""

    id: int
    company_id: int
    title: str
    description: str
    category: JobCategory
    location: str
    pay_type: PayType
    pay_amount: float
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: JobStatus

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "company_id": 2,
                "title": "Wedding photographer for two-day event",
                "description": "Candid and portrait coverage for a 300-guest wedding.",
                "category": "Photography",
                "location": "Jaipur, Rajasthan",
                "pay_type": "DAILY",
                "pay_amount": 8000,
                "start_date": "2026-12-05T09:00:00Z",
                "end_date": "2026-12-06T22:00:00Z",
                "status": "OPEN",
                "created_at": "2026-10-01T12:00:00Z",
                "updated_at": "2026-10-01T12:00:00Z",
            }
        }


class JobDetailResponse(JobResponse):
    """Job with its company summary."""

    company: Optional[UserSummary] = None
    application_count: int = 0
