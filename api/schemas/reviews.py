"""Review API schemas."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from api.schemas.common import check_length, check_range, strip_if_str
from api.schemas.users import UserSummary


class ReviewCreateRequest(BaseModel):
    """Body for ``POST /contracts/{contract_id}/reviews``."""

    rating: int = Field(..., description="Whole stars, 1-5")
    comment: Optional[str] = None

    @field_validator("rating", mode="before")
    @classmethod
    def require_integer(cls, v):
        if isinstance(v, float) and not v.is_integer():
            raise ValueError("Rating must be an integer")
        return v

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: int) -> int:
        return check_range(v, 1, 5, "Rating must be at least 1", "Rating cannot exceed 5")

    @field_validator("comment", mode="before")
    @classmethod
    def strip_comment(cls, v):
        return strip_if_str(v)

    @field_validator("comment")
    @classmethod
    def validate_comment(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return check_length(v, "Comment", 0, 2000)


class ReviewCreate(ReviewCreateRequest):
    """Schema for inserting a review row."""

    contract_id: int
    reviewer_id: int
    reviewee_id: int


class ReviewResponse(BaseModel):
    id: int
    contract_id: int
    reviewer_id: int
    reviewee_id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ReviewWithReviewerResponse(ReviewResponse):
    """Review listed on a profile, with who wrote it."""

    reviewer: Optional[UserSummary] = None
