"""Support ticket API schemas."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from api.schemas.common import TimestampMixin, check_length, strip_if_str
from database.models.tickets import TicketPriority, TicketStatus


class TicketCreateRequest(BaseModel):
    """Body for ``POST /tickets``."""

    subject: str = Field(..., description="Short summary")
    description: str = Field(..., description="What went wrong")
    priority: TicketPriority = Field(default=TicketPriority.MEDIUM)

    @field_validator("subject", mode="before")
    @classmethod
    def strip_subject(cls, v):
        return strip_if_str(v)

    @field_validator("subject")
    @classmethod
    def validate_subject(cls, v: str) -> str:
        return check_length(v, "Subject", 5, 200)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return check_length(v, "Description", 10, 5000)


class TicketCreate(TicketCreateRequest):
    """Schema for inserting a ticket row."""

    user_id: int
    status: TicketStatus = Field(default=TicketStatus.OPEN)


class TicketUpdate(BaseModel):
    """Admin triage update."""

    status: Optional[TicketStatus] = None
    priority: Optional[TicketPriority] = None


class TicketResponse(TimestampMixin):
    id: int
    user_id: int
    subject: str
    description: str
    status: TicketStatus
    priority: TicketPriority

    class Config:
        from_attributes = True
