"""Contract and payment API schemas."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from api.schemas.common import (
    TimestampMixin,
    as_utc,
    check_range,
    parse_iso_datetime,
)
from database.models.contracts import ContractStatus, PaymentStatus

MAX_CONTRACT_AMOUNT = 10_000_000


class ContractTerms(BaseModel):
    """Money and schedule fields shared by contract inputs."""

    total_amount: float = Field(..., description="Agreed contract value")
    terms: Optional[str] = Field(None, description="Free-text terms")
    start_date: datetime = Field(..., description="ISO-8601 start datetime")
    end_date: Optional[datetime] = Field(None, description="ISO-8601 end datetime")

    @field_validator("total_amount")
    @classmethod
    def validate_total_amount(cls, v: float) -> float:
        return check_range(
            v,
            0,
            MAX_CONTRACT_AMOUNT,
            "Total amount cannot be negative",
            "Total amount is too high",
        )

    @field_validator("start_date", mode="before")
    @classmethod
    def parse_start_date(cls, v):
        if v is None:
            raise ValueError("Invalid start date")
        return parse_iso_datetime(v, "Invalid start date")

    @field_validator("end_date", mode="before")
    @classmethod
    def parse_end_date(cls, v):
        return parse_iso_datetime(v, "Invalid end date")

    @field_validator("end_date")
    @classmethod
    def validate_end_after_start(
        cls, v: Optional[datetime], info: ValidationInfo
    ) -> Optional[datetime]:
        start = info.data.get("start_date")
        if v is not None and start is not None and as_utc(v) <= as_utc(start):
            raise ValueError("End date must be after start date")
        return v


class ContractCreateRequest(ContractTerms):
    """Body for ``POST /contracts``. The company is the caller."""

    job_id: int
    talent_id: int


class ContractCreate(ContractTerms):
    """Schema for inserting a contract row."""

    job_id: int
    talent_id: int
    company_id: int
    status: ContractStatus = Field(default=ContractStatus.ACTIVE)
    payment_status: PaymentStatus = Field(default=PaymentStatus.PENDING)
    amount_paid: Optional[float] = Field(None, description="Amount already paid")

    @field_validator("amount_paid")
    @classmethod
    def validate_amount_paid(cls, v: Optional[float], info: ValidationInfo) -> Optional[float]:
        if v is None:
            return None
        check_range(
            v,
            0,
            MAX_CONTRACT_AMOUNT,
            "Amount paid cannot be negative",
            "Amount paid is too high",
        )
        total = info.data.get("total_amount")
        if total is not None and v > total:
            raise ValueError("Amount paid cannot exceed total amount")
        return v


class PaymentCreate(BaseModel):
    """A payment installment recorded against a contract."""

    amount: float = Field(..., description="Amount paid in this installment")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Payment amount must be positive")
        if v > MAX_CONTRACT_AMOUNT:
            raise ValueError("Payment amount is too high")
        return v


class ContractStatusUpdate(BaseModel):
    status: Optional[ContractStatus] = None
    payment_status: Optional[PaymentStatus] = Field(
        None, description="Admin-only override, e.g. REFUNDED"
    )


class ContractResponse(TimestampMixin):
    """Schema for contract response."""

    id: int
    job_id: int
    talent_id: int
    company_id: int
    status: ContractStatus
    payment_status: PaymentStatus
    total_amount: float
    amount_paid: float
    terms: Optional[str] = None
    start_date: datetime
    end_date: Optional[datetime] = None

    class Config:
        from_attributes = True
