"""
Jobs Module

Job postings created by company accounts, with category, pay terms and
lifecycle status.
"""

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    String,
    ForeignKey,
    Integer,
    DateTime,
    func,
    Text,
    Float,
    Enum as SQLEnum,
    Index,
    CheckConstraint,
)
from database.engine import Base
from datetime import datetime
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from database.models.applications import Application
    from database.models.contracts import Contract
    from database.models.users import User


# ==================== Job Enums ===================== #
class JobStatus(str, PyEnum):
    """Job posting status."""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class JobCategory(str, PyEnum):
    """Marketplace job categories. Values are the display labels."""

    EVENT_MANAGEMENT = "Event Management"
    HOSPITALITY = "Hospitality"
    PHOTOGRAPHY = "Photography"
    CATERING = "Catering"
    SECURITY = "Security"
    CLEANING = "Cleaning"
    TECHNICAL_SUPPORT = "Technical Support"
    CUSTOMER_SERVICE = "Customer Service"


class PayType(str, PyEnum):
    """How pay_amount is interpreted."""

    HOURLY = "HOURLY"
    DAILY = "DAILY"
    FIXED = "FIXED"


def enum_values(enum_cls) -> list[str]:
    return [member.value for member in enum_cls]


# ==================== Job Model ===================== #
class Job(Base):
    """
    Job posting owned by a company user.
    """

    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, nullable=False, autoincrement=True
    )
    company_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Basic info
    title: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[JobCategory] = mapped_column(
        SQLEnum(JobCategory, native_enum=False, length=50, values_callable=enum_values),
        nullable=False,
    )
    location: Mapped[str] = mapped_column(String(200), nullable=False)

    # Compensation
    pay_type: Mapped[PayType] = mapped_column(
        SQLEnum(PayType, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=PayType.FIXED,
    )
    pay_amount: Mapped[float] = mapped_column(Float, nullable=False)

    # Schedule
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    status: Mapped[JobStatus] = mapped_column(
        SQLEnum(JobStatus, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=JobStatus.OPEN,
        index=True,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Relationships
    company: Mapped["User"] = relationship("User", back_populates="jobs")
    applications: Mapped[list["Application"]] = relationship(
        "Application", back_populates="job", cascade="all, delete-orphan", passive_deletes=True
    )
    contracts: Mapped[list["Contract"]] = relationship(
        "Contract", back_populates="job", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("pay_amount >= 0", name="ck_jobs_pay_amount_non_negative"),
        Index("idx_jobs_status_created", "status", "created_at"),
        Index("idx_jobs_category_status", "category", "status"),
    )
