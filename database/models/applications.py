"""
Applications Module

A talent's bid on a job. One application per talent per job.
"""

from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    ForeignKey,
    Integer,
    DateTime,
    func,
    Text,
    Float,
    Enum as SQLEnum,
    Index,
    UniqueConstraint,
    CheckConstraint,
)
from database.engine import Base
from database.models.jobs import enum_values
from datetime import datetime
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from database.models.jobs import Job
    from database.models.users import User


class ApplicationStatus(str, PyEnum):
    """Application review status."""

    PENDING = "PENDING"
    SHORTLISTED = "SHORTLISTED"
    REJECTED = "REJECTED"
    HIRED = "HIRED"


class Application(Base):
    """
    Talent application to a job posting.
    """

    __tablename__ = "applications"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, nullable=False, autoincrement=True
    )
    job_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False
    )
    talent_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[ApplicationStatus] = mapped_column(
        SQLEnum(ApplicationStatus, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=ApplicationStatus.PENDING,
    )
    cover_letter: Mapped[str | None] = mapped_column(Text)
    proposed_rate: Mapped[float | None] = mapped_column(Float)
    estimated_days: Mapped[int | None] = mapped_column(Integer)

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
    job: Mapped["Job"] = relationship("Job", back_populates="applications")
    talent: Mapped["User"] = relationship("User", back_populates="applications")

    __table_args__ = (
        UniqueConstraint("job_id", "talent_id", name="uq_applications_job_talent"),
        CheckConstraint(
            "proposed_rate IS NULL OR proposed_rate >= 0",
            name="ck_applications_proposed_rate_non_negative",
        ),
        CheckConstraint(
            "estimated_days IS NULL OR (estimated_days >= 1 AND estimated_days <= 365)",
            name="ck_applications_estimated_days_range",
        ),
        Index("idx_applications_job_status", "job_id", "status"),
        Index("idx_applications_talent", "talent_id"),
    )
