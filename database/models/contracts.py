"""
Contracts Module

Engagement between a company and a talent for a job, with payment tracking.
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
    CheckConstraint,
)
from database.engine import Base
from database.models.jobs import enum_values
from datetime import datetime
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from database.models.jobs import Job
    from database.models.reviews import Review
    from database.models.users import User


class ContractStatus(str, PyEnum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    TERMINATED = "TERMINATED"


class PaymentStatus(str, PyEnum):
    PENDING = "PENDING"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"
    REFUNDED = "REFUNDED"


class Contract(Base):
    """
    Agreed engagement tied to a job. amount_paid never exceeds total_amount.
    """

    __tablename__ = "contracts"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, nullable=False, autoincrement=True
    )
    job_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    talent_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    company_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    status: Mapped[ContractStatus] = mapped_column(
        SQLEnum(ContractStatus, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=ContractStatus.ACTIVE,
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        SQLEnum(PaymentStatus, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=PaymentStatus.PENDING,
    )

    # Money
    total_amount: Mapped[float] = mapped_column(Float, nullable=False)
    amount_paid: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    terms: Mapped[str | None] = mapped_column(Text)

    # Schedule
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

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
    job: Mapped["Job"] = relationship("Job", back_populates="contracts")
    talent: Mapped["User"] = relationship(
        "User", foreign_keys=[talent_id], back_populates="contracts_as_talent"
    )
    company: Mapped["User"] = relationship(
        "User", foreign_keys=[company_id], back_populates="contracts_as_company"
    )
    reviews: Mapped[list["Review"]] = relationship(
        "Review", back_populates="contract", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_contracts_total_amount_non_negative"),
        CheckConstraint("amount_paid >= 0", name="ck_contracts_amount_paid_non_negative"),
        CheckConstraint("amount_paid <= total_amount", name="ck_contracts_amount_paid_le_total"),
        Index("idx_contracts_talent_status", "talent_id", "status"),
    )

    def is_party(self, user_id: int) -> bool:
        return user_id in (self.talent_id, self.company_id)

    def counterparty_id(self, user_id: int) -> int:
        return self.company_id if user_id == self.talent_id else self.talent_id
