from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    String,
    Boolean,
    Integer,
    Float,
    DateTime,
    func,
    Text,
    Enum as SQLEnum,
    CheckConstraint,
)
from database.engine import Base
from database.models.jobs import enum_values
from datetime import datetime
from enum import Enum as PyEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from database.models.applications import Application
    from database.models.contracts import Contract
    from database.models.jobs import Job
    from database.models.reviews import Review
    from database.models.tickets import Ticket


# ==================== User Role ===================== #
class UserRole(str, PyEnum):
    ADMIN = "ADMIN"  # platform admin with full access
    COMPANY = "COMPANY"  # posts jobs and signs contracts
    TALENT = "TALENT"  # applies to jobs


class User(Base):
    """
    Marketplace account. Companies and talents share the table and are
    told apart by role; talent-only profile fields stay null for companies.
    """

    __tablename__: str = "users"
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, nullable=False, autoincrement=True
    )
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, native_enum=False, length=20, values_callable=enum_values),
        nullable=False,
        default=UserRole.TALENT,
        index=True,
    )

    # Contact / address
    phone: Mapped[str | None] = mapped_column(String(20))
    address: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(100))
    pincode: Mapped[str | None] = mapped_column(String(10))
    profile_photo: Mapped[str | None] = mapped_column(String(2048))

    # KYC
    aadhaar_number: Mapped[str | None] = mapped_column(String(12))
    aadhaar_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    gst_number: Mapped[str | None] = mapped_column(String(15))
    gst_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_banned: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Talent profile
    skills: Mapped[str | None] = mapped_column(Text)  # comma-separated
    bio: Mapped[str | None] = mapped_column(Text)
    experience_years: Mapped[int | None] = mapped_column(Integer)
    hourly_rate: Mapped[int | None] = mapped_column(Integer)
    rating: Mapped[float | None] = mapped_column(Float)
    jobs_completed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

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
    jobs: Mapped[list["Job"]] = relationship(
        "Job", back_populates="company", cascade="all, delete-orphan", passive_deletes=True
    )
    applications: Mapped[list["Application"]] = relationship(
        "Application", back_populates="talent", cascade="all, delete-orphan", passive_deletes=True
    )
    contracts_as_talent: Mapped[list["Contract"]] = relationship(
        "Contract", foreign_keys="Contract.talent_id", back_populates="talent", passive_deletes=True
    )
    contracts_as_company: Mapped[list["Contract"]] = relationship(
        "Contract", foreign_keys="Contract.company_id", back_populates="company", passive_deletes=True
    )
    reviews_written: Mapped[list["Review"]] = relationship(
        "Review", foreign_keys="Review.reviewer_id", back_populates="reviewer", passive_deletes=True
    )
    reviews_received: Mapped[list["Review"]] = relationship(
        "Review", foreign_keys="Review.reviewee_id", back_populates="reviewee", passive_deletes=True
    )
    tickets: Mapped[list["Ticket"]] = relationship(
        "Ticket", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    __table_args__ = (
        CheckConstraint("jobs_completed >= 0", name="ck_users_jobs_completed_non_negative"),
        CheckConstraint(
            "rating IS NULL OR (rating >= 0 AND rating <= 5)", name="ck_users_rating_range"
        ),
    )

    @property
    def skill_list(self) -> list[str]:
        if not self.skills:
            return []
        return [s.strip() for s in self.skills.split(",") if s.strip()]
