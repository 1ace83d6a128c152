"""ORM models. Importing this package registers every table on Base.metadata."""

from database.models.users import User, UserRole
from database.models.jobs import Job, JobCategory, JobStatus, PayType
from database.models.applications import Application, ApplicationStatus
from database.models.contracts import Contract, ContractStatus, PaymentStatus
from database.models.reviews import Review
from database.models.tickets import Ticket, TicketPriority, TicketStatus

__all__ = [
    "User",
    "UserRole",
    "Job",
    "JobCategory",
    "JobStatus",
    "PayType",
    "Application",
    "ApplicationStatus",
    "Contract",
    "ContractStatus",
    "PaymentStatus",
    "Review",
    "Ticket",
    "TicketPriority",
    "TicketStatus",
]
