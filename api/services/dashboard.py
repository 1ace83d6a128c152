"""Dashboard statistics per role."""

from enum import Enum
from typing import Any, Dict, Type
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from database.models.applications import Application, ApplicationStatus
from database.models.contracts import Contract, ContractStatus
from database.models.jobs import Job, JobStatus
from database.models.tickets import Ticket, TicketStatus
from database.models.users import User, UserRole

logger = logging.getLogger(__name__)


async def _count_by(
    session: AsyncSession, column, enum_cls: Type[Enum], *criteria, join=None
) -> Dict[str, int]:
    """Count rows grouped by an enum column, reporting zero for missing values."""
    query = select(column, func.count()).select_from(column.class_)
    if join is not None:
        query = query.join(join)
    if criteria:
        query = query.where(*criteria)
    result = await session.execute(query.group_by(column))

    counts = {member.value: 0 for member in enum_cls}
    for value, count in result.all():
        counts[value.value] = count
    return counts


async def _sum(session: AsyncSession, column, *criteria) -> float:
    query = select(func.coalesce(func.sum(column), 0))
    if criteria:
        query = query.where(*criteria)
    result = await session.execute(query)
    return float(result.scalar() or 0)


async def get_dashboard(session: AsyncSession, user: User) -> Dict[str, Any]:
    """
    Build the dashboard for the signed-in user.

    Talents see their applications, contracts and earnings. Companies see
    their jobs, the applications those jobs received, contracts and spend.
    Admins see platform-wide counts.

    Args:
        session: Database session
        user: Current user

    Returns:
        Dict of counts keyed by status plus money totals
    """
    stats: Dict[str, Any] = {"role": user.role.value}

    if user.role == UserRole.TALENT:
        stats["applications"] = await _count_by(
            session, Application.status, ApplicationStatus, Application.talent_id == user.id
        )
        stats["contracts"] = await _count_by(
            session, Contract.status, ContractStatus, Contract.talent_id == user.id
        )
        stats["total_earned"] = await _sum(
            session, Contract.amount_paid, Contract.talent_id == user.id
        )
        stats["jobs_completed"] = user.jobs_completed
        stats["rating"] = user.rating

    elif user.role == UserRole.COMPANY:
        stats["jobs"] = await _count_by(session, Job.status, JobStatus, Job.company_id == user.id)
        stats["applications"] = await _count_by(
            session,
            Application.status,
            ApplicationStatus,
            Job.company_id == user.id,
            join=Job,
        )
        stats["contracts"] = await _count_by(
            session, Contract.status, ContractStatus, Contract.company_id == user.id
        )
        stats["total_spent"] = await _sum(
            session, Contract.amount_paid, Contract.company_id == user.id
        )

    else:
        stats["users"] = await _count_by(session, User.role, UserRole)
        stats["jobs"] = await _count_by(session, Job.status, JobStatus)
        stats["contracts"] = await _count_by(session, Contract.status, ContractStatus)
        stats["tickets"] = await _count_by(session, Ticket.status, TicketStatus)
        stats["total_paid"] = await _sum(session, Contract.amount_paid)

    return stats
