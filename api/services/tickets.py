"""Support ticket service functions."""

from typing import List, Optional
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.tickets import TicketCreate, TicketUpdate
from database.models.tickets import Ticket, TicketPriority, TicketStatus

logger = logging.getLogger(__name__)


async def create_ticket(session: AsyncSession, data: TicketCreate) -> Ticket:
    """Open a ticket. New tickets are always OPEN."""
    ticket = Ticket(
        user_id=data.user_id,
        subject=data.subject,
        description=data.description,
        priority=data.priority or TicketPriority.MEDIUM,
        status=TicketStatus.OPEN,
    )
    session.add(ticket)
    await session.commit()
    await session.refresh(ticket)

    logger.info(f"User {ticket.user_id} opened ticket {ticket.id} ({ticket.priority.value})")
    return ticket


async def get_tickets_by_user(session: AsyncSession, user_id: int) -> List[Ticket]:
    result = await session.execute(
        select(Ticket)
        .where(Ticket.user_id == user_id)
        .order_by(Ticket.created_at.desc(), Ticket.id.desc())
    )
    return list(result.scalars().all())


async def get_all_tickets(
    session: AsyncSession,
    status: Optional[TicketStatus] = None,
    priority: Optional[TicketPriority] = None,
) -> List[Ticket]:
    """All tickets for the admin queue, optionally filtered, newest first."""
    query = select(Ticket)
    if status:
        query = query.where(Ticket.status == status)
    if priority:
        query = query.where(Ticket.priority == priority)

    result = await session.execute(query.order_by(Ticket.created_at.desc(), Ticket.id.desc()))
    return list(result.scalars().all())


async def get_ticket_by_id(session: AsyncSession, ticket_id: int) -> Optional[Ticket]:
    return await session.get(Ticket, ticket_id)


async def update_ticket(session: AsyncSession, ticket_id: int, data: TicketUpdate) -> Optional[Ticket]:
    ticket = await session.get(Ticket, ticket_id)
    if not ticket:
        return None

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(ticket, field, value)

    await session.commit()
    await session.refresh(ticket)

    logger.info(f"Ticket {ticket_id} is now {ticket.status.value} / {ticket.priority.value}")
    return ticket
