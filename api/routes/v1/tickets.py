"""Support ticket endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_active_user, require_admin
from api.schemas.tickets import TicketCreate, TicketCreateRequest, TicketResponse, TicketUpdate
from api.services import tickets as ticket_service
from database.engine import get_db
from database.models.tickets import TicketPriority, TicketStatus
from database.models.users import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.post("", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    ticket_data: TicketCreateRequest,
    current_user: User = Depends(require_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Open a support ticket."""
    ticket = await ticket_service.create_ticket(
        db, TicketCreate(**ticket_data.model_dump(), user_id=current_user.id)
    )
    return TicketResponse.model_validate(ticket)


@router.get("/me", response_model=list[TicketResponse])
async def list_my_tickets(
    current_user: User = Depends(require_active_user),
    db: AsyncSession = Depends(get_db),
):
    tickets = await ticket_service.get_tickets_by_user(db, current_user.id)
    return [TicketResponse.model_validate(t) for t in tickets]


@router.get("", response_model=list[TicketResponse])
async def list_tickets(
    status_filter: Optional[TicketStatus] = Query(None, alias="status"),
    priority: Optional[TicketPriority] = Query(None),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Admin queue of all tickets."""
    tickets = await ticket_service.get_all_tickets(db, status=status_filter, priority=priority)
    return [TicketResponse.model_validate(t) for t in tickets]


@router.patch("/{ticket_id}", response_model=TicketResponse)
async def update_ticket(
    update_data: TicketUpdate,
    ticket_id: int = Path(..., description="Ticket ID"),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Triage a ticket: change its status or priority."""
    ticket = await ticket_service.update_ticket(db, ticket_id, update_data)
    if not ticket:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ticket not found")
    logger.info(f"Admin {admin.id} updated ticket {ticket_id}")
    return TicketResponse.model_validate(ticket)
