"""Dashboard endpoint."""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_active_user
from api.services import dashboard as dashboard_service
from database.engine import get_db
from database.models.users import User

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
async def get_dashboard(
    current_user: User = Depends(require_active_user),
    db: AsyncSession = Depends(get_db),
) -> dict[str, Any]:
    """Per-role counts by status plus earnings (talents) or spend (companies)."""
    return await dashboard_service.get_dashboard(db, current_user)
