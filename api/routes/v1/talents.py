"""Talent directory endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.users import TalentSearchResult
from api.services import search as search_service
from database.engine import get_db

router = APIRouter(prefix="/talents", tags=["talents"])


@router.get("", response_model=list[TalentSearchResult])
async def search_talents(
    skills: Optional[str] = Query(None, description="Comma-separated skills, all must match"),
    location: Optional[str] = Query(None, description="Substring of \"city, state\""),
    min_rating: Optional[float] = Query(None, ge=0, le=5, description="Minimum average rating"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """Search talents by skills, location and rating."""
    skill_list = [s.strip() for s in skills.split(",") if s.strip()] if skills else None
    talents = await search_service.search_talents(
        db,
        skills=skill_list,
        location=location,
        min_rating=min_rating,
        limit=limit,
        offset=offset,
    )
    return [TalentSearchResult.model_validate(t) for t in talents]
