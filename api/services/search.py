"""Search service functions."""

from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import String, select, func, literal
from sqlalchemy.ext.asyncio import AsyncSession

from core.utils.formatting import round_rating
from database.models.contracts import Contract, ContractStatus
from database.models.reviews import Review
from database.models.users import User, UserRole

logger = logging.getLogger(__name__)


def _rating_subquery():
    return (
        select(func.coalesce(func.avg(Review.rating), 0))
        .where(Review.reviewee_id == User.id)
        .correlate(User)
        .scalar_subquery()
    )


def _jobs_completed_subquery():
    return (
        select(func.count(Contract.id))
        .where(
            Contract.talent_id == User.id,
            Contract.status == ContractStatus.COMPLETED,
        )
        .correlate(User)
        .scalar_subquery()
    )


async def search_talents(
    session: AsyncSession,
    skills: Optional[List[str]] = None,
    location: Optional[str] = None,
    min_rating: Optional[float] = None,
    limit: int = 20,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """
    Search talents that are not banned.

    Rating and completed-job counts are computed from reviews and contracts
    rather than read from the cached columns on the user row.

    Args:
        session: Database session
        skills: Every skill must be in the talent's skill list (case-insensitive)
        location: Case-insensitive substring of "city, state"
        min_rating: Minimum average rating, after rounding to 1 decimal
        limit: Max results
        offset: Pagination offset

    Returns:
        Talent dicts ordered by signup time
    """
    rating = _rating_subquery()
    jobs_completed = _jobs_completed_subquery()

    query = select(User, rating.label("rating"), jobs_completed.label("jobs_completed")).where(
        User.role == UserRole.TALENT,
        User.is_banned.is_(False),
    )

    if location and location.strip():
        city_state = (
            func.coalesce(User.city, "") + literal(", ") + func.coalesce(User.state, "")
        )
        query = query.where(
            func.lower(city_state).contains(location.strip().lower(), autoescape=True)
        )

    if min_rating is not None:
        # Compare against the displayed value, rounded like round_rating
        query = query.where(func.round(rating, 1) >= min_rating)

    # Skills are stored as "a, b, c"; wrap in commas to match whole entries
    normalized = func.replace(func.coalesce(User.skills, ""), ", ", ",", type_=String)
    skill_list = literal(",") + func.lower(normalized) + literal(",")
    for skill in skills or []:
        skill = skill.strip().lower()
        if skill:
            query = query.where(skill_list.contains(f",{skill},", autoescape=True))

    query = query.order_by(User.created_at.asc(), User.id.asc()).limit(limit).offset(offset)
    result = await session.execute(query)

    talents = []
    for user, avg_rating, completed in result.all():
        talents.append({
            "id": user.id,
            "name": user.name,
            "city": user.city,
            "state": user.state,
            "profile_photo": user.profile_photo,
            "aadhaar_verified": user.aadhaar_verified,
            "skills": user.skill_list,
            "bio": user.bio,
            "experience_years": user.experience_years,
            "hourly_rate": user.hourly_rate,
            "rating": round_rating(avg_rating),
            "jobs_completed": completed or 0,
        })

    logger.debug(f"Talent search matched {len(talents)} rows")
    return talents
