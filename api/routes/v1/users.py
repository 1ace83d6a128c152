"""User profile, moderation and review endpoints."""

import logging
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_active_user, require_admin
from api.schemas.reviews import ReviewWithReviewerResponse
from api.schemas.users import UserResponse, UserUpdate
from api.services import reviews as review_service
from api.services import users as user_service
from database.engine import get_db
from database.models.users import User, UserRole

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.patch("/me", response_model=UserResponse)
async def update_me(
    update_data: UserUpdate,
    current_user: User = Depends(require_active_user),
    db: AsyncSession = Depends(get_db),
):
    """Update the signed-in user's profile. Only provided fields change."""
    user = await user_service.update_user(db, current_user.id, update_data)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int = Path(..., description="User ID"),
    current_user: User = Depends(require_active_user),
    db: AsyncSession = Depends(get_db),
):
    user = await user_service.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.model_validate(user)


@router.get("/{user_id}/reviews", response_model=list[ReviewWithReviewerResponse])
async def list_user_reviews(
    user_id: int = Path(..., description="User ID"),
    db: AsyncSession = Depends(get_db),
):
    """Reviews a user has received, newest first."""
    if not await user_service.get_user_by_id(db, user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    reviews = await review_service.get_reviews_by_user(db, user_id)
    return [ReviewWithReviewerResponse.model_validate(r) for r in reviews]


async def _set_banned(db: AsyncSession, user_id: int, banned: bool, admin: User) -> UserResponse:
    target = await user_service.get_user_by_id(db, user_id)
    if not target:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if target.role == UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admin accounts cannot be banned",
        )

    user = await user_service.set_user_banned(db, user_id, banned)
    logger.info(f"Admin {admin.id} set is_banned={banned} on user {user_id}")
    return UserResponse.model_validate(user)


@router.post("/{user_id}/ban", response_model=UserResponse)
async def ban_user(
    user_id: int = Path(..., description="User ID"),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await _set_banned(db, user_id, True, admin)


@router.post("/{user_id}/unban", response_model=UserResponse)
async def unban_user(
    user_id: int = Path(..., description="User ID"),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await _set_banned(db, user_id, False, admin)
