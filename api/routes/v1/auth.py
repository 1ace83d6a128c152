"""
Authentication endpoints.

Provides:
- Email/password signup
- Email/password login
- Current user lookup

Tokens are returned in the body and sent back as ``Authorization: Bearer``.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_active_user
from api.schemas.users import AuthResponse, LoginRequest, UserCreate, UserResponse
from api.services import users as user_service
from core.config import settings
from core.security import (
    AccountBannedError,
    InvalidPasswordError,
    UserNotFoundError,
    create_access_token,
)
from database.engine import get_db
from database.models.users import User, UserRole

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        access_token=create_access_token(user.id, user.role.value),
        expires_in=settings.access_token_expire_days * 86400,
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    signup_data: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a company or talent account.

    Admin accounts cannot be self-registered.
    """
    if signup_data.role == UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin accounts cannot be registered",
        )

    user = await user_service.create_user(db, signup_data)
    logger.info(f"User {user.id} registered as {user.role.value}")
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Login with email and password.

    Unknown email and wrong password share one message to prevent email
    enumeration. Banned accounts get 403.
    """
    try:
        user = await user_service.login_user(db, login_data.email, login_data.password)
    except (UserNotFoundError, InvalidPasswordError):
        logger.warning("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    except AccountBannedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

    logger.info(f"User {user.id} logged in")
    return _auth_response(user)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(require_active_user)):
    """Get the signed-in user's profile."""
    return UserResponse.model_validate(current_user)
