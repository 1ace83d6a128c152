"""User service functions."""

from typing import Optional
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.users import UserCreate, UserUpdate
from core.security import (
    AccountBannedError,
    InvalidPasswordError,
    UserNotFoundError,
    hash_password,
    verify_password,
)
from core.exceptions import ConflictError
from core.utils.validators import normalize_email
from database.models.users import User

logger = logging.getLogger(__name__)


async def get_user_by_id(session: AsyncSession, user_id: int) -> Optional[User]:
    return await session.get(User, user_id)


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    """Look up a user by email, ignoring case and surrounding whitespace."""
    result = await session.execute(
        select(User).where(func.lower(User.email) == normalize_email(email))
    )
    return result.scalar_one_or_none()


async def create_user(session: AsyncSession, data: UserCreate) -> User:
    """
    Create a user, hashing the password.

    Args:
        session: Database session
        data: Validated registration payload

    Returns:
        The persisted user

    Raises:
        ConflictError: If the email is already registered
    """
    if await get_user_by_email(session, data.email):
        raise ConflictError("Email already registered")

    values = data.model_dump(exclude={"password"})
    user = User(**values, password=hash_password(data.password))
    session.add(user)
    await session.commit()
    await session.refresh(user)

    logger.info(f"Created user {user.id} with role {user.role.value}")
    return user


async def update_user(session: AsyncSession, user_id: int, data: UserUpdate) -> Optional[User]:
    """Apply a partial profile update. Returns None when the user does not exist."""
    user = await session.get(User, user_id)
    if not user:
        return None

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    user.updated_at = func.now()

    await session.commit()
    await session.refresh(user)
    return user


async def set_user_banned(session: AsyncSession, user_id: int, banned: bool) -> Optional[User]:
    user = await session.get(User, user_id)
    if not user:
        return None

    user.is_banned = banned
    await session.commit()
    await session.refresh(user)

    logger.info(f"User {user_id} {'banned' if banned else 'unbanned'}")
    return user


async def login_user(session: AsyncSession, email: str, password: str) -> User:
    """
    Check credentials and return the user.

    Raises:
        UserNotFoundError: No account for this email
        InvalidPasswordError: Password does not match
        AccountBannedError: Account exists but is banned
    """
    user = await get_user_by_email(session, email)
    if not user:
        raise UserNotFoundError("User not found")
    if not verify_password(password, user.password):
        raise InvalidPasswordError("Invalid password")
    if user.is_banned:
        raise AccountBannedError("Your account has been banned")
    return user
