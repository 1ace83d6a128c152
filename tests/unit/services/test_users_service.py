"""
Tests for user service functions.
"""

from datetime import datetime

import pytest
from sqlalchemy import update

from api.schemas.users import UserCreate, UserUpdate
from api.services import (
    create_user,
    get_user_by_email,
    get_user_by_id,
    login_user,
    set_user_banned,
    update_user,
)
from core.exceptions import ConflictError
from core.security import AccountBannedError, InvalidPasswordError, UserNotFoundError
from database.models.users import User, UserRole

TEST_PASSWORD = "Secure@123"


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_password_is_hashed(self, make_user):
        user = await make_user(UserRole.COMPANY)
        assert user.password != TEST_PASSWORD
        assert user.password.startswith("$2b$")
        assert user.is_banned is False
        assert user.jobs_completed == 0
        assert user.created_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts_case_insensitively(self, db_session, make_user):
        await make_user(email="asha@example.com")
        with pytest.raises(ConflictError, match="Email already registered"):
            await create_user(
                db_session,
                UserCreate(email="ASHA@example.com", password=TEST_PASSWORD, name="Asha Again"),
            )


class TestLookups:
    @pytest.mark.asyncio
    async def test_get_by_email_normalizes(self, db_session, make_user):
        user = await make_user(email="ravi@example.com")
        found = await get_user_by_email(db_session, "  Ravi@Example.com ")
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_missing_user(self, db_session):
        assert await get_user_by_id(db_session, 999) is None
        assert await get_user_by_email(db_session, "nobody@example.com") is None


class TestUpdateUser:
    @pytest.mark.asyncio
    async def test_partial_update(self, db_session, make_user):
        user = await make_user(city="Pune")
        updated = await update_user(db_session, user.id, UserUpdate(bio="Bartender", skills="Bartending"))
        assert updated.bio == "Bartender"
        assert updated.skills == "Bartending"
        assert updated.city == "Pune"

    @pytest.mark.asyncio
    async def test_bumps_updated_at(self, db_session, make_user):
        user = await make_user()
        stale = datetime(2020, 1, 1)
        await db_session.execute(
            update(User).where(User.id == user.id).values(created_at=stale, updated_at=stale)
        )
        await db_session.commit()

        updated = await update_user(db_session, user.id, UserUpdate(bio="Event host"))

        assert updated.updated_at.replace(tzinfo=None) > stale
        assert updated.created_at.replace(tzinfo=None) == stale

    @pytest.mark.asyncio
    async def test_missing_user_returns_none(self, db_session):
        assert await update_user(db_session, 999, UserUpdate(name="Ghost")) is None


class TestLogin:
    @pytest.mark.asyncio
    async def test_success(self, db_session, make_user):
        user = await make_user(email="login@example.com")
        assert (await login_user(db_session, "LOGIN@example.com", TEST_PASSWORD)).id == user.id

    @pytest.mark.asyncio
    async def test_unknown_email(self, db_session):
        with pytest.raises(UserNotFoundError):
            await login_user(db_session, "nobody@example.com", TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_wrong_password(self, db_session, make_user):
        await make_user(email="login@example.com")
        with pytest.raises(InvalidPasswordError):
            await login_user(db_session, "login@example.com", "Wrong@1234")

    @pytest.mark.asyncio
    async def test_banned_user(self, db_session, make_user):
        user = await make_user(email="banned@example.com")
        await set_user_banned(db_session, user.id, True)
        with pytest.raises(AccountBannedError, match="Your account has been banned"):
            await login_user(db_session, "banned@example.com", TEST_PASSWORD)

        await set_user_banned(db_session, user.id, False)
        assert (await login_user(db_session, "banned@example.com", TEST_PASSWORD)).id == user.id
