"""Shared fixtures and utilities for tests."""

import os

# Settings are read at import time, so the environment must be set first
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-min-32-chars-long-for-security")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JSON_LOGS", "false")

import itertools

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from api.main import app
from api.schemas.contracts import ContractCreate
from api.schemas.jobs import JobCreate
from api.schemas.users import UserCreate
from api.services import create_contract, create_job, create_user
from core.security import create_access_token
from database.engine import build_engine, get_db, init_db
from database.models import JobCategory, PayType, User, UserRole

TEST_PASSWORD = "Secure@123"

_counter = itertools.count(1)


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    test_engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client bound to the app with ``get_db`` pointed at the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory creating users through the service layer."""

    async def _make_user(role: UserRole = UserRole.TALENT, **fields) -> User:
        n = next(_counter)
        data = {
            "email": f"{role.value.lower()}{n}@example.com",
            "password": TEST_PASSWORD,
            "name": f"{role.value.capitalize()} {n}",
            "role": role,
        }
        data.update(fields)
        return await create_user(db_session, UserCreate(**data))

    return _make_user


@pytest.fixture
def make_job(db_session):
    """Factory creating OPEN jobs for a company."""

    async def _make_job(company: User, **fields):
        data = {
            "company_id": company.id,
            "title": "Event Photographer",
            "description": "Cover a two day wedding in Jaipur.",
            "category": JobCategory.PHOTOGRAPHY,
            "location": "Jaipur, Rajasthan",
            "pay_type": PayType.DAILY,
            "pay_amount": 4000,
        }
        data.update(fields)
        return await create_job(db_session, JobCreate(**data))

    return _make_job


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(user.id, user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def make_contract(db_session):
    """Factory creating an ACTIVE contract for a job and a talent."""

    async def _make_contract(job, talent: User, total_amount: float = 10000, **fields):
        data = {
            "job_id": job.id,
            "talent_id": talent.id,
            "company_id": job.company_id,
            "total_amount": total_amount,
            "start_date": "2026-11-01T09:00:00+00:00",
        }
        data.update(fields)
        return await create_contract(db_session, ContractCreate(**data))

    return _make_contract
