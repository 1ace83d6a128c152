import logging
import time
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from core.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False, **kwargs: Any) -> AsyncEngine:
    """Create an async engine, enabling foreign keys and WAL for SQLite."""
    engine = create_async_engine(database_url, echo=echo, **kwargs)

    if database_url.startswith("sqlite"):

        # Listen for the 'connect' event to apply SQLite pragmas
        @event.listens_for(engine.sync_engine, "connect")
        def connect(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            if ":memory:" not in database_url and not database_url.endswith("://"):
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    return engine


logger.info("Connecting to database at %s", settings.database_url.split("@")[-1])

db_engine = build_engine(settings.database_url, echo=settings.database_echo)


# Create async session maker to be used throughout the application
AsyncSessionLocal = async_sessionmaker(
    db_engine, class_=AsyncSession, expire_on_commit=False
)


# Base class for declarative models
class Base(DeclarativeBase):
    pass


# Dependency to get DB session
async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


# Function to initialize the database (create tables)
async def init_db(engine: AsyncEngine | None = None):
    # Models must be imported so their tables are registered on Base.metadata
    import database.models  # noqa: F401

    async with (engine or db_engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Function to close database connections
async def close_db():
    """Close database engine and connections."""
    await db_engine.dispose()


async def check_database_health(session: AsyncSession) -> dict[str, Any]:
    """Run a trivial query and report status with latency."""
    started = time.perf_counter()
    await session.execute(text("SELECT 1"))
    return {
        "status": "healthy",
        "latency_ms": round((time.perf_counter() - started) * 1000, 2),
    }
