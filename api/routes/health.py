"""Health check endpoints."""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.middleware.error_handling import sanitize_error_message
from core.utils.formatting import format_uptime
from database.engine import check_database_health, get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

STARTED_AT = time.monotonic()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    uptime: str
    database: dict[str, Any]
    environment: str
    version: Optional[str] = None


@router.get("/health", response_model=HealthResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """Report service status, uptime and database reachability. Returns 503 when the database is down."""
    try:
        database = await check_database_health(db)
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Health check failed: {sanitize_error_message(str(e))}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "error",
                "message": "Health check failed",
                "error": sanitize_error_message(str(e)),
            },
        )

    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        uptime=format_uptime(time.monotonic() - STARTED_AT),
        database=database,
        environment=settings.app_env,
        version="0.1.0",
    )
