"""
OpSkill API application.

Builds the FastAPI app: logging, error envelope, middleware stack and the
``/api/v1`` routers. Run locally with ``python -m api.main``.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health
from api.routes.v1 import (
    applications,
    auth,
    contracts,
    dashboard,
    jobs,
    talents,
    tickets,
    users,
)
from api.schemas.common import ErrorResponse
from core.config import settings
from core.middleware import (
    ErrorHandlingMiddleware,
    StructuredLoggingMiddleware,
    setup_error_handlers,
    setup_logging,
)
from database.engine import close_db, init_db

setup_logging(log_level=settings.log_level, json_logs=settings.json_logs)

logger = logging.getLogger(__name__)

V1_ROUTERS = (auth, users, jobs, applications, contracts, talents, tickets, dashboard)

ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409, 422, 500)
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup and dispose of the engine on shutdown."""
    logger.info(f"{settings.app_name} starting ({settings.app_env})")
    await init_db()
    yield
    logger.info(f"{settings.app_name} stopping")
    await close_db()


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        description="Freelance marketplace connecting companies with verified talent",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_error_handlers(application)

    # Last added runs first: CORS -> request logging -> error envelope -> routes
    application.add_middleware(ErrorHandlingMiddleware, debug=settings.debug)
    application.add_middleware(
        StructuredLoggingMiddleware,
        log_request_body=settings.log_request_body,
        log_response_body=settings.log_response_body,
        max_body_size=settings.log_max_body_size,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(health.router, prefix=settings.api_v1_prefix)
    for module in V1_ROUTERS:
        application.include_router(
            module.router, prefix=settings.api_v1_prefix, responses=ERROR_RESPONSES
        )

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
