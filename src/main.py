"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.dependencies.auth import get_token_service
from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.routes.health import API_VERSION
from api.routes.health import router as health_router
from api.v1 import router as v1_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler
from infrastructure.database.session import check_connection, dispose_engine

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the store at startup, close it at shutdown.

    A missing signing secret or an unreachable database aborts startup.
    """
    if not get_token_service().has_secret:
        logger.critical("jwt_secret_missing")
        raise RuntimeError("JWT_SECRET_KEY must be set")

    try:
        await check_connection()
    except Exception:
        logger.critical("database_unavailable", exc_info=True)
        raise

    logger.info("application_started", environment=settings.app_env)
    yield

    await dispose_engine()
    logger.info("application_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Developer Social Network\n\n"
            "DevConnect lets developers register, keep a profile with their "
            "experience and education, and share posts that others can like "
            "and comment on.\n\n"
            "### Authentication\n"
            "Register (`POST /api/v1/users`) or log in (`POST /api/v1/auth`) "
            "to obtain a token, then send it on protected endpoints:\n"
            "```\nx-auth-token: <your_token>\n```\n\n"
            "### Rate Limits\n"
            "- Register/login: 5 requests/minute\n"
            "- GET endpoints: 30 requests/minute\n"
            "- POST/PUT/DELETE: 10 requests/minute"
        ),
        version=API_VERSION,
        debug=settings.debug,
        license_info={
            "name": "MIT",
        },
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check endpoints",
            },
            {
                "name": "users",
                "description": "User registration",
            },
            {
                "name": "auth",
                "description": "Login and current-user lookup",
            },
            {
                "name": "profiles",
                "description": "Developer profiles, experience and education",
            },
            {
                "name": "posts",
                "description": "Posts, likes and comments",
            },
        ],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
