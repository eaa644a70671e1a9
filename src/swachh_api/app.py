"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import APIRouter, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from swachh_api.exception_handlers import setup_exception_handlers
from swachh_api.routers import citizens_router, employees_router
from swachh_auth import PasswordHashingService, TokenService
from swachh_config import Settings, get_settings
from swachh_identity.domain.time import utc_now
from swachh_identity.infrastructure.persistence.sqlalchemy import (
    create_engine,
    create_session_maker,
    create_tables,
    ping,
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"

OPENAPI_TAGS = [
    {
        "name": "Citizens",
        "description": """Citizen accounts and sessions.

**Registration & Login:**
- Register with email/password, optional phone and address
- Login to obtain an access token (15 min) and a refresh token (7 days)
- Refresh tokens rotate: each one can be used exactly once

**Account:**
- Update name, phone number and address
- Change password (ends every session)
- Deactivate the account
""",
    },
    {
        "name": "Employees",
        "description": """Municipal employee accounts, hierarchy and administration.

**Employee Types:**
- `waste_collector`, `driver`: field staff
- `supervisor`: may be referenced as another employee's supervisor
- `admin`: may also suspend/reactivate employees and read statistics
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


def _configure_logging(settings: Settings) -> None:
    """Configure application logging.

    Sets up logging for the service with:
    - Console output with timestamps and module names
    - Configurable log level for swachh modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    for name in ("swachh_api", "swachh_auth", "swachh_identity"):
        logging.getLogger(name).setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting %s v%s...", app.title, API_VERSION)
    await _init_database_schema(app)

    # First login with an unknown email should not pay for the dummy hash
    await asyncio.to_thread(lambda: app.state.password_service.dummy_hash)
    yield

    logger.info("Shutting down %s...", app.title)
    await app.state.engine.dispose()
    logger.info("Database connections closed")


async def _init_database_schema(app: FastAPI) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    try:
        await create_tables(app.state.engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all endpoints."""
    v1_router = APIRouter()
    v1_router.include_router(
        citizens_router,
        prefix="/auth/citizens",
        tags=["Citizens"],
    )
    v1_router.include_router(
        employees_router,
        prefix="/auth/employees",
        tags=["Employees"],
    )
    return v1_router


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.

    Raises
    ------
    ValueError
        If either JWT secret is empty
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)

    token_service = TokenService(
        access_secret=settings.jwt_access_secret.get_secret_value(),
        refresh_secret=settings.jwt_refresh_secret.get_secret_value(),
        access_ttl=settings.access_token_ttl,
        refresh_ttl=settings.refresh_token_ttl,
    )
    engine = create_engine(settings.database_url)

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Registration, login and **rotating refresh-token sessions** for "
            "citizens and municipal employees."
        ),
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.settings = settings
    app.state.token_service = token_service
    app.state.password_service = PasswordHashingService(rounds=settings.bcrypt_rounds)
    app.state.engine = engine
    app.state.session_maker = create_session_maker(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> JSONResponse:
        """Health check endpoint.

        Pings the database; answers 503 when it is unreachable.
        Unversioned for load balancer/monitoring compatibility.
        """
        try:
            await ping(engine)
            database = "healthy"
        except Exception:
            logger.warning("Health check: database unreachable", exc_info=True)
            database = "unhealthy"

        healthy = database == "healthy"
        return JSONResponse(
            status_code=(
                status.HTTP_200_OK
                if healthy
                else status.HTTP_503_SERVICE_UNAVAILABLE
            ),
            content={
                "success": healthy,
                "message": (
                    "Auth service is healthy"
                    if healthy
                    else "Auth service is unhealthy"
                ),
                "data": {
                    "service": settings.app_name,
                    "version": API_VERSION,
                    "timestamp": utc_now().isoformat(),
                    "database": database,
                },
            },
        )

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": settings.app_name,
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_V1_PREFIX,
            "endpoints": {
                "health": "/health",
                "citizens": f"{API_V1_PREFIX}/auth/citizens",
                "employees": f"{API_V1_PREFIX}/auth/employees",
            },
        }

    return app
