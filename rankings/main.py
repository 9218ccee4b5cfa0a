"""Main FastAPI application."""

import asyncio
import time
import uuid
from contextlib import asynccontextmanager

import sentry_sdk
import structlog
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from rankings.api.deps import get_db
from rankings.api.v1 import api_router
from rankings.config import settings
from rankings.core.codec import error_response, respond, respond_error
from rankings.core.exceptions import RankingsError
from rankings.core.logging import setup_logging
from rankings.db.session import AsyncSessionLocal, engine, ping
from rankings.schemas.common import HealthResponse
from rankings.utils.constants import (
    DATABASE_CONNECTED,
    DATABASE_DISCONNECTED,
    HEALTH_HEALTHY,
    HEALTH_UNHEALTHY,
)

# Setup logging
setup_logging()
logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
INTERNAL_ERROR = "Internal server error"

# Initialize Sentry for error tracking (only if DSN is properly configured)
if settings.SENTRY_DSN and settings.SENTRY_DSN.startswith("https://"):
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=None,  # Capture all logs
                event_level="ERROR",  # Only send ERROR and above as events
            ),
        ],
        release=settings.APP_VERSION,
        attach_stacktrace=True,
        send_default_pii=False,
    )
else:
    logger.info("sentry_disabled", reason="SENTRY_DSN not configured")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    try:
        async with AsyncSessionLocal() as session:
            await asyncio.wait_for(ping(session), timeout=settings.HEALTH_CHECK_TIMEOUT_SECONDS)
        logger.info("database_connected")
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
        logger.warning("database_unreachable_at_startup", error=str(e))
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Pairwise company voting with Elo rankings, ratings and comments",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX or None,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Bind a request id into the log context and log one line per request."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)

    started = time.perf_counter()
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id

    logger.info(
        "request_completed",
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    return response


# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.get("/health", tags=["Health"])
async def health_check(request: Request, db: AsyncSession = Depends(get_db)):
    """Report whether the store answers within the health-check timeout."""
    try:
        await asyncio.wait_for(ping(db), timeout=settings.HEALTH_CHECK_TIMEOUT_SECONDS)
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
        logger.warning("health_check_failed", error=str(e))
        return respond(
            request,
            HealthResponse(status=HEALTH_UNHEALTHY, database=DATABASE_DISCONNECTED),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return respond(request, HealthResponse(status=HEALTH_HEALTHY, database=DATABASE_CONNECTED))


@app.exception_handler(RankingsError)
async def rankings_exception_handler(request: Request, exc: RankingsError):
    if exc.status_code >= 500:
        logger.error("request_failed", error=exc.message, cause=repr(exc.__cause__))
    return respond_error(request, exc)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(request, str(exc.detail), exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(request, "Invalid request", status.HTTP_400_BAD_REQUEST)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error("unhandled_database_error", error=str(exc), exc_info=exc)
    message = str(exc) if settings.DEBUG else INTERNAL_ERROR
    return error_response(request, message, status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.exception("unhandled_exception", error=str(exc))
    message = str(exc) if settings.DEBUG else INTERNAL_ERROR
    return error_response(request, message, status.HTTP_500_INTERNAL_SERVER_ERROR)
