"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from vininfo.config import get_settings
from vininfo.core.exceptions import AppError, global_exception_handler, validation_exception_handler
from vininfo.core.logging import configure_logging
from vininfo.core.middleware import setup_middleware
from vininfo.infrastructure.database import ensure_schema

# Import routers
from vininfo.interfaces.api.admin import router as admin_router
from vininfo.interfaces.api.auth import router as auth_router
from vininfo.interfaces.api.cron import router as cron_router
from vininfo.interfaces.api.email import router as email_router
from vininfo.interfaces.api.preferences import router as preferences_router
from vininfo.interfaces.api.registry import router as registry_router
from vininfo.interfaces.api.reminders import router as reminders_router
from vininfo.interfaces.api.vehicles import router as vehicles_router

settings = get_settings()

configure_logging(settings)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting VINInfo API", env=settings.ENVIRONMENT)

    ensure_schema()
    logger.info("Database tables created/verified")

    if settings.SCHEDULER_ENABLED:
        from vininfo.scheduler.jobs import start_scheduler
        start_scheduler()

    yield

    if settings.SCHEDULER_ENABLED:
        from vininfo.scheduler.jobs import stop_scheduler
        stop_scheduler()
    logger.info("VINInfo API stopped")


app = FastAPI(
    title="VINInfo",
    description="API Backend — vehicle registry lookups, saved vehicles and reminder emails",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (Correlation ID, Logging)
setup_middleware(app)

app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(AppError, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Added last so it wraps everything, including error responses
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router)
app.include_router(vehicles_router)
app.include_router(reminders_router)
app.include_router(preferences_router)
app.include_router(registry_router)
app.include_router(cron_router)
app.include_router(admin_router)
app.include_router(email_router)


@app.get("/")
def root():
    return {
        "name": "VINInfo API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
