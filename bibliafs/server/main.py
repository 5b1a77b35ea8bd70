"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request monitoring), registers the exception handlers and includes all API
routers. The lifespan prepares the database, runs the reminder scheduler and
releases the shared HTTP clients on shutdown.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bibliafs import __version__
from bibliafs.core.database import async_session_maker, init_db
from bibliafs.core.logging_config import get_logger, setup_logging
from bibliafs.core.monitoring import initialize_logfire
from bibliafs.notifications import NotificationScheduler

from .api.v1 import (
    ai,
    annotations,
    bible,
    community,
    daily_verse,
    discussions,
    gamification,
    groups,
    health,
    lessons,
    media,
    notifications,
    payments,
    podcasts,
    prayers,
    reading_plans,
    users,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestMonitoringMiddleware
from .services.deps import build_push_service, close_shared_clients

# Initialize logging
setup_logging()
logger = get_logger(__name__)

_scheduler: Optional[NotificationScheduler] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Startup initializes the database and starts the notification scheduler
    when it is enabled; shutdown stops the scheduler and closes the shared
    Bible API client.
    """
    global _scheduler

    # Startup
    try:
        logger.info("Starting up BíbliaFS Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    scheduler_config = settings.scheduler
    if scheduler_config.enabled:
        _scheduler = NotificationScheduler(
            async_session_maker, build_push_service, interval=scheduler_config.interval_seconds
        )
        _scheduler.start()
    else:
        logger.info("Notification scheduler disabled")

    yield

    # Shutdown
    logger.info("Shutting down BíbliaFS Server...")
    if _scheduler is not None:
        await _scheduler.stop()
        _scheduler = None
    await close_shared_clients()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    BíbliaFS Server API

    Backend services for the BíbliaFS Bible study app: Bible text, reading plans and
    gamification, prayers and notes, podcasts, teacher lessons, community and study
    groups, the AI study assistant, payments and push reminders.
    """,
    version=__version__,
    openapi_url=f"{constant.API_PREFIX}/openapi.json",
    docs_url=f"{constant.API_PREFIX}/docs",
    redoc_url=f"{constant.API_PREFIX}/redoc",
    lifespan=lifespan,
)

# Set all CORS enabled origins
cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestMonitoringMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)


app.include_router(health.router)
app.include_router(users.router, prefix=constant.API_PREFIX)
app.include_router(bible.router, prefix=constant.API_PREFIX)
app.include_router(annotations.router, prefix=constant.API_PREFIX)
app.include_router(reading_plans.router, prefix=constant.API_PREFIX)
app.include_router(gamification.router, prefix=constant.API_PREFIX)
app.include_router(daily_verse.router, prefix=constant.API_PREFIX)
app.include_router(prayers.router, prefix=constant.API_PREFIX)
app.include_router(podcasts.router, prefix=constant.API_PREFIX)
app.include_router(lessons.router, prefix=constant.API_PREFIX)
app.include_router(community.router, prefix=constant.API_PREFIX)
app.include_router(media.router, prefix=constant.API_PREFIX)
app.include_router(groups.router, prefix=constant.API_PREFIX)
app.include_router(discussions.router, prefix=constant.API_PREFIX)
app.include_router(ai.router, prefix=constant.API_PREFIX)
app.include_router(payments.router, prefix=constant.API_PREFIX)
app.include_router(notifications.router, prefix=constant.API_PREFIX)
