"""Gym Tracker API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GymTrackerError → uniform JSON error envelope
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - Every response carries X-Request-ID

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py to keep this module's imports small
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gym_tracker.api.error_handlers import register_error_handlers
from gym_tracker.api.routes import auth, exercises, goals, health, profile, stats, workouts
from gym_tracker.config import get_settings
from gym_tracker.infrastructure import database
from gym_tracker.infrastructure.database import init_db
from gym_tracker.infrastructure.observability import (
    REQUEST_ID_HEADER, log_requests, setup_logging,
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"Gym Tracker API started ({settings.environment})")
    yield
    if database.db_manager is not None:
        await database.db_manager.dispose()
    logger.info("Gym Tracker API shutting down")


app = FastAPI(
    title="Personal Gym Tracker API", version=API_VERSION, lifespan=lifespan,
)

# CORS: origins from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)
app.middleware("http")(log_requests)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(exercises.router)
app.include_router(workouts.router)
app.include_router(stats.router)
app.include_router(goals.router)

register_error_handlers(app)


@app.get("/", tags=["root"])
async def root():
    return {
        "message": "Personal Gym Tracker API",
        "version": API_VERSION,
        "endpoints": {
            "health": "/health",
            "auth": "/api/auth",
            "profile": "/api/profile",
            "exercises": "/api/exercises",
            "workouts": "/api/workouts",
            "stats": "/api/stats",
            "goals": "/api/goals",
        },
    }
