"""Person API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PersonApiError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Stored pictures served read-only under /pictures; mounted AFTER API routes
      so /api/v1/* takes precedence
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from person_api.api.error_handlers import register_error_handlers
from person_api.infrastructure.database import init_db
from person_api.infrastructure.observability import setup_logging
from person_api.config import get_settings
from person_api.api.routes import health, persons

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    Path(settings.picture_dir).mkdir(parents=True, exist_ok=True)
    logger.info("Person API started")
    yield
    await manager.dispose()
    logger.info("Person API shutting down")


app = FastAPI(
    title="Person API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(persons.router)

app.mount(
    "/pictures",
    StaticFiles(directory=settings.picture_dir, check_dir=False),
    name="pictures",
)
