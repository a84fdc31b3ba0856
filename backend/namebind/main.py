"""namebind API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RegistryError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Store client built once in the lifespan and kept on app.state.db

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - The session manager is disposed on shutdown so pooled connections close
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from namebind.api.error_handlers import register_error_handlers
from namebind.infrastructure.database import DatabaseSessionManager
from namebind.infrastructure.observability import setup_logging
from namebind.config import get_settings
from namebind.api.routes import health, slugs, topic_images, usernames, well_known

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("namebind API started")
    yield
    logger.info("namebind API shutting down")
    await app.state.db.dispose()


app = FastAPI(
    title="namebind API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(usernames.router)
app.include_router(slugs.router)
app.include_router(topic_images.router)
app.include_router(well_known.router)

register_error_handlers(app)
