"""Blog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BlogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database manager created on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: scoped acquisition with guaranteed release
    - Three error handler layers (api/error_handlers.py): BlogError (domain),
      RequestValidationError (Pydantic), Exception (catch-all)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_api.api.error_handlers import register_error_handlers
from blog_api.api.routes import health, posts, users
from blog_api.config import get_settings
from blog_api.infrastructure.database import close_db, init_db
from blog_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout_seconds,
        connect_timeout=settings.database_connect_timeout_seconds,
        command_timeout=settings.database_command_timeout_seconds,
    )
    logger.info("Blog API started")
    try:
        yield
    finally:
        await close_db()
        logger.info("Blog API shut down, database pool released")


app = FastAPI(title="Blog API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(posts.router)

register_error_handlers(app)
