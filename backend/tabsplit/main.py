"""TabSplit API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TabSplitError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - Startup never requires INVITE_SECRET; its absence is reported on first sign/verify

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py (registered here once)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tabsplit.api.error_handlers import register_error_handlers
from tabsplit.api.routes import expenses, health, invites, settlements
from tabsplit.infrastructure.database import init_db
from tabsplit.infrastructure.observability import setup_logging
from tabsplit.config import get_settings

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
    )
    if settings.invite_secret is None:
        logger.warning("INVITE_SECRET not set: invite signing and verification disabled")
    logger.info("TabSplit API started")
    yield
    logger.info("TabSplit API shutting down")


app = FastAPI(
    title="TabSplit API", version="1.0.0", lifespan=lifespan,
)

# CORS: configured from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(invites.router)
app.include_router(expenses.router)
app.include_router(settlements.router)

register_error_handlers(app)
