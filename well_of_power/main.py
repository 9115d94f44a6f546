"""Well of Power API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map WellOfPowerError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Game session built on startup via lifespan; saved preferences restored before serving

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - SQLite databases get their tables created on startup; other backends run Alembic
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from well_of_power.api.error_handlers import register_error_handlers
from well_of_power.api.routes import game, health
from well_of_power.config import get_settings
from well_of_power.infrastructure import database
from well_of_power.infrastructure.observability import setup_logging
from well_of_power.services.game_session import create_game_session

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    session = create_game_session(settings)
    if settings.storage_backend == "database" and settings.database_url.startswith("sqlite"):
        await database.db_manager.create_all()
    await session.open()
    game.init_game_session(session)
    logger.info("Well of Power API started")
    yield
    logger.info("Well of Power API shutting down")
    if database.db_manager is not None:
        await database.db_manager.dispose()


app = FastAPI(
    title="Well of Power API", version="1.0.0", lifespan=lifespan,
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
app.include_router(game.router)

# Static files: serves the front-end build when present, after API routes
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
