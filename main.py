"""
Tic Tac Toe game engine and statistics API.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.router import include_routers
from app.core.config import settings
from app.core.database import SessionLocal
from app.core.exception_handlers import register_exception_handlers
from app.core.startup import initialize_database, shutdown_database
from app.services.game_service import GameService
from app.services.move_selector import MoveSelector
from app.services.settings_service import SettingsStore
from app.services.stats_service import StatsAggregator
from app.services.storage import SQLKeyValueStore

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# Lifespan context manager for startup/shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application lifecycle events."""
    # Startup
    logger.info("Starting Tic Tac Toe ...")
    initialize_database()

    store = SQLKeyValueStore(SessionLocal)
    app.state.settings_store = SettingsStore(store)
    app.state.stats_aggregator = StatsAggregator(store)
    app.state.move_selector = MoveSelector()
    app.state.game_service = GameService(
        app.state.stats_aggregator,
        app.state.settings_store,
        move_delay=settings.AI_MOVE_DELAY
    )

    yield

    # Shutdown
    logger.info("Shutting down TicTacToe API...")
    shutdown_database()


# Create FastAPI application
app = FastAPI(
    title="TicTacToe",
    description="""
    Tic Tac Toe against a friend or an unbeatable computer, with persisted statistics.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Register exception handlers
register_exception_handlers(app)


# Include routers
include_routers(app)

# CLI entry point
if __name__ == "__main__":
    import uvicorn

    # Development server configuration
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True
    )
