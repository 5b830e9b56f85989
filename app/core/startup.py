"""
Opening and closing the key-value store when the app starts and stops.
"""
import logging
from sqlalchemy import text

from app.core.database import engine, init_db

logger = logging.getLogger(__name__)


def initialize_database() -> None:
    """
    Make sure ``storage_entries`` exists and the database answers.

    Runs before the statistics and settings are loaded from the store, so
    a broken DATABASE_URL stops the app instead of leaving it on defaults.
    """
    try:
        init_db()
        logger.info(f"Key-value storage ready at {engine.url.render_as_string(hide_password=True)}")

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    except Exception as e:
        logger.error(f"Key-value storage unavailable: {e}")
        raise


def shutdown_database() -> None:
    """Release pooled storage connections; errors are only logged."""
    try:
        engine.dispose()
        logger.info("Key-value storage closed")
    except Exception as e:
        logger.error(f"Failed to close key-value storage: {e}")
