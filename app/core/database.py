"""
SQLAlchemy engine and session factory for the key-value storage table.

Statistics, match history and settings each live as one JSON row in
``storage_entries``; nothing else is stored in the database.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from app.core.config import settings

# SQLite by default; worker threads share the engine
engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
    echo=settings.DEBUG
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db():
    """Create the storage_entries table if it is missing."""
    from app.models.storage_entry import StorageEntry  # noqa: F401
    Base.metadata.create_all(bind=engine)
