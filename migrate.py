"""
Database migration script to set up the key-value storage schema.
"""
import os

from dotenv import load_dotenv
from sqlalchemy import create_engine, text

# Load environment variables
load_dotenv()

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "sqlite:///./tictactoe.db"
)

def run_migrations():
    """Run database migrations."""
    engine = create_engine(DATABASE_URL)

    with engine.connect() as conn:
        conn.execute(text("""
            CREATE TABLE IF NOT EXISTS storage_entries (
                key VARCHAR(100) PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """))

        conn.commit()

    print("Database migrations completed successfully.")


if __name__ == "__main__":
    print("Starting database migration...")

    # Run migrations
    run_migrations()

    print("Migration complete!")
