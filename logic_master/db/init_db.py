"""Database initialization for the local key-value store."""
import logging
import os
from sqlalchemy import inspect
from sqlalchemy.engine import make_url
from logic_master.config import settings
from logic_master.db.database import engine, Base
from logic_master.db import models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)


def ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(database_url)
    if not url.drivername.startswith("sqlite") or not url.database or url.database == ":memory:":
        return

    directory = os.path.dirname(url.database)
    if directory and not os.path.isdir(directory):
        logger.info(f"Creating database directory {directory}")
        os.makedirs(directory, exist_ok=True)


def init_db() -> None:
    """
    Initialize database: ensure the storage directory exists and create tables.

    Safe to call multiple times - all operations are idempotent.
    """
    logger.info("Initializing database...")

    ensure_sqlite_directory(settings.DATABASE_URL)

    Base.metadata.create_all(bind=engine)

    tables = inspect(engine).get_table_names()
    logger.info(f"Tables created/verified successfully: {', '.join(sorted(tables))}")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    init_db()
    print("Database initialization complete.")
