"""
Database Setup Script
Applies the LittleBridge schema to the PostgreSQL database named by DATABASE_URL.
Safe to re-run: every table is created with IF NOT EXISTS.

    python -m littlebridge.scripts.setup_database
"""

import sys
import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from littlebridge.config import settings
from littlebridge.database.schema import SCHEMA_SQL, TABLES

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def apply_schema(engine: Engine) -> None:
    """Run the whole DDL batch in a single transaction"""
    with engine.begin() as connection:
        connection.exec_driver_sql(SCHEMA_SQL)


def main():
    """Entry point. Exits with status 1 when the schema could not be applied."""
    logger.info("Setting up database schema...")
    if not settings.database_url:
        logger.error("DATABASE_URL is not set")
        sys.exit(1)

    engine: Optional[Engine] = None
    try:
        engine = create_engine(settings.database_url, echo=False)
        apply_schema(engine)
        logger.info(f"Database schema created successfully ({len(TABLES)} tables)")
    except Exception as e:
        logger.error(f"Error setting up database: {e}")
        sys.exit(1)
    finally:
        if engine is not None:
            engine.dispose()


if __name__ == "__main__":
    main()
