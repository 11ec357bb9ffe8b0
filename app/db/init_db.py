# app/db/init_db.py
"""Database initialization utilities."""
from sqlalchemy import inspect

from app.core.logging import get_logger
from app.db.base import Base, import_models
from app.db.session import engine

logger = get_logger(__name__)


def init_db() -> None:
    """
    Initialize the database by creating all tables.

    Note: This is suitable for development/testing only.
    For production, manage the schema with migrations instead.
    """
    try:
        import_models()

        existing_tables = inspect(engine).get_table_names()
        Base.metadata.create_all(bind=engine)

        logger.info(
            "Database schema ensured",
            extra={"existing_tables": len(existing_tables)}
        )
    except Exception as e:
        logger.error(f"Error initializing database: {e}", exc_info=True)
        raise

