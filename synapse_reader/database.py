"""
Database session management for Synapse Reader
SQLAlchemy setup over a local SQLite file
"""

import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from synapse_reader.config import settings


def make_engine(url: str, **kwargs) -> Engine:
    """
    Create an engine with foreign keys enforced on every SQLite connection

    Args:
        url: SQLAlchemy database URL
        **kwargs: Extra create_engine arguments (poolclass for tests, etc.)

    Returns:
        Engine: Configured engine
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    new_engine = create_engine(url, **kwargs)

    if new_engine.dialect.name == "sqlite":
        @event.listens_for(new_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


def _ensure_sqlite_dir(url: str) -> None:
    if url.startswith("sqlite:///") and ":memory:" not in url:
        directory = os.path.dirname(url[len("sqlite:///"):])
        if directory:
            os.makedirs(directory, exist_ok=True)


_ensure_sqlite_dir(settings.DATABASE_URL)

# echo: Log all SQL statements when DEBUG=True
engine = make_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()


def get_db():
    """
    Dependency for FastAPI endpoints to get database session
    Automatically closes session after request and rolls back on error
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def create_tables(bind: Engine = None):
    """
    Create or repair all tables in the database
    Called during application startup

    Note: Import models here to ensure they're registered with Base.metadata
    """
    import synapse_reader.models  # noqa: F401
    from synapse_reader.migrations import run_migrations, verify_and_repair_schema

    bind = bind or engine
    run_migrations(bind)
    return verify_and_repair_schema(bind)
