"""Database connection and session management for tasktrack.

This module supports both:
- Local SQLite (default for dev)
- PostgreSQL (production) via `DATABASE_URL`
"""

import os
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.declarative import declarative_base
from dotenv import load_dotenv

load_dotenv()

# Database URL - SQLite by default (local dev)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./tasktrack.db")


def _is_sqlite_url(database_url: str) -> bool:
    return "sqlite" in (database_url or "")


def _is_in_memory_sqlite(database_url: str) -> bool:
    return _is_sqlite_url(database_url) and ":memory:" in database_url


def get_engine_kwargs(database_url: str) -> dict:
    """Return create_engine kwargs for a DB URL without connecting.

    SQLite is shared across the route threadpool; an in-memory database must
    live on a single connection or each thread would see an empty schema.
    Any other URL gets the bounded connection pool every request draws from.
    """
    if _is_sqlite_url(database_url):
        sqlite_kwargs: dict = {
            "echo": os.getenv("DEBUG", "False").lower() == "true",
            "connect_args": {"check_same_thread": False},
        }
        if _is_in_memory_sqlite(database_url):
            sqlite_kwargs["poolclass"] = StaticPool
        return sqlite_kwargs

    return {
        "echo": os.getenv("DEBUG", "False").lower() == "true",
        "pool_pre_ping": True,
        "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
        "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", "5")),
        "pool_timeout": int(os.getenv("DB_POOL_TIMEOUT_SEC", "30")),
    }


def enable_sqlite_foreign_keys(dbapi_conn, connection_record):
    """Enforce task/qtask -> user foreign keys (SQLite leaves them off by default)."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    built = create_engine(database_url, **get_engine_kwargs(database_url))
    if _is_sqlite_url(database_url):
        event.listen(built, "connect", enable_sqlite_foreign_keys)
    return built


# Create engine (module-level singleton)
engine = build_engine(DATABASE_URL)


# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for declarative models
Base = declarative_base()


def get_db() -> Session:
    """Get database session (dependency for FastAPI)."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database schema.

    - SQLite (default dev): use `create_all()`.
    - PostgreSQL: prefer Alembic migrations. Enable by setting
      `RUN_MIGRATIONS=true` in the environment.
    """
    run_migrations = os.getenv("RUN_MIGRATIONS", "False").lower() == "true"
    if run_migrations and not _is_sqlite_url(DATABASE_URL):
        from alembic import command
        from alembic.config import Config

        alembic_cfg = Config(os.getenv("ALEMBIC_INI", "alembic.ini"))
        # Ensure Alembic uses the same runtime DB URL.
        alembic_cfg.set_main_option("sqlalchemy.url", DATABASE_URL)
        command.upgrade(alembic_cfg, "head")
        return

    # Make sure all models are registered on Base.metadata.
    import tasktrack.database.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
