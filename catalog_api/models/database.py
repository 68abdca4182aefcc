"""Database setup and session management."""

import logging
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from catalog_api.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def utc_now() -> datetime:
    """Current UTC time for timestamp column defaults."""
    return datetime.now(timezone.utc)


def engine_options(
    url: URL,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: float = 30.0,
    timeout_seconds: float = 15.0,
    statement_timeout_ms: int = 15000,
) -> dict:
    """Keyword arguments for ``create_engine`` on the backend ``url`` names.

    SQLite gets a busy timeout; pooled backends get pool sizing, and
    PostgreSQL additionally a connect and statement timeout.
    """
    backend = url.get_backend_name()

    if backend == "sqlite":
        options = {
            "connect_args": {"check_same_thread": False, "timeout": timeout_seconds},
        }
        # In-memory databases live on a single connection
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return options

    options = {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_timeout": pool_timeout,
        "pool_pre_ping": True,
    }
    if backend == "postgresql":
        options["connect_args"] = {
            "connect_timeout": int(timeout_seconds),
            "options": f"-c statement_timeout={statement_timeout_ms}",
        }
    return options


def unicode_lower(value):
    """SQL ``lower()`` that folds non-ASCII letters too."""
    return value.lower() if isinstance(value, str) else value


def register_sqlite_functions(dbapi_connection, connection_record) -> None:
    """Replace SQLite's ASCII-only ``lower()`` used by ILIKE."""
    dbapi_connection.create_function("lower", 1, unicode_lower, deterministic=True)


class Database:
    """Engine and session factory for one database.

    Built once by the application factory and handed to request handlers
    through ``get_db``; nothing here is process-global.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: float = 30.0,
        timeout_seconds: float = 15.0,
        statement_timeout_ms: int = 15000,
    ):
        self.url = make_url(url)
        self.engine = create_engine(
            url,
            **engine_options(
                self.url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                timeout_seconds=timeout_seconds,
                statement_timeout_ms=statement_timeout_ms,
            ),
        )
        if self.url.get_backend_name() == "sqlite":
            event.listen(self.engine, "connect", register_sqlite_functions)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Create a database from application settings."""
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            timeout_seconds=settings.db_timeout_seconds,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )

    def session(self) -> Session:
        """Open a new session."""
        return self.session_factory()

    def create_tables(self) -> None:
        """Create all database tables."""
        # Import models to ensure they're registered with Base
        from catalog_api.models import attribute, category, product  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database tables ready ({self.url.get_backend_name()})")

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()


def get_db(request: Request):
    """Dependency that provides a database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
