"""
==============================================================================
Database Connection Management Module
==============================================================================

SQLAlchemy engine and session management for the catalog service.

    ┌─────────────────┐
    │ DatabaseManager │ (Singleton)
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │     Engine      │ (Connection pool)
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │ session_factory │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Session      │ (Request-scoped)
    └─────────────────┘

Each HTTP request gets its own session through the ``get_db`` dependency.
Transaction boundaries are owned by the service layer.

SQLite Note:
-----------
'check_same_thread' is disabled because FastAPI runs sync dependencies in a
thread pool. In-memory URLs use a StaticPool so every session sees the same
database.

==============================================================================
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import get_settings


# Module logger
logger = logging.getLogger(__name__)

# SQLAlchemy declarative base for all models
Base = declarative_base()


class DatabaseManager:
    """
    Centralized database connection manager.

    The engine is created lazily on first access so configuration can be
    changed before the first connection.

    Example:
        >>> db_manager = DatabaseManager()
        >>> session = db_manager.get_session()
        >>> products = session.query(Product).all()
    """

    _instance: Optional[DatabaseManager] = None

    def __new__(cls) -> DatabaseManager:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, '_initialized', False):
            return

        self._settings = get_settings()
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._initialized = True

        logger.debug("DatabaseManager initialized")

    # =========================================================================
    # ENGINE MANAGEMENT
    # =========================================================================

    @property
    def engine(self) -> Engine:
        """SQLAlchemy engine, created on first access."""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        """
        Create the SQLAlchemy engine for the configured URL.

        - SQLite: disables check_same_thread, StaticPool for in-memory URLs
        - PostgreSQL/MySQL: connection pooling with pre-ping
        """
        database_url = self._settings.database_url

        if database_url.startswith("sqlite"):
            engine_args = {
                "connect_args": {"check_same_thread": False},
                "echo": self._settings.debug,
            }
            if self._settings.get_database_path() is None:
                engine_args["poolclass"] = StaticPool

            engine = create_engine(database_url, **engine_args)

            @event.listens_for(engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

            logger.info(f"Created SQLite engine: {database_url}")

        else:
            engine = create_engine(
                database_url,
                pool_size=5,
                max_overflow=10,
                pool_timeout=30,
                pool_recycle=1800,
                pool_pre_ping=True,
                echo=self._settings.debug,
            )

            logger.info(f"Created database engine with pooling: {engine.url!r}")

        return engine

    # =========================================================================
    # SESSION MANAGEMENT
    # =========================================================================

    @property
    def session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,
            )
        return self._session_factory

    def get_session(self) -> Session:
        """
        Get a new database session.

        The caller is responsible for closing the session.
        """
        return self.session_factory()

    # =========================================================================
    # TABLE MANAGEMENT
    # =========================================================================

    def create_tables(self) -> None:
        """Create all tables that don't already exist."""
        # Register the mapped classes on Base.metadata
        from app.db import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created/verified")

    # =========================================================================
    # SHUTDOWN
    # =========================================================================

    def dispose(self) -> None:
        """Dispose of the connection pool on shutdown."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database connection pool disposed")

    def __repr__(self) -> str:
        return f"DatabaseManager(url={self._settings.database_url!r})"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

@lru_cache(maxsize=1)
def get_database_manager() -> DatabaseManager:
    """Get the global DatabaseManager instance."""
    return DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a request-scoped database session.

    Usage:
        @router.get("/products")
        async def list_products(db: Session = Depends(get_db)):
            ...
    """
    session = get_database_manager().get_session()
    try:
        yield session
    finally:
        session.close()
