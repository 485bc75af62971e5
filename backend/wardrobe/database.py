"""
Wardrobe Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine (connection pool), session factory and the
       FastAPI dependency that hands one session to each request.
Why:   Centralizes all database connection logic in one place.
How:   `create_app()` builds one `Database` from Settings and stores it on
       `app.state.database`. `get_db_session` pulls it from the request, so
       nothing imports a global engine and tests can point the app at SQLite.

Connection Pooling Strategy:
    pool_size / max_overflow come from Settings for server databases.
    SQLite ignores both (aiosqlite manages its own connection per pool slot).
    pool_pre_ping validates connections before use.

Referential integrity:
    Comments and garment↔label associations are removed by ON DELETE CASCADE.
    SQLite only enforces foreign keys when asked, so every SQLite connection
    runs `PRAGMA foreign_keys=ON` as it is opened.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from wardrobe.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata)."""
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the async engine and the session factory.

    One instance per application. Passed around explicitly (app.state) instead
    of living at module level.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        engine_kwargs = {"echo": echo, "pool_pre_ping": pool_pre_ping}
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )

        self.engine = create_async_engine(url, **engine_kwargs)

        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # expire_on_commit=False: attributes stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    async def create_schema(self) -> None:
        """Create any missing tables from the ORM metadata."""
        # Models register themselves on Base.metadata when imported
        import wardrobe.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured (%d tables)", len(Base.metadata.tables))

    async def ping(self) -> None:
        """Run SELECT 1; raises whatever the driver raises when unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    Tell a unique/primary-key violation apart from other integrity failures.

    Driver messages:
        SQLite:      "UNIQUE constraint failed: labels.name"
        PostgreSQL:  "duplicate key value violates unique constraint ..."
        MySQL:       "Duplicate entry 'x' for key ..."
    """
    message = str(getattr(exc, "orig", None) or exc).lower()
    return "unique" in message or "duplicate" in message


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the application's Database
        2. Yields it to the route handler
        3. On success: commits
        4. On error: rolls back and re-raises for the global handlers
        5. Always: closes the session (returns connection to pool)
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
