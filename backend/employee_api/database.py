"""
Employee API: Database Handle & Session Management
====================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI session dependency.
How:   `Database` owns one engine (connection pool) and one session factory.
       The application factory creates a single `Database` and stores it on
       `app.state.database`; request handlers receive sessions through the
       `get_db_session` dependency, which commits on success and rolls back
       on error.
When:  The engine is built in create_app(); the connection is verified in the
       lifespan startup and disposed on shutdown.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from Settings.
    SQLite URLs (used by the test suite) skip pool sizing, which the
    aiosqlite pool does not accept in every configuration.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from employee_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, read by Alembic and by
    Database.create_tables().
    """
    pass


class Database:
    """
    Explicit storage-client handle: one engine plus its session factory.

    Usage:
        database = Database(settings)
        await database.connect()          # fails fast if unreachable
        async with database.session_factory() as session:
            ...
        await database.dispose()
    """

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        self.auto_create_tables = settings.auto_create_tables
        self.engine: AsyncEngine = create_async_engine(
            settings.database_url,
            echo=settings.log_level == "DEBUG",
            **self._engine_options(settings),
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @staticmethod
    def _engine_options(settings: Settings) -> Dict[str, Any]:
        if settings.uses_sqlite:
            return {"connect_args": {"check_same_thread": False}}
        return {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_pre_ping": settings.db_pool_pre_ping,
            "pool_recycle": 3600,
        }

    async def connect(self) -> None:
        """
        Open the pool and verify the server answers.

        Raises whatever the driver raises; the lifespan handler treats that
        as fatal and aborts startup.
        """
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        if self.auto_create_tables:
            await self.create_tables()
        logger.info("Database connected: %s", self.engine.url.render_as_string(hide_password=True))

    async def create_tables(self) -> None:
        # Registers the Employee mapper on Base.metadata before create_all
        from employee_api.models import employee  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        """Lightweight connectivity probe for the health endpoint."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    1. Creates a new session from the app's Database handle
    2. Yields it to the route handler
    3. On success: commits the transaction
    4. On error: rolls back and re-raises for the global error handlers
    5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/api/employees")
        async def list_employees(db: AsyncSession = Depends(get_db_session)):
            ...
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
