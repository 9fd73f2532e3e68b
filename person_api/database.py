"""
Person API — Database Lifecycle and Session Management
=======================================================

What:  Owns the async SQLAlchemy engine and session factory for one app.
How:   `Database.connect()` builds the engine and creates the `persons` table
       if it is missing; `Database.session()` yields a session that commits
       on success and rolls back on error; `Database.disconnect()` disposes
       the engine. The app factory creates one instance and the FastAPI
       lifespan drives connect/disconnect.
Who:   Injected into the person store; used directly by the health check.

Connection Pooling:
    Server databases (PostgreSQL via asyncpg) get an explicit pool:
    pool_size / max_overflow / pool_pre_ping from settings, and
    pool_recycle=3600. SQLite keeps the pool SQLAlchemy picks for it.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from person_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models of the service."""
    pass


class Database:
    """
    Connection lifecycle for the person store.

    A `Database` is inert until `connect()` is awaited; calling `session()`
    before that raises RuntimeError. `connect()` and `disconnect()` are both
    safe to call more than once.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def url(self) -> str:
        return self._settings.database_url

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def _engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            # Echo SQL only when debugging
            "echo": self._settings.log_level == "DEBUG",
        }
        if not self._settings.is_sqlite:
            options.update(
                pool_size=self._settings.db_pool_size,
                max_overflow=self._settings.db_max_overflow,
                pool_pre_ping=self._settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return options

    async def connect(self) -> None:
        """Create the engine and make sure the `persons` table exists."""
        if self._engine is not None:
            return

        # Register the ORM models on Base.metadata before create_all
        from person_api.models import person  # noqa: F401

        engine = create_async_engine(self._settings.database_url, **self._engine_options())
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        self._engine = engine
        # expire_on_commit=False keeps attributes readable after commit
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Connected to person store (%s)", engine.url.render_as_string(hide_password=True))

    async def disconnect(self) -> None:
        """Gracefully close all pooled connections."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Disconnected from person store")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide one unit of work against the store.

        On success the transaction is committed; on any error it is rolled
        back and the exception is re-raised for the caller to translate.
        """
        if self._session_factory is None:
            raise RuntimeError("Database is not connected; call connect() first")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> bool:
        """Run `SELECT 1`; False when not connected or unreachable."""
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False
        return True
