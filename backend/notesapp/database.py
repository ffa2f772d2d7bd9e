"""
NotesApp Backend — Data Store Client
======================================

What:  The Database class: async SQLAlchemy engine, session factory, and the
       idempotent schema step.
Why:   One explicitly constructed store client, owned by the application and
       handed to each service at construction time. There is no module-level
       engine.
How:   create_async_engine with a bounded pool; session() is an async context
       manager that commits on success and rolls back on error.
Who:   Built by create_app(); used by CredentialService, NoteService, the setup
       routes, and the health check.

Connection Pooling:
    pool_size=10, max_overflow=0:  hard cap of 10 concurrent connections
    pool_pre_ping:                 validates connections before use
    connect timeout:               the only timeout applied to store access
    SQLite URLs (tests) use SQLAlchemy's default pool for the dialect.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Iterable, Optional

from sqlalchemy import Table, text
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notesapp.config import Settings
from notesapp.exceptions import StoreError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with this metadata, which the startup schema step
    and Alembic both read.
    """
    pass


def _connect_args(url: URL, timeout: int) -> Dict[str, Any]:
    """Driver-specific keyword for the connect timeout."""
    driver = url.drivername
    if driver.endswith("+asyncpg"):
        return {"timeout": timeout}
    if driver.endswith("+aiomysql") or driver.endswith("+asyncmy"):
        return {"connect_timeout": timeout}
    return {}


class Database:
    """
    Relational store client shared by all services of one application.

    The engine is created lazily by SQLAlchemy: constructing a Database opens
    no connection. Call dispose() on shutdown to close pooled connections.
    """

    def __init__(self, settings: Settings, engine: Optional[AsyncEngine] = None):
        self.settings = settings
        self.url = settings.sqlalchemy_url
        self.engine = engine or self._create_engine()
        # expire_on_commit=False: returned ORM objects stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    def _create_engine(self) -> AsyncEngine:
        options: Dict[str, Any] = {
            "pool_pre_ping": self.settings.db_pool_pre_ping,
            "echo": self.settings.log_level == "DEBUG",
            "connect_args": _connect_args(self.url, self.settings.db_connect_timeout),
        }
        if self.url.get_backend_name() != "sqlite":
            options.update(
                pool_size=self.settings.db_pool_size,
                max_overflow=self.settings.db_max_overflow,
                pool_recycle=3600,
            )
        return create_async_engine(self.url, **options)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a transactional session for one service operation.

        How it works:
            1. Creates a new session from the factory
            2. Yields it to the caller
            3. On success: commits the transaction
            4. On error: rolls back and re-raises
            5. Always: closes the session (returns connection to pool)

        Example:
            async with database.session() as session:
                session.add(Note(title="T", content="C"))
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_schema(self, tables: Optional[Iterable[Table]] = None) -> None:
        """
        Idempotent migration step: create missing tables, leave existing ones.

        What:    CREATE TABLE IF NOT EXISTS for the given tables (all models
                 registered on Base when tables is None).
        Raises:  StoreError when the store rejects the DDL. Tables created
                 before the failure stay created.
        """
        table_list = list(tables) if tables is not None else None
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all, tables=table_list, checkfirst=True)
        except SQLAlchemyError as e:
            logger.error("Schema creation failed: %s", str(e))
            raise StoreError(message="Error creating tables", error=e)

        names = [t.name for t in table_list] if table_list else sorted(Base.metadata.tables)
        logger.info("Schema ready: %s", ", ".join(names))

    async def ping(self) -> bool:
        """Run SELECT 1; True when the store answers."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()
