"""
Catalog API — Database Lifecycle and Session Management
=========================================================

What:  Async SQLAlchemy engine ownership, session factory, and FastAPI dependencies.
Why:   The store connection is a single dependency with an explicit lifecycle
       instead of ambient module state: it is opened when the process starts,
       closed when it stops, and handed to request handlers by injection.
How:   A `Database` object wraps the engine and session factory. The app factory
       stores it on `app.state.database`; `get_db_session` pulls a session from
       it for each request.
Who:   The lifespan handler opens/closes it; routes receive sessions via Depends().

Connection Pooling Strategy (server databases only):
    pool_size:        Persistent connections for normal load
    max_overflow:     Temporary connections for traffic spikes
    pool_pre_ping:    Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour

    SQLite gets none of these; aiosqlite uses its own pool class.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from catalog_api.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object that Alembic reads for migrations
    and `Database.create_all()` uses for development schemas.
    """
    pass


class Database:
    """
    Owns the async engine and the session factory for one database URL.

    Lifecycle:
        db = Database(url)      # nothing connects yet
        db.open()               # engine + session factory created
        async with db.session() as session: ...
        await db.close()        # pool disposed

    `open()` is idempotent so the lifespan handler can call it even when a
    test has already opened an injected instance.
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self._engine_kwargs = engine_kwargs
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a Database with pool options appropriate for the URL's backend."""
        kwargs: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
        if not settings.is_sqlite:
            kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return cls(settings.database_url, **kwargs)

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not open; call open() first")
        return self._engine

    def open(self) -> None:
        """Create the engine and session factory. No connection is made until first use."""
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.url, **self._engine_kwargs)
        # expire_on_commit=False: ORM objects stay readable after the
        # repository commits, while the response is being serialized
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database engine created for %s", self._engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        """Dispose the pool. Safe to call on a database that was never opened."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; roll back on error, always close."""
        if self._session_factory is None:
            raise RuntimeError("Database is not open; call open() first")
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create every table registered on Base.metadata (dev/test only)."""
        # Models must be imported so they register with Base
        from catalog_api.models import product  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Run SELECT 1; True when the database answered."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True


# ── FastAPI Dependencies ──────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """Return the Database instance the app factory attached to app.state."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the app's Database
        2. Yields it to the route handler
        3. On success: commits; on error: rolls back
        4. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/things")
        async def list_things(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database = get_database(request)
    async with database.session() as session:
        yield session
