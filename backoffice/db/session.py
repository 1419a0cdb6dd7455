"""
db/session.py
-------------
Async SQLAlchemy engine and session factory.

Design decisions:
  - The engine (and its connection pool) is owned by the process-wide
    Database object; main.py's lifespan calls init() on startup and
    close() on shutdown. Nothing connects at import time.
  - AsyncEngine with asyncpg driver for non-blocking I/O in production;
    aiosqlite for tests and local runs.
  - Connection pool sized for typical SaaS workloads:
      pool_size=10, max_overflow=20 → max 30 concurrent DB connections.
  - pool_pre_ping=True: validates connections before checkout to handle
    stale connections after DB restarts or idle timeouts.
  - expire_on_commit=False: avoids lazy-load errors after commit in async
    context (attributes are already loaded, no implicit SELECT needed).
  - Every session runs on TenantGuardedSession, so an ORM query against a
    tenant-scoped table without a tenant_id clause fails fast.
"""

from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from backoffice.core.config import settings
from backoffice.core.logging import get_logger
from backoffice.db.guard import TenantGuardedSession
from backoffice.models import Base  # Imports all models so metadata is populated

logger = get_logger(__name__)


def make_engine(url: str, echo: bool = False) -> AsyncEngine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url:
            # One shared connection, otherwise each checkout sees an empty DB
            kwargs["poolclass"] = StaticPool
        return create_async_engine(url, echo=echo, **kwargs)

    return create_async_engine(
        url,
        echo=echo,                     # Log SQL in development
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        pool_recycle=3600,             # Recycle connections every hour
    )


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        sync_session_class=TenantGuardedSession,
        expire_on_commit=False,
        autoflush=False,
    )


class Database:
    """Process-wide owner of the engine and session factory."""

    def __init__(self) -> None:
        self.engine: Optional[AsyncEngine] = None
        self.sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None

    def init(self, url: Optional[str] = None, echo: Optional[bool] = None) -> None:
        url = url or settings.DATABASE_URL
        self.engine = make_engine(url, echo=settings.DEBUG if echo is None else echo)
        self.sessionmaker = make_sessionmaker(self.engine)
        logger.info("Database engine initialised", dialect=self.engine.dialect.name)

    async def create_all(self) -> None:
        async with self._require_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("Database engine disposed")
        self.engine = None
        self.sessionmaker = None

    def session(self) -> AsyncSession:
        if self.sessionmaker is None:
            raise RuntimeError("Database.init() has not been called")
        return self.sessionmaker()

    def _require_engine(self) -> AsyncEngine:
        if self.engine is None:
            raise RuntimeError("Database.init() has not been called")
        return self.engine


database = Database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields a database session.
    The session is committed when the request finishes successfully,
    and rolled back on exceptions.

    Usage:
        @router.get("/example")
        async def handler(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
