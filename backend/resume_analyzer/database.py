import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Owns the async engine and session factory.
    Built by the process entry point and handed to the store; nothing else
    reaches for the engine directly.
    """

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        self.echo = settings.debug
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker] = None

    def _engine_kwargs(self) -> dict:
        # Supabase/PostgreSQL with PgBouncer needs statement_cache_size=0
        # SQLite doesn't support these parameters
        if "postgresql" in self.url:
            return {
                "connect_args": {
                    "statement_cache_size": 0,
                    "prepared_statement_cache_size": 0,
                },
                "pool_pre_ping": True,  # Verify connections before use
                "pool_recycle": 300,    # Recycle connections every 5 minutes
                "pool_size": 20,
                "max_overflow": 30,
            }
        return {}

    async def init(self) -> None:
        """Create the engine and make sure the tables exist."""
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.url, echo=self.echo, **self._engine_kwargs())
        self._session_maker = async_sessionmaker(self._engine, class_=AsyncSession, expire_on_commit=False)

        # Register the ORM tables on Base.metadata before create_all
        from . import models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database initialized: %s", self._engine.url.render_as_string(hide_password=True))

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database.init() has not been called")
        return self._engine

    async def shutdown(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        logger.info("Database connections closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """One unit of work: commit on success, roll back on any error."""
        if self._session_maker is None:
            raise RuntimeError("Database.init() has not been called")
        async with self._session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
