"""
SQLAlchemy async engine and session management

- Database: lazily creates one AsyncEngine per URL and hands out sessions
- Base: declarative base shared by every ORM model
- create_tables(): metadata.create_all for local dev and tests

SQLite URLs (``sqlite+aiosqlite://``) use a StaticPool so an in-memory
database survives across sessions; every other URL gets the pool knobs
from settings.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class Base(DeclarativeBase):
    pass


class Database:
    """
    Database class for dependency injection

    Usage:
        database = Database(url='sqlite+aiosqlite://')
        await database.create_tables()
        async with database.session() as session:
            ...
    """

    def __init__(self, *, url: str | None = None, echo: bool | None = None) -> None:
        self.url = url or settings.DATABASE_URL
        self.echo = settings.DB_ECHO if echo is None else echo
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    @property
    def session_maker(self) -> async_sessionmaker[AsyncSession]:
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    def _create_engine(self) -> AsyncEngine:
        if self.is_sqlite:
            Logger.base.info('🔗 [DB] Creating SQLite engine (StaticPool)')
            return create_async_engine(
                self.url,
                echo=self.echo,
                connect_args={'check_same_thread': False},
                poolclass=StaticPool,
            )

        Logger.base.info('🔗 [DB] Creating engine')
        return create_async_engine(
            self.url,
            echo=self.echo,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions

        Note: Automatically handles rollback on exception
        """
        async with self.session_maker() as session:
            yield session

    async def create_tables(self) -> None:
        """Create database tables if they don't exist"""
        # Registers every model on Base.metadata
        import src.service.shared_kernel.driven_adapter.model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        Logger.base.info('🗄️ [DB] Tables ready')

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None
            Logger.base.info('🔌 [DB] Engine disposed')
