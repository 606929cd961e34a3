import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from sqlalchemy import text
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bloodbank.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Storage handle shared by the whole process.

    Owns the async engine and the session factory. It is constructed once at
    startup, kept on ``app.state.database`` and hands out one ``AsyncSession``
    per HTTP request through the ``get_db`` dependency.
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        **engine_options: Any,
    ):
        self.url = url
        database_url = make_url(url)

        connect_args: Dict[str, Any] = engine_options.pop("connect_args", {})
        if database_url.get_backend_name() == "sqlite":
            connect_args.setdefault("check_same_thread", False)
        else:
            engine_options.setdefault("pool_pre_ping", True)
            engine_options.setdefault("pool_recycle", 1800)

        self.engine: AsyncEngine = create_async_engine(
            url,
            connect_args=connect_args,
            echo=echo,
            **engine_options,
        )
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info(f"Database backend: {database_url.get_backend_name()}")

    async def connect(self) -> None:
        """Open a connection and run a trivial query; raises on failure."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database connection established")

    async def create_tables(self) -> None:
        # Import models so their tables are registered on the metadata
        import bloodbank.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    async def ping(self) -> bool:
        try:
            await self.connect()
            return True
        except Exception as e:
            logger.error(f"Database ping failed: {e}")
            return False

    async def dispose(self) -> None:
        """Close database connections gracefully"""
        await self.engine.dispose()
        logger.info("Database connections closed.")


def create_database(settings, **engine_options: Any) -> Database:
    return Database(
        settings.DATABASE_URL,
        echo=settings.DB_ECHO,
        **engine_options,
    )
